"""
A binary indexed tree (Fenwick tree) over a fixed-length numpy buffer,
based on "A new data structure for cumulative frequency tables",
Software Practice and Experience, Vol 24, No 3, pp 327-336, Mar 1994.

With one-based indexing, cell ``i`` holds the sum of the range
``(i - g(i), i]`` where ``g(i) = i & -i`` is the lowest set bit of ``i``:

    i = 4 = 100  covers [1, 4]
    i = 3 = 011  covers [3, 3]
    i = 2 = 010  covers [1, 2]
    i = 1 = 001  covers [1, 1]

A prefix sum of ``n`` elements is collected walking right to left and
clearing the lowest set bit each step (4 -> 0, 3 -> 2 -> 0). An update
walks left to right through every cell whose range covers the element.

The buffer itself is zero-based, so the two walks are written as

    descend(i) = i & (i - 1)    one-based, read cell i - 1
    ascend(i)  = i | (i + 1)    zero-based, write cell i

which avoids negating an index and needs no extra slot at position 0.
"""
import operator

import numba
import numpy as np
from loguru import logger

from fenwick_tree.bounds import Bounds
from fenwick_tree.bounds import as_bounds
from fenwick_tree.errors import IndexOutOfRange

# numeric kinds the compiled kernels accept, plus object for python numbers
ELEMENT_KINDS = "iufcO"


@numba.njit(cache=True)
def descend(i):
    # clears the lowest set bit
    return i & (i - 1)


@numba.njit(cache=True)
def ascend(i):
    # sets the lowest unset bit
    return i | (i + 1)


@numba.njit(cache=True)
def add_delta(bi_tree, i, v):
    """
    Adds v to the element at zero-based position i, updating every
    cell whose range covers it.
    """
    n = bi_tree.size
    while i < n:
        bi_tree[i] += v
        i = ascend(i)


@numba.njit(cache=True)
def range_sum(bi_tree, start, end, zero):
    """
    Returns prefix_sum(end) - prefix_sum(start) for start < end. The two
    descents meet at a common ancestor, so cells shared by both prefixes
    are never read.
    """
    s = zero
    while end > start:
        s += bi_tree[end - 1]
        end = descend(end)
    while start > end:
        s -= bi_tree[start - 1]
        start = descend(start)
    return s


@numba.njit(cache=True)
def construct(bi_tree):
    # turns an array of element values into tree cells in place, in O(n)
    n = bi_tree.size
    for i in range(n):
        j = ascend(i)
        if j < n:
            bi_tree[j] += bi_tree[i]


def element_dtype(dtype):
    dtype = np.dtype(dtype)
    if dtype.kind not in ELEMENT_KINDS:
        raise TypeError(f"unsupported element type {dtype}")
    return dtype


def kernel_for(kernel, dtype):
    # object arrays can't go through nopython mode
    if dtype.kind == "O":
        return getattr(kernel, "py_func", kernel)
    return kernel


class FenwickTree:
    """
    A Fenwick tree of fixed length over an additive element type.

    Both ``add`` and ``sum`` run in O(log n). Elements start at zero.

        tree = FenwickTree(3)
        tree.add(0, 1)
        tree.add(1, 2)
        tree.add(2, 3)
        tree.sum(slice(0, 3))  # 6
        tree.sum(Bounds.closed(1, 2))  # 5
        tree[1:]  # 5
    """

    def __init__(self, length, dtype=np.int64):
        length = operator.index(length)
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        dtype = element_dtype(dtype)
        self._tree = np.zeros(length, dtype=dtype)
        self._zero = np.zeros(1, dtype=dtype)[0]
        logger.debug("allocated Fenwick tree of length {} ({})", length, dtype)

    @classmethod
    def with_length(cls, length, dtype=np.int64):
        return cls(length, dtype)

    @classmethod
    def from_array(cls, values, dtype=None):
        """
        Builds a tree whose elements are ``values``.
        """
        arr = np.array(values, dtype=dtype)
        if arr.ndim != 1:
            raise ValueError(f"expected a one-dimensional array, got {arr.ndim}")
        tree = cls(arr.size, arr.dtype)
        tree._tree[:] = arr
        kernel_for(construct, tree.dtype)(tree._tree)
        logger.debug("built Fenwick tree from {} values", arr.size)
        return tree

    @property
    def length(self):
        return self._tree.size

    @property
    def dtype(self):
        return self._tree.dtype

    @property
    def cells(self):
        """
        A read-only view of the stored partial sums.
        """
        view = self._tree.view()
        view.flags.writeable = False
        return view

    def __len__(self):
        return self.length

    def __repr__(self):
        return f"FenwickTree(length={self.length}, dtype={self.dtype})"

    def _convert(self, value):
        converted = self.dtype.type(value)
        # float cells round, integer cells must not truncate
        if self.dtype.kind in "iu" and converted != value:
            raise TypeError(f"{value!r} can't be stored as {self.dtype} without loss")
        return converted

    def add(self, index, delta):
        """
        Adds ``delta`` to the element at ``index``.

        Raises IndexOutOfRange if ``index`` is not a position in the tree,
        and TypeError if an integer tree would truncate ``delta``. Nothing
        is modified in either case.
        """
        index = operator.index(index)
        if index < 0 or index >= self.length:
            raise IndexOutOfRange(index, self.length)
        if self.dtype.kind != "O":
            delta = self._convert(delta)
        kernel_for(add_delta, self.dtype)(self._tree, index, delta)

    def sum(self, bounds=None):
        """
        Returns the sum of the elements within ``bounds``.

        ``bounds`` is a Bounds, a pair of bounds, a slice, a range, or None
        for the whole tree. Raises OutOfRange if the start does not point at
        an element or the end lies past the last one. Empty and decreasing
        ranges sum to zero.
        """
        bounds = as_bounds(bounds)
        start, end = bounds.resolve(self.length)
        if start >= end:
            return self._zero
        s = kernel_for(range_sum, self.dtype)(self._tree, start, end, self._zero)
        if self.dtype.kind == "O":
            return s
        # numba widens narrow integers, cast back so sums wrap like the cells
        return np.asarray(s).astype(self.dtype)[()]

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self.sum(key)
        index = operator.index(key)
        return self.sum(Bounds.closed(index, index))
