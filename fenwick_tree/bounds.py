"""
Range bounds accepted by `FenwickTree.sum`.

A range is a pair of bounds, one per side, each of which is either
`Included`, `Excluded` or `Unbounded`. This covers the usual half-open
`start..end` form as well as closed ranges, open-ended ranges and the
full range. Python slices and ranges are converted to the same pair.
"""
import dataclasses
import operator
import sys

from fenwick_tree.errors import OutOfRange

# the largest index a bound can be normalized to
MAX_INDEX = sys.maxsize


@dataclasses.dataclass(frozen=True)
class Included:
    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", operator.index(self.value))

    def __str__(self):
        return f"Included({self.value})"


@dataclasses.dataclass(frozen=True)
class Excluded:
    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", operator.index(self.value))

    def __str__(self):
        return f"Excluded({self.value})"


@dataclasses.dataclass(frozen=True)
class Unbounded:
    def __str__(self):
        return "Unbounded"


UNBOUNDED = Unbounded()

BOUND_TYPES = (Included, Excluded, Unbounded)


def increment(i):
    # saturates instead of stepping past MAX_INDEX
    if i >= MAX_INDEX:
        return MAX_INDEX
    return i + 1


def start_index(bound):
    """
    Converts a start bound to an inclusive lower index.
    """
    if isinstance(bound, Included):
        return bound.value
    if isinstance(bound, Excluded):
        return increment(bound.value)
    return 0


def end_index(bound, length):
    """
    Converts an end bound to an exclusive upper index.
    """
    if isinstance(bound, Included):
        return increment(bound.value)
    if isinstance(bound, Excluded):
        return bound.value
    return length


def is_negative(bound):
    return not isinstance(bound, Unbounded) and bound.value < 0


@dataclasses.dataclass(frozen=True)
class Bounds:
    start: object = UNBOUNDED
    end: object = UNBOUNDED

    def __post_init__(self):
        for bound in (self.start, self.end):
            if not isinstance(bound, BOUND_TYPES):
                raise TypeError(
                    f"expected Included, Excluded or Unbounded, got {bound!r}"
                )

    def __str__(self):
        return f"({self.start}, {self.end})"

    @classmethod
    def half_open(cls, start, end):
        return cls(Included(start), Excluded(end))

    @classmethod
    def closed(cls, start, end):
        return cls(Included(start), Included(end))

    def resolve(self, length):
        """
        Returns the ``(start, end)`` pair of indexes described by these
        bounds for a sequence of ``length`` elements, with ``start``
        inclusive and ``end`` exclusive.

        Raises OutOfRange if ``start`` does not point at an element or
        ``end`` lies past the last one. A pair with ``start >= end`` is
        returned as is; it describes an empty range.
        """
        if is_negative(self.start) or is_negative(self.end):
            raise OutOfRange(self, length)
        start = start_index(self.start)
        end = end_index(self.end, length)
        if start >= length or end > length:
            raise OutOfRange(self, length)
        return start, end


def as_bounds(obj):
    """
    Coerces ``obj`` to a Bounds instance. Accepts Bounds, a pair of
    bounds, a slice or range with a unit step, or None for the full range.
    """
    if obj is None:
        return Bounds()
    if isinstance(obj, Bounds):
        return obj
    if isinstance(obj, slice):
        if obj.step not in (None, 1):
            raise ValueError(f"slice step must be 1, got {obj.step}")
        start = UNBOUNDED if obj.start is None else Included(obj.start)
        end = UNBOUNDED if obj.stop is None else Excluded(obj.stop)
        return Bounds(start, end)
    if isinstance(obj, range):
        if obj.step != 1:
            raise ValueError(f"range step must be 1, got {obj.step}")
        return Bounds.half_open(obj.start, obj.stop)
    if isinstance(obj, tuple) and len(obj) == 2:
        return Bounds(*obj)
    raise TypeError(f"cannot interpret {obj!r} as range bounds")
