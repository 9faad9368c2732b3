class FenwickTreeError(Exception):
    pass


class AddError(FenwickTreeError):
    """
    An error in adding a delta to a tree element.
    """


class SumError(FenwickTreeError):
    """
    An error in calculating a partial sum.
    """


class IndexOutOfRange(AddError, IndexError):
    def __init__(self, index, size):
        self.index = index
        self.size = size
        super().__init__(f"Index `{index}` is greater than the size `{size}`")

    def __reduce__(self):
        return type(self), (self.index, self.size)


class OutOfRange(SumError, IndexError):
    # bounds is kept as given by the caller, before normalization
    def __init__(self, bounds, length):
        self.bounds = bounds
        self.length = length
        super().__init__(f"Range {bounds} is out of range of the length `{length}`")

    def __reduce__(self):
        return type(self), (self.bounds, self.length)
