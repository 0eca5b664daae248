class HilbertPreconditionError(ValueError):
    """
    Raised when a call violates the preconditions of a curve transform:
    bad bit width or dimension count, a coordinate vector of the wrong
    length, a value that does not fit in `bits` bits, or an index that
    does not fit in the scalar code width.

    Always raised before any coordinate is modified.
    """
    pass
