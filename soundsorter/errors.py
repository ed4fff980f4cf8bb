class SoundSorterError(Exception):
    """Base class for every error raised by soundsorter."""


class InvalidAlgorithm(SoundSorterError, KeyError):
    """
    Raised by sort() when the algorithm key is not registered.

    Attributes
    ----------
    name  : str            — the key that was requested
    known : tuple[str, ...] — registered keys, in menu order
    """

    def __init__(self, name, known=()):
        self.name  = name
        self.known = tuple(known)
        super().__init__(name)

    def __str__(self):
        return f"Unknown algorithm {self.name!r} (expected one of: {', '.join(self.known)})"


class MoveIndexError(SoundSorterError, AssertionError):
    """
    A move, or a whole log, does not fit the array it is replayed against.

    `move` is the offending Move, or None when the log was recorded for a
    different length (`expected`).

    Only a broken engine can produce this, so it is never caught inside
    the package.
    """

    def __init__(self, move, length, expected=None):
        self.move     = move
        self.length   = length
        self.expected = expected
        if move is None:
            msg = f"log recorded for length {expected} replayed against length {length}"
        else:
            msg = f"{move!r} out of range for array of length {length}"
        super().__init__(msg)
