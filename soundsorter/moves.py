from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from .errors import MoveIndexError


@dataclass(frozen=True, slots=True)
class Swap:
    """Exchange the values at positions i and j."""
    i: int
    j: int


@dataclass(frozen=True, slots=True)
class Overwrite:
    """Set position i to value, discarding what was there."""
    i: int
    value: float


Move = Union[Swap, Overwrite]


@dataclass(frozen=True, slots=True)
class MoveLog:
    """
    Chronological record of every mutation an engine made.

    Attributes
    ----------
    length : int               — length of the array the log was recorded against
    moves  : tuple[Move, ...]  — moves in the order they were performed
    """
    length: int
    moves: tuple = ()

    @classmethod
    def record(cls, length: int, moves: Iterable[Move]) -> "MoveLog":
        return cls(length, tuple(moves))

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __len__(self):
        return len(self.moves)

    def __getitem__(self, idx):
        return self.moves[idx]

    def swaps(self):
        return sum(1 for m in self.moves if isinstance(m, Swap))

    def overwrites(self):
        return sum(1 for m in self.moves if isinstance(m, Overwrite))


def touched(move: Move):
    """Indices whose value may have changed after applying `move`."""
    if isinstance(move, Swap):
        return (move.i, move.j)
    return (move.i,)


def apply_move(arr: list, move: Move) -> None:
    """Apply one move to `arr` in place, raising MoveIndexError on a bad index."""
    n = len(arr)
    for idx in touched(move):
        if not 0 <= idx < n:
            raise MoveIndexError(move, n)
    if isinstance(move, Swap):
        arr[move.i], arr[move.j] = arr[move.j], arr[move.i]
    else:
        arr[move.i] = move.value


def check_length(arr, log: MoveLog) -> None:
    if len(arr) != log.length:
        raise MoveIndexError(None, len(arr), expected=log.length)


def replay(initial, log: MoveLog) -> list:
    """Apply the whole log to a copy of `initial` and return the result."""
    arr = list(initial)
    check_length(arr, log)
    for move in log:
        apply_move(arr, move)
    return arr
