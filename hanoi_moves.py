from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, NamedTuple, Tuple

logger = logging.getLogger(__name__)


PEG_COUNT = 3

# Fixed peg convention: everything starts on A and ends on C
SRC, DEST, TEMP = 0, 2, 1


class HanoiError(Exception):
    """Base class for Tower of Hanoi errors."""


class InvalidArgument(HanoiError, ValueError):
    """Raised for a bad disk count, peg id, bound or seek target."""


class IllegalMove(HanoiError):
    """Raised when a move would break the stacking rules."""


class Move(NamedTuple):
    src: int
    dst: int


def reverse_move(move: Move) -> Move:
    return Move(move.dst, move.src)


def check_disk_count(n) -> int:
    # bool is an int subclass but never a meaningful disk count
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgument(f"disk count must be an integer, got {n!r}")
    if n < 1:
        raise InvalidArgument(f"disk count must be >= 1, got {n}")
    return n


def check_pegs(*pegs: int) -> None:
    for p in pegs:
        if isinstance(p, bool) or not isinstance(p, int) or not 0 <= p < PEG_COUNT:
            raise InvalidArgument(f"peg must be one of 0..{PEG_COUNT - 1}, got {p!r}")
    if len(set(pegs)) != len(pegs):
        raise InvalidArgument(f"pegs must be distinct, got {pegs}")


def solution_length(n: int) -> int:
    """Number of moves in the optimal solution for ``n`` disks."""
    return (2 ** check_disk_count(n)) - 1


@lru_cache(maxsize=None)
def _generate(n: int, src: int, dest: int, temp: int) -> Tuple[Move, ...]:
    moves: List[Move] = []

    def collect(k: int, a: int, c: int, b: int):
        if k == 1:
            moves.append(Move(a, c))
            return
        collect(k - 1, a, b, c)
        moves.append(Move(a, c))
        collect(k - 1, b, c, a)

    collect(n, src, dest, temp)
    logger.debug("generated %d moves for %d disks (%d -> %d)", len(moves), n, src, dest)
    return tuple(moves)


def generate(n: int, src: int = SRC, dest: int = DEST, temp: int = TEMP) -> Tuple[Move, ...]:
    """
    Optimal move sequence moving ``n`` disks from ``src`` to ``dest``.

    The classic recursion: park the ``n - 1`` smaller disks on ``temp``,
    move the largest disk, then bring the smaller ones back on top of it.
    The result is a tuple of exactly ``2**n - 1`` moves and is cached, so
    repeated calls for the same arguments return the same object.
    """
    check_disk_count(n)
    check_pegs(src, dest, temp)
    return _generate(n, src, dest, temp)
