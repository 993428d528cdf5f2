from __future__ import annotations

import logging
from functools import lru_cache
from typing import NamedTuple, Optional, Tuple

from counter import BoundedCounter, check_integer
from hanoi_moves import (
    DEST,
    PEG_COUNT,
    SRC,
    TEMP,
    InvalidArgument,
    Move,
    check_disk_count,
    generate,
)
from hanoi_piles import PilesState, apply_move, initial_piles, is_solved

logger = logging.getLogger(__name__)


class HanoiState(NamedTuple):
    i: int
    piles: PilesState
    total: int


@lru_cache(maxsize=None)
def solution_table(
    n: int, src: int = SRC, dest: int = DEST, temp: int = TEMP
) -> Tuple[Tuple[Move, ...], Tuple[PilesState, ...]]:
    """
    Moves and the configuration after every prefix of them, for ``n`` disks.

    ``states[k]`` is the configuration once ``k`` moves have been applied, so
    there are ``len(moves) + 1`` states. Built once per ``n`` and peg convention.
    """
    moves = generate(n, src, dest, temp)
    states = [initial_piles(n, src)]
    for move in moves:
        states.append(apply_move(states[-1], move))
    logger.debug("built %d states for %d disks", len(states), n)
    return moves, tuple(states)


class HanoiStateMachine:
    """
    Cursor over the optimal solution for a fixed number of disks.

    The cursor counts moves applied so far and lives in [0, total]. Every
    configuration is precomputed, so stepping and seeking are both O(1) and
    can never disagree with each other.
    """

    def __init__(self, n: int, pegs: Tuple[int, int, int] = (SRC, DEST, TEMP)):
        self.n = check_disk_count(n)
        self.pegs = tuple(pegs)
        if len(self.pegs) != PEG_COUNT:
            raise InvalidArgument(f"expected {PEG_COUNT} pegs (src, dest, temp), got {self.pegs}")
        self.movements, self.states = solution_table(self.n, *self.pegs)
        self.total = len(self.movements)
        self._cursor = BoundedCounter(0, self.total, 0)

    def __repr__(self):
        return f"HanoiStateMachine(n={self.n}, i={self.i}/{self.total})"

    # ------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------
    @property
    def i(self) -> int:
        return self._cursor.value

    @property
    def piles(self) -> PilesState:
        return self.states[self.i]

    @property
    def remaining(self) -> int:
        return self.total - self.i

    @property
    def last_move(self) -> Optional[Move]:
        return self.movements[self.i - 1] if self.i > 0 else None

    @property
    def next_move(self) -> Optional[Move]:
        return self.movements[self.i] if self.i < self.total else None

    @property
    def is_solved(self) -> bool:
        return is_solved(self.piles, self.pegs[1])

    def current_state(self) -> HanoiState:
        return HanoiState(self.i, self.piles, self.total)

    # ------------------------------------------------------------------------
    # Selectors
    # ------------------------------------------------------------------------
    @property
    def can_step(self) -> bool:
        return self._cursor.can_increment

    @property
    def can_step_back(self) -> bool:
        return self._cursor.can_decrement

    # ------------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------------
    def step(self):
        self._cursor.increment()

    def step_back(self):
        self._cursor.decrement()

    def reset(self):
        self._cursor.set_to(0)

    def set_to(self, index: int):
        check_integer(index, "index")
        if not 0 <= index <= self.total:
            logger.debug("clamping index %d into [0, %d]", index, self.total)
        self._cursor.set_to(index)


def create_hanoi(n: int, pegs: Tuple[int, int, int] = (SRC, DEST, TEMP)) -> HanoiStateMachine:
    return HanoiStateMachine(n, pegs)
