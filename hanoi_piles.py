from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from hanoi_moves import (
    DEST,
    PEG_COUNT,
    SRC,
    IllegalMove,
    Move,
    check_disk_count,
)


Peg = Tuple[int, ...]
# One tuple per peg, bottom -> top; the last disk is the movable one
PilesState = Tuple[Peg, Peg, Peg]


def initial_piles(n: int, src: int = SRC) -> PilesState:
    check_disk_count(n)
    piles = [(), (), ()]
    piles[src] = tuple(range(n, 0, -1))
    return tuple(piles)


def top_disk(piles: PilesState, peg: int) -> Optional[int]:
    stack = piles[peg]
    return stack[-1] if stack else None


def _move_error(piles: PilesState, move: Move) -> Optional[str]:
    src, dst = move
    if not (0 <= src < PEG_COUNT and 0 <= dst < PEG_COUNT) or src == dst:
        return f"bad pegs in move {tuple(move)}"
    disk = top_disk(piles, src)
    if disk is None:
        return f"peg {src} is empty"
    target = top_disk(piles, dst)
    if target is not None and disk > target:
        return f"cannot put disk {disk} on smaller disk {target}"
    return None


def is_legal(piles: PilesState, move: Move) -> bool:
    return _move_error(piles, move) is None


def apply_move(piles: PilesState, move: Move) -> PilesState:
    """
    Return a new state with the top disk of ``move.src`` placed on ``move.dst``.

    Raises IllegalMove when the source peg is empty or the disk would land on
    a smaller one. The input state is never modified.
    """
    error = _move_error(piles, move)
    if error is not None:
        raise IllegalMove(error)

    src, dst = move
    new = list(piles)
    new[dst] = piles[dst] + (piles[src][-1],)
    new[src] = piles[src][:-1]
    return tuple(new)


def is_solved(piles: PilesState, dest: int = DEST) -> bool:
    return all(not stack for p, stack in enumerate(piles) if p != dest)


def validate_piles(piles: PilesState, n: int) -> None:
    """Raise IllegalMove unless every disk 1..n sits once, in decreasing order."""
    if len(piles) != PEG_COUNT:
        raise IllegalMove(f"expected {PEG_COUNT} pegs, got {len(piles)}")
    seen = sorted(d for stack in piles for d in stack)
    if seen != list(range(1, n + 1)):
        raise IllegalMove(f"disks {seen} are not exactly 1..{n}")
    for p, stack in enumerate(piles):
        if any(lower <= upper for lower, upper in zip(stack, stack[1:])):
            raise IllegalMove(f"peg {p} is not strictly decreasing: {stack}")


def piles_to_array(piles: PilesState, n: int) -> np.ndarray:
    """(3, n) int8 tower array, one row per peg, bottom first, zero padded."""
    towers = np.zeros((PEG_COUNT, n), dtype=np.int8)
    for peg, stack in enumerate(piles):
        towers[peg, : len(stack)] = stack
    return towers
