import numpy as np
import pytest

from hanoi_moves import IllegalMove, InvalidArgument, Move, generate, reverse_move
from hanoi_piles import (
    apply_move,
    initial_piles,
    is_legal,
    is_solved,
    piles_to_array,
    top_disk,
    validate_piles,
)


def test_initial_piles():
    assert initial_piles(3) == ((3, 2, 1), (), ())
    assert initial_piles(1) == ((1,), (), ())
    assert initial_piles(2, src=1) == ((), (2, 1), ())


def test_initial_piles_rejects_zero():
    with pytest.raises(InvalidArgument):
        initial_piles(0)


def test_apply_move_moves_top_disk():
    piles = apply_move(initial_piles(3), Move(0, 2))
    assert piles == ((3, 2), (), (1,))
    assert top_disk(piles, 2) == 1
    assert top_disk(piles, 1) is None


def test_apply_move_does_not_modify_input():
    start = initial_piles(2)
    apply_move(start, Move(0, 1))
    assert start == ((2, 1), (), ())


def test_apply_move_from_empty_peg():
    with pytest.raises(IllegalMove):
        apply_move(initial_piles(3), Move(1, 0))


def test_apply_move_larger_on_smaller():
    piles = apply_move(initial_piles(3), Move(0, 2))
    assert not is_legal(piles, Move(0, 2))
    with pytest.raises(IllegalMove):
        apply_move(piles, Move(0, 2))


@pytest.mark.parametrize("move", [Move(0, 0), Move(0, 3)])
def test_apply_move_bad_pegs(move):
    with pytest.raises(IllegalMove):
        apply_move(initial_piles(2), move)


def test_apply_then_reverse_restores_state():
    piles = initial_piles(4)
    for move in generate(4):
        after = apply_move(piles, move)
        assert apply_move(after, reverse_move(move)) == piles
        piles = after


@pytest.mark.parametrize("n", range(1, 11))
def test_full_sequence_solves(n):
    piles = initial_piles(n)
    for move in generate(n):
        piles = apply_move(piles, move)
        validate_piles(piles, n)
    assert piles == ((), (), tuple(range(n, 0, -1)))
    assert is_solved(piles)


def test_validate_piles_catches_broken_states():
    with pytest.raises(IllegalMove):
        validate_piles(((1, 2), (), ()), 2)
    with pytest.raises(IllegalMove):
        validate_piles(((2,), (), ()), 2)
    with pytest.raises(IllegalMove):
        validate_piles(((2, 1), (1,), ()), 2)


def test_piles_to_array():
    towers = piles_to_array(((3,), (2, 1), ()), 3)
    assert towers.dtype == np.int8
    assert towers.tolist() == [[3, 0, 0], [2, 1, 0], [0, 0, 0]]
