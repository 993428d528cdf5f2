import pytest

from hanoi_moves import InvalidArgument, Move
from hanoi_piles import initial_piles
from hanoi_stepper import HanoiState, create_hanoi, solution_table


def test_three_disk_scenario():
    hanoi = create_hanoi(3)
    assert hanoi.total == 7
    assert list(hanoi.movements) == [(0, 2), (0, 1), (2, 1), (0, 2), (1, 0), (1, 2), (0, 2)]
    assert hanoi.states[0] == ((3, 2, 1), (), ())
    assert hanoi.states[3] == ((3,), (2, 1), ())
    assert hanoi.states[7] == ((), (), (3, 2, 1))


def test_initial_state():
    hanoi = create_hanoi(4)
    assert hanoi.current_state() == HanoiState(0, initial_piles(4), 15)
    assert hanoi.can_step
    assert not hanoi.can_step_back
    assert hanoi.remaining == 15
    assert hanoi.last_move is None
    assert hanoi.next_move == Move(0, 1)


@pytest.mark.parametrize("n", range(1, 8))
def test_seek_matches_stepping(n):
    stepped = create_hanoi(n)
    seeker = create_hanoi(n)
    for k in range(stepped.total + 1):
        seeker.set_to(k)
        assert seeker.current_state() == stepped.current_state()
        stepped.step()


def test_step_then_step_back_restores():
    hanoi = create_hanoi(3)
    hanoi.set_to(4)
    before = hanoi.current_state()
    hanoi.step()
    assert hanoi.i == 5
    assert hanoi.last_move == Move(1, 0)
    hanoi.step_back()
    assert hanoi.current_state() == before


def test_boundaries_are_noops():
    hanoi = create_hanoi(2)
    hanoi.step_back()
    assert hanoi.i == 0

    hanoi.set_to(hanoi.total)
    assert not hanoi.can_step
    assert hanoi.next_move is None
    assert hanoi.is_solved
    hanoi.step()
    assert hanoi.i == 3
    assert hanoi.piles == ((), (), (2, 1))


def test_set_to_clamps():
    hanoi = create_hanoi(3)
    hanoi.set_to(100)
    assert hanoi.i == 7
    hanoi.set_to(-5)
    assert hanoi.i == 0
    assert hanoi.piles == initial_piles(3)


def test_set_to_rejects_non_integers():
    hanoi = create_hanoi(3)
    with pytest.raises(InvalidArgument):
        hanoi.set_to(2.5)


def test_reset():
    hanoi = create_hanoi(3)
    hanoi.set_to(6)
    hanoi.reset()
    assert hanoi.i == 0
    assert not hanoi.is_solved


def test_single_disk():
    hanoi = create_hanoi(1)
    assert hanoi.total == 1
    hanoi.step()
    assert hanoi.current_state() == HanoiState(1, ((), (), (1,)), 1)


@pytest.mark.parametrize("n", [0, -3, 1.5])
def test_create_hanoi_rejects_bad_n(n):
    with pytest.raises(InvalidArgument):
        create_hanoi(n)


def test_other_peg_convention():
    hanoi = create_hanoi(2, pegs=(1, 0, 2))
    assert hanoi.piles == ((), (2, 1), ())
    hanoi.set_to(hanoi.total)
    assert hanoi.piles == ((2, 1), (), ())
    assert hanoi.is_solved


def test_solution_table_is_shared_per_n():
    assert create_hanoi(5).states is create_hanoi(5).states
    moves, states = solution_table(5)
    assert len(states) == len(moves) + 1


@pytest.mark.parametrize("pegs", [(0, 2), (0, 2, 1, 3), ()])
def test_create_hanoi_rejects_wrong_peg_count(pegs):
    with pytest.raises(InvalidArgument):
        create_hanoi(3, pegs=pegs)
