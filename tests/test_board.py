import numpy as np
import pytest

from falling_blocks.game import Board, InvalidPlacementError, Piece, clear_full_lines
from tests.helpers import fill_row


def _bar(position, color_id=1):
    return Piece(shape=np.array([[1, 1, 1, 1]], dtype=np.int8), position=position, color_id=color_id)


def test_board_dimensions_are_fixed():
    board = Board((20, 10))
    assert board.shape == (20, 10)
    assert (board.height, board.width, board.depth) == (20, 10, 1)
    volume = Board((10, 20, 6))
    assert (volume.depth, volume.height, volume.width) == (10, 20, 6)


@pytest.mark.parametrize("dims", [(10,), (0, 10), (2, 2, 2, 2), (5, -1)])
def test_board_rejects_bad_dimensions(dims):
    with pytest.raises(ValueError):
        Board(dims)


def test_is_occupied_outside_is_false():
    board = Board((4, 4))
    board.cells[3, 0] = 2
    assert board.is_occupied((3, 0))
    assert not board.is_occupied((3, 1))
    assert not board.is_occupied((-1, 0))
    assert not board.is_occupied((4, 0))


def test_lock_writes_colour():
    board = Board((20, 10))
    board.lock(_bar((19, 3), color_id=5))
    assert list(board.cells[19]) == [0, 0, 0, 5, 5, 5, 5, 0, 0, 0]
    assert int(np.count_nonzero(board.cells)) == 4


@pytest.mark.parametrize("position", [(19, 7), (20, 0), (-1, 0), (5, -1)])
def test_lock_out_of_bounds_is_a_contract_violation(position):
    board = Board((20, 10))
    with pytest.raises(InvalidPlacementError):
        board.lock(_bar(position))
    assert not board.cells.any()


def test_lock_onto_occupied_cell_is_a_contract_violation():
    board = Board((20, 10))
    board.cells[10, 5] = 3
    with pytest.raises(InvalidPlacementError):
        board.lock(_bar((10, 3)))
    assert int(np.count_nonzero(board.cells)) == 1


def test_clear_without_full_rows_is_a_no_op():
    board = Board((6, 4))
    board.cells[5, :3] = 1
    board.cells[2, 1] = 4
    before = board.clone_state()
    assert board.clear_full_lines() == 0
    assert np.array_equal(board.cells, before)


def test_clear_removes_rows_simultaneously_and_keeps_order():
    board = Board((6, 4))
    board.cells[1, 0] = 2
    fill_row(board.cells, 2)
    board.cells[3, 1] = 3
    fill_row(board.cells, 4)
    board.cells[5, 2] = 4

    assert board.clear_full_lines() == 2
    assert board.shape == (6, 4)
    assert not board.cells[:3].any()
    assert board.cells[3, 0] == 2
    assert board.cells[4, 1] == 3
    assert board.cells[5, 2] == 4
    assert int(np.count_nonzero(board.cells)) == 3


def test_adjacent_full_rows_all_clear():
    board = Board((5, 3))
    for row in (1, 2, 3, 4):
        fill_row(board.cells, row)
    board.cells[0, 1] = 6
    assert board.clear_full_lines() == 4
    assert board.cells[4, 1] == 6
    assert int(np.count_nonzero(board.cells)) == 1


def test_volumetric_layers_clear_independently():
    board = Board((2, 4, 3))
    fill_row(board.cells[0], 3)
    board.cells[0, 2, 0] = 5
    board.cells[1, 3, :2] = 1
    board.cells[1, 1, 2] = 6
    layer_one = board.cells[1].copy()

    assert board.clear_full_lines() == 1
    assert board.cells[0, 3, 0] == 5
    assert int(np.count_nonzero(board.cells[0])) == 1
    assert np.array_equal(board.cells[1], layer_one)


def test_pure_clear_does_not_mutate_input():
    cells = np.zeros((4, 3), dtype=np.int8)
    fill_row(cells, 3)
    original = cells.copy()
    cleared, count = clear_full_lines(cells)
    assert count == 1
    assert np.array_equal(cells, original)
    assert not cleared.any()


def test_height_and_hole_metrics():
    board = Board((6, 3))
    assert board.get_max_height() == 0
    board.cells[3, 0] = 1
    board.cells[5, 1] = 1
    assert board.get_max_height() == 3
    assert board.count_holes() == 2
