import numpy as np

from falling_blocks.game import Board, Piece, TetrominoType, can_place


def _vertical_i(x, y):
    piece = Piece.spawn(TetrominoType.I, x, y)
    piece.apply_rotation(piece.rotated())
    return piece


def test_spawned_piece_fits_empty_board():
    board = Board(10, 20)
    assert can_place(board, Piece.spawn(TetrominoType.I, 3, 0))


def test_walls_and_floor():
    board = Board(10, 20)
    piece = Piece.spawn(TetrominoType.I, 0, 19)
    assert not can_place(board, piece, -1, 0)
    assert not can_place(board, piece, 0, 1)
    assert can_place(board, piece, 1, 0)

    piece.x = 6
    assert can_place(board, piece)
    assert not can_place(board, piece, 1, 0)


def test_cells_above_top_are_allowed():
    board = Board(10, 20)
    piece = _vertical_i(4, -3)
    assert can_place(board, piece)
    board.grid[0, 4] = 2
    assert not can_place(board, piece)
    assert can_place(board, piece, -1, 0)


def test_filled_cell_blocks():
    board = Board(10, 20)
    board.grid[5, 4] = 1
    piece = Piece.spawn(TetrominoType.O, 3, 3)
    assert can_place(board, piece)
    assert not can_place(board, piece, 0, 1)
    assert can_place(board, piece, -2, 1)


def test_candidate_shape_replaces_piece_shape():
    board = Board(10, 20)
    piece = Piece.spawn(TetrominoType.I, 3, 18)
    assert can_place(board, piece)
    assert not can_place(board, piece, candidate_shape=piece.rotated())


def test_can_place_is_pure():
    board = Board(10, 20)
    board.grid[10:, 2] = 3
    piece = Piece.spawn(TetrominoType.L, 1, 8)
    grid_before = board.snapshot()
    shape_before = piece.shape.copy()

    results = {can_place(board, piece, 0, 1) for _ in range(10)}
    assert len(results) == 1
    assert {can_place(board, piece, 1, 0, piece.rotated()) for _ in range(10)} == {
        can_place(board, piece, 1, 0, piece.rotated())
    }
    assert np.array_equal(board.grid, grid_before)
    assert np.array_equal(piece.shape, shape_before)
    assert (piece.x, piece.y, piece.rotation) == (1, 8, 0)
