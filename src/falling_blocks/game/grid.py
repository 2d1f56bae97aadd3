from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .pieces import Piece


Board = np.ndarray


@dataclass(frozen=True, eq=False)
class PlacementResult:
    board: Board
    lines_cleared: int


def empty_board(width: int, height: int) -> Board:
    board = np.zeros((height, width), dtype=np.int8)
    board.setflags(write=False)
    return board


def _frozen_copy(board: Board) -> Board:
    out = board.copy()
    out.setflags(write=False)
    return out


def is_valid(piece: Piece, x: int, y: int, board: Board) -> bool:
    """Check that every occupied cell of `piece` at (x, y) is free.

    Cells above the top edge (negative rows) are allowed so that a piece can
    still be entering the board.
    """
    height, width = board.shape
    for cx, cy in piece.cells_at(x, y):
        if cx < 0 or cx >= width or cy >= height:
            return False
        if cy >= 0 and board[cy, cx] != 0:
            return False
    return True


def place(piece: Piece, x: int, y: int, board: Board) -> Board:
    """Return a new board with `piece` merged in; cells off the board are skipped."""
    height, width = board.shape
    out = board.copy()
    for cx, cy in piece.cells_at(x, y):
        if 0 <= cy < height and 0 <= cx < width:
            out[cy, cx] = piece.color
    out.setflags(write=False)
    return out


def clear_lines(board: Board) -> Tuple[Board, int]:
    """Drop every full row, shift the rest down and refill the top with empty rows."""
    full_rows = np.all(board != 0, axis=1)
    num = int(np.count_nonzero(full_rows))
    if num == 0:
        return _frozen_copy(board), 0
    kept = board[~full_rows]
    new_rows = np.zeros((num, board.shape[1]), dtype=board.dtype)
    out = np.vstack((new_rows, kept))
    out.setflags(write=False)
    return out, num


def lock_piece(piece: Piece, x: int, y: int, board: Board) -> PlacementResult:
    cleared, lines = clear_lines(place(piece, x, y, board))
    return PlacementResult(board=cleared, lines_cleared=lines)


def drop_distance(piece: Piece, x: int, y: int, board: Board) -> int:
    """Number of rows `piece` can fall from (x, y) before it is blocked."""
    distance = 0
    while is_valid(piece, x, y + distance + 1, board):
        distance += 1
    return distance


def get_max_height(board: Board) -> int:
    # row 0 is the top; find first non-empty row from the top
    non_empty_rows = np.where(np.any(board != 0, axis=1))[0]
    if non_empty_rows.size == 0:
        return 0
    return board.shape[0] - int(non_empty_rows[0])


def count_holes(board: Board) -> int:
    holes = 0
    for x in range(board.shape[1]):
        seen_block = False
        for cell in board[:, x]:
            if cell != 0:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes
