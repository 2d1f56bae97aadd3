from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game.pieces import BASE_SHAPES, CATALOG, Piece, PieceGenerator, TetrominoType, rotate


def test_catalog_has_seven_pieces_with_colors_one_to_seven():
    assert len(CATALOG) == 7
    assert sorted(p.color for p in CATALOG) == list(range(1, 8))
    for piece in CATALOG:
        assert int(piece.shape.sum()) == 4


def test_catalog_shapes_are_read_only():
    for shape in BASE_SHAPES.values():
        with pytest.raises(ValueError):
            shape[0, 0] = 9


def test_rotate_t_piece_clockwise():
    t = BASE_SHAPES[TetrominoType.T]
    rotated = rotate(t)
    assert rotated.shape == (3, 2)
    assert rotated.tolist() == [[1, 0], [1, 1], [1, 0]]


def test_rotate_matches_index_formula():
    shape = BASE_SHAPES[TetrominoType.L]
    rows, cols = shape.shape
    rotated = rotate(shape)
    for i in range(rows):
        for j in range(cols):
            assert rotated[j, rows - 1 - i] == shape[i, j]


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_rotations_restore_shape(kind):
    shape = BASE_SHAPES[kind]
    out = shape
    for _ in range(4):
        out = rotate(out)
    assert out.shape == shape.shape
    assert np.array_equal(out, shape)


def test_rotate_leaves_input_untouched():
    shape = BASE_SHAPES[TetrominoType.S]
    before = shape.copy()
    rotate(shape)
    assert np.array_equal(shape, before)


def test_piece_rotated_keeps_kind_and_color():
    piece = Piece.of(TetrominoType.J)
    rotated = piece.rotated()
    assert rotated.kind is TetrominoType.J
    assert rotated.color == 6
    assert (rotated.height, rotated.width) == (3, 2)
    assert rotated != piece
    assert rotated.rotated().rotated().rotated() == piece


def test_cells_at_offsets_occupied_cells():
    piece = Piece.of(TetrominoType.T)
    assert piece.cells_at(4, -1) == [(5, -1), (4, 0), (5, 0), (6, 0)]


def test_generator_is_reproducible_with_seed():
    a = PieceGenerator(42)
    b = PieceGenerator(42)
    assert [a.next_piece().kind for _ in range(50)] == [b.next_piece().kind for _ in range(50)]


def test_generator_draws_every_kind_and_allows_repeats():
    gen = PieceGenerator(3)
    kinds = [gen.next_piece().kind for _ in range(500)]
    assert set(kinds) == set(TetrominoType)
    assert any(a == b for a, b in zip(kinds, kinds[1:]))
