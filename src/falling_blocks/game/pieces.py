from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}


def rotate(shape: Shape) -> Shape:
    """Rotate an R x C occupancy matrix 90 degrees clockwise into C x R.

    Cell ``shape[i][j]`` lands on ``rotated[j][R - 1 - i]``.
    """
    rotated = np.rot90(shape, 1, axes=(1, 0)).copy()
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape

    @classmethod
    def of(cls, kind: TetrominoType) -> "Piece":
        return cls(kind, BASE_SHAPES[kind])

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy in range(self.height):
            for dx in range(self.width):
                if self.shape[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.kind == other.kind and np.array_equal(self.shape, other.shape)

    __hash__ = None  # type: ignore[assignment]


CATALOG: Tuple[Piece, ...] = tuple(Piece.of(kind) for kind in TetrominoType)


class PieceGenerator:
    """Draws catalog pieces uniformly and independently (repeats allowed)."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def next_piece(self) -> Piece:
        return self.rng.choice(CATALOG)
