"""Direction markings and bit utilities for the dot pattern.

Every grid point carries one of four directional markings. A marking is
the concatenation of one horizontal-axis bit and one vertical-axis bit:

    (x_bit, y_bit)  direction  code
    (0, 0)          Up         0
    (1, 0)          Left       1
    (0, 1)          Right      2
    (1, 1)          Down       3

Also handles packing bit windows into integers (the key of the decoder
index) and conversion between DotMatrix arrays and Direction grids.
"""

from __future__ import annotations

import enum

import numpy as np


class Direction(enum.IntEnum):
    """Displacement of a dot from its grid point.

    The integer value is ``x_bit + 2 * y_bit``.
    """

    UP = 0
    LEFT = 1
    RIGHT = 2
    DOWN = 3

    @classmethod
    def from_bits(cls, x_bit: int, y_bit: int) -> Direction:
        """Build a Direction from its (x_bit, y_bit) pair.

        Raises:
            ValueError: If either bit is not 0 or 1.
        """
        if x_bit not in (0, 1) or y_bit not in (0, 1):
            raise ValueError(f"Invalid bit pair ({x_bit}, {y_bit})")
        return cls(x_bit + 2 * y_bit)

    @property
    def bits(self) -> tuple[int, int]:
        """The (x_bit, y_bit) pair of this direction."""
        return (self.value & 1, self.value >> 1)

    @property
    def arrow(self) -> str:
        return DIRECTION_ARROWS[self]


DIRECTION_ARROWS: dict[Direction, str] = {
    Direction.UP: "↑",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
    Direction.DOWN: "↓",
}

# Every spelling accepted from external input
DIRECTION_BY_NAME: dict[str, Direction] = {
    name: d
    for d, arrow in DIRECTION_ARROWS.items()
    for name in (arrow, d.name.capitalize(), d.name.lower())
}


def parse_direction(name: str) -> Direction:
    """Look up a direction by arrow glyph or name.

    Args:
        name: One of "↑", "Up", "up", "←", "Left", ... etc.

    Returns:
        The matching Direction.

    Raises:
        ValueError: If name is not a known spelling.
    """
    try:
        return DIRECTION_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Invalid direction string {name!r}") from None


def bits_to_int(bits) -> int:
    """Pack a bit window into an integer (MSB first).

    Args:
        bits: Iterable of 0s and 1s.

    Returns:
        Integer whose binary representation is the window.
    """
    value = 0
    for bit in bits:
        value = (value << 1) | int(bit)
    return value


def int_to_bits(value: int, length: int) -> list[int]:
    """Unpack an integer into a bit window of the given length (MSB first)."""
    if value < 0 or value >= 1 << length:
        raise ValueError(f"Value {value} does not fit in {length} bits")
    return [(value >> i) & 1 for i in range(length - 1, -1, -1)]


def freeze(matrix: np.ndarray) -> np.ndarray:
    """Mark a DotMatrix read-only and return it."""
    matrix.flags.writeable = False
    return matrix


def directions_to_matrix(grid) -> np.ndarray:
    """Convert an H x W grid of Direction codes into an H x W x 2 DotMatrix.

    Raises:
        ValueError: If the grid is not 2-D or holds codes outside 0-3.
    """
    codes = np.asarray(grid)
    if codes.dtype == object:
        codes = codes.astype(np.int64)
    if codes.ndim != 2:
        raise ValueError(f"Direction grid must be 2-D, got {codes.ndim}-D")
    if codes.size and (not np.issubdtype(codes.dtype, np.integer) or codes.min() < 0 or codes.max() > 3):
        raise ValueError("Direction grid holds values outside 0-3")
    matrix = np.empty(codes.shape + (2,), dtype=np.int8)
    matrix[..., 0] = codes & 1
    matrix[..., 1] = codes >> 1
    return freeze(matrix)


def matrix_to_directions(matrix: np.ndarray) -> list[list[Direction]]:
    """Convert an H x W x 2 DotMatrix into nested lists of Direction."""
    codes = matrix[..., 0].astype(np.int64) + 2 * matrix[..., 1].astype(np.int64)
    return [[Direction(int(code)) for code in row] for row in codes]
