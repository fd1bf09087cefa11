"""Page tiling for the dot pattern.

A printed page is one large patch. Its section (sect_u, sect_v) picks
which slice of the coordinate space it carries: the section reduced
modulo the period becomes the roll applied to the whole page. Anything
that needs to reproduce a page cell (printing, lookup, decoding checks)
must go through ``section_roll`` so all of them agree bit for bit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import structlog

from .bits import freeze
from .config import A4_HEIGHT_PT, A4_WIDTH_PT
from .errors import OutOfBounds

if TYPE_CHECKING:
    from .codec import Codec

logger = structlog.get_logger(__name__)

SECTION_SIZE = (6, 6)


def section_roll(sect_u: int, sect_v: int, period: int) -> tuple[int, int]:
    """Roll applied to a page of the given section."""
    return (sect_u % period, sect_v % period)


def generate_matrix(codec: Codec, height: int, width: int, sect_u: int, sect_v: int) -> np.ndarray:
    """Generate the full dot matrix of one page.

    Args:
        codec: Codec supplying the axis sequences.
        height: Number of grid rows.
        width: Number of grid columns.
        sect_u: Horizontal section.
        sect_v: Vertical section.

    Returns:
        Read-only DotMatrix of shape (height, width, 2).
    """
    roll = section_roll(sect_u, sect_v, codec.mns_length)
    matrix = codec.encode_patch((0, 0), (height, width), roll)

    logger.info(
        "page_generated",
        height=height,
        width=width,
        sect_u=sect_u,
        sect_v=sect_v,
        roll=roll,
    )
    return matrix


def extract_section(
    matrix: np.ndarray,
    row: int,
    col: int,
    size: tuple[int, int] = SECTION_SIZE,
) -> np.ndarray:
    """Copy a block out of a dot matrix.

    Args:
        matrix: Source DotMatrix (rows, cols, 2).
        row: Top row of the block.
        col: Left column of the block.
        size: (rows, cols) of the block.

    Returns:
        Read-only DotMatrix of the requested size.

    Raises:
        OutOfBounds: If the block does not lie fully inside ``matrix``.
    """
    rows, cols = size
    height, width = matrix.shape[:2]
    if row < 0 or col < 0 or row + rows > height or col + cols > width:
        raise OutOfBounds(
            f"{rows}x{cols} block at ({row}, {col}) exceeds {height}x{width} matrix"
        )
    return freeze(np.array(matrix[row : row + rows, col : col + cols]))


def extract_6x6_section(matrix: np.ndarray, row: int, col: int) -> np.ndarray:
    """Copy the 6x6 block whose top-left cell is (row, col)."""
    return extract_section(matrix, row, col, SECTION_SIZE)


def a4_grid_shape(grid_spacing: float, margin: float = 20.0) -> tuple[int, int]:
    """Number of grid points that fit an A4 page.

    Args:
        grid_spacing: Distance between grid points, in points.
        margin: Blank border on each side, in points.

    Returns:
        (height, width) in grid points.

    Raises:
        ValueError: If grid_spacing is not positive or the margin leaves no room.
    """
    if grid_spacing <= 0:
        raise ValueError(f"grid_spacing must be positive, got {grid_spacing}")
    if 2 * margin >= min(A4_WIDTH_PT, A4_HEIGHT_PT):
        raise ValueError(f"margin {margin} leaves no printable area")
    width = int((A4_WIDTH_PT - 2 * margin) / grid_spacing) + 1
    height = int((A4_HEIGHT_PT - 2 * margin) / grid_spacing) + 1
    return height, width
