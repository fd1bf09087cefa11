"""Patch encoder for the dot pattern.

Renders an absolute coordinate into a block of directional markings.

Encoding algorithm:
1. Shift the origin by the roll (the section offset of a page)
2. Column c reads the horizontal sequence at (x + c + roll_x) mod P
3. Row r reads the vertical sequence at (y + r + roll_y) mod P
4. Each cell concatenates its column's x bit and its row's y bit

Every row of the x-bit plane is the same window of the horizontal
sequence and every column of the y-bit plane the same window of the
vertical sequence, which is what lets the decoder read each axis
independently. Blocks wider or taller than P wrap around.
"""

from __future__ import annotations

import numpy as np
import structlog

from .bits import freeze
from .sequence import AxisSequence

logger = structlog.get_logger(__name__)


def axis_indices(start: int, count: int, period: int) -> np.ndarray:
    """Sequence offsets of ``count`` consecutive cells starting at ``start``."""
    return (start % period + np.arange(count, dtype=np.int64)) % period


def encode_patch(
    x_seq: AxisSequence,
    y_seq: AxisSequence,
    origin: tuple[int, int],
    size: tuple[int, int],
    roll: tuple[int, int] = (0, 0),
) -> np.ndarray:
    """Encode the block whose top-left cell sits at ``origin``.

    Args:
        x_seq: Horizontal-axis sequence.
        y_seq: Vertical-axis sequence.
        origin: (x, y) absolute coordinate of the top-left cell.
        size: (rows, cols) of the block.
        roll: (roll_x, roll_y) offset added on each axis.

    Returns:
        Read-only int8 DotMatrix of shape (rows, cols, 2).

    Raises:
        ValueError: If rows or cols is not positive.
    """
    x, y = origin
    rows, cols = size
    roll_x, roll_y = roll
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Patch size must be positive, got {rows}x{cols}")

    x_bits = x_seq.array[axis_indices(x + roll_x, cols, x_seq.period)]
    y_bits = y_seq.array[axis_indices(y + roll_y, rows, y_seq.period)]

    matrix = np.empty((rows, cols, 2), dtype=np.int8)
    matrix[:, :, 0] = x_bits[np.newaxis, :]
    matrix[:, :, 1] = y_bits[:, np.newaxis]

    logger.debug(
        "patch_encoded",
        origin=(x, y),
        rows=rows,
        cols=cols,
        roll=(roll_x, roll_y),
    )
    return freeze(matrix)
