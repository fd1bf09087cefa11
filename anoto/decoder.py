"""Patch decoder for the dot pattern.

Recovers the absolute position of an observed patch by:
1. Validating the patch shape and value domain
2. Splitting the markings into an x-bit plane and a y-bit plane
3. Looking up the first-row x window and the first-column y window
   in the precomputed window -> offset indexes
4. Re-encoding the patch at the found position and requiring an exact
   match, so every observed cell is accounted for

The result is the position modulo the period. A window missing from the
index, or a patch that disagrees with the pattern at the found position,
is reported as unrecognized. The decoder never picks a closest match.
"""

from __future__ import annotations

import numpy as np
import structlog

from .bits import directions_to_matrix
from .encoder import encode_patch
from .errors import AmbiguousOrUnknownWindow, MalformedPatch
from .sequence import AxisSequence

logger = structlog.get_logger(__name__)


def as_dot_matrix(patch) -> np.ndarray:
    """Coerce a patch into an H x W x 2 integer array.

    Accepts a DotMatrix (H x W x 2 bit pairs) or an H x W grid of
    Direction codes.

    Raises:
        MalformedPatch: If the patch has another shape or invalid values.
    """
    try:
        arr = np.asarray(patch)
    except (TypeError, ValueError) as e:
        raise MalformedPatch(f"Patch is not a rectangular array: {e}") from e

    if arr.ndim == 2:
        try:
            return directions_to_matrix(arr)
        except (TypeError, ValueError) as e:
            raise MalformedPatch(str(e)) from e

    if arr.ndim != 3 or arr.shape[2] != 2:
        raise MalformedPatch(f"Patch must have shape (rows, cols, 2), got {arr.shape}")
    if arr.size and not np.isin(arr, (0, 1)).all():
        raise MalformedPatch("Patch holds values outside the 2-bit domain")
    return arr


def _locate(seq: AxisSequence, bits: np.ndarray) -> int:
    offset = seq.locate(bits.tolist())
    if offset is None:
        window = "".join(str(int(b)) for b in bits)
        raise AmbiguousOrUnknownWindow(
            f"{seq.axis}-axis window {window} does not occur in the sequence"
        )
    return offset


def decode_position(x_seq: AxisSequence, y_seq: AxisSequence, patch) -> tuple[int, int]:
    """Decode the position of a patch's top-left cell.

    Args:
        x_seq: Horizontal-axis sequence.
        y_seq: Vertical-axis sequence.
        patch: DotMatrix (rows, cols, 2) or (rows, cols) Direction codes.

    Returns:
        (x, y) coordinate modulo the period.

    Raises:
        MalformedPatch: If the patch is smaller than the window or not a
            valid marking array.
        AmbiguousOrUnknownWindow: If the patch does not match exactly one
            position of the pattern.
    """
    arr = as_dot_matrix(patch)
    rows, cols = arr.shape[:2]
    if rows < y_seq.window or cols < x_seq.window:
        raise MalformedPatch(
            f"Patch {rows}x{cols} is smaller than the {y_seq.window}x{x_seq.window} window"
        )

    x = _locate(x_seq, arr[0, : x_seq.window, 0])
    y = _locate(y_seq, arr[: y_seq.window, 0, 1])

    expected = encode_patch(x_seq, y_seq, (x, y), (rows, cols))
    if not np.array_equal(arr, expected):
        mismatches = int(np.count_nonzero(arr != expected))
        logger.debug("decode_inconsistent_patch", x=x, y=y, mismatches=mismatches)
        raise AmbiguousOrUnknownWindow(
            f"Patch matches ({x}, {y}) on its first row and column but "
            f"disagrees in {mismatches} bit(s) elsewhere"
        )

    logger.debug("position_decoded", x=x, y=y, rows=rows, cols=cols)
    return x, y
