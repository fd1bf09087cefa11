"""Text rendering for dot matrices.

Renders a DotMatrix as a JSON-compatible text grid, one row per line:

    [
      ["↑", "←", "→", "↓", "↑", "↑"],
      ...
    ]

The arrow form is what a reader types back into the decoder, so
``ingest.parse_patch_json(render_arrows(m))`` reproduces ``m``. Drawing
dots on paper or screen is left to printing tools; only the marking
values are rendered here.
"""

from __future__ import annotations

import json

import numpy as np
import structlog

from .bits import DIRECTION_ARROWS, Direction

logger = structlog.get_logger(__name__)


def _render_rows(rows: list[list[str]]) -> str:
    lines = ["  [" + ", ".join(row) + "]" for row in rows]
    return "[\n" + ",\n".join(lines) + "\n]"


def render_arrows(matrix: np.ndarray) -> str:
    """Render a DotMatrix as a grid of arrow strings.

    Args:
        matrix: DotMatrix of shape (rows, cols, 2).

    Returns:
        JSON text, one row per line.
    """
    rows = []
    for row in matrix:
        cells = []
        for x_bit, y_bit in row:
            arrow = DIRECTION_ARROWS[Direction.from_bits(int(x_bit), int(y_bit))]
            cells.append(json.dumps(arrow, ensure_ascii=False))
        rows.append(cells)

    text = _render_rows(rows)
    logger.debug("arrows_rendered", rows=len(rows), cols=len(rows[0]) if rows else 0)
    return text


def render_bits(matrix: np.ndarray) -> str:
    """Render a DotMatrix as a grid of [x_bit, y_bit] pairs."""
    rows = [[f"[{int(x_bit)}, {int(y_bit)}]" for x_bit, y_bit in row] for row in matrix]
    return _render_rows(rows)
