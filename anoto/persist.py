"""Saving and loading generated dot matrices.

Two formats are supported:

- JSON: ``{"preset": ..., "sect_u": ..., "sect_v": ..., "matrix": [[[x, y], ...], ...]}``
  where the section fields are optional.
- Text: one line per row, one arrow per cell, cells separated by spaces.

Loaded matrices are validated and returned read-only. Bits must be JSON
integers; strings, booleans and floats are rejected.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import structlog
from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator

from .bits import DIRECTION_ARROWS, directions_to_matrix, freeze, matrix_to_directions, parse_direction
from .errors import MalformedPatch

logger = structlog.get_logger(__name__)


class PageRecord(BaseModel):
    """A stored page: its matrix and, optionally, how it was generated."""

    preset: str | None = None
    sect_u: int | None = None
    sect_v: int | None = None
    matrix: list[list[tuple[StrictInt, StrictInt]]] = Field(min_length=1)

    @field_validator("matrix")
    @classmethod
    def _check_matrix(cls, rows: list[list[tuple[int, int]]]) -> list[list[tuple[int, int]]]:
        width = len(rows[0])
        if width == 0:
            raise ValueError("matrix rows must not be empty")
        for r, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {r} has {len(row)} cells, expected {width}")
            for c, (x_bit, y_bit) in enumerate(row):
                if x_bit not in (0, 1) or y_bit not in (0, 1):
                    raise ValueError(f"invalid bit pair ({x_bit}, {y_bit}) at [{r}, {c}]")
        return rows

    def to_matrix(self) -> np.ndarray:
        return freeze(np.array(self.matrix, dtype=np.int8))


def _as_bit_matrix(matrix) -> np.ndarray:
    """Accept a DotMatrix or an H x W grid of Direction codes."""
    arr = np.asarray(matrix)
    if arr.ndim == 2:
        return directions_to_matrix(arr)
    return arr


def save_matrix_json(
    path: str | Path,
    matrix: np.ndarray,
    preset: str | None = None,
    sect_u: int | None = None,
    sect_v: int | None = None,
) -> Path:
    """Write a DotMatrix and its section metadata as JSON.

    Returns:
        The path written.
    """
    path = Path(path)
    matrix = _as_bit_matrix(matrix)
    record = PageRecord(
        preset=preset,
        sect_u=sect_u,
        sect_v=sect_v,
        matrix=matrix.tolist(),
    )
    path.write_text(record.model_dump_json(), encoding="utf-8")
    logger.info("matrix_saved", path=str(path), format="json", shape=tuple(np.shape(matrix)[:2]))
    return path


def load_page_json(path: str | Path) -> PageRecord:
    """Read a page and its section metadata written by ``save_matrix_json``.

    Raises:
        MalformedPatch: If the file is not a valid stored page.
    """
    path = Path(path)
    try:
        record = PageRecord.model_validate_json(path.read_bytes())
    except ValidationError as e:
        raise MalformedPatch(f"{path}: {e.errors()[0]['msg']}") from e
    logger.debug("matrix_loaded", path=str(path), format="json")
    return record


def load_matrix_json(path: str | Path) -> np.ndarray:
    """Read the DotMatrix of a page written by ``save_matrix_json``.

    Raises:
        MalformedPatch: If the file is not a valid stored page.
    """
    return load_page_json(path).to_matrix()


def save_matrix_txt(path: str | Path, matrix: np.ndarray) -> Path:
    """Write a DotMatrix as rows of arrows."""
    path = Path(path)
    matrix = _as_bit_matrix(matrix)
    lines = [" ".join(DIRECTION_ARROWS[d] for d in row) for row in matrix_to_directions(matrix)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("matrix_saved", path=str(path), format="txt", shape=tuple(np.shape(matrix)[:2]))
    return path


def load_matrix_txt(path: str | Path) -> np.ndarray:
    """Read a DotMatrix written by ``save_matrix_txt``.

    Raises:
        MalformedPatch: On unknown symbols or rows of unequal length.
    """
    path = Path(path)
    grid = []
    for r, line in enumerate(path.read_text(encoding="utf-8").splitlines()):
        if not line.strip():
            continue
        try:
            grid.append([int(parse_direction(token)) for token in line.split()])
        except ValueError as e:
            raise MalformedPatch(f"{path}: {e} on row {r}") from e

    if not grid:
        raise MalformedPatch(f"{path}: no rows")
    width = len(grid[0])
    for r, row in enumerate(grid):
        if len(row) != width:
            raise MalformedPatch(f"{path}: row {r} has {len(row)} cells, expected {width}")

    logger.debug("matrix_loaded", path=str(path), format="txt")
    return directions_to_matrix(grid)
