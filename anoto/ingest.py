"""Validation and decoding of externally observed patches.

Readers report what they saw as JSON: an array of rows, each an array of
cells. A cell may be written in any of these forms:

    "↑" / "Up" / "up"        direction string (also ←, →, ↓)
    ["↑"]                    one-element array holding a direction string
    [0, 1]                   (x_bit, y_bit) pair

The payload is validated into an exact, read-only DotMatrix before it
reaches the codec. ``decode_patch_json`` turns every failure into a
``DecodeResult`` that tells the caller whether to fix its input
("malformed") or rescan ("unrecognized").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import structlog
from pydantic import RootModel, ValidationError, field_validator

from .bits import Direction, freeze, parse_direction
from .codec import Codec
from .errors import AmbiguousOrUnknownWindow, MalformedPatch

logger = structlog.get_logger(__name__)


@dataclass
class DecodeResult:
    """Result of decoding an observed patch.

    Attributes:
        position: Decoded (x, y), or None if decode failed.
        error: Error message if decode failed.
        error_kind: "malformed" (bad input shape or values) or
            "unrecognized" (pattern not found), None on success.
    """

    position: tuple[int, int] | None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.position is not None


def parse_cell(cell: Any) -> Direction:
    """Interpret one JSON cell as a Direction.

    Raises:
        ValueError: If the cell is in none of the accepted forms.
    """
    if isinstance(cell, str):
        return parse_direction(cell)
    if isinstance(cell, list):
        if len(cell) == 1 and isinstance(cell[0], str):
            return parse_direction(cell[0])
        if len(cell) == 2 and all(isinstance(v, int) and not isinstance(v, bool) for v in cell):
            try:
                return Direction.from_bits(cell[0], cell[1])
            except ValueError:
                raise ValueError(f"Invalid coordinate ({cell[0]}, {cell[1]})") from None
        # Annotated cell: the direction first, anything after it ignored
        if len(cell) == 2 and isinstance(cell[0], str):
            return parse_direction(cell[0])
        raise ValueError(f"Invalid cell array {cell!r}")
    raise ValueError(f"Invalid cell type {type(cell).__name__}")


class ObservedPatch(RootModel[list[list[Any]]]):
    """Rows of cells as reported by a reader."""

    @field_validator("root")
    @classmethod
    def _parse_cells(cls, rows: list[list[Any]]) -> list[list[Direction]]:
        parsed: list[list[Direction]] = []
        for r, row in enumerate(rows):
            cells: list[Direction] = []
            for c, cell in enumerate(row):
                try:
                    cells.append(parse_cell(cell))
                except ValueError as e:
                    raise ValueError(f"{e} at [{r}, {c}]") from None
            parsed.append(cells)
        return parsed

    def to_matrix(self, size: tuple[int, int]) -> np.ndarray:
        """Convert to a DotMatrix of exactly ``size``.

        Raises:
            MalformedPatch: If the row or column count differs from ``size``.
        """
        rows, cols = size
        if len(self.root) != rows:
            raise MalformedPatch(f"Patch must have {rows} rows, got {len(self.root)}")
        for r, row in enumerate(self.root):
            if len(row) != cols:
                raise MalformedPatch(f"Row {r} must have {cols} elements, got {len(row)}")

        matrix = np.empty((rows, cols, 2), dtype=np.int8)
        for r, row in enumerate(self.root):
            for c, direction in enumerate(row):
                matrix[r, c] = direction.bits
        return freeze(matrix)


def _first_error(err: ValidationError) -> str:
    first = err.errors()[0]
    msg = first.get("msg", str(err))
    return msg.removeprefix("Value error, ")


def parse_patch_json(text: str | bytes, size: tuple[int, int] = (6, 6)) -> np.ndarray:
    """Validate a JSON patch into a DotMatrix.

    Args:
        text: JSON document (array of rows).
        size: Required (rows, cols).

    Returns:
        Read-only DotMatrix of shape (rows, cols, 2).

    Raises:
        MalformedPatch: If the JSON is invalid or does not describe a
            patch of exactly ``size``.
    """
    try:
        observed = ObservedPatch.model_validate_json(text)
    except ValidationError as e:
        raise MalformedPatch(_first_error(e)) from e
    return observed.to_matrix(size)


def decode_patch_json(codec: Codec, text: str | bytes, size: tuple[int, int] | None = None) -> DecodeResult:
    """Validate and decode an observed patch.

    Args:
        codec: Codec the patch was printed with.
        text: JSON document (array of rows).
        size: Required (rows, cols); defaults to the codec window square.

    Returns:
        DecodeResult with the position, or the error and its kind.
    """
    if size is None:
        size = (codec.window, codec.window)

    try:
        matrix = parse_patch_json(text, size)
        x, y = codec.decode_position(matrix)
    except MalformedPatch as e:
        logger.warning("ingest_malformed_patch", error=str(e))
        return DecodeResult(position=None, error=str(e), error_kind="malformed")
    except AmbiguousOrUnknownWindow as e:
        logger.warning("ingest_unrecognized_patch", error=str(e))
        return DecodeResult(position=None, error=str(e), error_kind="unrecognized")

    logger.info("ingest_decoded", x=x, y=y)
    return DecodeResult(position=(x, y))
