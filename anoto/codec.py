"""Position codec handle.

A ``Codec`` bundles one configuration with the two axis sequences built
from it and their window -> offset indexes. Construction is the only
expensive step and the only one that can fail fatally. Afterwards the
codec holds no mutable state, so one instance can serve any number of
concurrent encode and decode calls.
"""

from __future__ import annotations

import functools

import numpy as np
import structlog

from . import decoder, encoder, tiler
from .config import DEFAULT_PRESET, CodecConfig, select_preset
from .sequence import AxisSequence, build_sequences

logger = structlog.get_logger(__name__)


class Codec:
    """Encoder/decoder for one dot-pattern configuration.

    Raises:
        ConfigurationInvariantViolation: On construction, if the
            configured sequences cannot keep every window unique.
    """

    __slots__ = ("_config", "_x_seq", "_y_seq")

    def __init__(self, config: CodecConfig):
        x_seq, y_seq = build_sequences(config)
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_x_seq", x_seq)
        object.__setattr__(self, "_y_seq", y_seq)

        logger.info(
            "codec_constructed",
            preset=config.name,
            window=config.window,
            mns_length=config.period,
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"Codec(preset={self._config.name!r}, window={self.window}, mns_length={self.mns_length})"

    @classmethod
    def from_preset(cls, preset_name: str) -> Codec:
        """Build a new codec from a named preset."""
        return cls(select_preset(preset_name))

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def x_sequence(self) -> AxisSequence:
        return self._x_seq

    @property
    def y_sequence(self) -> AxisSequence:
        return self._y_seq

    @property
    def mns_length(self) -> int:
        """Period P of both axis sequences."""
        return self._x_seq.period

    @property
    def window(self) -> int:
        return self._config.window

    def encode_patch(
        self,
        origin: tuple[int, int],
        size: tuple[int, int],
        roll: tuple[int, int] = (0, 0),
    ) -> np.ndarray:
        """Encode the block at ``origin``; see ``encoder.encode_patch``."""
        return encoder.encode_patch(self._x_seq, self._y_seq, origin, size, roll)

    def decode_position(self, patch) -> tuple[int, int]:
        """Decode a patch's top-left position; see ``decoder.decode_position``."""
        return decoder.decode_position(self._x_seq, self._y_seq, patch)

    def generate_matrix(self, height: int, width: int, sect_u: int, sect_v: int) -> np.ndarray:
        """Full page matrix for a section; see ``tiler.generate_matrix``."""
        return tiler.generate_matrix(self, height, width, sect_u, sect_v)

    def section_roll(self, sect_u: int, sect_v: int) -> tuple[int, int]:
        return tiler.section_roll(sect_u, sect_v, self.mns_length)

    def lookup_patch(self, sect_u: int, sect_v: int, x: int, y: int) -> np.ndarray:
        """The window-sized patch at grid point (x, y) of a section's page.

        Equal to the block a reader sees at column x, row y of the printed
        page, without generating the page.
        """
        roll = self.section_roll(sect_u, sect_v)
        return self.encode_patch((x, y), (self.window, self.window), roll)

    def page_shape(self) -> tuple[int, int]:
        """(height, width) of the grid filling an A4 page with this configuration."""
        return tiler.a4_grid_shape(self._config.grid_spacing, self._config.page_margin)


def anoto_6x6_a4_fixed() -> Codec:
    """Build the 6x6 window codec for A4 pages."""
    return Codec.from_preset("6x6_a4")


@functools.lru_cache(maxsize=None)
def _shared_codec(preset_name: str) -> Codec:
    return Codec.from_preset(preset_name)


def get_codec(preset_name: str = DEFAULT_PRESET) -> Codec:
    """Shared codec for a preset, built on first use."""
    return _shared_codec(preset_name)
