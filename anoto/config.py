"""Codec configurations and named presets.

A configuration fixes everything the pattern depends on: the window
length, the period of both axis sequences, the feedback polynomials and
seeds that generate them, and the page grid used when tiling an A4 sheet.

Two codecs built from equal configurations produce bit-identical
patterns, so a configuration is the only thing a printer and a reader
need to agree on.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# A4 page in PostScript points
A4_WIDTH_PT = 595.276
A4_HEIGHT_PT = 841.89


class CodecConfig(BaseModel):
    """Immutable description of a dot-pattern codec.

    Each axis sequence is generated by a linear feedback shift register.
    ``x_taps`` / ``y_taps`` list the exponents below the leading term of
    the feedback polynomial, e.g. ``(0, 1)`` for x^6 + x + 1.

    Attributes:
        name: Preset name.
        window: Side of the smallest decodable patch.
        period: Length after which each axis sequence repeats.
        x_taps: Feedback taps of the horizontal-axis sequence.
        y_taps: Feedback taps of the vertical-axis sequence.
        x_seed: Initial register state of the horizontal sequence (bit i = symbol i).
        y_seed: Initial register state of the vertical sequence.
        grid_spacing: Distance between grid points on paper, in points.
        page_margin: Blank margin around the printed grid, in points.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="custom", min_length=1)
    window: int = Field(default=6, ge=2, le=24)
    period: int = Field(default=63, ge=2)
    x_taps: tuple[int, ...] = Field(default=(0, 1), min_length=1)
    y_taps: tuple[int, ...] = Field(default=(0, 5), min_length=1)
    x_seed: int = Field(default=1, ge=0)
    y_seed: int = Field(default=1, ge=0)
    grid_spacing: float = Field(default=10.0, gt=0)
    page_margin: float = Field(default=20.0, ge=0)

    @model_validator(mode="after")
    def _check_register_width(self) -> CodecConfig:
        for axis, taps, seed in (("x", self.x_taps, self.x_seed), ("y", self.y_taps, self.y_seed)):
            bad = [t for t in taps if not 0 <= t < self.window]
            if bad:
                raise ValueError(f"{axis}_taps {bad} outside register of width {self.window}")
            if seed >= 1 << self.window:
                raise ValueError(f"{axis}_seed {seed} does not fit in {self.window} bits")
        return self


PRESETS: list[CodecConfig] = [
    # 6x6 windows over period-63 m-sequences, one dot pattern page per section
    CodecConfig(
        name="6x6_a4",
        window=6,
        period=63,
        x_taps=(0, 1),  # x^6 + x + 1
        y_taps=(0, 5),  # x^6 + x^5 + 1
        x_seed=1,
        y_seed=1,
    ),
    CodecConfig(
        name="5x5_compact",
        window=5,
        period=31,
        x_taps=(0, 2),  # x^5 + x^2 + 1
        y_taps=(0, 3),  # x^5 + x^3 + 1
        x_seed=1,
        y_seed=1,
    ),
]

PRESET_INDEX: dict[str, CodecConfig] = {p.name: p for p in PRESETS}

DEFAULT_PRESET = "6x6_a4"


def select_preset(preset_name: str) -> CodecConfig:
    """Select a codec configuration by preset name.

    Args:
        preset_name: Preset name (6x6_a4, 5x5_compact).

    Returns:
        CodecConfig for the requested preset.

    Raises:
        ValueError: If preset_name is not recognized.
    """
    if preset_name not in PRESET_INDEX:
        valid = ", ".join(PRESET_INDEX.keys())
        raise ValueError(f"Unknown preset '{preset_name}'. Valid presets: {valid}")
    return PRESET_INDEX[preset_name]
