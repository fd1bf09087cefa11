"""Axis sequence construction for the dot pattern.

Each axis of the pattern is driven by a periodic binary sequence in
which every cyclic window of ``window`` symbols occurs at exactly one
offset per period. Observing any such window therefore pins down the
offset, i.e. the coordinate on that axis modulo the period.

Sequences are produced by a Fibonacci linear feedback shift register:

    s[k + n] = XOR of s[k + t] for t in taps

With a primitive feedback polynomial of degree n this yields an
m-sequence of period 2^n - 1 in which every non-zero n-bit window
appears once. The property is not assumed: construction scans every
window of the period, builds the window -> offset index the decoder
uses, and refuses the configuration on the first repeat.
"""

from __future__ import annotations

import types
from dataclasses import dataclass, field

import numpy as np
import structlog

from .bits import bits_to_int
from .config import CodecConfig
from .errors import ConfigurationInvariantViolation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AxisSequence:
    """One period of an axis sequence and its inverse index.

    Attributes:
        axis: "x" (horizontal) or "y" (vertical).
        symbols: One period of the sequence.
        window: Window length with the uniqueness guarantee.
        index: Window (packed MSB first) -> offset of its first symbol.
        array: ``symbols`` as a read-only int8 array.
    """

    axis: str
    symbols: tuple[int, ...]
    window: int
    index: types.MappingProxyType = field(repr=False, compare=False)
    array: np.ndarray = field(repr=False, compare=False)

    @property
    def period(self) -> int:
        return len(self.symbols)

    def window_at(self, offset: int) -> tuple[int, ...]:
        """The cyclic window starting at ``offset``."""
        p = self.period
        return tuple(self.symbols[(offset + i) % p] for i in range(self.window))

    def locate(self, bits) -> int | None:
        """Offset at which ``bits`` occurs, or None if it never does."""
        return self.index.get(bits_to_int(bits))


def lfsr_sequence(taps: tuple[int, ...], seed: int, width: int, length: int) -> list[int]:
    """Generate ``length`` symbols of a Fibonacci LFSR sequence.

    Args:
        taps: Register positions XORed into the feedback bit.
        seed: Initial register contents, bit i is symbol i.
        width: Register width (degree of the feedback polynomial).
        length: Number of symbols to produce.

    Returns:
        List of 0s and 1s.
    """
    register = [(seed >> i) & 1 for i in range(width)]
    out: list[int] = []
    for _ in range(length):
        out.append(register[0])
        feedback = 0
        for t in taps:
            feedback ^= register[t]
        register = register[1:] + [feedback]
    return out


def build_index(symbols: list[int], window: int, axis: str = "x") -> dict[int, int]:
    """Map every cyclic window of ``symbols`` to its offset.

    Slides a rolling integer key over the sequence (wrapped by
    ``window - 1`` symbols), one step per offset.

    Raises:
        ConfigurationInvariantViolation: If any window occurs twice.
    """
    period = len(symbols)
    mask = (1 << window) - 1
    extended = symbols + symbols[: window - 1]

    key = bits_to_int(extended[: window - 1])
    index: dict[int, int] = {}
    for offset in range(period):
        key = ((key << 1) & mask) | extended[offset + window - 1]
        if key in index:
            raise ConfigurationInvariantViolation(
                f"{axis}-axis window {key:0{window}b} repeats at offsets "
                f"{index[key]} and {offset}; period {period} cannot keep "
                f"{window}-symbol windows unique"
            )
        index[key] = offset
    return index


def build_axis(axis: str, taps: tuple[int, ...], seed: int, window: int, period: int) -> AxisSequence:
    """Generate and verify one axis sequence."""
    if period < window:
        raise ConfigurationInvariantViolation(
            f"period {period} is shorter than the window length {window}"
        )
    if period > 1 << window:
        raise ConfigurationInvariantViolation(
            f"period {period} exceeds the {1 << window} distinct {window}-symbol windows"
        )

    symbols = lfsr_sequence(taps, seed, window, period)
    index = build_index(symbols, window, axis)

    array = np.array(symbols, dtype=np.int8)
    array.flags.writeable = False

    return AxisSequence(
        axis=axis,
        symbols=tuple(symbols),
        window=window,
        index=types.MappingProxyType(index),
        array=array,
    )


def build_sequences(config: CodecConfig) -> tuple[AxisSequence, AxisSequence]:
    """Build the horizontal and vertical sequences of a configuration.

    Args:
        config: Codec configuration.

    Returns:
        (x_sequence, y_sequence)

    Raises:
        ConfigurationInvariantViolation: If either sequence has a repeated window.
    """
    x_seq = build_axis("x", config.x_taps, config.x_seed, config.window, config.period)
    y_seq = build_axis("y", config.y_taps, config.y_seed, config.window, config.period)

    logger.debug(
        "sequences_built",
        preset=config.name,
        window=config.window,
        period=config.period,
    )
    return x_seq, y_seq
