"""Tests for axis sequence construction."""

import pytest

from anoto.config import CodecConfig, select_preset
from anoto.errors import ConfigurationInvariantViolation
from anoto.sequence import build_index, build_sequences, lfsr_sequence


class TestLfsrSequence:
    def test_known_prefix(self):
        # x^6 + x + 1 from state 000001: s[k+6] = s[k+1] ^ s[k]
        bits = lfsr_sequence((0, 1), seed=1, width=6, length=13)
        assert bits == [1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 1]

    def test_primitive_polynomial_has_full_period(self):
        bits = lfsr_sequence((0, 1), seed=1, width=6, length=126)
        assert bits[:63] == bits[63:]
        for k in range(1, 63):
            assert bits[k : k + 63] != bits[:63]

    def test_zero_seed_is_all_zero(self):
        assert lfsr_sequence((0, 1), seed=0, width=6, length=10) == [0] * 10


class TestBuildSequences:
    def test_period_matches_config(self):
        x_seq, y_seq = build_sequences(select_preset("6x6_a4"))
        assert x_seq.period == 63
        assert y_seq.period == 63
        assert x_seq.window == 6

    def test_every_window_unique_exhaustive(self):
        for seq in build_sequences(select_preset("6x6_a4")):
            windows = [seq.window_at(o) for o in range(seq.period)]
            assert len(set(windows)) == seq.period

    def test_index_covers_every_offset(self):
        for seq in build_sequences(select_preset("6x6_a4")):
            assert sorted(seq.index.values()) == list(range(seq.period))
            for offset in range(seq.period):
                assert seq.locate(seq.window_at(offset)) == offset

    def test_all_zero_window_never_occurs(self):
        for seq in build_sequences(select_preset("6x6_a4")):
            assert seq.locate([0] * 6) is None

    def test_axes_are_independent(self):
        x_seq, y_seq = build_sequences(select_preset("6x6_a4"))
        assert x_seq.symbols != y_seq.symbols

    def test_deterministic(self):
        first = build_sequences(select_preset("6x6_a4"))
        second = build_sequences(select_preset("6x6_a4"))
        assert first == second
        assert first[0].symbols == second[0].symbols
        assert first[1].symbols == second[1].symbols

    def test_compact_preset(self):
        for seq in build_sequences(select_preset("5x5_compact")):
            assert seq.period == 31
            windows = {seq.window_at(o) for o in range(seq.period)}
            assert len(windows) == 31

    def test_index_is_read_only(self):
        x_seq, _ = build_sequences(select_preset("6x6_a4"))
        with pytest.raises(TypeError):
            x_seq.index[0] = 0


class TestInvariantViolations:
    def test_non_primitive_taps_rejected(self):
        # x^6 + 1 repeats every 6 symbols
        config = CodecConfig(window=6, period=63, x_taps=(0,), y_taps=(0, 5))
        with pytest.raises(ConfigurationInvariantViolation, match="x-axis window"):
            build_sequences(config)

    def test_zero_seed_rejected(self):
        config = CodecConfig(window=6, period=63, y_seed=0)
        with pytest.raises(ConfigurationInvariantViolation, match="y-axis"):
            build_sequences(config)

    def test_period_longer_than_window_space_rejected(self):
        config = CodecConfig(window=6, period=65)
        with pytest.raises(ConfigurationInvariantViolation, match="exceeds"):
            build_sequences(config)

    def test_period_shorter_than_window_rejected(self):
        config = CodecConfig(window=6, period=4)
        with pytest.raises(ConfigurationInvariantViolation, match="shorter"):
            build_sequences(config)

    def test_build_index_reports_repeat(self):
        with pytest.raises(ConfigurationInvariantViolation, match="repeats at offsets 0 and 2"):
            build_index([1, 0, 1, 0], window=2)

