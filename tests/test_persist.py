"""Tests for saving and loading dot matrices."""

import json

import numpy as np
import pytest

from anoto.bits import matrix_to_directions
from anoto.errors import MalformedPatch
from anoto.persist import (
    load_matrix_json,
    load_matrix_txt,
    load_page_json,
    save_matrix_json,
    save_matrix_txt,
)


class TestJson:
    def test_roundtrip_with_section(self, codec, tmp_path):
        matrix = codec.generate_matrix(9, 16, 10, 10)
        path = save_matrix_json(tmp_path / "page.json", matrix, preset="6x6_a4", sect_u=10, sect_v=10)

        record = load_page_json(path)
        assert record.preset == "6x6_a4"
        assert (record.sect_u, record.sect_v) == (10, 10)
        assert np.array_equal(record.to_matrix(), matrix)

    def test_load_matrix_returns_read_only_dot_matrix(self, codec, tmp_path):
        matrix = codec.generate_matrix(9, 16, 10, 10)
        path = save_matrix_json(tmp_path / "page.json", matrix, preset="6x6_a4", sect_u=10, sect_v=10)

        loaded = load_matrix_json(path)
        assert isinstance(loaded, np.ndarray)
        assert loaded.dtype == np.int8
        assert np.array_equal(loaded, matrix)
        assert not loaded.flags.writeable

    def test_direction_grid_saved_as_bits(self, codec, tmp_path):
        matrix = codec.generate_matrix(4, 5, 0, 0)
        grid = matrix_to_directions(matrix)
        path = save_matrix_json(tmp_path / "grid.json", grid)
        assert np.array_equal(load_matrix_json(path), matrix)

    def test_direction_grid_out_of_range(self, tmp_path):
        with pytest.raises(ValueError, match="outside 0-3"):
            save_matrix_json(tmp_path / "grid.json", [[0, 4]])

    def test_section_fields_optional(self, tmp_path):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps({"matrix": [[[0, 1], [1, 1]]]}))
        record = load_page_json(path)
        assert record.preset is None
        assert load_matrix_json(path).shape == (1, 2, 2)

    def test_invalid_bit_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"matrix": [[[0, 2]]]}))
        with pytest.raises(MalformedPatch, match="invalid bit pair"):
            load_matrix_json(path)

    @pytest.mark.parametrize("cell", [["1", 0], [True, 0], [0, 0.0]])
    def test_non_integer_bits_rejected(self, tmp_path, cell):
        path = tmp_path / "lax.json"
        path.write_text(json.dumps({"matrix": [[cell]]}))
        with pytest.raises(MalformedPatch, match="valid integer"):
            load_matrix_json(path)

    def test_ragged_rows_rejected(self, tmp_path):
        path = tmp_path / "ragged.json"
        path.write_text(json.dumps({"matrix": [[[0, 0], [0, 0]], [[0, 0]]]}))
        with pytest.raises(MalformedPatch, match="row 1"):
            load_matrix_json(path)


class TestText:
    def test_roundtrip(self, codec, tmp_path):
        matrix = codec.generate_matrix(7, 11, 3, 4)
        path = save_matrix_txt(tmp_path / "page.txt", matrix)
        assert np.array_equal(load_matrix_txt(path), matrix)

    def test_file_layout(self, tmp_path):
        matrix = np.array([[[0, 0], [1, 0]], [[0, 1], [1, 1]]], dtype=np.int8)
        path = save_matrix_txt(tmp_path / "small.txt", matrix)
        assert path.read_text(encoding="utf-8") == "↑ ←\n→ ↓\n"

    def test_direction_grid_saved(self, tmp_path):
        path = save_matrix_txt(tmp_path / "grid.txt", [[0, 1], [2, 3]])
        assert path.read_text(encoding="utf-8") == "↑ ←\n→ ↓\n"

    def test_unknown_symbol(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("↑ x\n", encoding="utf-8")
        with pytest.raises(MalformedPatch, match="Invalid direction string"):
            load_matrix_txt(path)

    def test_ragged_rows(self, tmp_path):
        path = tmp_path / "ragged.txt"
        path.write_text("↑ ←\n→\n", encoding="utf-8")
        with pytest.raises(MalformedPatch, match="expected 2"):
            load_matrix_txt(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        with pytest.raises(MalformedPatch, match="no rows"):
            load_matrix_txt(path)
