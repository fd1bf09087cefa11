"""Tests for the anoto command line."""

import io
import json

import numpy as np

from anoto.main import EXIT_MALFORMED, EXIT_OK, EXIT_UNRECOGNIZED, main
from anoto.persist import load_matrix_json, load_matrix_txt, load_page_json


class TestLookupCommand:
    def test_prints_arrow_grid(self, capsys):
        assert main(["lookup", "0", "0", "--sect-u", "10", "--sect-v", "10"]) == EXIT_OK
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 6
        assert all(len(row) == 6 for row in rows)

    def test_bits_output(self, capsys, codec):
        assert main(["lookup", "2", "3", "--bits"]) == EXIT_OK
        rows = json.loads(capsys.readouterr().out)
        assert rows == codec.lookup_patch(10, 10, 2, 3).tolist()

    def test_huge_origin(self, capsys, codec):
        assert main(["lookup", str(10**20), "0", "--bits"]) == EXIT_OK
        rows = json.loads(capsys.readouterr().out)
        assert rows == codec.lookup_patch(10, 10, 10**20 % 63, 0).tolist()


class TestDecodeCommand:
    def test_decodes_lookup_output(self, capsys, tmp_path):
        main(["lookup", "0", "0"])
        patch_file = tmp_path / "patch.json"
        patch_file.write_text(capsys.readouterr().out, encoding="utf-8")

        assert main(["decode", str(patch_file)]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "Position: (10, 10)"

    def test_reads_stdin(self, capsys, monkeypatch, codec):
        patch = codec.encode_patch((7, 9), (6, 6))
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(patch.tolist())))
        assert main(["decode"]) == EXIT_OK
        assert "Position: (7, 9)" in capsys.readouterr().out

    def test_unrecognized_exit_code(self, capsys, tmp_path):
        patch_file = tmp_path / "up.json"
        patch_file.write_text(json.dumps([["↑"] * 6] * 6), encoding="utf-8")
        assert main(["decode", str(patch_file)]) == EXIT_UNRECOGNIZED
        assert "Decoding Error" in capsys.readouterr().err

    def test_malformed_exit_code(self, capsys, tmp_path):
        patch_file = tmp_path / "short.json"
        patch_file.write_text(json.dumps([["↑"] * 6] * 3), encoding="utf-8")
        assert main(["decode", str(patch_file)]) == EXIT_MALFORMED

    def test_missing_file(self, capsys, tmp_path):
        assert main(["decode", str(tmp_path / "missing.json")]) == EXIT_MALFORMED


class TestGenerateCommand:
    def test_json_output(self, capsys, tmp_path, codec):
        out = tmp_path / "page.json"
        assert main(["generate", str(out), "--height", "9", "--width", "16"]) == EXIT_OK
        record = load_page_json(out)
        assert (record.sect_u, record.sect_v) == (10, 10)
        assert record.preset == "6x6_a4"
        assert np.array_equal(load_matrix_json(out), codec.generate_matrix(9, 16, 10, 10))
        assert "Generated 9x16" in capsys.readouterr().out

    def test_txt_output_defaults_to_a4(self, tmp_path, codec):
        out = tmp_path / "page.txt"
        assert main(["generate", str(out), "--sect-u", "3", "--sect-v", "4"]) == EXIT_OK
        matrix = load_matrix_txt(out)
        assert matrix.shape == (81, 56, 2)
        assert np.array_equal(matrix, codec.generate_matrix(81, 56, 3, 4))

    def test_compact_preset(self, tmp_path, compact_codec):
        out = tmp_path / "compact.json"
        assert main(["--preset", "5x5_compact", "generate", str(out), "--height", "5", "--width", "5"]) == EXIT_OK
        assert load_page_json(out).preset == "5x5_compact"
