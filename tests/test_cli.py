"""Tests for the command-line interface and its configuration.

WHY: The CLI is how most people run the extractor. Wrong exit codes
break scripts that call it, and overwritten output loses earlier runs.

HOW: main() is called with an explicit argv list. Bundles are written
to tmp_path; status text is read from stderr and --stdout output from
stdout via capsys.

RULES:
- Exit code 0 only when a container was found and output produced
- Status messages never appear on stdout
"""

import json
import logging

import pytest

from bundle_extractor.cli import build_parser, main
from bundle_extractor.config import DEFAULT_FORMAT, load_log_level

from conftest import MAIN_MODULES, WINDOW_PUSH_BUNDLE, WINDOW_PUSH_MODULES


class TestBuildParser:

    def test_defaults(self):
        args = build_parser().parse_args(["bundle.js"])
        assert args.bundle == "bundle.js"
        assert args.formats == DEFAULT_FORMAT
        assert args.output_dir is None
        assert args.stdout is False
        assert args.log_level is None

    def test_bundle_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestStdout:

    def test_json_to_stdout(self, bundle_file, capsys):
        assert main([str(bundle_file), "--stdout"]) == 0
        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert data["bundle"] == "main.js"
        assert data["modules"] == MAIN_MODULES
        assert "Found 2 modules" in captured.err

    def test_first_format_only(self, bundle_file, capsys):
        assert main([str(bundle_file), "--stdout", "--formats", "summary,json"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# main.js\n")

    def test_nothing_saved(self, bundle_file):
        main([str(bundle_file), "--stdout"])
        assert sorted(p.name for p in bundle_file.parent.iterdir()) == ["main.js"]


class TestSavedOutput:

    def test_saves_next_to_bundle(self, bundle_file, capsys):
        assert main([str(bundle_file)]) == 0
        out_path = bundle_file.parent / "main-modules.json"
        assert json.loads(out_path.read_text(encoding="utf-8"))["modules"] == MAIN_MODULES
        assert capsys.readouterr().out == ""

    def test_conflict_gets_numeric_suffix(self, bundle_file):
        assert main([str(bundle_file)]) == 0
        assert main([str(bundle_file)]) == 0
        assert (bundle_file.parent / "main-modules.json").exists()
        assert (bundle_file.parent / "main-modules-2.json").exists()

    def test_output_dir_and_multiple_formats(self, bundle_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        assert main([str(bundle_file), "--output-dir", str(out_dir), "--formats", "json,summary,files"]) == 0
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "main-modules.json",
            "main-modules.txt",
            "main.module-0.js",
            "main.module-2.js",
        ]

    def test_module_files_keep_crlf(self, tmp_path):
        path = tmp_path / "chunk.js"
        path.write_bytes(b"webpackJsonp([0], [function(){\r\n  a();\r\n}]);")
        assert main([str(path), "--formats", "files"]) == 0
        assert (tmp_path / "chunk.module-0.js").read_bytes() == b"function(){\r\n  a();\r\n}"

    def test_string_module_ids(self, tmp_path):
        path = tmp_path / "chunk.js"
        path.write_text(WINDOW_PUSH_BUNDLE, encoding="utf-8")
        assert main([str(path), "--formats", "files"]) == 0
        saved = tmp_path / "chunk.module-._src_index.js"
        assert saved.read_text(encoding="utf-8") == WINDOW_PUSH_MODULES["./src/index.js"]

    def test_digit_like_module_id(self, tmp_path):
        path = tmp_path / "chunk.js"
        path.write_text('webpackJsonp([0], {"²": function(){}});', encoding="utf-8")
        assert main([str(path), "--formats", "summary,files"]) == 0
        assert (tmp_path / "chunk-modules.txt").read_text(encoding="utf-8").splitlines()[1] == "²\t12"
        assert (tmp_path / "chunk.module-_.js").read_text(encoding="utf-8") == "function(){}"


class TestFailures:

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.js")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_no_container(self, plain_script_file, capsys):
        assert main([str(plain_script_file)]) == 1
        assert "No webpack module container found" in capsys.readouterr().err

    def test_syntax_error(self, tmp_path, capsys):
        path = tmp_path / "broken.js"
        path.write_text("webpackJsonp([0], {", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "latin.js"
        path.write_bytes(b'var s = "\xe9";')
        assert main([str(path)]) == 1
        assert "not valid utf-8" in capsys.readouterr().err

    def test_encoding_flag(self, tmp_path):
        path = tmp_path / "latin.js"
        path.write_bytes(b'webpackJsonp([0], [function(){ "\xe9" }]);')
        assert main([str(path), "--encoding", "latin-1", "--stdout"]) == 0

    def test_unknown_format(self, bundle_file, capsys):
        assert main([str(bundle_file), "--formats", "xml"]) == 1
        assert "Unknown format 'xml'" in capsys.readouterr().err

    def test_missing_output_dir(self, bundle_file, tmp_path):
        assert main([str(bundle_file), "--output-dir", str(tmp_path / "missing")]) == 1

    def test_unknown_log_level(self, bundle_file):
        with pytest.raises(SystemExit):
            main([str(bundle_file), "--log-level", "chatty"])

    def test_other_extension_only_warns(self, tmp_path, capsys):
        path = tmp_path / "bundle.txt"
        path.write_text("webpackJsonp([0], [function(){}]);", encoding="utf-8")
        assert main([str(path), "--stdout"]) == 0
        assert "Warning:" in capsys.readouterr().err


class TestLoadLogLevel:

    @pytest.mark.parametrize("name, level", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        (" warning ", logging.WARNING),
        ("ERROR", logging.ERROR),
    ])
    def test_known_names(self, name, level):
        assert load_log_level(name) == level

    def test_default_is_configured_level(self, monkeypatch):
        monkeypatch.setattr("bundle_extractor.config.LOG_LEVEL", "ERROR")
        assert load_log_level() == logging.ERROR

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            load_log_level("chatty")
