"""Tests for the command-line interface and its configuration.

WHY: The CLI is the only code that touches configuration, stdin and
exit codes. A wrong exit code breaks scripts that call it, and a
config typo should be reported, not crash with a traceback.

HOW: main() is called in-process with an argv list. capsys captures
stdout/stderr; monkeypatch swaps stdin and the config module globals
(the loaders read them at call time, so no reload is needed).

RULES:
- No subprocesses; main() returns the exit code directly.
"""

import io
import json

import pytest

from node_convert import config
from node_convert.cli import EXIT_DECODE_FAILED, EXIT_OK, EXIT_USAGE, main


class TestDecodeScalar:
    """--scalar decodes a single text node."""

    def test_hex_int(self, capsys):
        assert main(["decode", "int32", "--scalar", "0x1F"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == '"31"'

    def test_repr(self, capsys):
        assert main(["decode", "int32", "--scalar", "0x1F", "--repr"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "31"

    def test_float_gets_trailing_dot(self, capsys):
        assert main(["decode", "float64", "--scalar", "1"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == '"1."'

    def test_failure_exit_code(self, capsys):
        assert main(["decode", "int32", "--scalar", "abc"]) == EXIT_DECODE_FAILED
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "lexical_mismatch" in captured.err

    def test_overflow_reported(self, capsys):
        assert main(["decode", "uint8", "--scalar", "256"]) == EXIT_DECODE_FAILED
        assert "range_overflow" in capsys.readouterr().err


class TestDecodeDump:
    """Node dumps are read from a file or stdin."""

    def test_file(self, tmp_path, capsys):
        path = tmp_path / "node.json"
        path.write_text('[1, 2, "0x3"]', encoding="utf-8")
        assert main(["decode", '{"seq": "int32"}', str(path)]) == EXIT_OK
        assert json.loads(capsys.readouterr().out) == ["1", "2", "3"]

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": "1", "b": 2}'))
        assert main(["decode", '{"map": {"key": "string", "value": "int64"}}', "--repr"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "{'a': 1, 'b': 2}"

    def test_shape_mismatch(self, tmp_path, capsys):
        path = tmp_path / "node.json"
        path.write_text('["1", "2", "3"]', encoding="utf-8")
        spec = '{"array": {"of": "int8", "size": 2}}'
        assert main(["decode", spec, str(path)]) == EXIT_DECODE_FAILED
        assert "shape_mismatch" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["decode", "string", str(tmp_path / "absent.json")]) == EXIT_USAGE
        assert "cannot read input" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "node.json"
        path.write_text("[1, 2", encoding="utf-8")
        assert main(["decode", "node", str(path)]) == EXIT_USAGE

    def test_node_type_echoes_input(self, tmp_path, capsys):
        path = tmp_path / "node.json"
        path.write_text('{"k": [null, "v"]}', encoding="utf-8")
        assert main(["decode", "node", str(path)]) == EXIT_OK
        assert json.loads(capsys.readouterr().out) == {"k": [None, "v"]}


class TestUsageErrors:

    def test_unknown_type_name(self, capsys):
        assert main(["decode", "int128", "--scalar", "1"]) == EXIT_USAGE
        assert "unknown type name" in capsys.readouterr().err

    def test_malformed_type_expression(self, capsys):
        assert main(["decode", '{"seq": 5}', "--scalar", "1"]) == EXIT_USAGE
        assert "invalid type expression" in capsys.readouterr().err

    def test_missing_subcommand(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2


class TestTypesCommand:

    def test_lists_names(self, capsys):
        assert main(["types"]) == EXIT_OK
        names = capsys.readouterr().out.split()
        assert "uint64" in names
        assert "binary" in names


class TestConfig:
    """Environment-driven settings, read at call time."""

    def test_json_indent_from_config(self, monkeypatch, capsys):
        monkeypatch.setattr(config, "JSON_INDENT", "2")
        monkeypatch.setattr("sys.stdin", io.StringIO('["true"]'))
        assert main(["decode", '{"seq": "bool"}']) == EXIT_OK
        assert capsys.readouterr().out == '[\n  "true"\n]\n'

    def test_bad_indent_is_usage_error(self, monkeypatch, capsys):
        monkeypatch.setattr(config, "JSON_INDENT", "wide")
        assert main(["types"]) == EXIT_USAGE
        assert "NODE_CONVERT_JSON_INDENT" in capsys.readouterr().err

    def test_bad_log_level_is_usage_error(self, monkeypatch, capsys):
        monkeypatch.setattr(config, "LOG_LEVEL", "LOUD")
        assert main(["types"]) == EXIT_USAGE
        assert "NODE_CONVERT_LOG_LEVEL" in capsys.readouterr().err

    def test_verbose_ignores_log_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "LOUD")
        assert main(["-v", "types"]) == EXIT_OK

    @pytest.mark.parametrize("name,level", [("debug", 10), (" Info ", 20), ("ERROR", 40)])
    def test_load_log_level(self, name, level):
        assert config.load_log_level(name) == level

    def test_load_log_level_default(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "warning")
        assert config.load_log_level() == 30

    @pytest.mark.parametrize("value,expected", [("", None), ("  ", None), ("0", 0), ("4", 4)])
    def test_load_json_indent(self, value, expected):
        assert config.load_json_indent(value) == expected

    @pytest.mark.parametrize("value", ["-1", "two", "1.5"])
    def test_load_json_indent_rejects(self, value):
        with pytest.raises(ValueError):
            config.load_json_indent(value)
