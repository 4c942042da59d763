"""
Tests for the Iodine command line interface.
"""

import io

import pytest

from iodine.__main__ import main


@pytest.fixture
def script(tmp_path):
    path = tmp_path / "script.iod"
    path.write_text("i32 x = 6;\nprintln(x / 4);\n")
    return path


class TestCli:
    """Test the argparse entry point."""

    def test_run(self, script, capsys):
        assert main(["run", str(script)]) == 0
        assert capsys.readouterr().out == "1\n"

    def test_run_error_status(self, tmp_path, capsys):
        path = tmp_path / "bad.iod"
        path.write_text("println(nope);\n")
        assert main(["run", str(path)]) == 1
        assert "Error: reference to undefined variable 'nope'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["run", str(tmp_path / "missing.iod")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_tokens(self, script, capsys):
        assert main(["tokens", str(script)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Token: NAME (i32)\nToken: NAME (x)\n")

    def test_tokens_lexer_error(self, tmp_path, capsys):
        path = tmp_path / "bad.iod"
        path.write_text('println("open')
        assert main(["tokens", str(path)]) == 1
        assert capsys.readouterr().err == "Error: unterminated string literal (EOF while parsing string)\n"

    def test_ast_parser_error(self, tmp_path, capsys):
        """Parse errors use the same report as the script runner."""
        path = tmp_path / "bad.iod"
        path.write_text("i32 = 2;\n")
        assert main(["ast", str(path)]) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: expected variable name")
        assert "error[" not in err

    def test_missing_file_for_dump(self, tmp_path, capsys):
        assert main(["ast", str(tmp_path / "missing.iod")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_ast(self, script, capsys):
        assert main(["ast", str(script)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Node type: VarAssignment\nname: x\n")
        assert "Node type: FunctionCall" in out

    def test_repl(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1 + 1\n"))
        assert main(["repl"]) == 0
        assert capsys.readouterr().out == ">2\n>"

    def test_repl_print_tokens(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("5\n"))
        assert main(["repl", "--print-tokens"]) == 0
        assert capsys.readouterr().out == ">Token: NUMBER (5)\n5\n>"

    def test_config_file(self, tmp_path, monkeypatch, capsys):
        config = tmp_path / "iodine.yaml"
        config.write_text("prompt: '$ '\n")
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert main(["--config", str(config), "repl"]) == 0
        assert capsys.readouterr().out == "$ "

    def test_bad_config_file(self, tmp_path, capsys):
        config = tmp_path / "iodine.yaml"
        config.write_text("volume: 11\n")
        assert main(["--config", str(config), "repl"]) == 1
        assert "unknown config key" in capsys.readouterr().err
