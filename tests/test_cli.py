"""Tests for cli.py - CLI interface."""

import json
import pytest
from click.testing import CliRunner

from smartcalc.cli import main
from smartcalc.solver import Solver, SolveOutcome


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of CLI tests."""
    monkeypatch.delenv("OLLAMA_HOST", raising=False)
    monkeypatch.delenv("SMARTCALC_MODEL", raising=False)


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_solver(monkeypatch):
    """Answer every question with 42 without a server."""
    questions = []

    async def solve(self, query):
        questions.append(query)
        return SolveOutcome(query=query, result="42")

    monkeypatch.setattr(Solver, "solve", solve)
    return questions


class TestCLIBasics:
    """Basic CLI tests."""

    def test_version(self, runner):
        """Test --version flag."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "smartcalc" in result.output
        assert "1.0.0" in result.output

    def test_help(self, runner):
        """Test --help flag."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "SmartCalc" in result.output
        for command in ("repl", "eval", "ask", "keys", "config"):
            assert command in result.output

    def test_missing_path(self, runner, tmp_path):
        """Test a path that does not exist."""
        result = runner.invoke(main, ["--path", str(tmp_path / "nope"), "keys"])
        assert result.exit_code == 1
        assert "Path does not exist" in result.output


class TestEvalCommand:
    """Tests for eval command."""

    def test_left_to_right(self, runner, tmp_path):
        """Test chained operators without precedence."""
        result = runner.invoke(main, ["-p", str(tmp_path), "eval", "2 + 3 * 4 ="])
        assert result.exit_code == 0
        assert "20" in result.output
        assert "5 × 4 = 20" in result.output

    def test_json_output(self, runner, tmp_path):
        """Test --json output."""
        result = runner.invoke(main, ["-p", str(tmp_path), "eval", "1234 + 1 =", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.output)
        assert data["state"]["current_operand"] == "1235"
        assert data["state"]["overwrite"] is True
        assert data["display"] == {"pending": "", "current": "1,235"}
        assert len(data["history"]) == 1
        assert data["history"][0]["expression"] == "1234 + 1"
        assert data["history"][0]["is_ai_generated"] is False

    def test_pending_operation(self, runner, tmp_path):
        """Test output with an operator still pending."""
        result = runner.invoke(main, ["-p", str(tmp_path), "eval", "9 /", "--json"])
        data = json.loads(result.output)
        assert data["display"]["pending"] == "9 ÷"
        assert data["history"] == []

    def test_unknown_key(self, runner, tmp_path):
        """Test an unbound key fails."""
        result = runner.invoke(main, ["-p", str(tmp_path), "eval", "2 ^ 3"])
        assert result.exit_code == 1
        assert "Unknown key: ^" in result.output


class TestAskCommand:
    """Tests for ask command."""

    def test_ask(self, runner, tmp_path, fake_solver):
        """Test one solver question."""
        result = runner.invoke(main, ["-p", str(tmp_path), "ask", "six times seven"])
        assert result.exit_code == 0
        assert "42" in result.output
        assert fake_solver == ["six times seven"]

    def test_ask_json(self, runner, tmp_path, fake_solver):
        """Test --json output marks the AI source."""
        result = runner.invoke(main, ["-p", str(tmp_path), "ask", "half of 84", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.output)
        assert data["expression"] == "half of 84"
        assert data["result"] == "42"
        assert data["is_ai_generated"] is True

    def test_ask_blank(self, runner, tmp_path, fake_solver):
        """Test a blank question is not sent."""
        result = runner.invoke(main, ["-p", str(tmp_path), "ask", "   "])
        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert fake_solver == []

    def test_model_not_configured(self, runner, tmp_path):
        """Test the error is shown instead of raised."""
        config_dir = tmp_path / ".smartcalc"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"solver": {"model": ""}}))

        result = runner.invoke(main, ["-p", str(tmp_path), "ask", "1 + 1"])
        assert result.exit_code == 0
        assert "Error: Model Not Configured" in result.output


class TestKeysCommand:
    """Tests for keys command."""

    def test_keys(self, runner, tmp_path):
        """Test the bindings table."""
        result = runner.invoke(main, ["-p", str(tmp_path), "keys"])
        assert result.exit_code == 0
        assert "Key Bindings" in result.output
        assert "Enter" in result.output
        assert "ToggleSign" in result.output


class TestConfigCommand:
    """Tests for config command."""

    def test_config_json(self, runner, tmp_path):
        """Test the effective config from file."""
        config_dir = tmp_path / ".smartcalc"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"solver": {"model": "phi3"}}))

        result = runner.invoke(main, ["-p", str(tmp_path), "config", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.output)
        assert data["solver"]["model"] == "phi3"
        assert data["display"]["max_length"] == 24

    def test_config_table(self, runner, tmp_path):
        """Test the table view."""
        result = runner.invoke(main, ["-p", str(tmp_path), "config"])
        assert result.exit_code == 0
        assert "solver.model" in result.output
        assert "llama3.2" in result.output


class TestReplCommand:
    """Tests for the interactive loop."""

    def test_keys_and_quit(self, runner, tmp_path):
        """Test typing a calculation."""
        result = runner.invoke(main, ["-p", str(tmp_path), "repl"], input="7 x 6 =\n:quit\n")
        assert result.exit_code == 0
        assert "42" in result.output
        assert "Bye." in result.output

    def test_eof_leaves_cleanly(self, runner, tmp_path):
        """Test end of input ends the loop."""
        result = runner.invoke(main, ["-p", str(tmp_path), "repl"], input="1 + 1 =\n")
        assert result.exit_code == 0
        assert "Bye." in result.output

    def test_history(self, runner, tmp_path, fake_solver):
        """Test keypad and solver results show in history."""
        result = runner.invoke(
            main,
            ["-p", str(tmp_path), "repl"],
            input="2 + 2 =\n?meaning of life\n:history\n:quit\n",
        )
        assert result.exit_code == 0
        assert "History" in result.output
        assert "2 + 2" in result.output
        assert "meaning of life" in result.output
        assert "AI" in result.output
        assert fake_solver == ["meaning of life"]

    def test_clear_history(self, runner, tmp_path):
        """Test clearing history from the loop."""
        result = runner.invoke(
            main,
            ["-p", str(tmp_path), "repl"],
            input="2 + 2 =\n:clear-history\n:history\n:quit\n",
        )
        assert result.exit_code == 0
        assert "History cleared." in result.output
        assert "No calculations yet" in result.output

    def test_unknown_key(self, runner, tmp_path):
        """Test a typo is reported and the loop continues."""
        result = runner.invoke(
            main, ["-p", str(tmp_path), "repl"], input="2 ^ 2\n:quit\n"
        )
        assert result.exit_code == 0
        assert "Unknown key: ^" in result.output

    def test_unknown_command(self, runner, tmp_path):
        """Test an unknown shell command."""
        result = runner.invoke(main, ["-p", str(tmp_path), "repl"], input=":frobnicate\n:q\n")
        assert result.exit_code == 0
        assert "Unknown command" in result.output
