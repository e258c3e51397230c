"""Tests for the click CLI."""

import json
from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from codeaudit_cli import __version__
from codeaudit_cli.main import cli
from codeaudit_cli.model import ModelError, OllamaClient

BUGGY_JS = "function test() { if (x = 5) { console.log(x); } }\n"

WORKFLOW = """name: CI
on: push
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - run: npm test
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def js_file(tmp_path):
    path = tmp_path / "app.js"
    path.write_text(BUGGY_JS)
    return path


class TestAnalyze:
    def test_rich_output(self, runner, js_file):
        result = runner.invoke(cli, ["analyze", str(js_file)])
        assert result.exit_code == 0, result.output
        assert "Quality Score" in result.output
        assert "critical" in result.output

    def test_json_only(self, runner, js_file):
        result = runner.invoke(cli, ["analyze", str(js_file), "--json-only"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["analysisResult"]["issues"][0]["title"] == "BUG: Assignment operator in conditional"
        assert data["cicdAnalysis"] is None

    def test_report(self, runner, js_file):
        result = runner.invoke(cli, ["analyze", str(js_file), "--report"])
        assert result.exit_code == 0
        assert "- Critical: 1" in result.output

    def test_report_with_cicd(self, runner, js_file, tmp_path):
        ci = tmp_path / "ci.yml"
        ci.write_text(WORKFLOW)
        result = runner.invoke(cli, ["analyze", str(js_file), "--report", "--cicd-config", str(ci)])
        assert result.exit_code == 0
        assert "CI/CD: GitHub Actions" in result.output

    def test_stdin_with_language(self, runner):
        result = runner.invoke(cli, ["analyze", "-", "-l", "python", "--json-only"], input="x = 1\n")
        assert result.exit_code == 0
        assert json.loads(result.output)["analysisResult"]["metrics"]["linesOfCode"] == 2

    def test_language_from_extension(self, runner, tmp_path):
        path = tmp_path / "tool.py"
        path.write_text("const a = 1\nconst b = 2\nconst c = 3\nconst d = 4\n")
        result = runner.invoke(cli, ["analyze", str(path), "--json-only"])
        titles = [i["title"] for i in json.loads(result.output)["analysisResult"]["issues"]]
        # semicolon check only runs for JavaScript/TypeScript
        assert "Missing semicolons detected" not in titles

    def test_unknown_extension_is_detected(self, runner, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("import os\nimport sys\n\ndef main():\n    print(os.getcwd())\n")
        result = runner.invoke(cli, ["analyze", str(path)])
        assert result.exit_code == 0, result.output
        assert "(Python)" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["analyze", str(tmp_path / "nope.js")])
        assert result.exit_code == 1
        assert "Not a file" in result.output

    def test_oversized_input(self, runner, tmp_path):
        path = tmp_path / "big.js"
        path.write_text("x;\n" * 6000)
        result = runner.invoke(cli, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "limit" in result.output

    def test_unknown_language(self, runner, js_file):
        result = runner.invoke(cli, ["analyze", str(js_file), "-l", "cobol"])
        assert result.exit_code == 2

    def test_fix(self, runner, js_file):
        answer = json.dumps({
            "fixes": [{"issue": "Assignment", "fixedCode": "if (x === 5) {", "explanation": "Compare."}],
            "fullCorrectedCode": "function test() { if (x === 5) { console.log(x); } }",
        })
        with patch.object(OllamaClient, "ensure_ready"), patch.object(OllamaClient, "generate", return_value=answer):
            result = runner.invoke(cli, ["analyze", str(js_file), "--fix"])
        assert result.exit_code == 0, result.output
        assert "1 fix suggestion(s)" in result.output

    def test_fix_model_unavailable(self, runner, js_file):
        with patch.object(OllamaClient, "ensure_ready", side_effect=ModelError("Cannot connect to Ollama")):
            result = runner.invoke(cli, ["analyze", str(js_file), "--fix"])
        assert result.exit_code == 1
        assert "Cannot connect to Ollama" in result.output


class TestOtherCommands:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output

    def test_detect_json(self, runner, tmp_path):
        path = tmp_path / "snippet.txt"
        path.write_text("import os\nimport sys\n\ndef main():\n    print(os.getcwd())\n")
        result = runner.invoke(cli, ["detect", str(path), "--json-only"])
        assert result.exit_code == 0
        assert json.loads(result.output)["detectedLanguage"] == "python"

    def test_detect_table(self, runner, js_file):
        result = runner.invoke(cli, ["detect", str(js_file)])
        assert result.exit_code == 0
        assert "Detected:" in result.output

    def test_cicd_json(self, runner, tmp_path):
        path = tmp_path / "ci.yml"
        path.write_text(WORKFLOW)
        result = runner.invoke(cli, ["cicd", str(path), "--json-only"])
        data = json.loads(result.output)
        assert data["platform"] == "GitHub Actions"
        assert data["issues"] == []

    def test_cicd_not_detected(self, runner, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("Remember to buy milk.\n")
        result = runner.invoke(cli, ["cicd", str(path)])
        assert result.exit_code == 0
        assert "No CI/CD configuration detected" in result.output

    def test_languages(self, runner):
        result = runner.invoke(cli, ["languages"])
        assert result.exit_code == 0
        assert "TypeScript" in result.output

    def test_ask_streams_answer(self, runner, js_file):
        with patch.object(OllamaClient, "ensure_ready"), \
                patch.object(OllamaClient, "chat", return_value=iter(["Use ", "==="])) as chat:
            result = runner.invoke(cli, ["ask", str(js_file), "why?"])
        assert result.exit_code == 0, result.output
        assert "Use ===" in result.output
        messages = chat.call_args.args[0]
        assert messages == [{"role": "user", "content": "why?"}]
        assert "Quality Score" in chat.call_args.kwargs["system"]

    def test_ask_model_unavailable(self, runner, js_file):
        with patch.object(OllamaClient, "ensure_ready", side_effect=ModelError("Cannot connect to Ollama")):
            result = runner.invoke(cli, ["ask", str(js_file), "why?"])
        assert result.exit_code == 1

    def test_ask_transport_failure(self, runner, js_file):
        with patch.object(OllamaClient, "ensure_ready"), \
                patch("httpx.Client.stream", side_effect=httpx.ReadError("reset")):
            result = runner.invoke(cli, ["ask", str(js_file), "why?"])
        assert result.exit_code == 1
        assert "Request to Ollama failed: reset" in result.output

    def test_verbose_flag(self, runner, js_file):
        result = runner.invoke(cli, ["-v", "analyze", str(js_file), "--json-only"])
        assert result.exit_code == 0
