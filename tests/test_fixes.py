"""Tests for the fix-suggestion generator."""

import json
from unittest.mock import MagicMock

import pytest

from codeaudit_cli.fixes import (
    FixResult,
    FixSuggestion,
    FixSuggestionGenerator,
    parse_fix_response,
    select_issues_for_fix,
    strip_fences,
)
from codeaudit_cli.model import ModelError, OllamaClient
from codeaudit_cli.results import CRITICAL, INFO, WARNING, Issue

RESPONSE = {
    "fixes": [
        {
            "issue": "BUG: Assignment operator in conditional",
            "fixedCode": "if (x === 5) {",
            "explanation": "Compare instead of assigning.",
        }
    ],
    "fullCorrectedCode": "function test() { if (x === 5) { console.log(x); } }",
}


def make_issue(severity, title, line=None):
    return Issue(severity, title, f"{title} description", f"{title} suggestion", line)


@pytest.fixture
def mock_client():
    """Create a mock OllamaClient that returns a structured fix response."""
    client = MagicMock(spec=OllamaClient)
    client.model = "qwen2.5-coder:7b"
    client.generate.return_value = json.dumps(RESPONSE)
    return client


class TestSelectIssues:
    def test_caps_and_order(self):
        issues = (
            [make_issue(INFO, f"i{n}") for n in range(3)]
            + [make_issue(WARNING, f"w{n}") for n in range(4)]
            + [make_issue(CRITICAL, f"c{n}") for n in range(5)]
        )
        selected = select_issues_for_fix(issues)
        assert [i.title for i in selected] == ["c0", "c1", "c2", "w0", "w1"]

    def test_info_only(self):
        assert select_issues_for_fix([make_issue(INFO, "i")]) == []


class TestParseFixResponse:
    def test_object(self):
        result = parse_fix_response(json.dumps(RESPONSE))
        assert result.fixes == [
            FixSuggestion(
                issue="BUG: Assignment operator in conditional",
                fixed_code="if (x === 5) {",
                explanation="Compare instead of assigning.",
            )
        ]
        assert result.full_corrected_code.startswith("function test()")

    def test_fenced(self):
        text = "```json\n" + json.dumps(RESPONSE) + "\n```"
        assert len(parse_fix_response(text).fixes) == 1

    def test_bare_list(self):
        result = parse_fix_response(json.dumps(RESPONSE["fixes"]))
        assert len(result.fixes) == 1
        assert result.full_corrected_code == ""

    def test_malformed(self):
        assert parse_fix_response("Sure! Here are your fixes:") == FixResult()

    def test_unexpected_json(self):
        assert parse_fix_response("42") == FixResult()

    @pytest.mark.parametrize("fixes", ["5", '"rewrite it"', '{"issue": "x"}', "true"])
    def test_fixes_not_a_list(self, fixes):
        result = parse_fix_response(f'{{"fixes": {fixes}, "fullCorrectedCode": "ok()"}}')
        assert result.fixes == []
        assert result.full_corrected_code == "ok()"

    def test_strip_fences_leaves_plain_text(self):
        assert strip_fences('  {"a": 1}  ') == '{"a": 1}'


class TestFixSuggestionGenerator:
    def test_generate(self, mock_client):
        issues = [make_issue(CRITICAL, "BUG: Assignment operator in conditional", line=1)]
        result = FixSuggestionGenerator(mock_client).generate("if (x = 5) {}", "javascript", issues)
        assert len(result.fixes) == 1
        assert result.model_used == "qwen2.5-coder:7b"
        prompt = mock_client.generate.call_args.args[0]
        assert "1. BUG: Assignment operator in conditional (Line 1):" in prompt
        assert "```javascript" in prompt

    def test_no_issues_skips_model(self, mock_client):
        result = FixSuggestionGenerator(mock_client).generate("x = 1", "python", [make_issue(INFO, "i")])
        assert result.fixes == []
        mock_client.generate.assert_not_called()

    def test_model_error_propagates(self, mock_client):
        mock_client.generate.side_effect = ModelError("Rate limit exceeded. Please try again later.")
        with pytest.raises(ModelError):
            FixSuggestionGenerator(mock_client).generate("x", "python", [make_issue(CRITICAL, "c")])

    def test_to_dict(self, mock_client):
        result = FixSuggestionGenerator(mock_client).generate("x", "python", [make_issue(WARNING, "w")])
        d = result.to_dict()
        assert d["fixes"][0]["fixedCode"] == "if (x === 5) {"
        assert "fullCorrectedCode" in d
