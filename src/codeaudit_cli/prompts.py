"""Prompt templates for the local model collaborators.

Each template takes analysis output and builds a focused prompt: one for
batch fix suggestions, one system message that grounds a chat session in
the analyzed code.
"""

from __future__ import annotations

from typing import Sequence

from .results import AnalysisResult, Issue

SYSTEM_PROMPT = """You are a helpful code review assistant.
You provide concise, actionable fixes for code issues.
Always respond with valid JSON only, no markdown formatting."""

CHAT_PREAMBLE = "You are an expert code assistant helping to fix bugs and improve code quality."


def issue_list(issues: Sequence[Issue]) -> str:
    """Numbered ``N. Title (Line L): description`` lines."""
    return "\n".join(f"{n}. {issue.summary_line()}" for n, issue in enumerate(issues, 1))


def fix_prompt(code: str, language: str, issues: Sequence[Issue]) -> str:
    """Generate prompt asking for per-issue fixes plus the full corrected code."""
    return f"""You are an expert code reviewer. Analyze the following {language} code and provide specific fixes for the issues listed.

CODE:
```{language}
{code}
```

ISSUES TO FIX:
{issue_list(issues)}

Provide:
1. Individual fixes for each issue with the corrected code snippet and explanation
2. The COMPLETE fully functional corrected code with ALL issues fixed

Respond ONLY with valid JSON in this exact format (no markdown, no code blocks, just raw JSON):
{{
  "fixes": [
    {{
      "issue": "Issue title here",
      "fixedCode": "corrected code snippet here",
      "explanation": "Brief explanation of why this fix works"
    }}
  ],
  "fullCorrectedCode": "The complete corrected code with all issues fixed goes here"
}}"""


def chat_context(code: str = "", language: str = "", result: AnalysisResult | None = None) -> str:
    """System message for a chat session about ``code`` and its analysis."""
    parts = [CHAT_PREAMBLE]
    if code and language:
        parts.append(f"\n\nUser's code ({language}):\n```{language}\n{code}\n```")
    if result is not None:
        parts.append("\n\nCode Analysis Results:")
        parts.append(f"\n- Quality Score: {result.score}/100")
        if result.issues:
            parts.append("\n\nIssues Found:")
            for n, issue in enumerate(result.issues, 1):
                parts.append(f"\n{n}. [{issue.severity}] {issue.title}: {issue.description}")
                if issue.line:
                    parts.append(f" (Line {issue.line})")
                if issue.suggestion:
                    parts.append(f"\n   Suggestion: {issue.suggestion}")
    return "".join(parts)
