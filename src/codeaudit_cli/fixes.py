"""Fix suggestions - combines Layer 1 + Layer 2.

Takes analysis issues, feeds the most important ones into the fix prompt,
calls the local model, and parses its JSON answer into FixResult objects.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Sequence

from .model import OllamaClient
from .prompts import SYSTEM_PROMPT, fix_prompt
from .results import CRITICAL, WARNING, Issue

logger = logging.getLogger(__name__)

MAX_CRITICAL = 3
MAX_WARNING = 2

_FENCE = re.compile(r"```json?\n?")


@dataclass
class FixSuggestion:
    """One proposed fix for one issue."""

    issue: str
    fixed_code: str
    explanation: str

    def to_dict(self) -> dict[str, str]:
        return {
            "issue": self.issue,
            "fixedCode": self.fixed_code,
            "explanation": self.explanation,
        }


@dataclass
class FixResult:
    """Complete fix-suggestion output."""

    fixes: list[FixSuggestion] = field(default_factory=list)
    full_corrected_code: str = ""
    model_used: str = ""
    generation_time_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "fixes": [f.to_dict() for f in self.fixes],
            "fullCorrectedCode": self.full_corrected_code,
            "model_used": self.model_used,
            "generation_time_seconds": round(self.generation_time_seconds, 1),
        }


def select_issues_for_fix(issues: Sequence[Issue]) -> list[Issue]:
    """Up to 3 critical issues followed by up to 2 warnings."""
    critical = [i for i in issues if i.severity == CRITICAL][:MAX_CRITICAL]
    warning = [i for i in issues if i.severity == WARNING][:MAX_WARNING]
    return critical + warning


def strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE.sub("", text)
        text = re.sub(r"```$", "", text).strip()
    return text


def parse_fix_response(text: str) -> FixResult:
    """Parse the model's answer; malformed output yields an empty result."""
    try:
        data = json.loads(strip_fences(text))
    except json.JSONDecodeError:
        logger.warning("model returned unparseable fix suggestions: %s", text[:200])
        return FixResult()

    # a bare list is the older answer format: fixes only
    if isinstance(data, list):
        raw_fixes, full = data, ""
    elif isinstance(data, dict):
        raw_fixes, full = data.get("fixes") or [], data.get("fullCorrectedCode") or ""
    else:
        return FixResult()
    if not isinstance(raw_fixes, list):
        logger.warning("model returned fixes of unexpected type %s", type(raw_fixes).__name__)
        raw_fixes = []

    fixes = [
        FixSuggestion(
            issue=str(f.get("issue", "")),
            fixed_code=str(f.get("fixedCode", "")),
            explanation=str(f.get("explanation", "")),
        )
        for f in raw_fixes
        if isinstance(f, dict)
    ]
    return FixResult(fixes=fixes, full_corrected_code=str(full))


class FixSuggestionGenerator:
    """Asks the local model for fixes to the issues an analysis found."""

    def __init__(self, client: OllamaClient):
        self.client = client

    def generate(self, code: str, language: str, issues: Sequence[Issue]) -> FixResult:
        selected = select_issues_for_fix(issues)
        if not selected:
            return FixResult(model_used=self.client.model)

        start = time.time()
        prompt = fix_prompt(code, language, selected)
        text = self.client.generate(prompt, system=SYSTEM_PROMPT)

        result = parse_fix_response(text)
        result.model_used = self.client.model
        result.generation_time_seconds = time.time() - start
        return result
