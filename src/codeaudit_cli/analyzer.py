"""Snippet analyzer - Layer 1. No model needed.

Runs metrics, the issue rule battery, the authorship vote and the score
aggregator over a single piece of source text, plus the small helpers the
CLI and HTTP API share (size guard, language-mismatch hint, text report,
JSON export).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any

from .authorship import detect_authorship
from .detection import detect_language
from .issues import detect_issues
from .languages import EXT_LANG, language_for_filename
from .metrics import compute_metrics
from .results import (
    CRITICAL,
    INFO,
    WARNING,
    AIDetectionResult,
    AnalysisResult,
    CICDAnalysisResult,
    CodeMetrics,
    Issue,
)
from .scoring import quality_score

logger = logging.getLogger(__name__)

MAX_LINES = 5000
MAX_CHARS = 200_000
MIN_DETECTION_LENGTH = 20
MISMATCH_CONFIDENCE = 50

EMPTY_INPUT_ISSUE = Issue(
    WARNING,
    "No code provided",
    "Please enter code to analyze.",
    "Paste or upload code to get started.",
)


def empty_result() -> AnalysisResult:
    return AnalysisResult(
        score=0,
        issues=(EMPTY_INPUT_ISSUE,),
        metrics=CodeMetrics(),
        ai_detection=AIDetectionResult(),
    )


def analyze(code: str, language: str) -> AnalysisResult:
    """Analyze ``code`` as ``language``.

    Whitespace-only input short-circuits to a fixed sentinel result so the
    engines never see it. The same inputs always give the same result.
    """
    if not code or not code.strip():
        return empty_result()

    metrics = compute_metrics(code, language)
    issues = detect_issues(code, language)
    ai_detection = detect_authorship(code, language)
    score = quality_score(issues, metrics)

    logger.debug("analyzed %d lines of %s: score=%d, %d issue(s)", metrics.lines_of_code, language, score, len(issues))

    return AnalysisResult(
        score=score,
        issues=tuple(issues),
        metrics=metrics,
        ai_detection=ai_detection,
    )


def check_input_size(code: str, max_lines: int = MAX_LINES, max_chars: int = MAX_CHARS) -> None:
    """Raise ValueError when ``code`` is too large to analyze interactively."""
    if len(code) > max_chars:
        raise ValueError(f"Input is {len(code):,} characters; the limit is {max_chars:,}.")
    lines = code.count("\n") + 1
    if lines > max_lines:
        raise ValueError(f"Input is {lines:,} lines; the limit is {max_lines:,}.")


@dataclass(frozen=True)
class LanguageMismatch:
    """The selected language disagrees with what the text looks like."""

    selected: str
    detected: str
    confidence: int

    def to_dict(self) -> dict[str, Any]:
        return {"selected": self.selected, "detected": self.detected, "confidence": self.confidence}


def resolve_language(code: str, filename: str | None = None) -> str:
    """Language for ``code``: the file extension when it is a known one, else detection."""
    if filename and PurePath(filename).suffix.lower() in EXT_LANG:
        return language_for_filename(filename)
    return detect_language(code).language


def check_language_mismatch(code: str, selected: str) -> LanguageMismatch | None:
    """Return a mismatch hint, or None when detection agrees or is unsure.

    Advisory only: the analysis itself always runs with ``selected``.
    """
    if len(code.strip()) < MIN_DETECTION_LENGTH:
        return None
    detection = detect_language(code)
    if detection.language != selected and detection.confidence >= MISMATCH_CONFIDENCE:
        return LanguageMismatch(selected, detection.language, detection.confidence)
    return None


def format_report(result: AnalysisResult, cicd: CICDAnalysisResult | None = None) -> str:
    """Plain-text summary suitable for pasting into a chat or an email."""
    m = result.metrics
    ai = result.ai_detection
    verdict = "Possibly AI Generated" if ai.is_likely_ai else "Likely Human Written"

    lines = [
        "Code Analysis Report",
        "",
        f"Quality Score: {result.score}/100",
        f"Lines of Code: {m.lines_of_code}",
        f"Complexity: {m.complexity}",
        f"Functions: {m.functions}",
        "",
        "Issues Found:",
        f"- Critical: {result.count(CRITICAL)}",
        f"- Warnings: {result.count(WARNING)}",
        f"- Info: {result.count(INFO)}",
        "",
        f"AI Detection: {verdict} ({ai.confidence}% confidence)",
    ]
    if cicd is not None and cicd.detected:
        lines.append("")
        lines.append(f"CI/CD: {cicd.platform} (Security: {cicd.security_score}%)")
    return "\n".join(lines) + "\n"


def export_json(
    result: AnalysisResult,
    cicd: CICDAnalysisResult | None = None,
    timestamp: datetime | None = None,
) -> str:
    ts = timestamp or datetime.now(timezone.utc)
    payload = {
        "analysisResult": result.to_dict(),
        "cicdAnalysis": cicd.to_dict() if cicd is not None else None,
        "timestamp": ts.isoformat(),
    }
    return json.dumps(payload, indent=2)
