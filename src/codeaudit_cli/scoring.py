"""Weighted-penalty quality score."""

from __future__ import annotations

from typing import Iterable

from .results import CRITICAL, INFO, WARNING, CodeMetrics, Issue, round_half_up

PENALTIES = {CRITICAL: 15, WARNING: 8, INFO: 3}


def documentation_ratio(metrics: CodeMetrics) -> float:
    """Comment lines per code line, with float division semantics.

    Zero code lines give +inf when there are comments and NaN when there
    are none; NaN compares false against every threshold.
    """
    if metrics.code_lines == 0:
        return float("inf") if metrics.comment_lines > 0 else float("nan")
    return metrics.comment_lines / metrics.code_lines


def quality_score(issues: Iterable[Issue], metrics: CodeMetrics) -> int:
    score = 100
    for issue in issues:
        score -= PENALTIES.get(issue.severity, 0)

    if metrics.complexity > 15:
        score -= 10
    elif metrics.complexity > 10:
        score -= 5

    ratio = documentation_ratio(metrics)
    if ratio < 0.05:
        score -= 5
    elif ratio > 0.1:
        score += 5

    return round_half_up(max(0, min(100, score)))
