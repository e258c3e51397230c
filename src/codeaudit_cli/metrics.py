"""Line, structure and complexity counts for a (code, language) pair."""

from __future__ import annotations

import re

from .languages import structure_patterns
from .results import CodeMetrics

# Matched without word boundaries, so "if" inside "verify" counts too.
COMPLEXITY_TOKENS = re.compile(r"if|else|for|while|case|catch|\?\?|\|\||&&")
COMPLEXITY_CAP = 20


def count_comment_lines(code: str, comment_pattern: re.Pattern) -> int:
    """Lines spanned by all comment matches once joined by newlines.

    Rough on purpose: adjacent or inline comments are flattened and
    re-split, so the count can exceed what an editor would show.
    """
    matches = [m.group(0) for m in comment_pattern.finditer(code)]
    if not matches:
        return 0
    return len("\n".join(matches).split("\n"))


def compute_metrics(code: str, language: str) -> CodeMetrics:
    lines = code.split("\n")
    patterns = structure_patterns(language)

    without_comments = patterns.comment.sub("", code)

    comment_lines = count_comment_lines(code, patterns.comment)
    blank_lines = sum(1 for line in lines if not line.strip())
    # may go negative when comment matches overlap blank lines
    code_lines = len(lines) - blank_lines - comment_lines

    functions = len(patterns.function.findall(without_comments))
    classes = len(patterns.klass.findall(without_comments))
    complexity = min(COMPLEXITY_CAP, len(COMPLEXITY_TOKENS.findall(without_comments)) + functions)

    return CodeMetrics(
        lines_of_code=len(lines),
        code_lines=code_lines,
        comment_lines=comment_lines,
        blank_lines=blank_lines,
        complexity=complexity,
        functions=functions,
        classes=classes,
    )
