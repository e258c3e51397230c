"""AI-vs-human authorship estimate from stylistic signals.

Each signal adds a fixed number of points to either the AI or the human
side when its condition holds; several can fire at once. The reported
confidence is the AI share of all points, or 50 when nothing fired.
This is a vote, not a calibrated probability.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field

from .results import AIDetectionResult, AIIndicator, round_half_up

logger = logging.getLogger(__name__)

AI = "ai"
HUMAN = "human"

LIKELY_AI_THRESHOLD = 60
MAX_INDICATORS = 6

_LEADING_WS = re.compile(r"^\s*")
_GENERIC_NAMES = re.compile(
    r"\b(data|result|response|item|value|temp|tmp|foo|bar|obj|arr|element|config|options|params)\b"
)
_DECLARED = re.compile(r"\b(?:const|let|var|def|auto|int|string)\s+(\w+)")
_FORMAL_COMMENT = re.compile(r"\b(function|method|parameter|returns?|description|example)\b", re.IGNORECASE)
_DEV_MARKERS = re.compile(r"TODO|FIXME|HACK|XXX|BUG|WIP|NOTE|TEMP", re.IGNORECASE)
_DEBUG_STATEMENTS = re.compile(r"console\.(log|debug|dir|table)|print\(|println\(|debugger;|dump\(")
_LONG_IDENTIFIER = re.compile(r"\b[a-z][a-zA-Z]{18,}\b")
_CASUAL = re.compile(r"\b(lol|wtf|damn|shit|crap|hell|hmm|oops|yikes)\b", re.IGNORECASE)
# whitespace-led alternatives only start at the beginning of a run
_IRREGULAR_SPACING = re.compile(r"\(\s{2,}|(?<!\s)\s{2,}\)|\{\s{2,}|(?<!\s)\s{2,}\}|(?<!\s)\s{3,}\w|=\s{2,}|,\s{3,}")
_ANY_ERROR_HANDLING = re.compile(r"try|catch|except|throw|raise|error|Error|Exception", re.IGNORECASE)
_TRY_OPEN = re.compile(r"try\s*\{")
_CATCH_OPEN = re.compile(r"catch\s*\(")


@dataclass
class _Vote:
    ai_score: int = 0
    human_score: int = 0
    indicators: list[AIIndicator] = field(default_factory=list)

    def ai(self, points: int, text: str) -> None:
        self.ai_score += points
        self.indicators.append(AIIndicator(AI, text))

    def human(self, points: int, text: str) -> None:
        self.human_score += points
        self.indicators.append(AIIndicator(HUMAN, text))

    def confidence(self) -> float:
        total = self.ai_score + self.human_score
        return self.ai_score / total * 100 if total > 0 else 50.0


def _indentation_regularity(lines: list[str]) -> float:
    regular = 0
    for line in lines:
        spaces = len(_LEADING_WS.match(line).group(0))
        if not line.strip() or spaces % 2 == 0 or spaces % 4 == 0:
            regular += 1
    return regular / len(lines)


def _repeated_blocks(lines: list[str]) -> int:
    """Distinct 3-line windows (over 20 chars) that occur more than twice."""
    blocks: Counter = Counter()
    for i in range(len(lines) - 3):
        block = "\n".join(lines[i:i + 3]).strip()
        if len(block) > 20:
            blocks[block] += 1
    return sum(1 for count in blocks.values() if count > 2)


def _try_catch_blocks(code: str) -> int:
    """Count ``try {`` openings each followed later by a ``catch (``, without overlap."""
    count = 0
    pos = 0
    while True:
        opened = _TRY_OPEN.search(code, pos)
        if not opened:
            return count
        caught = _CATCH_OPEN.search(code, opened.end())
        if not caught:
            return count
        count += 1
        pos = caught.end()


def detect_authorship(code: str, language: str) -> AIDetectionResult:
    lines = code.split("\n")
    vote = _Vote()

    indentation = _indentation_regularity(lines)
    if indentation > 0.95:
        vote.ai(18, "Perfect, consistent indentation throughout (95%+ lines). Human code typically has occasional "
                    "spacing inconsistencies from quick edits or multiple authors.")
    elif indentation < 0.85:
        vote.human(15, "Inconsistent indentation patterns. Natural when code evolves over time with different edits.")

    total_vars = len(_DECLARED.findall(code))
    generic_count = len(_GENERIC_NAMES.findall(code))
    generic_ratio = generic_count / total_vars if total_vars > 0 else 0
    if generic_ratio > 0.4:
        vote.ai(22, f"{round_half_up(generic_ratio * 100)}% generic variable names (data, result, item). AI models "
                    "favor descriptive but generic naming patterns.")
    elif generic_ratio < 0.2 and total_vars > 5:
        vote.human(12, "Domain-specific, contextual variable names showing familiarity with the problem space.")

    comment_lines = [l for l in lines if l.strip().startswith(("//", "#", "*"))]
    comment_ratio = len(comment_lines) / len(lines)
    formal = sum(1 for l in comment_lines if _FORMAL_COMMENT.search(l))
    if comment_ratio > 0.25 and formal > len(comment_lines) * 0.5:
        vote.ai(20, "High density of formal documentation comments (JSDoc/docstring style). AI often generates "
                    "comprehensive docs even for simple code.")
    elif 0 < comment_ratio < 0.1 and formal < 2:
        vote.human(12, "Minimal, informal comments. Humans often under-document or add quick explanatory notes "
                       "rather than formal docs.")

    markers = len(_DEV_MARKERS.findall(code))
    if markers > 0:
        vote.human(25, f"{markers} development marker(s) found (TODO/FIXME/HACK). Strong indicator of iterative "
                       "human development and self-reminders.")

    debug = len(_DEBUG_STATEMENTS.findall(code))
    if debug > 2:
        vote.human(18, f"{debug} debug statement(s) present. Developers leave these during development; AI "
                       "typically doesn't include them.")

    if _repeated_blocks(lines) > 3:
        vote.ai(15, "Multiple highly repetitive code blocks. AI often generates similar patterns; humans typically "
                    "refactor or vary implementations.")

    long_names = len(_LONG_IDENTIFIER.findall(code))
    if long_names > 4:
        vote.ai(12, f"{long_names} very long identifier(s) (19+ characters). AI favors verbose, self-documenting "
                    "names; humans often abbreviate.")

    if _CASUAL.search(code):
        vote.human(30, "Informal/casual language in comments. Very strong indicator of human authorship - AI avoids "
                       "unprofessional language.")

    if len(_IRREGULAR_SPACING.findall(code)) > 3:
        vote.human(14, "Irregular spacing patterns detected. Human code often has spacing inconsistencies from "
                       "manual typing and edits.")

    has_error_handling = bool(_ANY_ERROR_HANDLING.search(code))
    comprehensive = _try_catch_blocks(code) > 1
    if comprehensive and comment_ratio > 0.2:
        vote.ai(10, "Comprehensive error handling with documentation. AI generates complete, defensive code patterns.")
    elif not has_error_handling and len(lines) > 20:
        vote.human(8, "Minimal error handling in medium-length code. Humans often skip error handling in quick "
                      "implementations.")

    avg_line_length = sum(len(l) for l in lines) / len(lines)
    if 60 < avg_line_length < 85 and indentation > 0.9:
        vote.ai(8, "Consistently optimal line length (60-85 chars) with perfect structure. AI follows style guides "
                   "precisely.")

    confidence = vote.confidence()
    likely_ai = confidence > LIKELY_AI_THRESHOLD
    lead = AI if likely_ai else HUMAN
    ordered = [i for i in vote.indicators if i.kind == lead] + [i for i in vote.indicators if i.kind != lead]

    logger.debug("authorship vote ai=%d human=%d -> %.1f", vote.ai_score, vote.human_score, confidence)

    return AIDetectionResult(
        is_likely_ai=likely_ai,
        confidence=round_half_up(confidence),
        indicators=tuple(ordered[:MAX_INDICATORS]),
    )
