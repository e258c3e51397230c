"""Language auto-detection by weighted pattern voting.

Every language in the catalog scores the whole text; strong indicators are
worth far more than general patterns or bare keywords. The winner's
confidence rewards both an absolute score and a clear margin over the
runner-up.
"""

from __future__ import annotations

import logging

from .languages import DEFAULT_LANGUAGE, DETECTION_PATTERNS, LanguagePattern
from .results import DetectionResult, LanguageScore, round_half_up

logger = logging.getLogger(__name__)

STRONG_POINTS = 20
PATTERN_POINTS = 3
KEYWORD_POINTS = 2
RANKING_SIZE = 5


def _count(pattern, text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))


def score_language(lang: LanguagePattern, text: str) -> float:
    """Raw weighted score of ``text`` against one language's patterns."""
    score = 0
    score += STRONG_POINTS * sum(_count(p, text) for p in lang.strong_indicators)
    score += PATTERN_POINTS * sum(_count(p, text) for p in lang.patterns)
    score += KEYWORD_POINTS * sum(_count(k, text) for k in lang.keywords)
    return score * lang.weight


def confidence_for(top: float, second: float) -> int:
    if top <= 0:
        return 0
    dominance = (top - second) / top if second > 0 else 1.0
    return min(100, round_half_up(dominance * 100 * 0.7 + min(30.0, top * 0.6)))


def detect_language(text: str) -> DetectionResult:
    """Guess the language of ``text``.

    Empty or whitespace-only input returns the fallback language with zero
    confidence and no ranking.
    """
    if not text or not text.strip():
        return DetectionResult(language=DEFAULT_LANGUAGE.value)

    scored = [LanguageScore(lang.language.value, score_language(lang, text)) for lang in DETECTION_PATTERNS]
    # stable sort keeps catalog order on ties
    scored.sort(key=lambda s: s.score, reverse=True)

    top = scored[0].score
    second = scored[1].score if len(scored) > 1 else 0
    confidence = confidence_for(top, second)
    # no pattern matched anywhere: same fallback as empty input
    best = scored[0].language if top > 0 else DEFAULT_LANGUAGE.value

    logger.debug("detected %s (score=%.1f, runner-up=%.1f, confidence=%d)", best, top, second, confidence)

    return DetectionResult(
        language=best,
        confidence=confidence,
        scores=tuple(scored[:RANKING_SIZE]),
    )
