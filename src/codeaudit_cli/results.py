"""Result types shared by the analysis engines.

Every value here is created fresh per call and handed to a renderer.
``to_dict()`` keeps the camelCase keys the report consumers expect.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

CRITICAL = "critical"
WARNING = "warning"
INFO = "info"

SEVERITIES = (CRITICAL, WARNING, INFO)


def round_half_up(value: float) -> int:
    """Round halves up, the way every reported score and percentage is rounded."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Issue:
    """A single finding from the issue detector."""

    severity: str
    title: str
    description: str
    suggestion: str
    line: int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "type": self.severity,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
        }
        if self.line is not None:
            d["line"] = self.line
        return d

    def summary_line(self) -> str:
        """One-line plain-text form used in model prompts."""
        where = f" (Line {self.line})" if self.line else ""
        return f"{self.title}{where}: {self.description}"


@dataclass(frozen=True)
class CodeMetrics:
    lines_of_code: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    complexity: int = 0
    functions: int = 0
    classes: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "linesOfCode": self.lines_of_code,
            "codeLines": self.code_lines,
            "commentLines": self.comment_lines,
            "blankLines": self.blank_lines,
            "complexity": self.complexity,
            "functions": self.functions,
            "classes": self.classes,
        }


@dataclass(frozen=True)
class AIIndicator:
    """Evidence for one side of the authorship vote ("ai" or "human")."""

    kind: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.kind, "text": self.text}


@dataclass(frozen=True)
class AIDetectionResult:
    is_likely_ai: bool = False
    confidence: int = 50
    indicators: tuple[AIIndicator, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "isLikelyAI": self.is_likely_ai,
            "confidence": self.confidence,
            "indicators": [i.to_dict() for i in self.indicators],
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Root aggregate returned by ``analyze()``."""

    score: int
    issues: tuple[Issue, ...] = ()
    metrics: CodeMetrics = field(default_factory=CodeMetrics)
    ai_detection: AIDetectionResult = field(default_factory=AIDetectionResult)

    def count(self, severity: str) -> int:
        return sum(1 for i in self.issues if i.severity == severity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "issues": [i.to_dict() for i in self.issues],
            "metrics": self.metrics.to_dict(),
            "aiDetection": self.ai_detection.to_dict(),
        }


@dataclass(frozen=True)
class LanguageScore:
    language: str
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {"language": self.language, "score": self.score}


@dataclass(frozen=True)
class DetectionResult:
    """Best-guess language with confidence and the ranked runners-up."""

    language: str
    confidence: int = 0
    scores: tuple[LanguageScore, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "detectedLanguage": self.language,
            "confidence": self.confidence,
            "scores": [s.to_dict() for s in self.scores],
        }


@dataclass(frozen=True)
class CICDIssue:
    severity: str
    title: str
    description: str
    suggestion: str
    platform: str

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.severity,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
            "platform": self.platform,
        }


@dataclass(frozen=True)
class BestPractice:
    name: str
    implemented: bool
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "implemented": self.implemented,
            "description": self.description,
        }


@dataclass(frozen=True)
class CICDAnalysisResult:
    detected: bool = False
    platform: str | None = None
    issues: tuple[CICDIssue, ...] = ()
    best_practices: tuple[BestPractice, ...] = ()
    security_score: int = 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "detected": self.detected,
            "platform": self.platform,
            "issues": [i.to_dict() for i in self.issues],
            "bestPractices": [bp.to_dict() for bp in self.best_practices],
            "securityScore": self.security_score,
        }
