"""Tests for language auto-detection."""

import time

import pytest

from codeaudit_cli import detection
from codeaudit_cli.detection import confidence_for, detect_language
from codeaudit_cli.languages import DETECTION_PATTERNS, Language
from codeaudit_cli.results import DetectionResult

PYTHON_SNIPPET = """import os
import sys

def main():
    print(os.getcwd())

if __name__ == "__main__":
    main()
"""

JAVA_SNIPPET = """package com.example;

import java.util.List;

public class Hello {
    public static void main(String[] args) {
        System.out.println("Hello");
    }
}
"""

JS_SNIPPET = """const express = require('express');
const app = express();

app.get('/', (req, res) => {
  console.log('hit');
  res.send('ok');
});

module.exports = app;
"""

CSS_SNIPPET = """body {
  margin: 0;
}

.card {
  display: flex;
  background-color: #fff;
}
"""


class TestDetectLanguage:
    def test_empty_input_falls_back(self):
        result = detect_language("")
        assert result == DetectionResult(language="javascript", confidence=0, scores=())

    def test_whitespace_input_falls_back(self):
        result = detect_language("   \n\t  ")
        assert result.language == "javascript"
        assert result.confidence == 0
        assert result.scores == ()

    def test_python(self):
        result = detect_language(PYTHON_SNIPPET)
        assert result.language == "python"
        assert result.confidence > 50

    def test_java(self):
        assert detect_language(JAVA_SNIPPET).language == "java"

    def test_javascript(self):
        assert detect_language(JS_SNIPPET).language == "javascript"

    def test_css(self):
        assert detect_language(CSS_SNIPPET).language == "css"

    @pytest.mark.parametrize(
        "snippet,expected",
        [(PYTHON_SNIPPET, "python"), (JAVA_SNIPPET, "java"), (JS_SNIPPET, "javascript")],
    )
    def test_unrelated_whitespace_keeps_winner(self, snippet, expected):
        reflowed = "\n\n" + "\n   \n".join(snippet.splitlines()) + "\t\n\n"
        assert detect_language(snippet).language == expected
        assert detect_language(reflowed).language == expected

    def test_long_prose_is_fast(self):
        # just under the size guard; no pattern may rescan to the end from every line
        text = "alpha beta gamma delta epsilon zeta eta theta\n" * 4000
        css = next(p for p in DETECTION_PATTERNS if p.language == Language.CSS)
        start = time.perf_counter()
        for pattern in css.strong_indicators:
            sum(1 for _ in pattern.finditer(text))
        assert time.perf_counter() - start < 1.0

        start = time.perf_counter()
        detect_language(text)
        assert time.perf_counter() - start < 5.0

    def test_ranking_is_top_five_descending(self):
        result = detect_language(PYTHON_SNIPPET)
        assert len(result.scores) == 5
        values = [s.score for s in result.scores]
        assert values == sorted(values, reverse=True)
        assert result.scores[0].language == result.language

    def test_idempotent(self):
        assert detect_language(JS_SNIPPET) == detect_language(JS_SNIPPET)

    def test_no_signal_falls_back(self, monkeypatch):
        monkeypatch.setattr(detection, "score_language", lambda lang, text: 0)
        result = detect_language("anything at all")
        assert result.language == "javascript"
        assert result.confidence == 0

    def test_ties_keep_catalog_order(self, monkeypatch):
        monkeypatch.setattr(detection, "score_language", lambda lang, text: 1)
        result = detect_language("x")
        assert [s.language for s in result.scores] == ["python", "java", "javascript", "typescript", "cpp"]
        assert result.language == "python"
        assert result.confidence == 1

    def test_to_dict_keys(self):
        d = detect_language(PYTHON_SNIPPET).to_dict()
        assert set(d) == {"detectedLanguage", "confidence", "scores"}
        assert set(d["scores"][0]) == {"language", "score"}


class TestConfidence:
    @pytest.mark.parametrize(
        "top,second,expected",
        [
            (0, 0, 0),
            (100, 0, 100),
            (10, 5, 41),
            (10, 10, 6),
            (1, 1, 1),
        ],
    )
    def test_confidence_for(self, top, second, expected):
        assert confidence_for(top, second) == expected

    def test_capped_at_100(self):
        assert confidence_for(1000, 0) == 100
