"""Tests for the language catalog."""

import pytest

from codeaudit_cli.languages import (
    DEFAULT_LANGUAGE,
    DETECTION_PATTERNS,
    STRUCTURE_PATTERNS,
    Language,
    is_language,
    language_for_filename,
    language_label,
    structure_patterns,
)


class TestLanguage:
    def test_fallback_is_first_member(self):
        assert DEFAULT_LANGUAGE is Language.JAVASCRIPT
        assert [lang.value for lang in Language][:3] == ["javascript", "typescript", "python"]

    def test_from_id(self):
        assert Language.from_id("Python") is Language.PYTHON
        assert Language.from_id("cobol") is None

    def test_labels(self):
        assert language_label("cpp") == "C++"
        assert language_label("csharp") == "C#"
        assert language_label("cobol") == "cobol"


class TestFilenameLookup:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("app.jsx", "javascript"),
            ("App.TSX", "typescript"),
            ("main.py", "python"),
            ("lib.rs", "rust"),
            ("engine.cc", "cpp"),
            ("util.h", "c"),
            ("styles.scss", "css"),
            ("index.htm", "html"),
            ("schema.sql", "sql"),
            ("README", "javascript"),
            ("notes.txt", "javascript"),
        ],
    )
    def test_language_for_filename(self, filename, expected):
        assert language_for_filename(filename) == expected


class TestCatalog:
    def test_every_language_has_detection_patterns(self):
        assert {p.language for p in DETECTION_PATTERNS} == set(Language)

    def test_detection_table_order(self):
        assert [p.language.value for p in DETECTION_PATTERNS][:4] == ["python", "java", "javascript", "typescript"]

    def test_structure_lookup(self):
        assert structure_patterns("Java") is STRUCTURE_PATTERNS["java"]
        assert structure_patterns("kotlin") is STRUCTURE_PATTERNS["default"]

    def test_is_language_is_substring_match(self):
        assert is_language("typescript", "javascript", "typescript")
        assert is_language("javascript", "java")
        assert not is_language("ruby", "python")
