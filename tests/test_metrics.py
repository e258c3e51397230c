"""Tests for the metrics calculator."""

from codeaudit_cli.metrics import compute_metrics


def _python_file(functions=10, body_lines=19):
    lines = []
    for i in range(functions):
        lines.append(f"def step_{i}(x):")
        lines.extend(["    x = x + 1"] * body_lines)
    return "\n".join(lines)


class TestComputeMetrics:
    def test_javascript_counts(self):
        code = "// add two numbers\nfunction add(a, b) {\n  return a + b;\n}\n"
        m = compute_metrics(code, "javascript")
        assert m.lines_of_code == 5
        assert m.blank_lines == 1
        assert m.comment_lines == 1
        assert m.code_lines == 3
        assert m.functions == 1
        assert m.classes == 0
        assert m.complexity == 1

    def test_python_file_with_ten_defs(self):
        code = _python_file()
        m = compute_metrics(code, "python")
        assert m.lines_of_code == 200
        assert m.functions == 10
        assert m.comment_lines == 0
        assert m.complexity == 10

    def test_lines_of_code_matches_split(self):
        code = "a\n\nb\n"
        assert compute_metrics(code, "go").lines_of_code == len(code.split("\n"))

    def test_complexity_has_no_word_boundaries(self):
        # "verify" contains "if"
        m = compute_metrics("function verify() {}", "javascript")
        assert m.functions == 1
        assert m.complexity == 2

    def test_complexity_capped(self):
        code = "\n".join("if (a && b) { x(); }" for _ in range(20))
        assert compute_metrics(code, "javascript").complexity == 20

    def test_comments_ignored_for_structure(self):
        code = "// function ghost() {}\nfunction real() {}\n"
        assert compute_metrics(code, "javascript").functions == 1

    def test_block_comment_spans_lines(self):
        code = "/* one\n two\n three */\nint x = 1;"
        m = compute_metrics(code, "cpp")
        assert m.comment_lines == 3
        assert m.code_lines == 1

    def test_inline_comments_count_as_comment_lines(self):
        code = "x = 1  # a\n\ny = 2  # b\nz = 3  # c\n"
        m = compute_metrics(code, "python")
        assert m.lines_of_code == 5
        assert m.blank_lines == 2
        assert m.comment_lines == 3
        assert m.code_lines == 0

    def test_blank_line_inside_comment_makes_code_lines_negative(self):
        code = '"""a\n\nb"""'
        m = compute_metrics(code, "python")
        assert m.blank_lines == 1
        assert m.comment_lines == 3
        assert m.code_lines == -1

    def test_python_docstrings_count_as_comments(self):
        code = 'def f():\n    """Doc\n    string."""\n    return 1'
        m = compute_metrics(code, "python")
        assert m.comment_lines == 2
        assert m.functions == 1

    def test_language_lookup_is_case_insensitive(self):
        code = "# note\ndef f(): pass"
        assert compute_metrics(code, "Python") == compute_metrics(code, "python")

    def test_unknown_language_uses_default_patterns(self):
        code = "# comment\nfn main() {\n}\n"
        m = compute_metrics(code, "rust")
        assert m.comment_lines == 1
        assert m.functions == 1

    def test_typescript_interfaces_count_as_classes(self):
        code = "interface User { id: number }\nclass Admin {}\n"
        assert compute_metrics(code, "typescript").classes == 2

    def test_pure(self):
        code = _python_file(functions=3, body_lines=2)
        assert compute_metrics(code, "python") == compute_metrics(code, "python")
