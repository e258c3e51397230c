"""Issue detector - an ordered battery of independent heuristic checks.

Each check scans the whole file (or its line list) and returns zero or more
issues. Output order is the order of ``RULES``, not severity. No check
raises on odd input; no match simply means no issue.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .languages import is_language
from .metrics import compute_metrics
from .results import CRITICAL, INFO, WARNING, Issue, round_half_up

logger = logging.getLogger(__name__)

Rule = Callable[[str, list[str], str], list[Issue]]

TYPOS = (
    ("lenght", "length"),
    ("fucntion", "function"),
    ("retrun", "return"),
    ("consoel", "console"),
    ("udefined", "undefined"),
)

LONG_FUNCTION_LINES = 60
MISSING_RETURN_MIN_CHARS = 100


def _first_line(lines: list[str], pattern: re.Pattern) -> int | None:
    for idx, line in enumerate(lines):
        if pattern.search(line):
            return idx + 1
    return None


def _is_js(language: str) -> bool:
    return is_language(language, "javascript", "typescript")


# --- Correctness ---

_ASSIGN_IN_IF = re.compile(r"if\s*\([^)]*[^=!<>]\s=\s[^=]")
_EQUALITY = re.compile(r"===|==")


def check_assignment_in_conditional(code: str, lines: list[str], language: str) -> list[Issue]:
    issues = []
    for idx, line in enumerate(lines):
        if _ASSIGN_IN_IF.search(line) and not _EQUALITY.search(line):
            n = idx + 1
            issues.append(Issue(
                severity=CRITICAL,
                title="BUG: Assignment operator in conditional",
                description=(
                    f"Line {n} uses assignment (=) instead of comparison (== or ===) in an if statement. "
                    "This will always assign the value and evaluate to true/truthy, not compare values. "
                    "This is almost always a bug."
                ),
                line=n,
                suggestion=(
                    "Change = to === for strict equality check. Example: if (n === 0) instead of if (n = 0). "
                    "Use == only if you intentionally want type coercion."
                ),
            ))
    return issues


_TEMPLATE_IN_LOG = re.compile(r"console\.log\([^`]*\$\{")
_TEMPLATE_IN_RETURN = re.compile(r"return\s+[^`]*\$\{")


def check_missing_backticks(code: str, lines: list[str], language: str) -> list[Issue]:
    issues = []
    for idx, line in enumerate(lines):
        if _TEMPLATE_IN_LOG.search(line) or _TEMPLATE_IN_RETURN.search(line):
            n = idx + 1
            issues.append(Issue(
                severity=CRITICAL,
                title="SYNTAX ERROR: Missing backticks for template literal",
                description=(
                    f"Line {n} uses template literal syntax (${{}}) but is missing backticks. "
                    "This will cause a syntax error. Template literals must use backticks (`), "
                    "not single or double quotes."
                ),
                line=n,
                suggestion="Replace quotes with backticks: console.log(`Factorial of ${num} is: ${result}`);",
            ))
    return issues


_QUOTED_NUMBER = re.compile(r"[\"']\d+[\"']")
_MATH_CONTEXT = re.compile(r"factorial|calculate|multiply|divide|add|subtract|Math\.", re.IGNORECASE)


def check_string_in_numeric_context(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _is_js(language):
        return []
    issues = []
    for idx, line in enumerate(lines):
        if not _QUOTED_NUMBER.search(line):
            continue
        window = " ".join(lines[max(0, idx - 3):idx + 3])
        if _MATH_CONTEXT.search(window):
            n = idx + 1
            issues.append(Issue(
                severity=WARNING,
                title="BUG: String used in numeric context",
                description=(
                    f'Line {n} uses a string (e.g., "5") where a number is expected. This can cause type '
                    "coercion issues, NaN results, or unexpected string concatenation instead of addition."
                ),
                line=n,
                suggestion=(
                    'Remove quotes to use numbers: const number = 5; not const number = "5". '
                    "Or parse strings: parseInt(str) or Number(str)."
                ),
            ))
    return issues


def check_typos(code: str, lines: list[str], language: str) -> list[Issue]:
    issues = []
    for typo, fix in TYPOS:
        n = _first_line(lines, re.compile(typo))
        if n is None:
            continue
        issues.append(Issue(
            severity=CRITICAL,
            title=f"TYPO: '{typo}' should be '{fix}'",
            description=f"Found typo on line {n}. This will cause a ReferenceError or unexpected behavior.",
            line=n,
            suggestion=f"Correct the spelling to '{fix}'.",
        ))
    return issues


_STATEMENT_START = re.compile(r"^(const|let|var|return)\s")


def check_missing_semicolons(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _is_js(language):
        return []
    missing = 0
    # the last line is never counted
    for line in lines[:-1]:
        trimmed = line.strip()
        if trimmed and _STATEMENT_START.search(trimmed) and not trimmed.endswith((";", "{", ",")):
            missing += 1
    if missing <= 3:
        return []
    return [Issue(
        severity=INFO,
        title="Missing semicolons detected",
        description=(
            f"Found {missing} statements without semicolons. While JavaScript has ASI (Automatic Semicolon "
            "Insertion), it can cause subtle bugs in certain cases."
        ),
        suggestion=(
            "Add semicolons at the end of statements, or use a linter like ESLint with automatic fixing "
            "to enforce consistency."
        ),
    )]


_DECLARATION = re.compile(r"(?:const|let|var)\s+(\w+)")


def check_unused_variables(code: str, lines: list[str], language: str) -> list[Issue]:
    """Flag declared names whose text occurs at most once in the whole file.

    Shadowed or nested re-declarations are not tracked; false positives
    there are accepted.
    """
    if not _is_js(language):
        return []
    declared: dict[str, None] = {}
    for line in lines:
        for name in _DECLARATION.findall(line):
            declared.setdefault(name, None)

    unused = [name for name in declared if code.count(name) <= 1]
    if not unused:
        return []
    plural = "s" if len(unused) > 1 else ""
    return [Issue(
        severity=INFO,
        title=f"Unused variable{plural}: {', '.join(unused)}",
        description=(
            f"Declared {len(unused)} variable(s) that are never used. Dead code clutters the codebase "
            "and may indicate incomplete refactoring."
        ),
        suggestion=(
            "Remove unused variables or use them if they were meant to be used. Modern IDEs can "
            "highlight these automatically."
        ),
    )]


_NAMED_FUNCTION = re.compile(r"function\s+\w+")
_RETURN = re.compile(r"return\s")


def check_missing_return(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _is_js(language):
        return []
    issues = []
    in_function = False
    start = 0
    has_return = False
    depth = 0

    for idx, line in enumerate(lines):
        if _NAMED_FUNCTION.search(line) and "=>" not in line:
            in_function = True
            start = idx
            has_return = False
            depth = 0

        if not in_function:
            continue

        depth += line.count("{") - line.count("}")
        if _RETURN.search(line):
            has_return = True

        if depth == 0 and idx > start:
            body = " ".join(lines[start:idx + 1])
            if not has_return and len(body) > MISSING_RETURN_MIN_CHARS:
                issues.append(Issue(
                    severity=WARNING,
                    title="Function may be missing return statement",
                    description=(
                        f"Function starting at line {start + 1} has no return statement. If this function "
                        "should return a value, it will return undefined."
                    ),
                    line=start + 1,
                    suggestion=(
                        "Add a return statement if the function should return a value, or clarify if "
                        "it's intentionally a void function."
                    ),
                ))
            in_function = False
    return issues


# --- Security ---

_EVAL = re.compile(r"eval\s*\(", re.IGNORECASE)


def check_eval(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _EVAL.search(code):
        return []
    n = _first_line(lines, _EVAL)
    return [Issue(
        severity=CRITICAL,
        title="Critical: eval() allows arbitrary code execution",
        description=(
            f"Found on line {n}. The eval() function executes any string as code, making it extremely "
            "dangerous. Attackers can inject malicious code that will run with full application privileges, "
            "potentially stealing data, modifying behavior, or compromising the entire system."
        ),
        line=n,
        suggestion=(
            "Replace eval() with safer alternatives: For JSON parsing, use JSON.parse(). For mathematical "
            "expressions, use a safe expression evaluator library like math.js. If you absolutely need dynamic "
            "code, use new Function() with strict validation and Content Security Policy headers."
        ),
    )]


_INNER_HTML = re.compile(r"innerHTML\s*=", re.IGNORECASE)


def check_inner_html(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _INNER_HTML.search(code):
        return []
    n = _first_line(lines, _INNER_HTML)
    return [Issue(
        severity=CRITICAL,
        title="Critical XSS Risk: Direct innerHTML manipulation",
        description=(
            f"Detected on line {n}. Setting innerHTML with unsanitized user input allows attackers to inject "
            "malicious scripts that execute in users' browsers, potentially stealing cookies, session tokens, "
            "or performing unauthorized actions."
        ),
        line=n,
        suggestion=(
            "Use textContent for plain text (e.g., element.textContent = userInput). For HTML content, sanitize "
            "using DOMPurify: element.innerHTML = DOMPurify.sanitize(userInput). Or use createElement() and "
            "setAttribute() for dynamic content. Modern frameworks like React automatically escape content."
        ),
    )]


_SQL_CONCAT = re.compile(r"(SELECT|INSERT|UPDATE|DELETE).*(\+|concat|\$\{).*['\"`]", re.IGNORECASE)


def check_sql_injection(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _SQL_CONCAT.search(code):
        return []
    n = _first_line(lines, _SQL_CONCAT)
    if _is_js(language):
        suggestion = (
            'Use parameterized queries: db.query("SELECT * FROM users WHERE id = $1", [userId]) or prepared '
            "statements. With ORMs like Prisma: prisma.user.findUnique({ where: { id } }). Never concatenate "
            "user input into SQL strings."
        )
    elif is_language(language, "python"):
        suggestion = (
            'Use parameterized queries: cursor.execute("SELECT * FROM users WHERE id = %s", (user_id,)) or ORM '
            "methods. Never use string formatting (f-strings, %) with SQL."
        )
    else:
        suggestion = "Use prepared statements with bound parameters. Never concatenate user input into SQL queries."
    return [Issue(
        severity=CRITICAL,
        title="Critical SQL Injection vulnerability",
        description=(
            f"Found on line {n}. String concatenation in SQL queries allows attackers to modify query logic, "
            "bypass authentication, steal data, or delete entire databases. This is one of the most dangerous "
            "web vulnerabilities."
        ),
        line=n,
        suggestion=suggestion,
    )]


_CREDENTIAL = re.compile(r"(?:password|api[_-]?key|secret|token|auth)\s*[=:]\s*['\"][^'\"]{8,}['\"]", re.IGNORECASE)


def check_hardcoded_credentials(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _CREDENTIAL.search(code):
        return []
    n = _first_line(lines, _CREDENTIAL)
    return [Issue(
        severity=CRITICAL,
        title="Critical: Hardcoded credentials detected",
        description=(
            f"Found on line {n}. Credentials in source code are exposed in version control history forever, "
            "even if deleted later. They can be discovered through GitHub searches, leaked repositories, or "
            "compromised systems."
        ),
        line=n,
        suggestion=(
            'Store secrets in environment variables: process.env.API_KEY or os.environ["API_KEY"]. Use .env '
            "files locally (add to .gitignore!). In production, use secret managers like AWS Secrets Manager, "
            "Azure Key Vault, or HashiCorp Vault. Rotate exposed credentials immediately."
        ),
    )]


_WEAK_CRYPTO = re.compile(r"md5|sha1(?!\d)|base64(?!url).*password", re.IGNORECASE)


def check_weak_crypto(code: str, lines: list[str], language: str) -> list[Issue]:
    if not _WEAK_CRYPTO.search(code):
        return []
    if _is_js(language):
        suggestion = (
            "For passwords, use bcrypt (12+ rounds) or Argon2: await bcrypt.hash(password, 12). For hashing, "
            "use SHA-256 or better. For encryption, use AES-256-GCM. Never roll your own crypto."
        )
    else:
        suggestion = (
            "Use bcrypt, Argon2, or PBKDF2 for passwords with proper salts. For hashing, use SHA-256+. For "
            "encryption, use established libraries with modern algorithms."
        )
    return [Issue(
        severity=CRITICAL,
        title="Weak cryptographic algorithm detected",
        description=(
            "MD5 and SHA1 are cryptographically broken and can be cracked in seconds. Base64 is encoding, not "
            "encryption. Using weak crypto for passwords means attackers can reverse them easily."
        ),
        suggestion=suggestion,
    )]


# --- Code quality ---

_CONSOLE = re.compile(r"console\.(log|error|warn|debug|info)")


def check_console_statements(code: str, lines: list[str], language: str) -> list[Issue]:
    count = len(_CONSOLE.findall(code))
    if count <= 5:
        return []
    if _is_js(language):
        suggestion = (
            'Remove console.* before deploying. Use a proper logger (Winston, Pino, or Bunyan) with '
            'environment-based levels: if (process.env.NODE_ENV !== "production") console.log(). Set up error '
            "tracking with Sentry or similar."
        )
    else:
        suggestion = (
            "Remove print/debug statements. Use a logging framework with configurable levels (logging, log4j) "
            "that can be disabled in production."
        )
    return [Issue(
        severity=WARNING,
        title=f"{count} console statements found",
        description=(
            "Console logs in production expose sensitive data (user IDs, API responses, internal logic) to "
            "anyone with browser DevTools. They also impact performance and clutter the console, making real "
            "errors harder to spot."
        ),
        suggestion=suggestion,
    )]


_ASYNC_USAGE = re.compile(r"async|await|fetch|axios|request|Promise|\.then\(", re.IGNORECASE)
_ERROR_HANDLING = re.compile(r"try|catch|except|throw|\.catch\(|error", re.IGNORECASE)


def check_async_error_handling(code: str, lines: list[str], language: str) -> list[Issue]:
    if not is_language(language, "javascript", "typescript", "python", "java"):
        return []
    if not _ASYNC_USAGE.search(code) or _ERROR_HANDLING.search(code):
        return []
    if _is_js(language):
        suggestion = (
            'Wrap async code in try-catch: try { const data = await fetch(url); } catch (error) { '
            'console.error("API failed:", error); showToast("Error loading data"); }. Use .catch() for '
            "promises. Add global error handlers for unhandled rejections."
        )
    else:
        suggestion = (
            "Add try-except blocks around all async/IO operations. Log errors and provide user feedback. Use "
            "context managers (with statements) for resource cleanup."
        )
    return [Issue(
        severity=WARNING,
        title="Missing error handling for async operations",
        description=(
            "Async code without error handling causes unhandled promise rejections, crashes, silent failures, "
            "or leaves the app in an inconsistent state. Users see generic errors or worse - no error at all."
        ),
        suggestion=suggestion,
    )]


_TASK_MARKER = re.compile(r"TODO|FIXME|HACK|XXX|BUG", re.IGNORECASE)


def check_task_markers(code: str, lines: list[str], language: str) -> list[Issue]:
    count = len(_TASK_MARKER.findall(code))
    if count == 0:
        return []
    n = _first_line(lines, _TASK_MARKER)
    plural = "s" if count > 1 else ""
    return [Issue(
        severity=INFO,
        title=f"{count} unfinished task marker{plural} (TODO/FIXME)",
        description=(
            f"Found starting at line {n}. These comments indicate incomplete features, temporary workarounds, "
            "or known bugs. Shipping code with TODOs means you're deploying unfinished work."
        ),
        line=n,
        suggestion=(
            "Review each TODO: Complete the work, create a ticket in your issue tracker (Jira, Linear, GitHub "
            "Issues) with proper priority, or remove if no longer relevant. Assign owners and due dates. Never "
            "deploy critical TODOs."
        ),
    )]


_MAGIC_NUMBER = re.compile(r"\b(?<!\.)\d{3,}\b(?!\s*[a-zA-Z_])")


def check_magic_numbers(code: str, lines: list[str], language: str) -> list[Issue]:
    if len(_MAGIC_NUMBER.findall(code)) <= 3:
        return []
    return [Issue(
        severity=INFO,
        title="Magic numbers detected - use named constants",
        description=(
            "Unexplained numbers like 86400, 1000, 3600 make code hard to understand and maintain. When the "
            "same number appears multiple times, changing it requires finding every instance."
        ),
        suggestion=(
            "Replace with named constants: const SECONDS_IN_DAY = 86400; const MAX_RETRIES = 3; const "
            "DEFAULT_TIMEOUT_MS = 5000. Use SCREAMING_SNAKE_CASE for constants. Group related constants in an "
            "object or enum."
        ),
    )]


def check_documentation_ratio(code: str, lines: list[str], language: str) -> list[Issue]:
    metrics = compute_metrics(code, language)
    ratio = metrics.comment_lines / (metrics.code_lines or 1)
    if metrics.functions <= 3 or ratio >= 0.1:
        return []
    if _is_js(language):
        suggestion = (
            "Add JSDoc comments: /** @param {string} userId - Unique user identifier * @returns {Promise<User>} "
            "User object * @throws {NotFoundError} If user doesn't exist */. Document complex logic, edge cases, "
            "and business rules. Use clear variable names to reduce need for comments."
        )
    elif is_language(language, "python"):
        suggestion = (
            'Add docstrings: """Fetch user by ID. Args: user_id (str): Unique identifier. Returns: User: User '
            'object. Raises: NotFoundError: If user not found.""". Follow PEP 257 conventions.'
        )
    else:
        suggestion = (
            "Add function/method documentation explaining parameters, return values, exceptions, and purpose. "
            "Document non-obvious logic and business rules."
        )
    percent = round_half_up(ratio * 100)
    return [Issue(
        severity=INFO,
        title="Low code documentation",
        description=(
            f"Found {metrics.functions} functions but only {percent}% comments. Undocumented code is a "
            "maintenance nightmare. Future developers (including you in 6 months) won't understand the \"why\" "
            "behind decisions."
        ),
        suggestion=suggestion,
    )]


_FUNCTION_START = re.compile(r"function|def |fn |func ")


def check_long_functions(code: str, lines: list[str], language: str) -> list[Issue]:
    """Flag functions spanning more than LONG_FUNCTION_LINES lines.

    Tracking only ends once a function is reported, so a function that
    closes early keeps accumulating lines from whatever follows it.
    """
    issues = []
    in_function = False
    start = 0
    depth = 0
    for idx, line in enumerate(lines):
        if not in_function and _FUNCTION_START.search(line):
            in_function = True
            start = idx
            depth = 0
        if not in_function:
            continue
        depth += line.count("{") - line.count("}")
        span = idx - start
        if depth == 0 and span > LONG_FUNCTION_LINES:
            issues.append(Issue(
                severity=INFO,
                title="Long function detected",
                description=(
                    f"Function starting at line {start + 1} spans {span} lines. Long functions are hard to test, "
                    "understand, debug, and reuse. They often violate the Single Responsibility Principle."
                ),
                line=start + 1,
                suggestion=(
                    "Break down into smaller functions with clear names: extract repeated logic, separate "
                    "concerns (validation, processing, formatting), create helper functions. Aim for functions "
                    "under 30 lines that do one thing well."
                ),
            ))
            in_function = False
    return issues


_SLASH_COMMENTED_CODE = re.compile(r"^[\s]*//\s*[a-zA-Z]+.*[;{}()]")
_HASH_COMMENTED_CODE = re.compile(r"^[\s]*#\s*[a-zA-Z]+.*[;:()]")


def check_commented_out_code(code: str, lines: list[str], language: str) -> list[Issue]:
    count = sum(
        1 for line in lines
        if _SLASH_COMMENTED_CODE.search(line) or _HASH_COMMENTED_CODE.search(line)
    )
    if count <= 3:
        return []
    return [Issue(
        severity=INFO,
        title="Commented-out code found",
        description=(
            f"Found {count} lines of commented code. Commented code creates confusion, clutter, and false "
            "positives in searches. Version control (Git) already preserves history."
        ),
        suggestion=(
            "Delete commented code - it's in Git history if you need it. If keeping for reference, add a comment "
            "explaining why and when to remove it. Better: use feature flags for experimental code."
        ),
    )]


RULES: tuple[Rule, ...] = (
    check_assignment_in_conditional,
    check_missing_backticks,
    check_string_in_numeric_context,
    check_typos,
    check_missing_semicolons,
    check_unused_variables,
    check_missing_return,
    check_eval,
    check_inner_html,
    check_sql_injection,
    check_hardcoded_credentials,
    check_weak_crypto,
    check_console_statements,
    check_async_error_handling,
    check_task_markers,
    check_magic_numbers,
    check_documentation_ratio,
    check_long_functions,
    check_commented_out_code,
)


def detect_issues(code: str, language: str) -> list[Issue]:
    """Run every rule in order and concatenate their findings."""
    lines = code.split("\n")
    issues: list[Issue] = []
    for rule in RULES:
        found = rule(code, lines, language)
        if found:
            logger.debug("%s: %d issue(s)", rule.__name__, len(found))
        issues.extend(found)
    return issues
