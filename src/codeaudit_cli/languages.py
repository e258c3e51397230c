"""Pattern catalog - the shared regex vocabulary of every engine.

Two tables live here:

* ``DETECTION_PATTERNS``: per-language strong indicators, general patterns,
  keywords and a weight, used to guess the language of raw text.
* ``STRUCTURE_PATTERNS``: per-language function/class/comment regexes used
  by the metrics calculator, with a ``default`` bundle for anything else.

Both are built once at import time and never mutated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath


class Language(str, Enum):
    """Supported language ids. The first member is the fallback guess."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    CSHARP = "csharp"
    GO = "go"
    RUST = "rust"
    PHP = "php"
    RUBY = "ruby"
    SWIFT = "swift"
    KOTLIN = "kotlin"
    HTML = "html"
    CSS = "css"
    SQL = "sql"

    @classmethod
    def from_id(cls, value: str) -> Language | None:
        try:
            return cls(value.lower())
        except ValueError:
            return None


DEFAULT_LANGUAGE = next(iter(Language))

LANGUAGE_LABELS = {
    Language.JAVASCRIPT: "JavaScript",
    Language.TYPESCRIPT: "TypeScript",
    Language.PYTHON: "Python",
    Language.JAVA: "Java",
    Language.CPP: "C++",
    Language.C: "C",
    Language.CSHARP: "C#",
    Language.GO: "Go",
    Language.RUST: "Rust",
    Language.PHP: "PHP",
    Language.RUBY: "Ruby",
    Language.SWIFT: "Swift",
    Language.KOTLIN: "Kotlin",
    Language.HTML: "HTML",
    Language.CSS: "CSS",
    Language.SQL: "SQL",
}

# Extension -> Language mapping
EXT_LANG = {
    ".js": Language.JAVASCRIPT, ".jsx": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT, ".tsx": Language.TYPESCRIPT,
    ".py": Language.PYTHON,
    ".java": Language.JAVA,
    ".cpp": Language.CPP, ".cc": Language.CPP, ".cxx": Language.CPP,
    ".c": Language.C, ".h": Language.C,
    ".cs": Language.CSHARP,
    ".go": Language.GO,
    ".rs": Language.RUST,
    ".php": Language.PHP,
    ".rb": Language.RUBY,
    ".swift": Language.SWIFT,
    ".kt": Language.KOTLIN,
    ".html": Language.HTML, ".htm": Language.HTML,
    ".css": Language.CSS, ".scss": Language.CSS, ".sass": Language.CSS,
    ".sql": Language.SQL,
}


def language_label(value: str) -> str:
    """Display name for a language id; unknown ids are returned unchanged."""
    lang = Language.from_id(value)
    return LANGUAGE_LABELS[lang] if lang else value


def language_for_filename(filename: str) -> str:
    """Guess the language id from a file extension, defaulting to JavaScript."""
    lang = EXT_LANG.get(PurePath(filename).suffix.lower(), DEFAULT_LANGUAGE)
    return lang.value


@dataclass(frozen=True)
class LanguagePattern:
    language: Language
    strong_indicators: tuple[re.Pattern, ...]
    patterns: tuple[re.Pattern, ...]
    keywords: tuple[re.Pattern, ...]
    weight: float


def _lang(language: Language, strong: list[str], patterns: list[str], keywords: list[str], weight: float) -> LanguagePattern:
    # All regexes are matched multi-line and case-sensitive; keywords ignore case.
    return LanguagePattern(
        language=language,
        strong_indicators=tuple(re.compile(p, re.MULTILINE) for p in strong),
        patterns=tuple(re.compile(p, re.MULTILINE) for p in patterns),
        keywords=tuple(re.compile(rf"\b{re.escape(k)}\b", re.IGNORECASE) for k in keywords),
        weight=weight,
    )


DETECTION_PATTERNS: tuple[LanguagePattern, ...] = (
    _lang(
        Language.PYTHON,
        strong=[
            r"^import\s+(pandas|numpy|sklearn|tensorflow|keras|torch|matplotlib|seaborn|flask|django|requests|os|sys|re|json|csv|datetime|collections|itertools|functools|typing|asyncio|pathlib)\b",
            r"^from\s+(pandas|numpy|sklearn|tensorflow|keras|torch|matplotlib|seaborn|flask|django|fastapi|typing|collections|itertools|functools|asyncio|pathlib|dataclasses)\s+import",
            # def/class headers ending in a colon
            r"^def\s+\w+\s*\([^)]*\)\s*:\s*$",
            r"^[ \t]+def\s+\w+\s*\([^)]*\)\s*:\s*$",
            r"^class\s+\w+(\s*\([^)]*\))?\s*:\s*$",
            r"""^[ \t]*if\s+__name__\s*==\s*['"]__main__['"]\s*:""",
            r"^[ \t]*elif\s+[^{\n]+:\s*$",
            r"^[ \t]*except\s+\w+(\s+as\s+\w+)?\s*:\s*$",
            r"^[ \t]*try\s*:\s*$",
            r"^[ \t]*finally\s*:\s*$",
            r"^[ \t]*with\s+.+\s+as\s+\w+\s*:\s*$",
            r"print\s*\([^)]*\)",
            # comprehensions
            r"\[\s*\w+(\.\w+)*\s+for\s+\w+\s+in\s+",
            r"\{\s*\w+\s*:\s*\w+\s+for\s+\w+\s+in\s+",
            r"^@\w+(\.\w+)*(\([^)]*\))?\s*$",
            r"""f["'][^"']*\{[^}]+\}[^"']*["']""",
            r"""["']{3}[\s\S]*?["']{3}""",
        ],
        patterns=[
            r"^import\s+\w+$",
            r"^from\s+\w+\s+import\s+",
            r"self\.\w+",
            r"__init__",
            r"__str__",
            r"__repr__",
            r"^[ \t]*#[^!].*$",
            r"\.append\s*\(",
            r"\.extend\s*\(",
            r"\.items\s*\(\)",
            r"\.keys\s*\(\)",
            r"\.values\s*\(\)",
            r"range\s*\(",
            r"len\s*\(",
            r"str\s*\(",
            r"int\s*\(",
            r"float\s*\(",
            r"list\s*\(",
            r"dict\s*\(",
            r"set\s*\(",
            r"tuple\s*\(",
            r"\bTrue\b",
            r"\bFalse\b",
            r"\bNone\b",
            r"lambda\s+\w+\s*:",
            r"\bimport\s+\w+\s+as\s+\w+\b",
            r"\bor\b",
            r"\band\b",
            r"\bnot\b",
            r"\bin\b",
            r"\bis\b",
        ],
        keywords=["def", "elif", "except", "finally", "lambda", "yield", "async", "await", "None", "True", "False",
                  "self", "import", "from", "as", "with", "pass", "raise", "try", "global", "nonlocal", "assert",
                  "del", "in", "is", "not", "and", "or"],
        weight=2.0,
    ),
    _lang(
        Language.JAVA,
        strong=[
            r"public\s+static\s+void\s+main\s*\(\s*String\s*\[\s*\]\s*\w+\s*\)",
            r"^import\s+java\.[\w.]+;$",
            r"^import\s+javax\.[\w.]+;$",
            r"^import\s+org\.(springframework|apache|junit)\.[\w.]+;$",
            r"^package\s+[\w.]+;$",
            r"System\.out\.print(ln)?\s*\(",
            r"System\.err\.print(ln)?\s*\(",
            r"public\s+(final\s+)?class\s+\w+\s+(extends\s+\w+\s+)?(implements\s+[\w,\s]+\s*)?\{",
            r"@Override\s*$",
            r"@Autowired",
            r"@Component",
            r"@Service",
            r"@Repository",
        ],
        patterns=[
            r"public\s+class\s+\w+",
            r"private\s+\w+\s+\w+\s*;",
            r"protected\s+\w+\s+\w+",
            r"@\w+(\([^)]*\))?",
            r"new\s+\w+\s*\(",
            r"\.equals\s*\(",
            r"\.hashCode\s*\(",
            r"\.toString\s*\(",
            r"throws\s+\w+",
            r"catch\s*\(\w+\s+\w+\)",
        ],
        keywords=["public", "private", "protected", "class", "interface", "extends", "implements", "static", "final",
                  "void", "throws", "synchronized", "abstract", "native", "transient", "volatile"],
        weight=1.5,
    ),
    _lang(
        Language.JAVASCRIPT,
        strong=[
            r"""const\s+\w+\s*=\s*require\s*\(\s*['"][^'"]+['"]\s*\)""",
            r"module\.exports\s*=",
            r"exports\.\w+\s*=",
            r"console\.(log|error|warn|info|debug)\s*\(",
            r"document\.(getElementById|querySelector|querySelectorAll|createElement|getElementsByClassName)\s*\(",
            r"window\.(addEventListener|removeEventListener|location|localStorage|sessionStorage)\b",
            r"""^import\s+\{[^}]+\}\s+from\s+['"][^'"]+['"];?\s*$""",
            r"""^import\s+\w+\s+from\s+['"][^'"]+['"];?\s*$""",
            r"^export\s+default\s+",
            r"^export\s+(const|let|var|function|class)\s+",
            r"const\s+\w+\s*=\s*\([^)]*\)\s*=>",
            r"=>\s*\{",
            r"\.then\s*\(\s*(async\s*)?\(",
            r"\.catch\s*\(\s*\(",
            r"Promise\.(all|race|resolve|reject)\s*\(",
            r"async\s+(function|\(|\w+\s*=>)",
        ],
        patterns=[
            r"const\s+\w+\s*=",
            r"let\s+\w+\s*=",
            r"var\s+\w+\s*=",
            r"function\s+\w+\s*\(",
            r"=>\s*[^{]",
            r"\.\.\.\w+",
            r"`[^`]*\$\{[^}]+\}[^`]*`",
            r"JSON\.(parse|stringify)\s*\(",
            r"Array\.(isArray|from|of)\s*\(",
            r"Object\.(keys|values|entries|assign)\s*\(",
        ],
        keywords=["const", "let", "var", "function", "return", "async", "await", "class", "extends", "import",
                  "export", "default", "null", "undefined", "typeof", "instanceof", "new", "this", "super"],
        weight=1.0,
    ),
    _lang(
        Language.TYPESCRIPT,
        strong=[
            r":\s*(string|number|boolean|void|never|unknown|any|null|undefined)\s*[;=),\]]",
            r":\s*(string|number|boolean|void|never|unknown|any)\[\]\s*[;=),]",
            r"^interface\s+\w+\s*(<[\w,\s<>]+>)?\s*(\s+extends\s+[\w,\s<>]+)?\s*\{",
            r"^export\s+interface\s+\w+",
            r"^type\s+\w+\s*(<[\w,\s<>]+>)?\s*=\s*",
            r"^export\s+type\s+\w+",
            r":\s*\w+<[\w,\s<>\[\]|&]+>",
            r"<\w+(\s*,\s*\w+)*>\s*\(",
            r"as\s+(string|number|boolean|any|unknown|const)\b",
            r"<(string|number|boolean|any)>",
            r"import\s+type\s+",
            r"readonly\s+\w+\s*:",
            r"\?\s*:\s*\w+",
            r"private\s+readonly\s+\w+\s*:",
            r"public\s+\w+\s*:\s*\w+",
        ],
        patterns=[
            r"enum\s+\w+\s*\{",
            r"namespace\s+\w+\s*\{",
            r"declare\s+(const|let|var|function|class|module)",
            r"keyof\s+\w+",
            r"typeof\s+\w+",
            r"\w+\s+extends\s+\w+\s*\?",
            r"\w+\s+\|\s+\w+",
            r"\w+\s+&\s+\w+",
            r"Partial<\w+>",
            r"Required<\w+>",
            r"""Pick<\w+,\s*['"][^'"]+['"]>""",
            r"""Omit<\w+,\s*['"][^'"]+['"]>""",
            r"Record<\w+,\s*\w+>",
        ],
        keywords=["interface", "type", "enum", "namespace", "declare", "readonly", "keyof", "typeof", "infer",
                  "extends", "implements", "abstract", "as", "is", "never", "unknown", "any"],
        weight=1.8,
    ),
    _lang(
        Language.CPP,
        strong=[
            r"#include\s*<iostream>",
            r"#include\s*<vector>",
            r"#include\s*<string>",
            r"#include\s*<map>",
            r"#include\s*<algorithm>",
            r"#include\s*<memory>",
            r"#include\s*<fstream>",
            r"std::cout\s*<<",
            r"std::cin\s*>>",
            r"std::endl",
            r"std::string\b",
            r"std::vector\s*<",
            r"std::map\s*<",
            r"std::unique_ptr\s*<",
            r"std::shared_ptr\s*<",
            r"using\s+namespace\s+std\s*;",
            r"int\s+main\s*\(\s*(int\s+argc\s*,\s*char\s*\*?\s*\*?\s*argv\s*\[\s*\]|void)?\s*\)",
            r"class\s+\w+\s*(:\s*(public|private|protected)\s+\w+)?\s*\{[^{}]*?(public|private|protected)\s*:",
            r"template\s*<\s*(typename|class)\s+\w+",
        ],
        patterns=[
            r"#include\s*<[\w.]+>",
            r'#include\s*"[\w.]+"',
            r"std::\w+",
            r"cout\s*<<",
            r"cin\s*>>",
            r"nullptr",
            r"::\w+",
            r"public:",
            r"private:",
            r"protected:",
            r"virtual\s+\w+",
            r"override\s*;",
            r"const\s+\w+\s*&",
            r"\w+\s*\*\s+\w+",
        ],
        keywords=["namespace", "template", "typename", "virtual", "override", "nullptr", "constexpr", "auto",
                  "decltype", "static_cast", "dynamic_cast", "const_cast", "reinterpret_cast", "friend", "inline",
                  "mutable"],
        weight=1.6,
    ),
    _lang(
        Language.C,
        strong=[
            r"#include\s*<stdio\.h>",
            r"#include\s*<stdlib\.h>",
            r"#include\s*<string\.h>",
            r"#include\s*<math\.h>",
            r"#include\s*<ctype\.h>",
            r"#include\s*<time\.h>",
            r"#include\s*<stdbool\.h>",
            r'printf\s*\(\s*"',
            r'scanf\s*\(\s*"',
            r"fprintf\s*\(",
            r"fscanf\s*\(",
            r"int\s+main\s*\(\s*(void)?\s*\)\s*\{",
            r"malloc\s*\(\s*sizeof",
            r"calloc\s*\(",
            r"realloc\s*\(",
            r"free\s*\(\s*\w+\s*\)",
        ],
        patterns=[
            r"printf\s*\(",
            r"scanf\s*\(",
            r"sizeof\s*\(",
            r"struct\s+\w+\s*\{",
            r"typedef\s+struct",
            r"typedef\s+enum",
            r"#define\s+\w+",
            r"#ifdef\s+\w+",
            r"#ifndef\s+\w+",
            r"#endif",
            r"NULL\b",
            r"\w+\s*\*\s*\w+\s*=",
            r"&\w+",
        ],
        keywords=["printf", "scanf", "malloc", "free", "calloc", "realloc", "sizeof", "typedef", "struct", "union",
                  "enum", "extern", "register", "volatile", "NULL", "FILE"],
        weight=1.3,
    ),
    _lang(
        Language.CSHARP,
        strong=[
            r"^using\s+System(\.\w+)*;$",
            r"^using\s+(Microsoft|Newtonsoft|NUnit|Xunit)\.[\w.]+;$",
            r"^namespace\s+[\w.]+\s*(\{|;)$",
            r"Console\.(WriteLine|ReadLine|Write|Read)\s*\(",
            r"\{\s*get\s*;\s*set\s*;\s*\}",
            r"\{\s*get\s*;\s*\}",
            r"\{\s*get\s*=>",
            r"\[\w+(\([^\]]*\))?\]\s*(public|private|protected|internal)",
            r"\[HttpGet\]",
            r"\[HttpPost\]",
            r"\[Route\(",
            r"async\s+Task(<\w+>)?\s+\w+\s*\(",
            r"\.(Where|Select|OrderBy|FirstOrDefault|ToList|Any|All)\s*\(",
            r'\$"[^"]*\{[^}]+\}[^"]*"',
        ],
        patterns=[
            r"public\s+class\s+\w+",
            r"public\s+interface\s+\w+",
            r"public\s+override",
            r"\?\?",
            r"\?\.",
            r"var\s+\w+\s*=",
            r"new\s+\w+\s*\{",
            r"sealed\s+class",
            r"partial\s+class",
            r"virtual\s+\w+",
        ],
        keywords=["namespace", "using", "partial", "sealed", "abstract", "virtual", "override", "async", "await",
                  "var", "dynamic", "object", "string", "decimal", "internal", "readonly", "ref", "out", "params"],
        weight=1.6,
    ),
    _lang(
        Language.GO,
        strong=[
            r"^package\s+(main|\w+)\s*$",
            r"^func\s+main\s*\(\s*\)\s*\{",
            r"fmt\.(Println|Printf|Print|Sprintf|Fprintf)\s*\(",
            r"^import\s+\(\s*$",
            r"\w+\s*:=\s*\w+",
            r"^func\s+\(\s*\w+\s+\*?\w+\s*\)\s+\w+\s*\(",
            r"if\s+err\s*!=\s*nil\s*\{",
            r"defer\s+\w+\.(Close|Unlock|Done)\s*\(\)",
            r"go\s+func\s*\(",
            r"go\s+\w+\s*\(",
        ],
        patterns=[
            r"func\s+\w+\s*\(",
            r"var\s+\w+\s+\w+",
            r"const\s+\w+\s*=",
            r"type\s+\w+\s+struct\s*\{",
            r"type\s+\w+\s+interface\s*\{",
            r"make\s*\(\s*(map|chan|slice|\[\])",
            r"range\s+\w+",
            r"chan\s+\w+",
            r"<-\s*\w+",
            r"\w+\s*<-",
        ],
        keywords=["package", "import", "func", "var", "const", "type", "struct", "interface", "map", "chan", "go",
                  "defer", "select", "range", "fallthrough", "nil"],
        weight=1.7,
    ),
    _lang(
        Language.RUST,
        strong=[
            r"^fn\s+main\s*\(\s*\)\s*(->[\s\w<>]+)?\s*\{",
            r"println!\s*\(",
            r"print!\s*\(",
            r"format!\s*\(",
            r"vec!\s*\[",
            r"panic!\s*\(",
            r"let\s+mut\s+\w+",
            r"^impl(<[\w,\s<>]+>)?\s+\w+(<[\w,\s<>]+>)?\s+(for\s+\w+(<[\w,\s<>]+>)?\s+)?\{",
            r"use\s+std::\w+",
            r"use\s+crate::\w+",
            r"Option<[\w<>]+>",
            r"Result<[\w<>]+,\s*[\w<>]+>",
            r"Some\s*\(",
            r"\bNone\b",
            r"Ok\s*\(",
            r"Err\s*\(",
            r"&mut\s+\w+",
            r"&'\w+\s+",
        ],
        patterns=[
            r"fn\s+\w+\s*\(",
            r"let\s+\w+\s*:",
            r"pub\s+(fn|struct|enum|mod|trait)",
            r"mod\s+\w+\s*\{",
            r"trait\s+\w+\s*\{",
            r"match\s+\w+\s*\{",
            r"=>\s*\{",
            r"\|\w+\|\s*\{",
            r"\.unwrap\s*\(\)",
            r"\.expect\s*\(",
            r"\.map\s*\(\|",
            r"\.filter\s*\(\|",
        ],
        keywords=["fn", "let", "mut", "impl", "trait", "struct", "enum", "pub", "mod", "use", "crate", "self",
                  "super", "where", "async", "await", "unsafe", "dyn", "move", "ref", "match"],
        weight=1.8,
    ),
    _lang(
        Language.PHP,
        strong=[
            r"<\?php",
            r"<\?=",
            r"\$_GET\[",
            r"\$_POST\[",
            r"\$_SESSION\[",
            r"\$_REQUEST\[",
            r"\$_SERVER\[",
            r"\$_FILES\[",
            r"\$_COOKIE\[",
            r"\$this->\w+",
            r"^namespace\s+[\w\\]+;$",
            r"^use\s+[\w\\]+;$",
            r"function\s+\w+\s*\([^)]*\$\w+",
        ],
        patterns=[
            r"\$\w+\s*=",
            r"echo\s+",
            r"print_r\s*\(",
            r"var_dump\s*\(",
            r"public\s+function\s+\w+",
            r"private\s+function\s+\w+",
            r"protected\s+function\s+\w+",
            r"static\s+function\s+\w+",
            r"->[\w]+\s*\(",
            r"array\s*\(",
            r"""\[\s*['"]?\w+['"]?\s*=>""",
            r"::\w+\s*\(",
        ],
        keywords=["echo", "print", "isset", "unset", "empty", "die", "exit", "include", "require", "include_once",
                  "require_once", "namespace", "use", "trait", "abstract", "final", "clone"],
        weight=1.7,
    ),
    _lang(
        Language.RUBY,
        strong=[
            r"""^require\s+['"][\w/]+['"]\s*$""",
            r"""^require_relative\s+['"][\w/]+['"]\s*$""",
            r"\.each\s+do\s*\|\w+\|",
            r"\.map\s+do\s*\|\w+\|",
            r"\.select\s+do\s*\|\w+\|",
            r"attr_accessor\s+:\w+",
            r"attr_reader\s+:\w+",
            r"attr_writer\s+:\w+",
            r"def\s+initialize\s*\(",
            r"^puts\s+",
            r":\w+\s*=>",
            r"""\w+:\s*['"\w]""",
            r"class\s+\w+\s*<\s*\w+",
            r"^[ \t]*end\s*$",
        ],
        patterns=[
            r"def\s+\w+",
            r"\|[\w,\s]+\|",
            r"@\w+\s*=",
            r"@@\w+",
            r"do\s*$",
            r"\.each\s*\{",
            r"\.map\s*\{",
            r"\.select\s*\{",
            r"unless\s+",
            r"until\s+",
            r"\bnil\b",
        ],
        keywords=["def", "end", "class", "module", "attr_accessor", "attr_reader", "attr_writer", "puts", "gets",
                  "require", "include", "extend", "yield", "lambda", "proc", "nil", "unless", "until", "elsif",
                  "when", "then"],
        weight=1.5,
    ),
    _lang(
        Language.SWIFT,
        strong=[
            r"^import\s+(Foundation|UIKit|SwiftUI|Combine|CoreData|MapKit|AVFoundation)$",
            r"func\s+\w+\s*\([^)]*\)\s*->\s*\w+(\?|!)?\s*\{",
            r"guard\s+let\s+\w+\s*=\s*\w+",
            r"if\s+let\s+\w+\s*=\s*\w+",
            r"var\s+\w+\s*:\s*\w+\s*\?",
            r"let\s+\w+\s*:\s*\w+\s*!",
            r"@IBOutlet\s+",
            r"@IBAction\s+",
            r"@Published\s+",
            r"@State\s+",
            r"@Binding\s+",
            r"@ObservedObject\s+",
            r"override\s+func\s+\w+",
            r"\{\s*\(\w+\)\s*->\s*\w+\s+in",
            r"\{\s*\w+\s+in",
        ],
        patterns=[
            r"func\s+\w+\s*\(",
            r"var\s+\w+\s*:",
            r"let\s+\w+\s*:",
            r"class\s+\w+\s*:",
            r"struct\s+\w+\s*(:\s*\w+)?\s*\{",
            r"enum\s+\w+\s*\{",
            r"protocol\s+\w+\s*\{",
            r"extension\s+\w+\s*(:\s*\w+)?\s*\{",
            r"print\s*\(",
            r"\?\?",
            r"\?\.",
            r"\.map\s*\{\s*\$",
            r"\.filter\s*\{\s*\$",
        ],
        keywords=["func", "var", "let", "guard", "defer", "import", "class", "struct", "enum", "protocol",
                  "extension", "typealias", "associatedtype", "inout", "mutating", "fileprivate", "internal", "open",
                  "weak", "unowned", "lazy", "didSet", "willSet"],
        weight=1.4,
    ),
    _lang(
        Language.KOTLIN,
        strong=[
            r"fun\s+main\s*\(\s*(args\s*:\s*Array<String>)?\s*\)\s*\{",
            r"println\s*\(",
            r"data\s+class\s+\w+\s*\(",
            r"val\s+\w+\s*:\s*\w+(<[\w,\s<>]+>)?\s*=",
            r"var\s+\w+\s*:\s*\w+(<[\w,\s<>]+>)?\s*=",
            r"companion\s+object\s*\{",
            r"\w+\?\.let\s*\{",
            r"\?\.",
            r"!!",
            r"when\s*\([^)]+\)\s*\{",
            r"object\s+\w+\s*(:\s*\w+)?\s*\{",
            r"suspend\s+fun\s+\w+",
        ],
        patterns=[
            r"fun\s+\w+\s*\(",
            r"val\s+\w+\s*[=:]",
            r"var\s+\w+\s*[=:]",
            r"class\s+\w+\s*\(",
            r"sealed\s+class",
            r"it\.\w+",
            r"it\s*->",
            r"\{\s*\w+\s*->",
            r"\.let\s*\{",
            r"\.apply\s*\{",
            r"\.run\s*\{",
            r"\.also\s*\{",
        ],
        keywords=["fun", "val", "var", "when", "data", "object", "companion", "sealed", "inline", "reified",
                  "suspend", "lateinit", "by", "lazy", "init", "internal", "crossinline", "noinline"],
        weight=1.5,
    ),
    _lang(
        Language.HTML,
        strong=[
            r"<!DOCTYPE\s+html>",
            r"<html[\s>]",
            r"<head[\s>][\s\S]*?</head>",
            r"<body[\s>]",
            r"<meta\s+[^>]*charset",
            r"<meta\s+[^>]*viewport",
            r"""<link\s+[^>]*rel\s*=\s*["']stylesheet["']""",
            r"<script[\s>]",
            r"<style[\s>]",
        ],
        patterns=[
            r"<div[\s>]",
            r"<span[\s>]",
            r"<p[\s>]",
            r"<a\s+href",
            r"<img\s+[^>]*src",
            r"</\w+>",
            r"<form[\s>]",
            r"<input[\s>]",
            r"<button[\s>]",
            r"<h[1-6][\s>]",
            r"<ul[\s>]",
            r"<li[\s>]",
            r"<table[\s>]",
            r"<nav[\s>]",
            r"<header[\s>]",
            r"<footer[\s>]",
            r"<section[\s>]",
            r"<article[\s>]",
        ],
        keywords=[],
        weight=1.8,
    ),
    _lang(
        Language.CSS,
        strong=[
            # selector and brace on one line; the body stops at the next brace
            r"""^[ \t]*[\w.#\-\[\]='"~^$*:,]+(?:[ \t]+[\w.#\-\[\]='"~^$*:,]+)*[ \t]*\{[^{}]*\}""",
            r"@media\s+\(?(screen|print|all|min-width|max-width)",
            r"@keyframes\s+\w+\s*\{",
            r"""@import\s+(url\()?['"][^'"]+['"]\)?;""",
            r"@font-face\s*\{",
            r"display\s*:\s*(flex|grid|block|inline-block|none)\s*;",
            r"position\s*:\s*(relative|absolute|fixed|sticky)\s*;",
            r"background(-color)?\s*:\s*[^;]+;",
        ],
        patterns=[
            r"[a-z-]+\s*:\s*[^;{}]+;",
            r"\.[\w-]+\s*\{",
            r"#[\w-]+\s*\{",
            r":hover\s*\{",
            r":focus\s*\{",
            r":active\s*\{",
            r"::before",
            r"::after",
            r"!important",
            r"\d+(px|em|rem|%|vh|vw|vmin|vmax)\b",
            r"var\s*\(\s*--[\w-]+\s*\)",
            r"calc\s*\(",
            r"rgba?\s*\(",
            r"hsla?\s*\(",
        ],
        keywords=[],
        weight=1.8,
    ),
    _lang(
        Language.SQL,
        strong=[
            r"SELECT\s+(DISTINCT\s+)?[\w*,\s.]+\s+FROM\s+\w+",
            r"INSERT\s+INTO\s+\w+\s*\([^)]+\)\s*VALUES",
            r"UPDATE\s+\w+\s+SET\s+\w+\s*=",
            r"CREATE\s+TABLE\s+(IF\s+NOT\s+EXISTS\s+)?\w+\s*\(",
            r"ALTER\s+TABLE\s+\w+\s+(ADD|DROP|MODIFY|ALTER)\s+",
            r"DROP\s+TABLE\s+(IF\s+EXISTS\s+)?\w+",
            r"(INNER|LEFT|RIGHT|FULL|CROSS)\s+JOIN\s+\w+\s+ON\s+",
            r"PRIMARY\s+KEY\s*\(",
            r"FOREIGN\s+KEY\s*\(",
            r"REFERENCES\s+\w+\s*\(",
        ],
        patterns=[
            r"DELETE\s+FROM\s+\w+",
            r"WHERE\s+\w+\s*(=|<|>|LIKE|IN|IS)",
            r"GROUP\s+BY\s+[\w,\s]+",
            r"ORDER\s+BY\s+[\w,\s]+(ASC|DESC)?",
            r"HAVING\s+",
            r"LIMIT\s+\d+",
            r"OFFSET\s+\d+",
            r"AS\s+\w+",
            r"COUNT\s*\(",
            r"SUM\s*\(",
            r"AVG\s*\(",
            r"MAX\s*\(",
            r"MIN\s*\(",
            r"CASE\s+WHEN\s+",
        ],
        keywords=["SELECT", "FROM", "WHERE", "INSERT", "UPDATE", "DELETE", "CREATE", "ALTER", "DROP", "JOIN", "LEFT",
                  "RIGHT", "INNER", "OUTER", "FULL", "CROSS", "ON", "AND", "OR", "NOT", "IN", "LIKE", "BETWEEN",
                  "GROUP", "ORDER", "BY", "HAVING", "UNION", "INDEX", "PRIMARY", "FOREIGN", "KEY", "CONSTRAINT",
                  "DEFAULT", "NULL", "UNIQUE", "CHECK"],
        weight=1.9,
    ),
)


@dataclass(frozen=True)
class StructurePatterns:
    """Function/class/comment regexes used to derive code metrics."""

    function: re.Pattern
    klass: re.Pattern
    comment: re.Pattern


_C_STYLE_COMMENT = r"//.*|/\*[\s\S]*?\*/"
_JS_FUNCTION = r"function\s+\w+|const\s+\w+\s*=\s*\([^)]*\)\s*=>|=>\s*\{"
_BRACED_FUNCTION = r"\w+\s+\w+\s*\([^)]*\)\s*\{"

STRUCTURE_PATTERNS: dict[str, StructurePatterns] = {
    "javascript": StructurePatterns(
        function=re.compile(_JS_FUNCTION),
        klass=re.compile(r"class\s+\w+"),
        comment=re.compile(_C_STYLE_COMMENT),
    ),
    "typescript": StructurePatterns(
        function=re.compile(_JS_FUNCTION),
        klass=re.compile(r"class\s+\w+|interface\s+\w+"),
        comment=re.compile(_C_STYLE_COMMENT),
    ),
    "python": StructurePatterns(
        function=re.compile(r"def\s+\w+"),
        klass=re.compile(r"class\s+\w+"),
        comment=re.compile(r"#.*|'''[\s\S]*?'''|\"\"\"[\s\S]*?\"\"\""),
    ),
    "java": StructurePatterns(
        function=re.compile(_BRACED_FUNCTION),
        klass=re.compile(r"class\s+\w+|interface\s+\w+"),
        comment=re.compile(_C_STYLE_COMMENT),
    ),
    "cpp": StructurePatterns(
        function=re.compile(_BRACED_FUNCTION),
        klass=re.compile(r"class\s+\w+|struct\s+\w+"),
        comment=re.compile(_C_STYLE_COMMENT),
    ),
    "default": StructurePatterns(
        function=re.compile(r"function\s+\w+|def\s+\w+|\w+\s*\([^)]*\)\s*\{"),
        klass=re.compile(r"class\s+\w+"),
        comment=re.compile(r"//.*|#.*|/\*[\s\S]*?\*/"),
    ),
}


def structure_patterns(language: str) -> StructurePatterns:
    """Look up a language's structure patterns, falling back to ``default``."""
    return STRUCTURE_PATTERNS.get(language.lower(), STRUCTURE_PATTERNS["default"])


def is_language(language: str, *names: str) -> bool:
    """True when any of ``names`` occurs in the language id."""
    return any(name in language for name in names)
