"""Per-language regex profiles for entity extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Words that look like a call or declaration head but never name an entity
CONTROL_FLOW_KEYWORDS = frozenset({
    "if", "else", "elif", "for", "foreach", "while", "do", "switch", "case",
    "catch", "try", "finally", "return", "throw", "new", "with", "match",
    "when", "loop", "unless", "until", "yield", "await", "sizeof", "typeof",
    "function", "super", "this", "self", "constructor", "guard", "defer",
})


@dataclass(frozen=True)
class LanguageProfile:
    """Regexes for type and function declarations; each exposes a ``name`` group."""

    name: str
    extensions: tuple[str, ...]
    class_patterns: tuple[re.Pattern[str], ...]
    function_patterns: tuple[re.Pattern[str], ...]
    excluded_names: frozenset[str] = field(default=CONTROL_FLOW_KEYWORDS)


def _p(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.MULTILINE) for p in patterns)


PYTHON = LanguageProfile(
    name="python",
    extensions=(".py", ".pyi"),
    class_patterns=_p(r"^[ \t]*class[ \t]+(?P<name>[A-Za-z_]\w*)"),
    function_patterns=_p(r"^[ \t]*(?:async[ \t]+)?def[ \t]+(?P<name>[A-Za-z_]\w*)"),
)

JAVASCRIPT = LanguageProfile(
    name="javascript",
    extensions=(".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"),
    class_patterns=_p(
        r"^[ \t]*(?:export[ \t]+)?(?:default[ \t]+)?(?:declare[ \t]+)?(?:abstract[ \t]+)?"
        r"(?:class|interface|enum|type)[ \t]+(?P<name>[A-Za-z_$][\w$]*)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:export[ \t]+)?(?:default[ \t]+)?(?:async[ \t]+)?function[ \t]*\*?[ \t]*"
        r"(?P<name>[A-Za-z_$][\w$]*)",
        r"^[ \t]*(?:export[ \t]+)?(?:const|let|var)[ \t]+(?P<name>[A-Za-z_$][\w$]*)[ \t]*"
        r"(?::[^=]+)?=[ \t]*(?:async[ \t]+)?(?:\([^)]*\)|[A-Za-z_$][\w$]*)[ \t]*(?::[^=]+)?=>",
        r"^[ \t]*(?:(?:public|private|protected|static|async|abstract|readonly|override|get|set)[ \t]+)*"
        r"(?P<name>[A-Za-z_$][\w$]*)[ \t]*(?:<[^>]*>)?\([^)]*\)[ \t]*(?::[^{;]+)?\{",
    ),
)

JAVA = LanguageProfile(
    name="java",
    extensions=(".java",),
    class_patterns=_p(
        r"^[ \t]*(?:(?:public|private|protected|static|abstract|final|sealed)[ \t]+)*"
        r"(?:class|interface|enum|record)[ \t]+(?P<name>\w+)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:(?:public|private|protected|static|abstract|final|synchronized|native|default)[ \t]+)*"
        r"(?:<[^>]+>[ \t]+)?(?!(?:return|new|else|throw)\b)[\w<>\[\],.?]+[ \t]+(?P<name>\w+)[ \t]*"
        r"\([^)]*\)[ \t]*(?:throws[ \t]+[\w.,\t ]+)?(?:\{|$)",
    ),
)

CSHARP = LanguageProfile(
    name="csharp",
    extensions=(".cs",),
    class_patterns=_p(
        r"^[ \t]*(?:(?:public|private|protected|internal|static|abstract|sealed|partial|readonly)[ \t]+)*"
        r"(?:class|interface|struct|enum|record)[ \t]+(?P<name>\w+)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:(?:public|private|protected|internal|static|abstract|virtual|override|async|sealed|extern)[ \t]+)*"
        r"(?!(?:return|new|else|throw|await)\b)[\w<>\[\],.?]+[ \t]+(?P<name>\w+)[ \t]*"
        r"(?:<[^>]*>)?\([^)]*\)[ \t]*(?:\{|=>|$)",
    ),
)

KOTLIN = LanguageProfile(
    name="kotlin",
    extensions=(".kt", ".kts"),
    class_patterns=_p(
        r"^[ \t]*(?:(?:public|private|internal|protected|open|abstract|data|sealed|enum|inner|annotation)[ \t]+)*"
        r"(?:class|interface|object)[ \t]+(?P<name>\w+)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:(?:public|private|internal|protected|open|override|suspend|inline|abstract)[ \t]+)*"
        r"fun[ \t]+(?:<[^>]+>[ \t]+)?(?:[\w.]+\.)?(?P<name>\w+)[ \t]*\(",
    ),
)

GO = LanguageProfile(
    name="go",
    extensions=(".go",),
    class_patterns=_p(r"^[ \t]*type[ \t]+(?P<name>\w+)[ \t]+(?:struct|interface)\b"),
    function_patterns=_p(r"^[ \t]*func[ \t]+(?:\([^)]*\)[ \t]*)?(?P<name>\w+)[ \t]*[(\[]"),
)

RUST = LanguageProfile(
    name="rust",
    extensions=(".rs",),
    class_patterns=_p(
        r"^[ \t]*(?:pub(?:\([^)]*\))?[ \t]+)?(?:struct|enum|trait|union)[ \t]+(?P<name>\w+)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:pub(?:\([^)]*\))?[ \t]+)?(?:(?:async|const|unsafe|extern(?:[ \t]+\"[^\"]*\")?)[ \t]+)*"
        r"fn[ \t]+(?P<name>\w+)",
    ),
)

RUBY = LanguageProfile(
    name="ruby",
    extensions=(".rb",),
    class_patterns=_p(r"^[ \t]*(?:class|module)[ \t]+(?P<name>[A-Z]\w*)"),
    function_patterns=_p(r"^[ \t]*def[ \t]+(?:self\.)?(?P<name>\w+[?!=]?)"),
)

PHP = LanguageProfile(
    name="php",
    extensions=(".php",),
    class_patterns=_p(
        r"^[ \t]*(?:(?:abstract|final|readonly)[ \t]+)*(?:class|interface|trait|enum)[ \t]+(?P<name>\w+)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:(?:public|private|protected|static|abstract|final)[ \t]+)*"
        r"function[ \t]+&?(?P<name>\w+)[ \t]*\(",
    ),
)

SWIFT = LanguageProfile(
    name="swift",
    extensions=(".swift",),
    class_patterns=_p(
        r"^[ \t]*(?:(?:public|private|fileprivate|internal|open|final)[ \t]+)*"
        r"(?:class|struct|protocol|enum|actor)[ \t]+(?P<name>\w+)",
    ),
    function_patterns=_p(
        r"^[ \t]*(?:(?:public|private|fileprivate|internal|open|static|class|override|final|mutating)[ \t]+)*"
        r"func[ \t]+(?P<name>\w+)",
    ),
)

PROFILES: tuple[LanguageProfile, ...] = (
    PYTHON, JAVASCRIPT, JAVA, CSHARP, KOTLIN, GO, RUST, RUBY, PHP, SWIFT,
)

_BY_EXTENSION = {ext: profile for profile in PROFILES for ext in profile.extensions}


def get_profile(extension: str) -> LanguageProfile | None:
    """Profile for a file extension (with or without the leading dot)."""
    ext = extension.lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return _BY_EXTENSION.get(ext)
