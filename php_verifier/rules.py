from __future__ import annotations
import re
from typing import Iterable, List

from . import CandidateFile, Finding, ScanTarget
from .scanner import CandidateSet, read_text

# Heuristics over raw file text. None of these parse PHP, so counts are
# approximate: multi-line signatures, strings and comments can skew them.

# declare(strict_types=1) as the first statement; an optional shebang,
# whitespace and comments may precede it. "#[" starts an attribute, not a comment.
STRICT_TYPES = re.compile(
    r'\A(?:#![^\n]*\n)?\s*<\?php\s*(?:(?:/\*.*?\*/|//[^\n]*|#(?!\[)[^\n]*)\s*)*'
    r'declare\s*\(\s*strict_types\s*=\s*1\s*\)',
    re.DOTALL | re.IGNORECASE,
)
FUNCTION_DECL = re.compile(r'\bfunction\s+&?\s*([A-Za-z_]\w*)\s*\(', re.IGNORECASE)
RETURN_TYPE = re.compile(r'\)\s*:')
# PHP forbids return types on these
NO_RETURN_TYPE = {"__construct", "__destruct"}
LEGACY_ARRAY = re.compile(r'(?<![\w$>:])array\s*\(', re.IGNORECASE)
ORM_ANNOTATION = re.compile(r'@ORM\\')

def _texts(files: Iterable[CandidateFile]) -> Iterable[str]:
    for f in files:
        text = read_text(f.path)
        if text is not None:
            yield text

def _code_lines(text: str) -> Iterable[str]:
    for line in text.splitlines():
        s = line.lstrip()
        if s.startswith(("*", "/*", "//", "#")) and not s.startswith("#["):
            continue
        yield line

def has_strict_types(text: str) -> bool:
    return STRICT_TYPES.match(text.lstrip("\ufeff")) is not None

def count_untyped_functions(text: str) -> int:
    """Named function declarations with no `):` return annotation on the same line."""
    n = 0
    for line in _code_lines(text):
        for m in FUNCTION_DECL.finditer(line):
            if m.group(1).lower() in NO_RETURN_TYPE:
                continue
            if not RETURN_TYPE.search(line, m.end()):
                n += 1
    return n

def count_lines(text: str, pattern: re.Pattern) -> int:
    return sum(1 for line in text.splitlines() if pattern.search(line))

def lint_strict_types(sources: CandidateSet) -> List[Finding]:
    """One aggregate warning for files lacking declare(strict_types=1)."""
    if not sources.exists:
        return [Finding(rule="source-dir", severity="warning",
                        message=f"No {sources.subdir}/ directory found")]
    total = missing = 0
    for text in _texts(sources):
        total += 1
        if not has_strict_types(text):
            missing += 1
    if missing == 0:
        return []
    return [Finding(
        rule="strict-types",
        severity="warning",
        message=f"{missing} of {total} files missing declare(strict_types=1)",
        count=missing,
    )]

def lint_return_types(sources: CandidateSet) -> List[Finding]:
    """Approximate count of functions declared without a return type."""
    untyped = sum(count_untyped_functions(text) for text in _texts(sources))
    if untyped == 0:
        return []
    return [Finding(
        rule="return-types",
        severity="warning",
        message=f"~{untyped} functions may be missing return type declarations (heuristic, approximate)",
        count=untyped,
    )]

def lint_deprecated_syntax(sources: CandidateSet) -> List[Finding]:
    """Legacy array() literals and Doctrine annotations, one warning per kind."""
    arrays = annotations = 0
    for text in _texts(sources):
        arrays += count_lines(text, LEGACY_ARRAY)
        annotations += count_lines(text, ORM_ANNOTATION)
    findings: List[Finding] = []
    if arrays:
        findings.append(Finding(
            rule="legacy-array-syntax",
            severity="warning",
            message=f"Found ~{arrays} uses of array() syntax (prefer [])",
            count=arrays,
        ))
    if annotations:
        findings.append(Finding(
            rule="doctrine-annotations",
            severity="warning",
            message=f"Found ~{annotations} Doctrine annotations (consider attributes)",
            count=annotations,
        ))
    return findings

def lint_tests(tests: CandidateSet) -> List[Finding]:
    """Warn once when the tests directory is absent or holds no test files."""
    if not tests.exists:
        return [Finding(rule="tests", severity="warning",
                        message=f"No tests found: {tests.subdir}/ directory not found")]
    if next(iter(tests), None) is not None:
        return []
    return [Finding(rule="tests", severity="warning",
                    message=f"No tests found: no {tests.pattern} files under {tests.subdir}/")]

def lint_rector(target: ScanTarget, rector_config: str) -> List[Finding]:
    if (target.root / rector_config).is_file():
        return []
    return [Finding(rule="rector", severity="warning",
                    message=f"No Rector configuration found ({rector_config}, recommended for automated upgrades)")]

