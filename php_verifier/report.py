from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

from colorama import Fore, Style

from . import Finding, ScanTarget
from .policy import Decision, decide, describe

@dataclass(frozen=True)
class Section:
    title: str
    findings: Tuple[Finding, ...] = ()

@dataclass(frozen=True)
class ComplianceReport:
    """All findings of one run, grouped by section in rule-declaration order. Append-only."""
    target: ScanTarget
    sections: Tuple[Section, ...] = ()

    def with_findings(self, title: str, findings: Iterable[Finding]) -> "ComplianceReport":
        new = tuple(findings)
        sections = list(self.sections)
        for i, s in enumerate(sections):
            if s.title == title:
                sections[i] = replace(s, findings=s.findings + new)
                break
        else:
            sections.append(Section(title=title, findings=new))
        return replace(self, sections=tuple(sections))

    @property
    def findings(self) -> List[Finding]:
        return [f for s in self.sections for f in s.findings]

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == "warning")

    @property
    def decision(self) -> Decision:
        return decide(self.error_count, self.warning_count)

_SEVERITY_STYLE = {
    "error": (Fore.RED, Style.BRIGHT),
    "warning": (Fore.YELLOW, Style.BRIGHT),
    "info": (Fore.BLUE,),
}
_DECISION_STYLE = {
    "FAILED": (Fore.RED, Style.BRIGHT),
    "PASSED_WITH_WARNINGS": (Fore.YELLOW, Style.BRIGHT),
    "PASSED": (Fore.GREEN, Style.BRIGHT),
}

def _clr(enabled: bool, text: str, *styles: str) -> str:
    if not enabled or not styles:
        return text
    return "".join(styles) + text + Style.RESET_ALL

def format_finding(f: Finding, color: bool = False) -> List[str]:
    tag = _clr(color, f"[{f.severity}]", *_SEVERITY_STYLE.get(f.severity, ()))
    lines = [f"- {tag} {f.rule}: {f.message}"]
    lines.extend(_clr(color, f"    {d}", Style.DIM) for d in f.details)
    return lines

def render_report(report: ComplianceReport, color: bool = False) -> str:
    """Line-oriented summary; identical input gives identical text."""
    def heading(text: str) -> str:
        return _clr(color, f"=== {text} ===", Fore.CYAN, Style.BRIGHT)

    lines = [heading("PHP Modernization Verification"), f"Directory: {report.target.root}"]
    for section in report.sections:
        lines.append("")
        lines.append(heading(section.title))
        if not section.findings:
            lines.append(_clr(color, "- ok", Style.DIM))
        for f in section.findings:
            lines.extend(format_finding(f, color))

    decision = report.decision
    lines.append("")
    lines.append(heading("Summary"))
    lines.append(f"Totals: {report.error_count} error(s), {report.warning_count} warning(s)")
    lines.append(_clr(color, describe(decision), *_DECISION_STYLE[decision]))
    return "\n".join(lines) + "\n"
