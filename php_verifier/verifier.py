from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from . import ScanTarget
from .analyzer import ProcessRunner, SubprocessRunner, run_analyzer
from .config import Layout, layout_from_env
from .config_facts import extract_config_facts, lint_analyzer_config, lint_php_version
from .report import ComplianceReport
from .rules import lint_deprecated_syntax, lint_rector, lint_return_types, lint_strict_types, lint_tests
from .scanner import check_marker, scan

logger = logging.getLogger(__name__)

def verify(
    root: Union[str, Path] = ".",
    layout: Optional[Layout] = None,
    runner: Optional[ProcessRunner] = None,
    skip_analyzer: bool = False,
    cwd: Optional[Path] = None,
) -> ComplianceReport:
    """Run every check against `root` in declared order. Always returns a report."""
    layout = layout or layout_from_env()
    target = ScanTarget(root=Path(root))
    report = ComplianceReport(target=target)

    report = report.with_findings("Project", check_marker(target, layout.marker))
    facts = extract_config_facts(target, layout)
    report = report.with_findings("Project", lint_php_version(facts))

    sources = scan(target, layout.source_dir, layout.extension)
    report = report.with_findings("Strict Types Usage", lint_strict_types(sources))
    report = report.with_findings("Type Declaration Coverage", lint_return_types(sources))

    report = report.with_findings("Static Analysis", lint_analyzer_config(facts))
    report = report.with_findings("Static Analysis", lint_rector(target, layout.rector_config))

    report = report.with_findings("Deprecated Patterns", lint_deprecated_syntax(sources))

    tests = scan(target, layout.tests_dir, layout.extension, pattern=f"*{layout.test_suffix}")
    report = report.with_findings("Test Coverage", lint_tests(tests))

    if skip_analyzer:
        logger.debug("external analyzer skipped")
    else:
        findings = run_analyzer(target, runner or SubprocessRunner(), cwd=cwd, budget=layout.output_lines)
        report = report.with_findings("PHPStan Analysis", findings)

    logger.debug("verification of %s: %d error(s), %d warning(s)",
                 target.root, report.error_count, report.warning_count)
    return report
