"""
Optional PHPStan run.

The analyzer is an opaque collaborator: its output is shown verbatim
(truncated) and a non-zero exit is advisory, never a verification error.
Process launching sits behind ProcessRunner so tests can substitute it.
"""

from __future__ import annotations
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from . import Finding, ScanTarget
from .config import OUTPUT_LINE_BUDGET

logger = logging.getLogger(__name__)

ANALYZER_BIN = Path("vendor") / "bin" / "phpstan"
ANALYZER_ARGS: Tuple[str, ...] = ("analyse", "--no-progress", "--no-interaction", "--error-format=raw")

@dataclass(frozen=True)
class AnalyzerResult:
    exit_code: int
    text: str

class ProcessRunner(ABC):
    @abstractmethod
    def run(self, args: Sequence[str], cwd: Path) -> AnalyzerResult:
        """Run args to completion in cwd."""

class SubprocessRunner(ProcessRunner):
    """Runs the analyzer to completion with stderr folded into stdout. No timeout is applied."""

    def run(self, args: Sequence[str], cwd: Path) -> AnalyzerResult:
        proc = subprocess.run(
            list(args),
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        return AnalyzerResult(exit_code=proc.returncode, text=proc.stdout or "")

def locate_analyzer(target: ScanTarget, cwd: Optional[Path] = None) -> Optional[Path]:
    """Project-local binary first, then one relative to the working directory.

    Paths are absolute: the analyzer is launched with the target as its cwd.
    """
    candidates = [target.root.resolve() / ANALYZER_BIN, (cwd or Path.cwd()).resolve() / ANALYZER_BIN]
    for cand in candidates:
        if cand.is_file():
            return cand
    return None

def truncate_output(text: str, budget: int = OUTPUT_LINE_BUDGET) -> Tuple[str, ...]:
    lines = [line.rstrip() for line in (text or "").splitlines() if line.strip()]
    if len(lines) <= budget:
        return tuple(lines)
    return tuple(lines[:budget]) + (f"... ({len(lines) - budget} more lines truncated)",)

def run_analyzer(
    target: ScanTarget,
    runner: ProcessRunner,
    cwd: Optional[Path] = None,
    budget: int = OUTPUT_LINE_BUDGET,
) -> List[Finding]:
    binary = locate_analyzer(target, cwd)
    if binary is None:
        return [Finding(rule="phpstan", severity="warning", message="PHPStan not installed")]

    args = [str(binary), *ANALYZER_ARGS]
    logger.debug("running %s in %s", " ".join(args), target.root)
    try:
        result = runner.run(args, cwd=target.root)
    except OSError as exc:
        logger.debug("analyzer launch failed: %s", exc)
        return [Finding(rule="phpstan", severity="warning", message=f"PHPStan could not be executed: {exc}")]

    details = truncate_output(result.text, budget)
    if result.exit_code == 0:
        return [Finding(rule="phpstan", severity="info", message="PHPStan completed", details=details)]
    return [Finding(
        rule="phpstan",
        severity="warning",
        message=f"PHPStan found issues (exit code {result.exit_code})",
        details=details,
    )]
