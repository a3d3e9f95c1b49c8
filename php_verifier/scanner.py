from __future__ import annotations
import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

from . import CandidateFile, Finding, ScanTarget
from .config import SKIP_DIRS

logger = logging.getLogger(__name__)

def check_marker(target: ScanTarget, marker: str) -> List[Finding]:
    """Missing target directory or marker file is the only hard error."""
    if not target.root.is_dir():
        return [Finding(rule="target", severity="error",
                        message=f"Directory not found: {target.root}")]
    if not (target.root / marker).is_file():
        return [Finding(rule="marker", severity="error", message=f"{marker} not found")]
    return []

def read_text(path: Path) -> Optional[str]:
    """Read a candidate file; None when it cannot be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("skipping unreadable file %s: %s", path, exc)
        return None

class CandidateSet:
    """
    Files under one subdirectory of the target, filtered by extension and an
    optional filename glob. Iterating walks the tree again each time, in
    sorted order. A missing subdirectory simply yields nothing.
    """

    def __init__(self, target: ScanTarget, subdir: str, extension: str, pattern: Optional[str] = None):
        self.target = target
        self.subdir = subdir
        self.extension = extension.lower()
        self.pattern = pattern

    @property
    def base(self) -> Path:
        return self.target.root / self.subdir

    @property
    def exists(self) -> bool:
        return self.base.is_dir()

    def __iter__(self) -> Iterator[CandidateFile]:
        if not self.exists:
            return
        for root, dirs, files in os.walk(self.base, onerror=self._on_error):
            dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS and not d.startswith("."))
            for name in sorted(files):
                if not name.lower().endswith(self.extension):
                    continue
                if self.pattern and not fnmatch.fnmatch(name, self.pattern):
                    continue
                yield CandidateFile(path=Path(root) / name, extension=self.extension)

    def _on_error(self, exc: OSError) -> None:
        logger.debug("cannot list %s: %s", exc.filename, exc)

def scan(target: ScanTarget, subdir: str, extension: str, pattern: Optional[str] = None) -> CandidateSet:
    return CandidateSet(target, subdir, extension, pattern)
