from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Tuple, Union

Severity = Literal["error", "warning", "info"]

@dataclass(frozen=True)
class ScanTarget:
    root: Path

@dataclass(frozen=True)
class CandidateFile:
    path: Path
    extension: str

@dataclass(frozen=True)
class Finding:
    rule: str
    severity: Severity
    message: str
    count: Optional[int] = None
    details: Tuple[str, ...] = ()

@dataclass(frozen=True)
class ConfigFacts:
    manifest: Optional[str] = None
    php_constraint: Optional[str] = None
    analyzer_config: Optional[str] = None
    # None: no analyzer config; "unknown": config present, level not found
    analyzer_level: Union[int, str, None] = None
