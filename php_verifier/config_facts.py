from __future__ import annotations
import logging
import re
from typing import Iterable, List, Optional, Union

from . import ConfigFacts, Finding, ScanTarget
from .config import Layout
from .scanner import read_text

logger = logging.getLogger(__name__)

# Textual extraction only: composer.json and phpstan.neon are never deserialized.
#   "php": ">=8.1"
_PHP_REQUIREMENT = re.compile(r'"php"\s*:\s*"(?P<constraint>[^"]*)"')
#   level: 9   /   level: max
_ANALYZER_LEVEL = re.compile(r'^\s*level\s*:\s*(?P<level>\d+|max)\b', re.MULTILINE | re.IGNORECASE)
# major version in a constraint such as "^7.4 || ^8.0" or ">=7"; minor and
# patch numbers follow a dot and are skipped
_MAJOR_VERSION = re.compile(r'(?<![\d.])(\d+)(?!\d)')

# First supported major and recommended analyzer levels
SUPPORTED_PHP_MAJOR = 8
MIN_ANALYZER_LEVEL = 6
RECOMMENDED_ANALYZER_LEVEL = 8

def _first_existing(target: ScanTarget, names: Iterable[str]) -> Optional[str]:
    for name in names:
        if (target.root / name).is_file():
            return name
    return None

def php_constraint(text: str) -> Optional[str]:
    m = _PHP_REQUIREMENT.search(text or "")
    return m.group("constraint").strip() if m else None

def analyzer_level(text: str) -> Union[int, str]:
    """Configured level as int, "max", or "unknown" when no level key is found."""
    m = _ANALYZER_LEVEL.search(text or "")
    if not m:
        return "unknown"
    raw = m.group("level").lower()
    return raw if raw == "max" else int(raw)

def is_end_of_life(constraint: str) -> bool:
    """True when the constraint names a PHP major version below the supported one."""
    return any(int(major) < SUPPORTED_PHP_MAJOR for major in _MAJOR_VERSION.findall(constraint or ""))

def extract_config_facts(target: ScanTarget, layout: Layout) -> ConfigFacts:
    """
    Best-effort extraction from the build manifest and at most one analyzer
    config (first recognized filename wins). Missing files or keys only
    downgrade facts; this never raises.
    """
    manifest = layout.marker if (target.root / layout.marker).is_file() else None
    constraint = None
    if manifest:
        text = read_text(target.root / manifest)
        constraint = php_constraint(text) if text is not None else None

    config = _first_existing(target, layout.analyzer_configs)
    level = None
    if config:
        text = read_text(target.root / config)
        level = analyzer_level(text) if text is not None else "unknown"
    logger.debug("config facts: manifest=%s php=%s analyzer=%s level=%s", manifest, constraint, config, level)
    return ConfigFacts(manifest=manifest, php_constraint=constraint, analyzer_config=config, analyzer_level=level)

def lint_php_version(facts: ConfigFacts) -> List[Finding]:
    if facts.php_constraint is None:
        where = facts.manifest or "manifest missing"
        return [Finding(rule="php-version", severity="warning",
                        message=f"PHP version constraint unknown ({where})")]
    findings = [Finding(rule="php-version", severity="info",
                        message=f"PHP requirement: {facts.php_constraint}")]
    if is_end_of_life(facts.php_constraint):
        findings.append(Finding(
            rule="php-version",
            severity="warning",
            message=f"PHP {facts.php_constraint} allows an end-of-life 7.x or older version - consider upgrading to PHP 8.x",
        ))
    return findings

def lint_analyzer_config(facts: ConfigFacts) -> List[Finding]:
    if facts.analyzer_config is None:
        return [Finding(rule="phpstan-config", severity="warning", message="No PHPStan configuration found")]
    level = facts.analyzer_level
    if level == "unknown":
        return [Finding(rule="phpstan-level", severity="warning",
                        message=f"PHPStan level not found in {facts.analyzer_config}")]
    findings = [Finding(rule="phpstan-level", severity="info",
                        message=f"PHPStan configuration {facts.analyzer_config}, level: {level}")]
    if isinstance(level, int) and level < MIN_ANALYZER_LEVEL:
        findings.append(Finding(
            rule="phpstan-level",
            severity="warning",
            message=f"Consider increasing PHPStan level (current: {level}, recommended: {RECOMMENDED_ANALYZER_LEVEL}+)",
        ))
    return findings
