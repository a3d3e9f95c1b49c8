"""Project layout the verifier expects, with environment overrides."""

from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Tuple

MARKER_FILE = "composer.json"
ANALYZER_CONFIGS: Tuple[str, ...] = ("phpstan.neon", "phpstan.neon.dist")
RECTOR_CONFIG = "rector.php"

# Analyzer output shown in the report
OUTPUT_LINE_BUDGET = 20

# Directory names never descended into while scanning
SKIP_DIRS = {"vendor", "node_modules"}

@dataclass(frozen=True)
class Layout:
    marker: str = MARKER_FILE
    source_dir: str = "src"
    tests_dir: str = "tests"
    extension: str = ".php"
    test_suffix: str = "Test.php"
    analyzer_configs: Tuple[str, ...] = ANALYZER_CONFIGS
    rector_config: str = RECTOR_CONFIG
    output_lines: int = OUTPUT_LINE_BUDGET

DEFAULT_LAYOUT = Layout()

def layout_from_env() -> Layout:
    """Default layout, with source/tests directories overridable from the environment."""
    layout = DEFAULT_LAYOUT
    source_dir = os.environ.get("PHP_VERIFIER_SOURCE_DIR", "").strip().strip("/")
    tests_dir = os.environ.get("PHP_VERIFIER_TESTS_DIR", "").strip().strip("/")
    if source_dir:
        layout = replace(layout, source_dir=source_dir)
    if tests_dir:
        layout = replace(layout, tests_dir=tests_dir)
    return layout
