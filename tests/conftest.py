# tests/conftest.py
import sys, pathlib
from pathlib import Path
from typing import Dict, Optional

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from php_verifier.analyzer import AnalyzerResult, ProcessRunner

STRICT_FILE = """<?php

declare(strict_types=1);

namespace App;

final class Greeter
{
    public function __construct(private string $name)
    {
    }

    public function greet(): string
    {
        return "Hello {$this->name}";
    }
}
"""

LEGACY_FILE = """<?php

namespace App;

class Legacy
{
    public function items()
    {
        return array(1, 2, 3);
    }
}
"""

def write_tree(root: Path, files: Dict[str, str]) -> Path:
    for rel, text in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return root

@pytest.fixture
def make_project(tmp_path):
    """Build a project tree under tmp_path from {relative path: content}."""
    def _make(files: Dict[str, str], name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)
    return _make

@pytest.fixture
def modern_project(make_project) -> Path:
    """A project that passes every source check."""
    return make_project({
        "composer.json": '{\n  "require": {\n    "php": "^8.2"\n  }\n}\n',
        "phpstan.neon": "parameters:\n  level: 9\n  paths:\n    - src\n",
        "rector.php": "<?php\n\ndeclare(strict_types=1);\n",
        "src/Greeter.php": STRICT_FILE,
        "tests/GreeterTest.php": STRICT_FILE,
    })

@pytest.fixture
def legacy_project(make_project) -> Path:
    """composer.json on PHP 7, no analyzer config, no rector, legacy code, no tests dir."""
    return make_project({
        "composer.json": '{"require": {"php": ">=7.2", "ext-json": "*"}}',
        "src/Legacy.php": LEGACY_FILE,
        "src/Entity/User.php": STRICT_FILE.replace("final class Greeter", "/** @ORM\\Entity */\nfinal class User"),
    }, name="legacy")

class StubRunner(ProcessRunner):
    """Stands in for the analyzer process."""

    def __init__(self, exit_code: int = 0, text: str = "", error: Optional[OSError] = None):
        self.result = AnalyzerResult(exit_code=exit_code, text=text)
        self.error = error
        self.calls = []

    def run(self, args, cwd):
        self.calls.append((list(args), cwd))
        if self.error is not None:
            raise self.error
        return self.result

@pytest.fixture
def stub_runner():
    return StubRunner
