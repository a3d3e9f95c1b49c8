from __future__ import annotations

from php_verifier import ConfigFacts, ScanTarget
from php_verifier.config import DEFAULT_LAYOUT
from php_verifier.config_facts import (
    analyzer_level,
    extract_config_facts,
    is_end_of_life,
    lint_analyzer_config,
    lint_php_version,
    php_constraint,
)


def _warnings(findings):
    return [f for f in findings if f.severity == "warning"]


def test_analyzer_level_values():
    assert analyzer_level("parameters:\n    level: 9\n    paths:\n        - src\n") == 9
    assert analyzer_level("parameters:\n    paths:\n        - src\n") == "unknown"
    assert analyzer_level("parameters:\n    level: max\n") == "max"
    assert analyzer_level("") == "unknown"


def test_php_constraint():
    assert php_constraint('{"require": {"php": ">=8.1", "ext-json": "*"}}') == ">=8.1"
    assert php_constraint('{\n  "require": {\n    "php" : "^7.4 || ^8.0"\n  }\n}') == "^7.4 || ^8.0"
    assert php_constraint('{"require": {"symfony/console": "^6.0"}}') is None


def test_end_of_life_detection():
    assert is_end_of_life("^7.4 || ^8.0")
    assert is_end_of_life(">=5.6")
    assert is_end_of_life("^7")
    assert is_end_of_life(">=7")
    assert is_end_of_life("~5")
    assert not is_end_of_life("^8.1")
    assert not is_end_of_life("^8")
    assert not is_end_of_life("8.10.*")
    assert not is_end_of_life("*")


def test_extract_facts(make_project):
    root = make_project({
        "composer.json": '{"require": {"php": "^8.2"}}',
        "phpstan.neon": "parameters:\n  level: 9\n",
    })
    facts = extract_config_facts(ScanTarget(root=root), DEFAULT_LAYOUT)
    assert facts == ConfigFacts(manifest="composer.json", php_constraint="^8.2",
                                analyzer_config="phpstan.neon", analyzer_level=9)


def test_prefers_first_analyzer_config(make_project):
    root = make_project({
        "phpstan.neon": "parameters:\n  level: 8\n",
        "phpstan.neon.dist": "parameters:\n  level: 2\n",
    })
    facts = extract_config_facts(ScanTarget(root=root), DEFAULT_LAYOUT)
    assert facts.analyzer_config == "phpstan.neon"
    assert facts.analyzer_level == 8


def test_dist_config_only(make_project):
    root = make_project({"phpstan.neon.dist": "parameters:\n  level: 5\n"})
    facts = extract_config_facts(ScanTarget(root=root), DEFAULT_LAYOUT)
    assert facts.analyzer_config == "phpstan.neon.dist"
    assert facts.manifest is None
    assert facts.php_constraint is None


def test_no_config_files(make_project):
    root = make_project({})
    facts = extract_config_facts(ScanTarget(root=root), DEFAULT_LAYOUT)
    assert facts == ConfigFacts()


def test_unknown_level_single_warning():
    facts = ConfigFacts(analyzer_config="phpstan.neon", analyzer_level="unknown")
    findings = lint_analyzer_config(facts)
    assert len(findings) == 1
    assert findings[0].severity == "warning"


def test_level_nine_is_clean():
    findings = lint_analyzer_config(ConfigFacts(analyzer_config="phpstan.neon", analyzer_level=9))
    assert _warnings(findings) == []


def test_low_level_warns():
    findings = lint_analyzer_config(ConfigFacts(analyzer_config="phpstan.neon", analyzer_level=5))
    assert len(_warnings(findings)) == 1
    assert "recommended: 8+" in _warnings(findings)[0].message


def test_max_level_is_clean():
    findings = lint_analyzer_config(ConfigFacts(analyzer_config="phpstan.neon", analyzer_level="max"))
    assert _warnings(findings) == []


def test_missing_analyzer_config():
    findings = lint_analyzer_config(ConfigFacts())
    assert [(f.rule, f.severity) for f in findings] == [("phpstan-config", "warning")]


def test_php_version_findings():
    assert len(_warnings(lint_php_version(ConfigFacts()))) == 1
    assert _warnings(lint_php_version(ConfigFacts(manifest="composer.json", php_constraint="^8.2"))) == []
    eol = _warnings(lint_php_version(ConfigFacts(manifest="composer.json", php_constraint="^7.4")))
    assert len(eol) == 1
    assert "PHP 8.x" in eol[0].message
