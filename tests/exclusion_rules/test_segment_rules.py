"""Tests for exact segment-name exclusion rules."""

import pytest

from treegenius.exclusion_rules.base_rules import BaseExclusionRules
from treegenius.exclusion_rules.segment_rules import SegmentExclusionRules


def test_empty_rules_exclude_nothing():
    rules = SegmentExclusionRules()
    assert not rules.has_rules()
    assert not rules.exclude(["src", "main.py"])


def test_any_matching_segment_excludes():
    rules = SegmentExclusionRules(["node_modules", ".git"])
    assert rules.exclude(["node_modules", "react", "index.js"])
    assert rules.exclude(["web", "app", ".git"])
    assert not rules.exclude(["web", "app", "main.js"])


def test_exact_match_only():
    """Substrings, prefixes and globs never match."""
    rules = SegmentExclusionRules(["test", "*.pyc"])
    assert rules.exclude(["src", "test", "a.py"])
    assert not rules.exclude(["src", "tests", "a.py"])
    assert not rules.exclude(["src", "latest.py"])
    assert not rules.exclude(["src", "module.pyc"])


def test_match_is_case_sensitive():
    rules = SegmentExclusionRules(["Build"])
    assert rules.exclude(["Build", "out.o"])
    assert not rules.exclude(["build", "out.o"])


def test_add_and_remove_rules():
    rules = SegmentExclusionRules()
    rules.add_rule("dist")
    rules.add_rule("")
    rules.add_rule("   ")
    assert rules.rules == frozenset({"dist"})

    rules.remove_rule("dist")
    rules.remove_rule("unknown")
    assert rules.rules == frozenset()


def test_load_rules_from_files(tmp_path):
    first = tmp_path / "names.txt"
    first.write_text("# build output\ndist\n\ncoverage\n")
    second = tmp_path / "more.txt"
    second.write_text(".venv\n")

    rules = SegmentExclusionRules()
    rules.load_rules([first, second])
    assert rules.rules == frozenset({"dist", "coverage", ".venv"})


def test_load_rules_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SegmentExclusionRules().load_rules(tmp_path / "missing.txt")


def test_base_rules_optional_operations():
    class NeverExclude(BaseExclusionRules):
        def exclude(self, segments):
            return False

    rules = NeverExclude()
    with pytest.raises(NotImplementedError):
        rules.add_rule("dist")
    with pytest.raises(NotImplementedError):
        rules.load_rules("names.txt")


def test_names_with_surrounding_whitespace_match_exactly():
    rules = SegmentExclusionRules([" build"])
    assert rules.rules == frozenset({" build"})
    assert rules.exclude([" build", "x"])
    assert not rules.exclude(["build", "y"])

    rules.remove_rule("build")
    assert rules.rules == frozenset({" build"})
    rules.remove_rule(" build")
    assert not rules.has_rules()


def test_load_rules_keeps_names_verbatim(tmp_path):
    names = tmp_path / "names.txt"
    names.write_text("dist \n  # indented comment\n   \n.venv\r\n")

    rules = SegmentExclusionRules()
    rules.load_rules(names)
    assert rules.rules == frozenset({"dist ", ".venv"})
