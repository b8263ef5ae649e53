"""
Tests for the rule catalog — vocabularies, validation, lookups.

A catalog that builds is a catalog the matcher can trust: every defect
has to surface here, at construction, never during a scan.
"""

import re
from dataclasses import FrozenInstanceError

import pytest

from promocheck.errors import CatalogError
from promocheck.rules import (
    CATALOG_VERSION,
    CATEGORIES,
    CATEGORY_LABELS,
    COMPLIANCE_RULES,
    SEVERITIES,
    ComplianceRule,
    RuleCatalog,
    default_catalog,
)


def _rule(**overrides) -> ComplianceRule:
    fields = dict(
        id="test-rule",
        category="misleading_claims",
        severity="high",
        name="Test Rule",
        description="A rule for tests",
        patterns=(r"\bmiracle\b",),
        suggestion="Remove it.",
    )
    fields.update(overrides)
    return ComplianceRule(**fields)


class TestVocabularies:
    def test_severities_ordered(self):
        assert SEVERITIES == ("critical", "high", "medium", "low", "info")

    def test_every_category_has_label(self):
        assert set(CATEGORY_LABELS) == set(CATEGORIES)

    def test_fourteen_categories(self):
        assert len(CATEGORIES) == 14


class TestDefaultCatalog:
    def test_builds_all_rules(self):
        assert len(default_catalog) == len(COMPLIANCE_RULES)

    def test_version(self):
        assert default_catalog.version == CATALOG_VERSION

    def test_rule_ids_unique(self):
        ids = [rule.id for rule in default_catalog]
        assert len(ids) == len(set(ids))

    def test_patterns_compiled(self):
        for rule in default_catalog:
            assert rule.patterns
            assert all(isinstance(p, re.Pattern) for p in rule.patterns)

    def test_rules_use_known_vocabulary(self):
        for rule in default_catalog:
            assert rule.severity in SEVERITIES
            assert rule.category in CATEGORIES

    def test_lookup_by_id(self):
        rule = default_catalog.get("financial-guaranteed")
        assert rule is not None
        assert rule.severity == "critical"
        assert "financial-guaranteed" in default_catalog
        assert default_catalog.get("no-such-rule") is None

    def test_by_category(self):
        rules = default_catalog.by_category("financial_claims")
        assert rules
        assert all(r.category == "financial_claims" for r in rules)

    def test_active_rules_without_info(self):
        active = default_catalog.active_rules(include_info_level=False)
        assert all(r.severity != "info" for r in active)
        assert len(active) < len(default_catalog.active_rules(include_info_level=True))

    def test_describe_has_no_compiled_patterns(self):
        described = default_catalog.describe(severity="critical")
        assert described
        for entry in described:
            assert entry["severity"] == "critical"
            assert "patterns" not in entry
            assert entry["pattern_count"] >= 1


class TestCatalogValidation:
    def test_string_patterns_compiled_case_insensitive(self):
        catalog = RuleCatalog([_rule()])
        rule = catalog.get("test-rule")
        assert rule.patterns[0].search("A MIRACLE cure")

    def test_invalid_pattern_rejected(self):
        with pytest.raises(CatalogError) as exc:
            RuleCatalog([_rule(patterns=(r"(unclosed",))])
        assert exc.value.rule_id == "test-rule"

    def test_unknown_severity_rejected(self):
        with pytest.raises(CatalogError):
            RuleCatalog([_rule(severity="catastrophic")])

    def test_unknown_category_rejected(self):
        with pytest.raises(CatalogError):
            RuleCatalog([_rule(category="astrology")])

    def test_empty_patterns_rejected(self):
        with pytest.raises(CatalogError):
            RuleCatalog([_rule(patterns=())])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogError, match="duplicate"):
            RuleCatalog([_rule(), _rule(name="Copy")])

    def test_rules_are_frozen(self):
        rule = default_catalog.get("misleading-guarantee")
        with pytest.raises(FrozenInstanceError):
            rule.severity = "low"
