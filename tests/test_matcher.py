"""
Tests for the pattern matcher — positions, dedup, ordering, filters,
highlighting.
"""

import time

from promocheck.config import settings
from promocheck.matcher import (
    AnalysisOptions,
    detect_issues,
    filter_by_category,
    filter_by_severity,
    highlight_ranges,
    highlight_segments,
)
from promocheck.rules import SEVERITIES, ComplianceRule, RuleCatalog


SAMPLE = (
    "Get 100% guaranteed results! Limited time offer, act now. "
    "Our revolutionary formula is clinically proven and eco-friendly. "
    "Earn $5,000 per month with passive income. Past performance matters."
)

CLEAN = "The meeting is scheduled for Tuesday afternoon in the main conference room."


def _catalog(*rules):
    return RuleCatalog(rules)


def _rule(rule_id, patterns, severity="medium", category="misleading_claims"):
    return ComplianceRule(
        id=rule_id,
        category=category,
        severity=severity,
        name=rule_id.title(),
        description="test",
        patterns=patterns,
        suggestion="test",
    )


class TestPositions:
    def test_matched_text_equals_slice(self):
        issues = detect_issues(SAMPLE)
        assert issues
        for issue in issues:
            assert 0 <= issue.position.start < issue.position.end <= len(SAMPLE)
            assert SAMPLE[issue.position.start:issue.position.end] == issue.matched_text

    def test_sorted_by_start(self):
        starts = [i.position.start for i in detect_issues(SAMPLE)]
        assert starts == sorted(starts)

    def test_issue_carries_rule_metadata(self):
        issue = next(i for i in detect_issues(SAMPLE) if i.rule_id == "financial-income")
        assert issue.category == "financial_claims"
        assert issue.severity == "critical"
        assert issue.regulation == "FTC Business Opportunity Rule"


class TestDetection:
    def test_empty_content(self):
        assert detect_issues("") == []

    def test_clean_content(self):
        assert detect_issues(CLEAN) == []

    def test_guaranteed_results_flagged(self):
        issues = detect_issues("Get 100% guaranteed results!")
        assert any(
            i.category == "misleading_claims" and i.severity in ("critical", "high")
            for i in issues
        )

    def test_deterministic(self):
        assert detect_issues(SAMPLE) == detect_issues(SAMPLE)

    def test_issue_ids_unique(self):
        ids = [i.id for i in detect_issues(SAMPLE)]
        assert len(ids) == len(set(ids))

    def test_every_occurrence_found(self):
        catalog = _catalog(_rule("hype", (r"\bamazing\b",)))
        issues = detect_issues("amazing, truly amazing, AMAZING", catalog)
        assert [i.position.start for i in issues] == [0, 15, 24]

    def test_overlapping_patterns_deduplicated(self):
        catalog = _catalog(_rule("hype", (r"\bamazing\b", r"amazing")))
        issues = detect_issues("simply amazing", catalog)
        assert len(issues) == 1

    def test_same_span_different_rules_kept(self):
        catalog = _catalog(
            _rule("first", (r"\bfree\b",)),
            _rule("second", (r"\bfree\b",), severity="low"),
        )
        issues = detect_issues("totally free", catalog)
        assert [i.rule_id for i in issues] == ["first", "second"]

    def test_zero_width_matches_skipped(self):
        catalog = _catalog(_rule("stars", (r"x*",)))
        issues = detect_issues("abxxc", catalog)
        assert [(i.position.start, i.position.end) for i in issues] == [(2, 4)]

    def test_info_level_excluded_on_request(self):
        text = "Past performance is shown for the last five years."
        with_info = detect_issues(text, options=AnalysisOptions(include_info_level=True))
        without = detect_issues(text, options=AnalysisOptions(include_info_level=False))
        assert any(i.severity == "info" for i in with_info)
        assert all(i.severity != "info" for i in without)

    def test_french_guaranteed_return(self):
        issues = detect_issues("Un rendement garanti de 6% par an.")
        assert any(i.rule_id == "financial-guaranteed" for i in issues)


class TestFilters:
    def test_all_severities_is_identity(self):
        issues = detect_issues(SAMPLE)
        assert filter_by_severity(issues, SEVERITIES) == issues

    def test_filter_by_severity(self):
        issues = filter_by_severity(detect_issues(SAMPLE), ["critical"])
        assert issues
        assert all(i.severity == "critical" for i in issues)

    def test_filter_by_category(self):
        issues = filter_by_category(detect_issues(SAMPLE), ["urgency_manipulation"])
        assert issues
        assert all(i.category == "urgency_manipulation" for i in issues)


class TestHighlighting:
    def test_segments_rebuild_content(self):
        segments = highlight_segments(SAMPLE, detect_issues(SAMPLE))
        assert "".join(s.text for s in segments) == SAMPLE
        assert any(s.highlighted for s in segments)

    def test_no_issues_single_plain_segment(self):
        segments = highlight_segments(CLEAN, [])
        assert len(segments) == 1
        assert segments[0].highlighted is False

    def test_overlapping_issue_skipped(self):
        catalog = _catalog(
            _rule("long", (r"guaranteed results",)),
            _rule("short", (r"results",)),
        )
        text = "guaranteed results today"
        segments = highlight_segments(text, detect_issues(text, catalog))
        assert "".join(s.text for s in segments) == text
        assert [s.text for s in segments if s.highlighted] == ["guaranteed results"]

    def test_ranges(self):
        issues = detect_issues(SAMPLE)
        ranges = highlight_ranges(issues)
        assert len(ranges) == len(issues)
        assert ranges[0]["issue_id"] == issues[0].id


class TestLongInput:
    """Rules with look-ahead stay linear on large single-line input."""

    def _rule_ids(self, text):
        return {issue.rule_id for issue in detect_issues(text)}

    def _timed(self, text):
        start = time.perf_counter()
        issues = detect_issues(text)
        return issues, time.perf_counter() - start

    def test_repeated_free_at_size_limit(self):
        text = ("free " * 40000)[:settings.MAX_CONTENT_CHARS]
        issues, elapsed = self._timed(text)
        assert elapsed < 10
        assert any(i.rule_id == "misleading-free" for i in issues)

    def test_repeated_quotes_at_size_limit(self):
        text = ('"quote" ' * 25000)[:settings.MAX_CONTENT_CHARS]
        _, elapsed = self._timed(text)
        assert elapsed < 10

    def test_free_with_disclaimer_not_flagged(self):
        assert "misleading-free" not in self._rule_ids("Free shipping, no obligation.")

    def test_free_without_disclaimer_flagged(self):
        assert "misleading-free" in self._rule_ids("Free shipping on every order.")

    def test_attributed_quote_flagged(self):
        text = '"Best fund I ever bought." - Marie'
        assert "testimonial-unverified" in self._rule_ids(text)
