"""
Tests for the finding aggregator — filtering, sorting, grouping.
"""

import pytest

from promocheck.findings import (
    ViewOptions,
    count_non_applicable,
    enrich_findings,
    group_findings,
    sort_findings,
)
from promocheck.obligations import CRITICALITY_LEVELS, AnalysisByText, Finding


def _finding(obligation_id, status, criticality="Major"):
    return Finding(
        obligation_id=obligation_id,
        status=status,
        criticality_level=CRITICALITY_LEVELS.get(criticality, 2),
        criticality=criticality,
        comment="",
    )


def _text(code, title, findings):
    counts = {s: sum(1 for f in findings if f.status == s) for s in (
        "COMPLIANT", "NON_COMPLIANT", "IMPROVEMENT", "NOT_APPLICABLE", "NOT_VERIFIABLE",
    )}
    return AnalysisByText(
        document_source=code,
        title=title,
        nb_total=len(findings),
        nb_compliant=counts["COMPLIANT"],
        nb_non_compliant=counts["NON_COMPLIANT"],
        nb_improvement=counts["IMPROVEMENT"],
        nb_not_applicable=counts["NOT_APPLICABLE"],
        nb_not_verifiable=counts["NOT_VERIFIABLE"],
        findings=tuple(findings),
    )


@pytest.fixture
def analyses():
    return [
        _text("DOC-2011-24", "Communications publicitaires OPC", [
            _finding("DOC-2011-24-1", "COMPLIANT", "Major"),
            _finding("DOC-2011-24-2", "NON_COMPLIANT", "Critical"),
            _finding("DOC-2011-24-4", "IMPROVEMENT", "Major"),
            _finding("DOC-2011-24-7", "NOT_APPLICABLE", "Minor"),
        ]),
        _text("ESMA34-45-1272", "Guidelines MiFID II publicités", [
            _finding("ESMA-1", "NON_COMPLIANT", "Critical"),
            _finding("ESMA-2", "NOT_VERIFIABLE", "Major"),
            _finding("ESMA-3", "NOT_APPLICABLE", "Major"),
        ]),
    ]


def _members(groups):
    return [f.obligation_id for group in groups for f in group.findings]


class TestEnrichAndSort:
    def test_enrich_tags_source(self, analyses):
        enriched = enrich_findings(analyses)
        assert len(enriched) == 7
        assert enriched[0].document_source == "DOC-2011-24"
        assert enriched[-1].source_title == "Guidelines MiFID II publicités"

    def test_sort_criticality_desc_is_stable(self, analyses):
        ordered = sort_findings(enrich_findings(analyses), "criticality_desc")
        assert [f.obligation_id for f in ordered[:2]] == ["DOC-2011-24-2", "ESMA-1"]
        assert ordered[-1].obligation_id == "DOC-2011-24-7"

    def test_sort_alphabetical(self, analyses):
        ordered = sort_findings(enrich_findings(analyses), "alphabetical")
        ids = [f.obligation_id for f in ordered]
        assert ids == sorted(ids)

    def test_sort_by_status(self, analyses):
        ordered = sort_findings(enrich_findings(analyses), "status")
        statuses = [f.status for f in ordered]
        assert statuses == sorted(statuses)


class TestGrouping:
    def test_non_applicable_hidden_by_default(self, analyses):
        groups = group_findings(analyses)
        assert "DOC-2011-24-7" not in _members(groups)
        assert "ESMA-3" not in _members(groups)
        assert len(_members(groups)) == 5

    def test_group_by_text(self, analyses):
        groups = group_findings(analyses, ViewOptions(group_by="text"))
        assert [g.key for g in groups] == ["DOC-2011-24", "ESMA34-45-1272"]
        assert groups[0].label == "DOC-2011-24"
        assert groups[0].description == "Communications publicitaires OPC"
        assert groups[0].stats.total == 3

    def test_group_by_status_order(self, analyses):
        groups = group_findings(
            analyses, ViewOptions(group_by="status", show_non_applicable=True),
        )
        assert [g.key for g in groups] == [
            "NON_COMPLIANT", "IMPROVEMENT", "COMPLIANT", "NOT_APPLICABLE", "NOT_VERIFIABLE",
        ]
        assert groups[0].label == "Non-compliant"
        assert groups[0].stats.non_compliant == 2

    def test_empty_groups_not_emitted(self, analyses):
        groups = group_findings(analyses, ViewOptions(group_by="criticality"))
        assert [g.key for g in groups] == ["Critical", "Major"]

    def test_unknown_criticality_grouped_as_info(self):
        texts = [_text("X", "X", [_finding("X-1", "COMPLIANT", "Unrated")])]
        groups = group_findings(texts, ViewOptions(group_by="criticality"))
        assert [g.key for g in groups] == ["Info"]
        assert groups[0].label == "Information"

    @pytest.mark.parametrize("group_by", ["text", "status", "criticality"])
    @pytest.mark.parametrize("show", [False, True])
    def test_groups_cover_filtered_input(self, analyses, group_by, show):
        groups = group_findings(analyses, ViewOptions(group_by=group_by, show_non_applicable=show))
        expected = [
            f.obligation_id for f in enrich_findings(analyses)
            if show or f.status != "NOT_APPLICABLE"
        ]
        assert sorted(_members(groups)) == sorted(expected)
        assert sum(g.stats.total for g in groups) == len(expected)

    def test_showing_non_applicable_never_shrinks(self, analyses):
        for group_by in ("text", "status", "criticality"):
            hidden = group_findings(analyses, ViewOptions(group_by=group_by))
            shown = group_findings(
                analyses, ViewOptions(group_by=group_by, show_non_applicable=True),
            )
            assert len(_members(shown)) >= len(_members(hidden))

    def test_count_non_applicable(self, analyses):
        assert count_non_applicable(analyses) == 2

    def test_invalid_view_options(self):
        with pytest.raises(ValueError):
            ViewOptions(group_by="colour")
