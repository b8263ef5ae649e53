"""
Finding Aggregator — Display Views for Audit Findings

Flattens the per-text findings of an AuditResult, optionally hides
NOT_APPLICABLE ones, sorts them and partitions them into groups by
regulatory text, status or criticality. Every call recomputes the view
from its input; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from promocheck.obligations import (
    COMPLIANT,
    IMPROVEMENT,
    NON_COMPLIANT,
    NOT_APPLICABLE,
    NOT_VERIFIABLE,
    AnalysisByText,
    CorrectiveAction,
    Finding,
)

GROUP_BY_OPTIONS = ("text", "status", "criticality")
SORT_BY_OPTIONS = ("criticality_desc", "criticality_asc", "status", "alphabetical")

STATUS_ORDER = (NON_COMPLIANT, IMPROVEMENT, COMPLIANT, NOT_APPLICABLE, NOT_VERIFIABLE)
STATUS_LABELS = {
    COMPLIANT: "Compliant",
    NON_COMPLIANT: "Non-compliant",
    IMPROVEMENT: "Suggested improvement",
    NOT_APPLICABLE: "Not applicable",
    NOT_VERIFIABLE: "Not verifiable",
}

CRITICALITY_ORDER = ("Critical", "Major", "Minor", "Info")
CRITICALITY_LABELS = {
    "Critical": "Critical",
    "Major": "Major",
    "Minor": "Minor",
    "Info": "Information",
}


@dataclass(frozen=True)
class ViewOptions:
    group_by: str = "text"
    show_non_applicable: bool = False
    sort_by: str = "criticality_desc"

    def __post_init__(self):
        if self.group_by not in GROUP_BY_OPTIONS:
            raise ValueError(f"group_by must be one of {GROUP_BY_OPTIONS}")
        if self.sort_by not in SORT_BY_OPTIONS:
            raise ValueError(f"sort_by must be one of {SORT_BY_OPTIONS}")


@dataclass(frozen=True)
class EnrichedFinding:
    """A Finding tagged with the regulatory text it came from."""
    obligation_id: str
    status: str
    criticality_level: int
    criticality: str
    comment: str
    document_source: str
    source_title: str
    excerpt: Optional[str] = None
    corrective_action: Optional[CorrectiveAction] = None

    @classmethod
    def from_finding(cls, finding: Finding, text: AnalysisByText) -> "EnrichedFinding":
        return cls(
            obligation_id=finding.obligation_id,
            status=finding.status,
            criticality_level=finding.criticality_level,
            criticality=finding.criticality,
            comment=finding.comment,
            document_source=text.document_source,
            source_title=text.title,
            excerpt=finding.excerpt,
            corrective_action=finding.corrective_action,
        )


@dataclass(frozen=True)
class FindingStats:
    total: int = 0
    compliant: int = 0
    non_compliant: int = 0
    improvement: int = 0
    not_applicable: int = 0
    not_verifiable: int = 0


@dataclass(frozen=True)
class FindingGroup:
    key: str
    label: str
    findings: tuple[EnrichedFinding, ...]
    stats: FindingStats
    description: Optional[str] = None


# ============================================================
# BUILDING BLOCKS
# ============================================================

def finding_stats(findings: Iterable[EnrichedFinding]) -> FindingStats:
    counts = {status: 0 for status in STATUS_ORDER}
    total = 0
    for finding in findings:
        total += 1
        if finding.status in counts:
            counts[finding.status] += 1
    return FindingStats(
        total=total,
        compliant=counts[COMPLIANT],
        non_compliant=counts[NON_COMPLIANT],
        improvement=counts[IMPROVEMENT],
        not_applicable=counts[NOT_APPLICABLE],
        not_verifiable=counts[NOT_VERIFIABLE],
    )


def enrich_findings(analyses_by_text: Iterable[AnalysisByText]) -> list[EnrichedFinding]:
    return [
        EnrichedFinding.from_finding(finding, text)
        for text in analyses_by_text
        for finding in text.findings
    ]


def sort_findings(findings: list[EnrichedFinding], sort_by: str) -> list[EnrichedFinding]:
    """Stable sort; equal keys keep their input order."""
    if sort_by == "criticality_desc":
        return sorted(findings, key=lambda f: -(f.criticality_level or 0))
    if sort_by == "criticality_asc":
        return sorted(findings, key=lambda f: f.criticality_level or 0)
    if sort_by == "status":
        return sorted(findings, key=lambda f: f.status)
    return sorted(findings, key=lambda f: f.obligation_id)


def _partition(findings: list[EnrichedFinding], key_of) -> dict[str, list[EnrichedFinding]]:
    groups: dict[str, list[EnrichedFinding]] = {}
    for finding in findings:
        groups.setdefault(key_of(finding), []).append(finding)
    return groups


# ============================================================
# GROUPINGS
# ============================================================

def group_by_text(findings: list[EnrichedFinding]) -> list[FindingGroup]:
    """One group per regulatory text, in order of first appearance."""
    groups = _partition(findings, lambda f: f.document_source)
    return [
        FindingGroup(
            key=code,
            label=code,
            description=members[0].source_title,
            findings=tuple(members),
            stats=finding_stats(members),
        )
        for code, members in groups.items()
    ]


def group_by_status(findings: list[EnrichedFinding]) -> list[FindingGroup]:
    groups = _partition(findings, lambda f: f.status)
    return [
        FindingGroup(
            key=status,
            label=STATUS_LABELS[status],
            findings=tuple(groups[status]),
            stats=finding_stats(groups[status]),
        )
        for status in STATUS_ORDER
        if status in groups
    ]


def group_by_criticality(findings: list[EnrichedFinding]) -> list[FindingGroup]:
    # Unknown or missing criticality is shown with Info
    groups = _partition(
        findings,
        lambda f: f.criticality if f.criticality in CRITICALITY_LABELS else "Info",
    )
    return [
        FindingGroup(
            key=criticality,
            label=CRITICALITY_LABELS[criticality],
            findings=tuple(groups[criticality]),
            stats=finding_stats(groups[criticality]),
        )
        for criticality in CRITICALITY_ORDER
        if criticality in groups
    ]


def group_findings(
    analyses_by_text: Iterable[AnalysisByText],
    view_options: Optional[ViewOptions] = None,
) -> list[FindingGroup]:
    """
    Build the grouped view of audit findings.

    The union of all group members is exactly the (optionally filtered)
    input; empty groups are never emitted.
    """
    view_options = view_options or ViewOptions()
    findings = enrich_findings(analyses_by_text)

    if not view_options.show_non_applicable:
        findings = [f for f in findings if f.status != NOT_APPLICABLE]

    findings = sort_findings(findings, view_options.sort_by)

    if view_options.group_by == "status":
        return group_by_status(findings)
    if view_options.group_by == "criticality":
        return group_by_criticality(findings)
    return group_by_text(findings)


def count_non_applicable(analyses_by_text: Iterable[AnalysisByText]) -> int:
    return sum(text.nb_not_applicable for text in analyses_by_text)
