"""
Pattern Matcher — Issue Extraction

Runs a rule catalog against free text and returns positioned,
deduplicated issues. Pure: the catalog is passed in, the scan cursor
is local to each call, and nothing survives between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from promocheck.rules import RuleCatalog, ComplianceRule, default_catalog


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Position:
    start: int
    end: int


@dataclass(frozen=True)
class Issue:
    """A single rule match inside the analysed content."""
    id: str                # "<rule id>:<start>-<end>", unique within a run
    rule_id: str
    category: str
    severity: str
    title: str
    description: str
    matched_text: str
    position: Position
    suggestion: Optional[str] = None
    regulation: Optional[str] = None


@dataclass(frozen=True)
class AnalysisOptions:
    content_type: str = "general"
    strict_mode: bool = False          # reserved, not used in scoring
    include_info_level: bool = True
    target_market: Optional[str] = None


@dataclass(frozen=True)
class TextSegment:
    """A slice of content for highlighting, either plain or tied to an issue."""
    text: str
    highlighted: bool
    severity: Optional[str] = None
    issue_id: Optional[str] = None


# ============================================================
# DETECTION
# ============================================================

def detect_issues(
    content: str,
    catalog: Optional[RuleCatalog] = None,
    options: Optional[AnalysisOptions] = None,
) -> list[Issue]:
    """
    Scan content with every active rule of the catalog.

    Each pattern is searched repeatedly from a cursor that moves to the
    end of the previous match, or one character further after an empty
    match. Empty matches never become issues. A (rule, start, end) span
    is reported once even when several patterns of the rule hit it.

    Returns issues sorted by start offset; ties keep catalog order.
    """
    catalog = catalog if catalog is not None else default_catalog
    options = options or AnalysisOptions()

    issues: list[Issue] = []
    seen: set[tuple[str, int, int]] = set()

    for rule in catalog.active_rules(options.include_info_level):
        for pattern in rule.patterns:
            for start, end in _scan(pattern, content):
                key = (rule.id, start, end)
                if key in seen:
                    continue
                seen.add(key)
                issues.append(_make_issue(rule, content, start, end))

    issues.sort(key=lambda issue: issue.position.start)
    return issues


def _scan(pattern, content: str):
    """Yield (start, end) of every non-empty match, left to right."""
    cursor = 0
    length = len(content)
    while cursor <= length:
        match = pattern.search(content, cursor)
        if match is None:
            return
        start, end = match.span()
        if end > start:
            yield start, end
            cursor = end
        else:
            cursor = end + 1


def _make_issue(rule: ComplianceRule, content: str, start: int, end: int) -> Issue:
    return Issue(
        id=f"{rule.id}:{start}-{end}",
        rule_id=rule.id,
        category=rule.category,
        severity=rule.severity,
        title=rule.name,
        description=rule.description,
        matched_text=content[start:end],
        position=Position(start=start, end=end),
        suggestion=rule.suggestion,
        regulation=rule.regulation,
    )


# ============================================================
# FILTERS
# ============================================================

def filter_by_severity(issues: list[Issue], severities: Iterable[str]) -> list[Issue]:
    wanted = set(severities)
    return [issue for issue in issues if issue.severity in wanted]


def filter_by_category(issues: list[Issue], categories: Iterable[str]) -> list[Issue]:
    wanted = set(categories)
    return [issue for issue in issues if issue.category in wanted]


# ============================================================
# HIGHLIGHTING
# ============================================================

def highlight_ranges(issues: list[Issue]) -> list[dict]:
    return [
        {
            "start": issue.position.start,
            "end": issue.position.end,
            "severity": issue.severity,
            "issue_id": issue.id,
        }
        for issue in issues
    ]


def highlight_segments(content: str, issues: list[Issue]) -> list[TextSegment]:
    """
    Split content into plain and highlighted segments.

    An issue that starts inside an already highlighted span is skipped,
    so the segments always concatenate back to the original content.
    """
    if not issues:
        return [TextSegment(text=content, highlighted=False)]

    segments: list[TextSegment] = []
    cursor = 0
    for issue in sorted(issues, key=lambda i: i.position.start):
        start, end = issue.position.start, issue.position.end
        if start < cursor:
            continue
        if start > cursor:
            segments.append(TextSegment(text=content[cursor:start], highlighted=False))
        segments.append(TextSegment(
            text=content[start:end],
            highlighted=True,
            severity=issue.severity,
            issue_id=issue.id,
        ))
        cursor = end

    if cursor < len(content):
        segments.append(TextSegment(text=content[cursor:], highlighted=False))
    return segments
