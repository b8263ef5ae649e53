"""
Compliance Score Calculator

Computes a 0-100 compliance score and the per-severity / per-category
summary from a list of issues. Separated from analyzer.py for
single-responsibility.

Score = 100 minus one deduction per issue, by severity only:
  critical=-25, high=-15, medium=-8, low=-3, info=-1
Weights come from settings (environment-overridable). Floor at 0.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Mapping, Optional

from promocheck.config import settings
from promocheck.matcher import Issue
from promocheck.rules import CATEGORIES


@dataclass(frozen=True)
class AnalysisSummary:
    total_issues: int
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    info_count: int
    category_counts: Mapping[str, int]   # read-only view

    def as_dict(self) -> dict:
        """Plain-dict copy for serialization."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["category_counts"] = dict(self.category_counts)
        return data


def calculate_score(
    issues: list[Issue],
    weights: Optional[dict[str, int]] = None,
) -> int:
    """Return the compliance score. No issues ⇒ 100."""
    if not issues:
        return 100
    weights = weights or settings.severity_weights
    deduction = sum(weights.get(issue.severity, 0) for issue in issues)
    return max(0, 100 - deduction)


def score_breakdown(
    issues: list[Issue],
    weights: Optional[dict[str, int]] = None,
) -> dict:
    """
    Explain a score: every deduction applied, grouped by severity.

    The final_score always equals calculate_score() for the same input.
    """
    weights = weights or settings.severity_weights
    breakdown: dict = {
        "starting_score": 100,
        "deductions": [],
        "by_severity": {severity: 0 for severity in weights},
    }
    for issue in issues:
        pen = weights.get(issue.severity, 0)
        breakdown["deductions"].append({
            "issue_id": issue.id,
            "severity": issue.severity,
            "penalty": -pen,
        })
        breakdown["by_severity"][issue.severity] = (
            breakdown["by_severity"].get(issue.severity, 0) - pen
        )
    breakdown["final_score"] = calculate_score(issues, weights)
    return breakdown


def summarize(issues: list[Issue]) -> AnalysisSummary:
    # Every known category starts at zero so consumers never special-case
    category_counts = {category: 0 for category in CATEGORIES}
    severity_counts = {"critical": 0, "high": 0, "medium": 0, "low": 0, "info": 0}

    for issue in issues:
        category_counts[issue.category] = category_counts.get(issue.category, 0) + 1
        if issue.severity in severity_counts:
            severity_counts[issue.severity] += 1

    return AnalysisSummary(
        total_issues=len(issues),
        critical_count=severity_counts["critical"],
        high_count=severity_counts["high"],
        medium_count=severity_counts["medium"],
        low_count=severity_counts["low"],
        info_count=severity_counts["info"],
        category_counts=MappingProxyType(category_counts),
    )
