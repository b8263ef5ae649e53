"""
Markdown Compliance Report

Renders a mode A AnalysisResult as a self-contained Markdown document:
date, score, per-severity counts, and one section per issue.

Usage:
    from promocheck.report import generate_report, report_filename
    markdown = generate_report(result)
"""

from __future__ import annotations

from promocheck.analyzer import AnalysisResult

DISCLAIMER = (
    "*This report is generated for informational purposes only and does not "
    "constitute legal advice.*"
)


def generate_report(result: AnalysisResult) -> str:
    summary = result.summary
    lines: list[str] = [
        "# Marketing Compliance Analysis Report",
        "",
        f"**Date:** {result.timestamp.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        f"**Compliance Score:** {result.score}/100",
        "",
        "## Summary",
        "",
        f"- Total Issues: {summary.total_issues}",
        f"- Critical: {summary.critical_count}",
        f"- High: {summary.high_count}",
        f"- Medium: {summary.medium_count}",
        f"- Low: {summary.low_count}",
        f"- Info: {summary.info_count}",
        "",
    ]

    if result.issues:
        lines += ["## Issues Found", ""]
        for index, issue in enumerate(result.issues, start=1):
            lines += [
                f"### {index}. {issue.title}",
                "",
                f"**Severity:** {issue.severity.upper()}",
                f"**Category:** {issue.category.replace('_', ' ')}",
                "",
                f'**Matched Text:** "{issue.matched_text}"',
                "",
                f"**Description:** {issue.description}",
                "",
            ]
            if issue.suggestion:
                lines += [f"**Suggestion:** {issue.suggestion}", ""]
            if issue.regulation:
                lines += [f"**Regulation:** {issue.regulation}", ""]
            lines += ["---", ""]
    else:
        lines += [
            "## No Issues Found",
            "",
            "Your content appears to be compliant with marketing regulations.",
        ]

    lines += ["", DISCLAIMER]
    return "\n".join(lines)


def report_filename(result: AnalysisResult) -> str:
    return f"compliance-report-{result.timestamp.date().isoformat()}.md"
