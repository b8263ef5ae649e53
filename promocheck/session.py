"""
Mode A Session

Holds what a single user sees while running quick analyses: the current
result, the severity / category filters applied to it, the last error
and a bounded history of previous results.

Validation problems and unexpected failures never escape analyze();
they land in `error` for the caller to display.
"""

from __future__ import annotations

from typing import Iterable, Optional

from promocheck.analyzer import AnalysisResult, analyze_content, validate_content
from promocheck.errors import ErrorState, ValidationFailure
from promocheck.history import AnalysisHistory
from promocheck.logging import get_logger
from promocheck.matcher import AnalysisOptions, Issue, filter_by_category, filter_by_severity
from promocheck.report import generate_report, report_filename
from promocheck.rules import CATEGORIES, SEVERITIES, RuleCatalog

logger = get_logger("session")

ANALYSIS_FAILED = "Analysis failed. Please try again."


class ComplianceSession:

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        history: Optional[AnalysisHistory] = None,
    ):
        self._catalog = catalog
        self.history = history if history is not None else AnalysisHistory()
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[ErrorState] = None
        self.severity_filter: frozenset[str] = frozenset()
        self.category_filter: frozenset[str] = frozenset()

    def analyze(
        self,
        content: str,
        options: Optional[AnalysisOptions] = None,
    ) -> Optional[AnalysisResult]:
        """Run an analysis; return the result, or None with `error` set."""
        self.error = None
        try:
            validate_content(content)
            result = analyze_content(content, options, self._catalog)
        except ValidationFailure as exc:
            self.error = ErrorState(kind="validation", message=str(exc))
            return None
        except Exception as exc:
            logger.error(
                "Analysis failed",
                extra={"error": str(exc), "error_type": type(exc).__name__},
                exc_info=True,
            )
            self.error = ErrorState(kind="internal", message=ANALYSIS_FAILED)
            return None

        self.result = result
        self.history.append(result)
        return result

    def clear_result(self) -> None:
        self.result = None
        self.error = None

    def clear_history(self) -> None:
        self.history.clear()

    def set_severity_filter(self, severities: Iterable[str]) -> None:
        wanted = frozenset(severities)
        unknown = wanted - set(SEVERITIES)
        if unknown:
            raise ValueError(f"Unknown severities: {sorted(unknown)}")
        self.severity_filter = wanted

    def set_category_filter(self, categories: Iterable[str]) -> None:
        wanted = frozenset(categories)
        unknown = wanted - set(CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown categories: {sorted(unknown)}")
        self.category_filter = wanted

    @property
    def filtered_issues(self) -> list[Issue]:
        """
        Issues of the current result after filtering. An empty filter, or
        one that names every value, keeps everything.
        """
        if self.result is None:
            return []
        issues = list(self.result.issues)
        if self.severity_filter and self.severity_filter != set(SEVERITIES):
            issues = filter_by_severity(issues, self.severity_filter)
        if self.category_filter and self.category_filter != set(CATEGORIES):
            issues = filter_by_category(issues, self.category_filter)
        return issues

    def export_report(self) -> Optional[tuple[str, str]]:
        """(filename, markdown) for the current result, or None."""
        if self.result is None:
            return None
        return report_filename(self.result), generate_report(self.result)
