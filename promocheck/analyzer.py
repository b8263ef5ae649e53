"""
Analyzer — Mode A Orchestrator

Coordinates the rule catalog, the matcher and the scorer into one
immutable AnalysisResult per call. Analysis is synchronous and
deterministic apart from the result id and timestamp.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from promocheck.config import settings
from promocheck.errors import ContentValidationError
from promocheck.logging import get_logger
from promocheck.matcher import AnalysisOptions, Issue, detect_issues
from promocheck.rules import RuleCatalog, default_catalog
from promocheck.scorer import AnalysisSummary, calculate_score, summarize

logger = get_logger("analyzer")


@dataclass(frozen=True)
class AnalysisResult:
    """Result of a mode A analysis. Never mutated after creation."""
    id: str
    content: str
    timestamp: datetime
    issues: tuple[Issue, ...]
    score: int
    summary: AnalysisSummary
    options: AnalysisOptions = field(default_factory=AnalysisOptions)
    catalog_version: str = ""


def analyze_content(
    content: str,
    options: Optional[AnalysisOptions] = None,
    catalog: Optional[RuleCatalog] = None,
) -> AnalysisResult:
    """
    Analyze marketing content for compliance issues.

    Args:
        content: The text to analyze. Length checks are the caller's job.
        options: Analysis options; defaults include info-level rules.
        catalog: Rule catalog to run. Defaults to the built-in catalog.
    """
    options = options or AnalysisOptions()
    catalog = catalog if catalog is not None else default_catalog
    start = time.perf_counter()

    issues = detect_issues(content, catalog, options)
    score = calculate_score(issues)
    summary = summarize(issues)

    result = AnalysisResult(
        id=uuid.uuid4().hex,
        content=content,
        timestamp=datetime.now(timezone.utc),
        issues=tuple(issues),
        score=score,
        summary=summary,
        options=options,
        catalog_version=catalog.version,
    )

    logger.debug(
        "Content analyzed",
        extra={
            "result_id": result.id,
            "score": score,
            "issues_count": len(issues),
            "content_length": len(content),
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        },
    )
    return result


def validate_content(content: Optional[str], min_chars: int = 1) -> str:
    """
    Check submitted content and return it unchanged.

    Raises:
        ContentValidationError: blank, shorter than min_chars once
            stripped, or longer than MAX_CONTENT_CHARS.
    """
    stripped = (content or "").strip()
    if not stripped:
        raise ContentValidationError("Please enter some content to analyze", length=0)
    if len(stripped) < min_chars:
        raise ContentValidationError(
            f"Content must contain at least {min_chars} characters",
            length=len(stripped),
        )
    if len(content) > settings.MAX_CONTENT_CHARS:
        raise ContentValidationError(
            f"Content must not exceed {settings.MAX_CONTENT_CHARS} characters",
            length=len(content),
        )
    return content
