"""
Mode B Workflow — Qualify, Review, Audit

An explicit state machine around the obligation simulator:

    upload → qualifying → review → analyzing → results

The caller submits content, gets a qualification to review (and edit),
then runs the audit. A failure during qualifying or analyzing puts the
workflow back on the last stable stage (upload or review) with `error`
set; reset() returns to upload from anywhere. Any other move raises
InvalidTransitionError.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional

from promocheck.analyzer import validate_content
from promocheck.config import settings
from promocheck.errors import ErrorState, InvalidTransitionError, ValidationFailure
from promocheck.findings import FindingGroup, ViewOptions, count_non_applicable, group_findings
from promocheck.logging import get_logger
from promocheck.obligations import AuditResult, Qualification, audit, qualify

logger = get_logger("workflow")

QUALIFICATION_FAILED = "Qualification failed. Please try again."
ANALYSIS_FAILED = "Analysis failed. Please try again."


class WorkflowStage(str, Enum):
    upload = "upload"
    qualifying = "qualifying"
    review = "review"
    analyzing = "analyzing"
    results = "results"


TRANSITIONS: dict[WorkflowStage, frozenset[WorkflowStage]] = {
    WorkflowStage.upload: frozenset({WorkflowStage.qualifying}),
    WorkflowStage.qualifying: frozenset({WorkflowStage.review, WorkflowStage.upload}),
    WorkflowStage.review: frozenset({WorkflowStage.analyzing, WorkflowStage.upload}),
    WorkflowStage.analyzing: frozenset({WorkflowStage.results, WorkflowStage.review}),
    WorkflowStage.results: frozenset(),
}


class ComplianceWorkflow:

    def __init__(
        self,
        *,
        fallback: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        self._fallback = fallback
        self._rng = rng
        self.view_options = ViewOptions()
        self._clear()

    def _clear(self) -> None:
        self.stage = WorkflowStage.upload
        self.content: Optional[str] = None
        self.qualification: Optional[Qualification] = None
        self.result: Optional[AuditResult] = None
        self.error: Optional[ErrorState] = None

    def _move(self, target: WorkflowStage) -> None:
        if target not in TRANSITIONS[self.stage]:
            raise InvalidTransitionError(self.stage.value, target.value)
        logger.debug(
            f"Workflow {self.stage.value} -> {target.value}",
            extra={"stage": target.value},
        )
        self.stage = target

    def _require(self, stage: WorkflowStage, action: str) -> None:
        if self.stage is not stage:
            raise InvalidTransitionError(self.stage.value, action)

    # --------------------------------------------------------
    # upload → qualifying → review
    # --------------------------------------------------------

    def set_content(self, content: str) -> None:
        self._require(WorkflowStage.upload, "set_content")
        self.content = content

    def qualify(self, content: Optional[str] = None) -> Optional[Qualification]:
        """
        Validate the content and qualify it. Returns None and sets `error`
        on failure, staying on (or going back to) upload.
        """
        self._require(WorkflowStage.upload, WorkflowStage.qualifying.value)
        if content is not None:
            self.content = content
        self.error = None

        try:
            validate_content(self.content, settings.MIN_CONTENT_CHARS)
        except ValidationFailure as exc:
            self.error = ErrorState(kind="validation", message=str(exc))
            return None

        self._move(WorkflowStage.qualifying)
        try:
            qualification = qualify(self.content)
        except Exception as exc:
            logger.error(
                "Qualification failed",
                extra={"error": str(exc), "error_type": type(exc).__name__, "stage": "qualifying"},
                exc_info=True,
            )
            self.error = ErrorState(kind="internal", message=QUALIFICATION_FAILED)
            self._move(WorkflowStage.upload)
            return None

        self.qualification = qualification
        self._move(WorkflowStage.review)
        return qualification

    def update_qualification(self, qualification: Qualification) -> None:
        """Replace the qualification under review with an edited one."""
        self._require(WorkflowStage.review, "update_qualification")
        self.qualification = qualification

    def edit_content(self) -> None:
        """Leave the review to change the submitted content."""
        self._move(WorkflowStage.upload)
        self.qualification = None

    # --------------------------------------------------------
    # review → analyzing → results
    # --------------------------------------------------------

    def analyze(self) -> Optional[AuditResult]:
        """
        Audit the content against the reviewed qualification. Returns None
        and sets `error` on failure, staying on review.
        """
        self._move(WorkflowStage.analyzing)
        self.error = None

        try:
            result = audit(
                self.content,
                self.qualification,
                fallback=self._fallback,
                rng=self._rng,
            )
        except ValidationFailure as exc:
            self.error = ErrorState(kind="validation", message=str(exc))
            self._move(WorkflowStage.review)
            return None
        except Exception as exc:
            logger.error(
                "Audit failed",
                extra={"error": str(exc), "error_type": type(exc).__name__, "stage": "analyzing"},
                exc_info=True,
            )
            self.error = ErrorState(kind="internal", message=ANALYSIS_FAILED)
            self._move(WorkflowStage.review)
            return None

        self.result = result
        self._move(WorkflowStage.results)
        return result

    # --------------------------------------------------------
    # Results view
    # --------------------------------------------------------

    def set_view_options(self, view_options: ViewOptions) -> None:
        self.view_options = view_options

    @property
    def grouped_findings(self) -> list[FindingGroup]:
        if self.result is None:
            return []
        return group_findings(self.result.analyses_by_text, self.view_options)

    @property
    def hidden_non_applicable(self) -> int:
        """NOT_APPLICABLE findings hidden by the current view options."""
        if self.result is None or self.view_options.show_non_applicable:
            return 0
        return count_non_applicable(self.result.analyses_by_text)

    def reset(self) -> None:
        self._clear()
