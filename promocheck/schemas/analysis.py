"""
API Schemas — Request and Response Models

Pydantic models for the Promocheck API. Core results are frozen
dataclasses; endpoints hand them over as dicts (dataclasses.asdict)
and these models shape and validate the JSON.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from promocheck.config import settings
from promocheck.obligations import (
    AnalysisByText,
    ApplicableText,
    CorrectiveAction,
    Finding,
    ProductType,
    Qualification,
    active_conditions_for,
)


# ============================================================
# MODE A: ANALYZE
# ============================================================

class AnalyzeRequest(BaseModel):
    """POST /analyze request body."""
    content: str = Field(..., min_length=1, max_length=settings.MAX_CONTENT_CHARS,
                         description=f"The marketing text to check (1-{settings.MAX_CONTENT_CHARS:,} characters).")
    content_type: str = Field("general", pattern="^(general|email|social|website|advertising|press)$")
    strict_mode: bool = False
    include_info_level: bool = True
    target_market: Optional[str] = None

    model_config = {"json_schema_extra": {"examples": [
        {"content": "Get 100% guaranteed results! Limited time offer, act now.", "content_type": "email"},
    ]}}


class PositionResponse(BaseModel):
    start: int
    end: int


class IssueResponse(BaseModel):
    id: str
    rule_id: str
    category: str
    severity: str
    title: str
    description: str
    matched_text: str
    position: PositionResponse
    suggestion: Optional[str] = None
    regulation: Optional[str] = None


class SummaryResponse(BaseModel):
    total_issues: int
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    info_count: int
    category_counts: dict[str, int]


class AnalyzeResponse(BaseModel):
    """POST /analyze response body."""
    id: str
    content: str
    timestamp: datetime
    score: int
    issues: list[IssueResponse]
    summary: SummaryResponse
    catalog_version: str
    score_breakdown: Optional[dict] = None
    highlights: Optional[list[dict]] = None


class HistoryEntry(BaseModel):
    id: str
    timestamp: datetime
    score: int
    total_issues: int
    preview: str


class HistoryResponse(BaseModel):
    entries: list[HistoryEntry]
    total: int
    max_entries: int


class RuleResponse(BaseModel):
    id: str
    category: str
    severity: str
    name: str
    description: str
    suggestion: Optional[str] = None
    regulation: Optional[str] = None
    pattern_count: int


class RulesResponse(BaseModel):
    catalog_version: str
    total: int
    rules: list[RuleResponse]


# ============================================================
# MODE B: QUALIFY / AUDIT
# ============================================================

class QualifyRequest(BaseModel):
    """POST /qualify request body."""
    content: str = Field(..., min_length=1, max_length=settings.MAX_CONTENT_CHARS)


class ProductTypeModel(BaseModel):
    category: str
    subcategory: Optional[str] = None
    commercial_name: Optional[str] = None


class ApplicableTextModel(BaseModel):
    code: str
    title: str
    reason: Optional[str] = None


class QualificationModel(BaseModel):
    document_type: str
    product: ProductTypeModel
    target_audience: str = Field(..., pattern="^(non_professionnel|professionnel)$")
    characteristics: dict[str, bool] = Field(default_factory=dict)
    active_conditions: list[str] = Field(default_factory=list)
    applicable_texts: list[ApplicableTextModel] = Field(default_factory=list)

    def to_qualification(self) -> Qualification:
        """Core Qualification; condition tags are rebuilt when left empty."""
        conditions = tuple(self.active_conditions) or active_conditions_for(
            self.product.category, self.target_audience, self.characteristics,
        )
        return Qualification(
            document_type=self.document_type,
            product=ProductType(**self.product.model_dump()),
            target_audience=self.target_audience,
            characteristics=dict(self.characteristics),
            active_conditions=conditions,
            applicable_texts=tuple(
                ApplicableText(**text.model_dump()) for text in self.applicable_texts
            ),
        )


class AuditRequest(BaseModel):
    """POST /audit request body."""
    content: str = Field(..., min_length=1, max_length=settings.MAX_CONTENT_CHARS)
    qualification: Optional[QualificationModel] = None
    fallback: Optional[str] = Field(None, pattern="^(not_verifiable|simulated)$")


class CorrectiveActionModel(BaseModel):
    type: str
    full_text: str
    location: str


class FindingModel(BaseModel):
    obligation_id: str
    status: str = Field(..., pattern="^(COMPLIANT|NON_COMPLIANT|IMPROVEMENT|NOT_APPLICABLE|NOT_VERIFIABLE)$")
    criticality_level: int = Field(..., ge=1, le=4)
    criticality: str
    comment: str = ""
    excerpt: Optional[str] = None
    corrective_action: Optional[CorrectiveActionModel] = None


class AnalysisByTextModel(BaseModel):
    document_source: str
    title: str
    nb_total: int
    nb_compliant: int
    nb_non_compliant: int
    nb_improvement: int
    nb_not_applicable: int
    nb_not_verifiable: int = 0
    findings: list[FindingModel]

    def to_analysis(self) -> AnalysisByText:
        return AnalysisByText(
            document_source=self.document_source,
            title=self.title,
            nb_total=self.nb_total,
            nb_compliant=self.nb_compliant,
            nb_non_compliant=self.nb_non_compliant,
            nb_improvement=self.nb_improvement,
            nb_not_applicable=self.nb_not_applicable,
            nb_not_verifiable=self.nb_not_verifiable,
            findings=tuple(
                Finding(
                    obligation_id=f.obligation_id,
                    status=f.status,
                    criticality_level=f.criticality_level,
                    criticality=f.criticality,
                    comment=f.comment,
                    excerpt=f.excerpt,
                    corrective_action=(
                        CorrectiveAction(**f.corrective_action.model_dump())
                        if f.corrective_action else None
                    ),
                )
                for f in self.findings
            ),
        )


class AuditReportModel(BaseModel):
    verdict: str
    nb_checked: int
    nb_compliant: int
    nb_non_compliant: int
    nb_improvement: int
    nb_not_applicable: int
    nb_not_verifiable: int
    score: int


class MissingMentionModel(BaseModel):
    obligation_id: str
    full_text: str
    location: str
    format: str


class AuditResponse(BaseModel):
    """POST /audit response body."""
    qualification: QualificationModel
    report: AuditReportModel
    analyses_by_text: list[AnalysisByTextModel]
    missing_mentions: list[MissingMentionModel]
    synthesis: str
    fallback: str


# ============================================================
# FINDING GROUPS
# ============================================================

class GroupFindingsRequest(BaseModel):
    """POST /findings/group request body."""
    analyses_by_text: list[AnalysisByTextModel]
    group_by: str = Field("text", pattern="^(text|status|criticality)$")
    show_non_applicable: bool = False
    sort_by: str = Field("criticality_desc",
                         pattern="^(criticality_desc|criticality_asc|status|alphabetical)$")


class EnrichedFindingModel(FindingModel):
    document_source: str
    source_title: str


class FindingStatsModel(BaseModel):
    total: int
    compliant: int
    non_compliant: int
    improvement: int
    not_applicable: int
    not_verifiable: int


class FindingGroupModel(BaseModel):
    key: str
    label: str
    description: Optional[str] = None
    findings: list[EnrichedFindingModel]
    stats: FindingStatsModel


class GroupFindingsResponse(BaseModel):
    groups: list[FindingGroupModel]
    total_findings: int
    hidden_non_applicable: int


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    version: str
    catalog_version: str
    rules_count: int
    history_entries: int
    audit_fallback: str
