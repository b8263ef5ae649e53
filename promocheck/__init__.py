"""
Promocheck — Marketing Compliance Checker

Flags regulatory issues in marketing and financial promotion text.

Public API:
  - analyze_content:  Quick analysis against the rule catalog (mode A)
  - default_catalog:  The built-in, read-only rule catalog
  - qualify / audit:  Qualify a document, then audit it against the
                      obligations of its regulatory texts (mode B)
  - group_findings:   Grouped, sorted view of audit findings
  - generate_report:  Markdown export of a mode A result
  - ComplianceSession / ComplianceWorkflow: stateful wrappers for
                      mode A and mode B

Usage:
    from promocheck import analyze_content, qualify, audit
    result = analyze_content(text)
    audit_result = audit(text, qualify(text))
"""

__version__ = "0.4.0"

from promocheck.rules import (
    ComplianceRule,
    RuleCatalog,
    default_catalog,
    CATEGORIES,
    SEVERITIES,
)
from promocheck.matcher import AnalysisOptions, Issue, detect_issues
from promocheck.scorer import AnalysisSummary, calculate_score, summarize
from promocheck.analyzer import AnalysisResult, analyze_content
from promocheck.obligations import AuditResult, Qualification, audit, qualify
from promocheck.findings import FindingGroup, ViewOptions, group_findings
from promocheck.report import generate_report
from promocheck.history import AnalysisHistory
from promocheck.session import ComplianceSession
from promocheck.workflow import ComplianceWorkflow, WorkflowStage

__all__ = [
    "ComplianceRule",
    "RuleCatalog",
    "default_catalog",
    "CATEGORIES",
    "SEVERITIES",
    "AnalysisOptions",
    "Issue",
    "detect_issues",
    "AnalysisSummary",
    "calculate_score",
    "summarize",
    "AnalysisResult",
    "analyze_content",
    "AuditResult",
    "Qualification",
    "audit",
    "qualify",
    "FindingGroup",
    "ViewOptions",
    "group_findings",
    "generate_report",
    "AnalysisHistory",
    "ComplianceSession",
    "ComplianceWorkflow",
    "WorkflowStage",
]
