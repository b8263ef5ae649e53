"""
Promocheck API — Main Application

GET    /health               — Health check
GET    /rules                — List the detection rules
POST   /analyze              — Quick analysis (mode A), kept in history
GET    /history              — Recent mode A analyses, newest first
DELETE /history              — Clear the history
GET    /history/{id}/report  — Markdown report for a past analysis
POST   /qualify              — Qualify a document (mode B, phase 1)
POST   /audit                — Audit a document against its obligations
POST   /findings/group       — Group and sort audit findings for display
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.requests import Request

from promocheck.analyzer import validate_content
from promocheck.config import settings
from promocheck.errors import ValidationFailure
from promocheck.findings import ViewOptions, count_non_applicable, group_findings
from promocheck.logging import setup_logging, get_logger
from promocheck.matcher import AnalysisOptions, highlight_ranges
from promocheck.obligations import audit, qualify
from promocheck.report import generate_report, report_filename
from promocheck.rules import CATEGORIES, SEVERITIES, default_catalog
from promocheck.scorer import score_breakdown
from promocheck.session import ComplianceSession
from promocheck.schemas.analysis import (
    AnalyzeRequest,
    AnalyzeResponse,
    AuditRequest,
    AuditResponse,
    GroupFindingsRequest,
    GroupFindingsResponse,
    HealthResponse,
    HistoryResponse,
    QualificationModel,
    QualifyRequest,
    RulesResponse,
)

logger = get_logger("api")

# Single in-memory session: one history shared by every client
session = ComplianceSession(catalog=default_catalog)


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "Promocheck API starting",
        extra={"catalog_version": default_catalog.version, "rules_count": len(default_catalog)},
    )
    yield
    logger.info("Promocheck API shutting down")


app = FastAPI(
    title="Promocheck API",
    description="Regulatory compliance checks for marketing and financial promotion text",
    version=f"{settings.VERSION} (catalog {default_catalog.version})",
    lifespan=lifespan,
)

# CORS: set PROMOCHECK_CORS_ORIGINS in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# ERROR HANDLERS
# ============================================================

@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — return structured error, don't leak internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error. The analysis could not be completed.",
        },
    )


# ============================================================
# ROUTES: MODE A
# ============================================================

@app.get("/health", response_model=HealthResponse)
async def health():
    return {
        "status": "operational",
        "version": settings.VERSION,
        "catalog_version": default_catalog.version,
        "rules_count": len(default_catalog),
        "history_entries": len(session.history),
        "audit_fallback": settings.AUDIT_FALLBACK,
    }


@app.get("/rules", response_model=RulesResponse)
async def get_rules(
    category: Optional[str] = Query(None, pattern=f"^({'|'.join(CATEGORIES)})$"),
    severity: Optional[str] = Query(None, pattern=f"^({'|'.join(SEVERITIES)})$"),
):
    """Return rule metadata, optionally filtered by category and severity."""
    rules = default_catalog.describe(category=category, severity=severity)
    return {
        "catalog_version": default_catalog.version,
        "total": len(rules),
        "rules": rules,
    }


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest):
    """Check marketing text against the rule catalog."""
    options = AnalysisOptions(
        content_type=request.content_type,
        strict_mode=request.strict_mode,
        include_info_level=request.include_info_level,
        target_market=request.target_market,
    )
    result = session.analyze(request.content, options)
    if result is None:
        if session.error.kind == "validation":
            raise HTTPException(422, session.error.message)
        raise HTTPException(500, session.error.message)

    logger.info(
        f"Analysis complete: score={result.score}",
        extra={
            "result_id": result.id,
            "score": result.score,
            "issues_count": len(result.issues),
            "content_length": len(result.content),
        },
    )
    return {
        "id": result.id,
        "content": result.content,
        "timestamp": result.timestamp,
        "score": result.score,
        "issues": [asdict(issue) for issue in result.issues],
        "summary": result.summary.as_dict(),
        "catalog_version": result.catalog_version,
        "score_breakdown": score_breakdown(list(result.issues)),
        "highlights": highlight_ranges(list(result.issues)),
    }


@app.get("/history", response_model=HistoryResponse)
async def get_history():
    entries = [
        {
            "id": entry.id,
            "timestamp": entry.timestamp,
            "score": entry.score,
            "total_issues": entry.summary.total_issues,
            "preview": entry.content[:120],
        }
        for entry in session.history
    ]
    return {
        "entries": entries,
        "total": len(entries),
        "max_entries": session.history.max_entries,
    }


@app.delete("/history")
async def clear_history():
    cleared = len(session.history)
    session.clear_history()
    return {"cleared": cleared}


@app.get("/history/{result_id}/report", response_class=PlainTextResponse)
async def get_report(result_id: str):
    """Markdown report for an analysis still in the history."""
    result = session.history.get(result_id)
    if result is None:
        raise HTTPException(404, "Analysis not found in history.")
    return PlainTextResponse(
        generate_report(result),
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(result)}"'},
    )


# ============================================================
# ROUTES: MODE B
# ============================================================

@app.post("/qualify", response_model=QualificationModel)
async def qualify_document(request: QualifyRequest):
    """Classify a document and list the regulatory texts that apply."""
    validate_content(request.content, settings.MIN_CONTENT_CHARS)
    return asdict(qualify(request.content))


@app.post("/audit", response_model=AuditResponse)
async def audit_document(request: AuditRequest):
    """
    Audit a document against the obligations of its applicable texts.

    The qualification is normally the (possibly edited) output of
    /qualify; a request without one is rejected.
    """
    start = time.time()
    validate_content(request.content, settings.MIN_CONTENT_CHARS)
    qualification = request.qualification.to_qualification() if request.qualification else None

    result = audit(request.content, qualification, fallback=request.fallback)

    duration = int((time.time() - start) * 1000)
    logger.info(
        f"Audit complete: score={result.report.score} verdict={result.report.verdict}",
        extra={
            "score": result.report.score,
            "verdict": result.report.verdict,
            "findings_count": result.report.nb_checked,
            "duration_ms": duration,
        },
    )
    return asdict(result)


@app.post("/findings/group", response_model=GroupFindingsResponse)
async def group_audit_findings(request: GroupFindingsRequest):
    analyses = [text.to_analysis() for text in request.analyses_by_text]
    view_options = ViewOptions(
        group_by=request.group_by,
        show_non_applicable=request.show_non_applicable,
        sort_by=request.sort_by,
    )
    groups = group_findings(analyses, view_options)
    return {
        "groups": [asdict(group) for group in groups],
        "total_findings": sum(group.stats.total for group in groups),
        "hidden_non_applicable": (
            0 if request.show_non_applicable else count_non_applicable(analyses)
        ),
    }


# --- Security + Version Headers Middleware ---
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security and version headers to all responses."""
    response = await call_next(request)
    response.headers["X-Promocheck-Version"] = settings.VERSION
    response.headers["X-Catalog-Version"] = default_catalog.version
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)
