"""
Obligation Simulator — Qualify, Then Audit

Mode B of the checker. Two phases:

  1. qualify(content)  — classify the document (product category,
     document type, audience, characteristics) and select the
     regulatory texts whose obligations apply.
  2. audit(content, qualification) — evaluate every obligation of every
     applicable text with keyword heuristics and roll the findings up
     into a verdict, a score, missing mandatory mentions and a synthesis.

Both phases are heuristics over the raw text. There is no language
understanding here; the aim is a plausible first pass a compliance
officer then reviews.

The only non-deterministic path is the "simulated" fallback for
obligations that no heuristic can decide. The default fallback marks
them NOT_VERIFIABLE instead.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, replace
from typing import Optional

from promocheck.config import settings
from promocheck.errors import QualificationRequiredError
from promocheck.logging import get_logger

logger = get_logger("obligations")


# ============================================================
# VOCABULARIES
# ============================================================

COMPLIANT = "COMPLIANT"
NON_COMPLIANT = "NON_COMPLIANT"
IMPROVEMENT = "IMPROVEMENT"
NOT_APPLICABLE = "NOT_APPLICABLE"
NOT_VERIFIABLE = "NOT_VERIFIABLE"

FINDING_STATUSES: tuple[str, ...] = (
    COMPLIANT, NON_COMPLIANT, IMPROVEMENT, NOT_APPLICABLE, NOT_VERIFIABLE,
)

VERDICT_COMPLIANT = "compliant"
VERDICT_NEEDS_REVIEW = "needs_review"
VERDICT_NON_COMPLIANT = "non_compliant"

ACTION_ADD = "ADD"
ACTION_MODIFY = "MODIFY"
ACTION_REMOVE = "REMOVE"

# Anything below Major (Minor, Info, unknown) is level 2
CRITICALITY_LEVELS: dict[str, int] = {
    "Critical": 4,
    "Major": 3,
}

FALLBACK_NOT_VERIFIABLE = "not_verifiable"
FALLBACK_SIMULATED = "simulated"

PRODUCT_CATEGORIES: tuple[str, ...] = (
    "OPCVM", "FIA", "SCPI", "OPCI", "GFI", "SOFICA", "FCPR", "FCPI", "FIP",
    "ETF", "titre_creance_complexe", "EMTN", "produit_structure", "autre",
)

DOCUMENT_TYPES: tuple[str, ...] = (
    "brochure", "page_web", "email", "reseaux_sociaux", "presentation",
    "fiche_produit", "autre",
)

TARGET_AUDIENCES: tuple[str, ...] = ("non_professionnel", "professionnel")

COLLECTIVE_INVESTMENT = ("OPCVM", "FIA", "SCPI", "OPCI", "ETF")
COMPLEX_DEBT = ("produit_structure", "EMTN", "titre_creance_complexe")

REGULATORY_TEXTS: dict[str, dict[str, str]] = {
    "DOC-2011-24": {
        "title": "Communications publicitaires OPC",
        "description": "Collective investments and SOFICA",
    },
    "DOC-2010-05": {
        "title": "Instruments complexes",
        "description": "Structured products, EMTN, debt securities",
    },
    "DOC-2017-06": {
        "title": "Biens divers",
        "description": "Art, wine, forests, diamonds",
    },
    "ESMA34-45-1272": {
        "title": "Guidelines MiFID II publicités",
        "description": "Marketing communications for financial instruments",
    },
    "DOC-2020-03": {
        "title": "ESG / Finance durable",
        "description": "ESG and sustainable finance claims",
    },
}


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class ProductType:
    category: str
    subcategory: Optional[str] = None
    commercial_name: Optional[str] = None


@dataclass(frozen=True)
class ApplicableText:
    code: str
    title: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class Qualification:
    """Classified profile of a document. Edit with dataclasses.replace()."""
    document_type: str
    product: ProductType
    target_audience: str
    characteristics: dict[str, bool]
    active_conditions: tuple[str, ...]
    applicable_texts: tuple[ApplicableText, ...]


@dataclass(frozen=True)
class Obligation:
    id: str
    description: str
    criticality: str                  # "Critical" | "Major" | "Minor" | "Info"
    topic: Optional[str] = None       # "risk" | "promotional" | "fees"


@dataclass(frozen=True)
class CorrectiveAction:
    type: str                         # ADD | MODIFY | REMOVE
    full_text: str
    location: str


@dataclass(frozen=True)
class Finding:
    obligation_id: str
    status: str
    criticality_level: int
    criticality: str
    comment: str
    excerpt: Optional[str] = None
    corrective_action: Optional[CorrectiveAction] = None


@dataclass(frozen=True)
class MissingMention:
    obligation_id: str
    full_text: str
    location: str
    format: str


@dataclass(frozen=True)
class AnalysisByText:
    document_source: str
    title: str
    nb_total: int
    nb_compliant: int
    nb_non_compliant: int
    nb_improvement: int
    nb_not_applicable: int
    nb_not_verifiable: int
    findings: tuple[Finding, ...]


@dataclass(frozen=True)
class AuditReport:
    verdict: str
    nb_checked: int
    nb_compliant: int
    nb_non_compliant: int
    nb_improvement: int
    nb_not_applicable: int
    nb_not_verifiable: int
    score: int


@dataclass(frozen=True)
class AuditResult:
    qualification: Qualification
    report: AuditReport
    analyses_by_text: tuple[AnalysisByText, ...]
    missing_mentions: tuple[MissingMention, ...]
    synthesis: str
    fallback: str = FALLBACK_NOT_VERIFIABLE


# ============================================================
# OBLIGATION CHECKLISTS
# ============================================================

OBLIGATIONS: dict[str, tuple[Obligation, ...]] = {
    "DOC-2011-24": (
        Obligation("DOC-2011-24-1", "Promotional nature of the document is stated", "Major", "promotional"),
        Obligation("DOC-2011-24-2", "Balance between advantages and risks", "Critical", "risk"),
        Obligation("DOC-2011-24-3", "Capital loss risk warning", "Critical", "risk"),
        Obligation("DOC-2011-24-4", "Fees are disclosed", "Major", "fees"),
        Obligation("DOC-2011-24-5", "Reference to the KID / KIID", "Major"),
        Obligation("DOC-2011-24-6", "Past performance shown with its disclaimer", "Major"),
        Obligation("DOC-2011-24-7", "Management company is identified", "Minor"),
    ),
    "DOC-2010-05": (
        Obligation("DOC-2010-05-1", "Total capital loss risk is mentioned", "Critical", "risk"),
        Obligation("DOC-2010-05-2", "Product mechanism is explained", "Major"),
        Obligation("DOC-2010-05-3", "Performance scenarios are presented", "Major"),
        Obligation("DOC-2010-05-4", "Product complexity is mentioned", "Major"),
    ),
    "ESMA34-45-1272": (
        Obligation("ESMA-1", "Information is clear and not misleading", "Critical"),
        Obligation("ESMA-2", "Identified as a marketing communication", "Major"),
        Obligation("ESMA-3", "Consistent with the regulatory documentation", "Major"),
    ),
    "DOC-2020-03": (
        Obligation("DOC-2020-03-1", "Extra-financial claims proportionate to the ESG approach", "Major"),
        Obligation("DOC-2020-03-2", "SFDR classification (Article 8 / 9) is referenced", "Major"),
        Obligation("DOC-2020-03-3", "Sustainability labels are cited accurately", "Minor"),
    ),
}

# Mandatory wording to insert, keyed by obligation id (AMF wording is French)
MISSING_MENTIONS: dict[str, str] = {
    "DOC-2011-24-1": "Document à caractère promotionnel",
    "DOC-2011-24-2": "Les performances passées ne préjugent pas des performances futures.",
    "DOC-2011-24-3": "Risque de perte en capital. Le capital investi n'est pas garanti.",
    "DOC-2011-24-5": (
        "Avant tout investissement, veuillez consulter le Document "
        "d'Information Clé (DIC)."
    ),
    "DOC-2010-05-1": "Ce produit présente un risque de perte totale du capital investi.",
    "ESMA-2": "Communication à caractère promotionnel",
    "DOC-2020-03-2": (
        "Ce produit promeut des caractéristiques environnementales ou sociales "
        "au sens de l'article 8 du règlement (UE) 2019/2088 (SFDR)."
    ),
}

GENERIC_MENTION = "Mention réglementaire requise"
MENTION_LOCATION = "Document header or footer"
MENTION_FORMAT = "Legible and visible"
ACTION_LOCATION = "To be defined according to the document format"


def obligations_for(code: str) -> tuple[Obligation, ...]:
    """Checklist of a regulatory text; empty for texts without one."""
    return OBLIGATIONS.get(code, ())


def missing_mention_text(obligation_id: str) -> str:
    return MISSING_MENTIONS.get(obligation_id, GENERIC_MENTION)


# ============================================================
# KEYWORDS
# ============================================================

def _keyword_patterns(words, negatable: bool = False):
    """
    Compile keywords into (word, pattern) pairs.

    Keywords match at a word start and may continue ("risque" hits
    "risques"); keywords of four characters or less must also end on a
    word boundary so acronyms like "dic" or "fee" stay whole. Negatable
    keywords are ignored right after "non", "not" or "pas".
    """
    compiled = []
    for word in words:
        head = r"(?<!\w)"
        if negatable:
            head += r"(?<!non )(?<!not )(?<!pas )"
        tail = r"(?!\w)" if len(word) <= 4 else ""
        compiled.append((word, re.compile(head + re.escape(word) + tail, re.IGNORECASE)))
    return tuple(compiled)


RISK_KEYWORDS = _keyword_patterns((
    "risque", "perte", "risk", "risks", "loss", "losses",
))
PROMOTIONAL_KEYWORDS = _keyword_patterns((
    "promotionnel", "publicitaire", "publicité",
    "promotional", "marketing communication", "advertisement",
))
FEE_KEYWORDS = _keyword_patterns((
    "frais", "commission", "coût", "coûts", "fee", "fees", "charges",
))
POSITIVE_KEYWORDS = _keyword_patterns((
    "risque", "perte", "capital", "frais", "commission", "avertissement",
    "attention", "dic", "dici", "prospectus", "disclaimer", "performance passée",
    "société de gestion", "agrément", "amf", "promotionnel", "publicitaire",
    "risk", "loss", "fees", "warning", "key information document",
    "past performance", "management company",
))
MISLEADING_KEYWORDS = _keyword_patterns((
    "garanti", "sans risque", "rendement assuré", "opportunité unique",
    "meilleur", "exceptionnel", "inratable", "fortune", "enrichissement",
    "guaranteed", "risk-free", "no risk", "assured return", "unique opportunity",
    "exceptional", "get rich",
), negatable=True)


def _find_keyword(content: str, keywords) -> Optional[tuple[str, re.Match]]:
    """First keyword (in list order) present in content, with its match."""
    for word, pattern in keywords:
        match = pattern.search(content)
        if match:
            return word, match
    return None


def _excerpt(content: str, match: re.Match, width: int) -> str:
    """Up to `width` characters either side of a match, same line only."""
    line_start = content.rfind("\n", 0, match.start()) + 1
    line_end = content.find("\n", match.end())
    if line_end == -1:
        line_end = len(content)
    start = max(line_start, match.start() - width)
    end = min(line_end, match.end() + width)
    return content[start:end]


# ============================================================
# PHASE 1: QUALIFY
# ============================================================

# Order matters: first match wins
_CATEGORY_RULES: tuple[tuple[str, re.Pattern], ...] = (
    ("SCPI", re.compile(r"\bscpi\b", re.IGNORECASE)),
    ("OPCVM", re.compile(r"\bopcvm\b", re.IGNORECASE)),
    ("FIA", re.compile(r"\bfia\b", re.IGNORECASE)),
    ("ETF", re.compile(r"\betfs?\b", re.IGNORECASE)),
    ("produit_structure", re.compile(r"\bstructur(?:é|e|ed)e?s?\b", re.IGNORECASE)),
    ("EMTN", re.compile(r"\bemtn\b", re.IGNORECASE)),
)
DEFAULT_CATEGORY = "OPCVM"

_DOCUMENT_TYPE_RULES: tuple[tuple[str, tuple], ...] = (
    ("email", _keyword_patterns(("email", "e-mail", "newsletter"))),
    ("page_web", _keyword_patterns(("site", "website", "page web", "web page"))),
    ("reseaux_sociaux", _keyword_patterns(("réseaux sociaux", "linkedin", "social media"))),
)
DEFAULT_DOCUMENT_TYPE = "brochure"

_PROFESSIONAL = _keyword_patterns(("professionnel", "professional investor", "professional client"))
_RETAIL = _keyword_patterns((
    "non professionnel", "non-professionnel", "non professional", "non-professional", "retail",
))

_PERCENTAGE = re.compile(r"\d+(?:[.,]\d+)?\s*%")
_PERFORMANCE = _keyword_patterns(("performance",))
_FEES = _keyword_patterns(("frais", "commission", "fee", "fees"))
_CAPITAL_RISK = _keyword_patterns(("perte", "risque", "risk", "loss"))
_ESG = _keyword_patterns(("esg", "durable", "responsable", "sustainable", "isr"))

_CATEGORY_CONDITIONS: dict[str, str] = {
    "OPCVM": "SI_OPCVM",
    "FIA": "SI_FIA",
    "SCPI": "SI_SCPI",
    "OPCI": "SI_OPCI",
    "ETF": "SI_ETF",
    "produit_structure": "SI_PRODUIT_STRUCTURE",
    "EMTN": "SI_TITRE_CREANCE_COMPLEXE",
    "titre_creance_complexe": "SI_TITRE_CREANCE_COMPLEXE",
}

_NAME = r"([A-Z][\w'-]*(?:[ \t]+[A-Z0-9][\w'-]*)*)"
_COMMERCIAL_NAME_PATTERNS = (
    re.compile(r"(?i:\b(?:fonds|fund|opcvm|fia|scpi|etf))\s+[«\"“]?\s*" + _NAME),
    re.compile(r"[«\"“]\s*" + _NAME + r"\s*[»\"”]\s+(?i:est|propose|offre|is|offers)\b"),
)


def qualify(content: str) -> Qualification:
    """
    Classify a document. Pure: the same content always gives the same
    qualification.
    """
    category = _detect_category(content)
    characteristics = {
        "performances_affichees": bool(
            _PERCENTAGE.search(content) or _find_keyword(content, _PERFORMANCE)
        ),
        "frais_affiches": _find_keyword(content, _FEES) is not None,
        "risque_perte_capital": _find_keyword(content, _CAPITAL_RISK) is not None,
        "esg": _find_keyword(content, _ESG) is not None,
    }
    target_audience = _detect_audience(content)

    qualification = Qualification(
        document_type=_detect_document_type(content),
        product=ProductType(
            category=category,
            commercial_name=extract_commercial_name(content),
        ),
        target_audience=target_audience,
        characteristics=characteristics,
        active_conditions=active_conditions_for(category, target_audience, characteristics),
        applicable_texts=applicable_texts_for(category, characteristics),
    )
    logger.debug(
        "Document qualified",
        extra={"stage": "qualify", "content_length": len(content)},
    )
    return qualification


def _detect_category(content: str) -> str:
    for category, pattern in _CATEGORY_RULES:
        if pattern.search(content):
            return category
    return DEFAULT_CATEGORY


def _detect_document_type(content: str) -> str:
    for document_type, keywords in _DOCUMENT_TYPE_RULES:
        if _find_keyword(content, keywords):
            return document_type
    return DEFAULT_DOCUMENT_TYPE


def _detect_audience(content: str) -> str:
    if _find_keyword(content, _PROFESSIONAL) and not _find_keyword(content, _RETAIL):
        return "professionnel"
    return "non_professionnel"


def extract_commercial_name(content: str) -> Optional[str]:
    """Best-effort product name: a title-cased phrase after a trigger word."""
    for pattern in _COMMERCIAL_NAME_PATTERNS:
        match = pattern.search(content)
        if match:
            return match.group(1).strip()
    return None


def applicable_texts_for(
    category: str,
    characteristics: dict[str, bool],
) -> tuple[ApplicableText, ...]:
    """
    Regulatory texts for a product category, in assembly order:
    collective investment, complex debt, universal MiFID II guidelines,
    then ESG.
    """
    texts = []
    if category in COLLECTIVE_INVESTMENT:
        texts.append(ApplicableText(
            code="DOC-2011-24",
            title=REGULATORY_TEXTS["DOC-2011-24"]["title"],
            reason="Collective investment product",
        ))
    if category in COMPLEX_DEBT:
        texts.append(ApplicableText(
            code="DOC-2010-05",
            title=REGULATORY_TEXTS["DOC-2010-05"]["title"],
            reason="Structured product or debt security",
        ))
    texts.append(ApplicableText(
        code="ESMA34-45-1272",
        title=REGULATORY_TEXTS["ESMA34-45-1272"]["title"],
        reason="Applies to every marketing communication",
    ))
    if characteristics.get("esg"):
        texts.append(ApplicableText(
            code="DOC-2020-03",
            title=REGULATORY_TEXTS["DOC-2020-03"]["title"],
            reason="ESG claims detected",
        ))
    return tuple(texts)


def active_conditions_for(
    category: str,
    target_audience: str,
    characteristics: dict[str, bool],
) -> tuple[str, ...]:
    conditions = ["TOUJOURS"]
    if category in _CATEGORY_CONDITIONS:
        conditions.append(_CATEGORY_CONDITIONS[category])
    if target_audience == "non_professionnel":
        conditions.append("SI_PUBLIC_NON_PROFESSIONNEL")
    else:
        conditions.append("SI_PUBLIC_PROFESSIONNEL")
    if characteristics.get("performances_affichees"):
        conditions.append("SI_PERFORMANCES_AFFICHEES")
    if characteristics.get("frais_affiches"):
        conditions.append("SI_FRAIS_AFFICHES")
    if characteristics.get("risque_perte_capital"):
        conditions.append("SI_RISQUE_PERTE_CAPITAL")
    if characteristics.get("esg"):
        conditions.append("SI_ESG")
    return tuple(conditions)


def with_category(qualification: Qualification, category: str) -> Qualification:
    """
    Re-categorise a qualification, rebuilding the dependent condition
    tags and applicable texts with the same rules qualify() uses.
    """
    return replace(
        qualification,
        product=replace(qualification.product, category=category),
        active_conditions=active_conditions_for(
            category, qualification.target_audience, qualification.characteristics,
        ),
        applicable_texts=applicable_texts_for(category, qualification.characteristics),
    )


# ============================================================
# PHASE 2: AUDIT
# ============================================================

def audit(
    content: str,
    qualification: Optional[Qualification],
    *,
    fallback: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> AuditResult:
    """
    Evaluate every obligation of every applicable text against content.

    Args:
        content: The document text.
        qualification: Output of qualify(), possibly edited.
        fallback: What to do with obligations no heuristic decides:
            "not_verifiable" (default, deterministic) or "simulated"
            (60% compliant / 20% improvement / 20% not applicable).
        rng: Random source for the simulated fallback.

    Raises:
        QualificationRequiredError: no qualification, or one without
            any applicable text.
    """
    if qualification is None:
        raise QualificationRequiredError("Qualification required before analysis")
    if not qualification.applicable_texts:
        raise QualificationRequiredError("Qualification has no applicable regulatory text")

    fallback = fallback or settings.AUDIT_FALLBACK
    if fallback not in (FALLBACK_NOT_VERIFIABLE, FALLBACK_SIMULATED):
        raise ValueError(f"Unknown audit fallback: {fallback!r}")
    if fallback == FALLBACK_SIMULATED and rng is None:
        rng = random.Random()

    analyses: list[AnalysisByText] = []
    missing: list[MissingMention] = []
    totals = {status: 0 for status in FINDING_STATUSES}

    for text in qualification.applicable_texts:
        findings = []
        for obligation in obligations_for(text.code):
            finding = evaluate_obligation(obligation, content, fallback=fallback, rng=rng)
            findings.append(finding)
            totals[finding.status] += 1

            if finding.status == NON_COMPLIANT and finding.criticality_level >= 3:
                missing.append(MissingMention(
                    obligation_id=finding.obligation_id,
                    full_text=missing_mention_text(obligation.id),
                    location=MENTION_LOCATION,
                    format=MENTION_FORMAT,
                ))

        analyses.append(_rollup(text, findings))

    scored = totals[COMPLIANT] + totals[NON_COMPLIANT] + totals[IMPROVEMENT]
    score = round(100 * totals[COMPLIANT] / scored) if scored > 0 else 0

    report = AuditReport(
        verdict=verdict_for(score),
        nb_checked=sum(totals.values()),
        nb_compliant=totals[COMPLIANT],
        nb_non_compliant=totals[NON_COMPLIANT],
        nb_improvement=totals[IMPROVEMENT],
        nb_not_applicable=totals[NOT_APPLICABLE],
        nb_not_verifiable=totals[NOT_VERIFIABLE],
        score=score,
    )

    logger.info(
        f"Audit complete: score={score} verdict={report.verdict}",
        extra={
            "stage": "audit",
            "score": score,
            "verdict": report.verdict,
            "findings_count": report.nb_checked,
            "content_length": len(content),
        },
    )

    return AuditResult(
        qualification=qualification,
        report=report,
        analyses_by_text=tuple(analyses),
        missing_mentions=tuple(missing),
        synthesis=build_synthesis(report, qualification),
        fallback=fallback,
    )


def evaluate_obligation(
    obligation: Obligation,
    content: str,
    *,
    fallback: str = FALLBACK_NOT_VERIFIABLE,
    rng: Optional[random.Random] = None,
) -> Finding:
    """
    Decide one obligation. Checks run in a fixed order and the first
    one that applies wins: topic checks (risk, promotional, fees), then
    misleading wording, then general compliance wording, then fallback.
    """
    excerpt = None

    if obligation.topic == "risk":
        hit = _find_keyword(content, RISK_KEYWORDS)
        if hit is None:
            status = NON_COMPLIANT
            comment = "No risk disclosure was found in the document."
        else:
            status = COMPLIANT
            comment = "Risk is mentioned in the document."
            excerpt = _excerpt(content, hit[1], 50)

    elif obligation.topic == "promotional":
        if _find_keyword(content, PROMOTIONAL_KEYWORDS) is None:
            status = NON_COMPLIANT
            comment = "The promotional nature of the document is not stated."
        else:
            status = COMPLIANT
            comment = "The promotional nature of the document is stated."

    elif obligation.topic == "fees":
        if _find_keyword(content, FEE_KEYWORDS) is None:
            status = IMPROVEMENT
            comment = "Fees are not explicitly mentioned."
        else:
            status = COMPLIANT
            comment = "Fees are mentioned."

    elif (hit := _find_keyword(content, MISLEADING_KEYWORDS)) is not None:
        status = NON_COMPLIANT
        comment = f'Potentially misleading term detected: "{hit[0]}"'
        excerpt = _excerpt(content, hit[1], 30)

    elif _find_keyword(content, POSITIVE_KEYWORDS) is not None:
        status = COMPLIANT
        comment = "The required elements appear to be present."

    elif fallback == FALLBACK_SIMULATED:
        status, comment = _simulated_status(rng or random.Random())

    else:
        status = NOT_VERIFIABLE
        comment = "No indicator found in the document; manual review required."

    return Finding(
        obligation_id=obligation.id,
        status=status,
        criticality_level=CRITICALITY_LEVELS.get(obligation.criticality, 2),
        criticality=obligation.criticality,
        comment=comment,
        excerpt=excerpt,
        corrective_action=(
            CorrectiveAction(
                type=ACTION_ADD,
                full_text=missing_mention_text(obligation.id),
                location=ACTION_LOCATION,
            )
            if status == NON_COMPLIANT else None
        ),
    )


def _simulated_status(rng: random.Random) -> tuple[str, str]:
    roll = rng.random()
    if roll < 0.6:
        return COMPLIANT, "Obligation met."
    if roll < 0.8:
        return IMPROVEMENT, "Could be improved for clarity."
    return NOT_APPLICABLE, "Not applicable in this context."


def _rollup(text: ApplicableText, findings: list[Finding]) -> AnalysisByText:
    counts = {status: 0 for status in FINDING_STATUSES}
    for finding in findings:
        counts[finding.status] += 1
    return AnalysisByText(
        document_source=text.code,
        title=text.title,
        nb_total=len(findings),
        nb_compliant=counts[COMPLIANT],
        nb_non_compliant=counts[NON_COMPLIANT],
        nb_improvement=counts[IMPROVEMENT],
        nb_not_applicable=counts[NOT_APPLICABLE],
        nb_not_verifiable=counts[NOT_VERIFIABLE],
        findings=tuple(findings),
    )


def verdict_for(score: int) -> str:
    if score >= 80:
        return VERDICT_COMPLIANT
    if score >= 50:
        return VERDICT_NEEDS_REVIEW
    return VERDICT_NON_COMPLIANT


def build_synthesis(report: AuditReport, qualification: Qualification) -> str:
    score = report.score
    if score >= 80:
        synthesis = (
            f"This marketing document for {qualification.product.category} shows "
            f"a good level of compliance ({score}%). "
        )
    elif score >= 50:
        synthesis = f"This marketing document needs adjustments. Compliance score: {score}%. "
    else:
        synthesis = (
            f"WARNING: this document shows significant non-compliance "
            f"(score: {score}%). A thorough review is recommended. "
        )

    if report.nb_non_compliant > 0:
        synthesis += f"{report.nb_non_compliant} non-compliance issue(s) require correction. "
    if report.nb_improvement > 0:
        synthesis += f"{report.nb_improvement} improvement(s) suggested to strengthen compliance. "
    if report.nb_not_verifiable > 0:
        synthesis += (
            f"{report.nb_not_verifiable} obligation(s) could not be verified "
            f"automatically and need manual review."
        )
    return synthesis.strip()
