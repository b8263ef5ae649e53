"""
Rule Catalog — Curated Detection Rules

The catalog defines what the matcher looks for:
  1. The severity scale and the category taxonomy (fixed vocabularies)
  2. The detection rules: compiled patterns + remediation metadata
  3. RuleCatalog, the validated read-only table the matcher consumes

Rules are data. The catalog is built once at import time and never
mutated; a pattern that does not compile or a rule that references an
unknown severity or category is rejected when the catalog is built,
not when a request is served.

Sources: FTC advertising guides, FDA/DSHEA, GDPR/CCPA/CAN-SPAM, COPPA,
and AMF / ESMA guidance for financial promotions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional

from promocheck.config import settings
from promocheck.errors import CatalogError

CATALOG_VERSION = settings.CATALOG_VERSION

I = re.IGNORECASE


# ============================================================
# VOCABULARIES
# ============================================================

# Ordered most to least severe
SEVERITIES: tuple[str, ...] = ("critical", "high", "medium", "low", "info")

CATEGORIES: tuple[str, ...] = (
    "misleading_claims",
    "unsubstantiated_claims",
    "pricing_issues",
    "disclaimer_missing",
    "prohibited_terms",
    "comparative_advertising",
    "testimonial_issues",
    "urgency_manipulation",
    "hidden_conditions",
    "data_privacy",
    "environmental_claims",
    "health_claims",
    "financial_claims",
    "target_audience",
)

CATEGORY_LABELS: dict[str, str] = {
    "misleading_claims": "Misleading Claims",
    "unsubstantiated_claims": "Unsubstantiated Claims",
    "pricing_issues": "Pricing Issues",
    "disclaimer_missing": "Missing Disclaimers",
    "prohibited_terms": "Prohibited Terms",
    "comparative_advertising": "Comparative Advertising",
    "testimonial_issues": "Testimonial Issues",
    "urgency_manipulation": "Urgency Manipulation",
    "hidden_conditions": "Hidden Conditions",
    "data_privacy": "Data Privacy",
    "environmental_claims": "Environmental Claims",
    "health_claims": "Health Claims",
    "financial_claims": "Financial Claims",
    "target_audience": "Target Audience",
}

SEVERITY_LABELS: dict[str, str] = {
    "critical": "Critical",
    "high": "High",
    "medium": "Medium",
    "low": "Low",
    "info": "Info",
}

CONTENT_TYPES: dict[str, str] = {
    "email": "Promotional emails, newsletters, drip campaigns",
    "social": "Posts, ads, and content for social platforms",
    "website": "Landing pages, product descriptions, CTAs",
    "advertising": "Display ads, video scripts, print materials",
    "press": "Company announcements, news releases",
}


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class ComplianceRule:
    """
    A single detection rule.

    A rule fires once per distinct span matched by any of its patterns.
    Patterns are tried in order; case sensitivity is a property of each
    compiled pattern, so proper-noun heuristics can stay case-sensitive
    while keyword rules ignore case.
    """
    id: str
    category: str
    severity: str
    name: str
    description: str
    patterns: tuple
    suggestion: str
    regulation: Optional[str] = None


# ============================================================
# THE RULES
# ============================================================

COMPLIANCE_RULES: list[ComplianceRule] = [

    # --- Misleading claims ---

    ComplianceRule(
        id="misleading-guarantee",
        category="misleading_claims",
        severity="high",
        name="Absolute Guarantee",
        description="Claims of absolute guarantees without conditions may be misleading",
        patterns=(
            re.compile(
                r"\b(?:100%|100\s+percent)\s*(?:guarantee|guaranteed|satisfaction|"
                r"money.?back|effective|success|safe)\b", I),
            re.compile(r"\bguarantee[ds]?\s*(?:results?|success|satisfaction|cure|work)\b", I),
            re.compile(r"\balways\s+works?\b", I),
        ),
        suggestion=(
            "Add specific conditions or limitations to guarantee claims. Consider "
            "using \"satisfaction guarantee with conditions\" instead."
        ),
        regulation="FTC Act Section 5",
    ),
    ComplianceRule(
        id="misleading-best",
        category="misleading_claims",
        severity="medium",
        name="Unqualified Superlatives",
        description='Using "best", "number one", or "#1" without substantiation',
        patterns=(
            re.compile(
                r"\b(?:the\s+)?best\s+(?:in\s+class|in\s+the\s+world|on\s+the\s+market|"
                r"available|choice|option|solution)\b", I),
            re.compile(r"(?<!\w)#1\s*(?:rated|choice|solution|product|service|brand)\b", I),
            re.compile(r"\bnumber\s*one\s*(?:rated|choice|solution|product)\b", I),
            re.compile(r"\bworld'?s?\s*(?:best|leading|finest|greatest)\b", I),
        ),
        suggestion=(
            "Qualify superlative claims with source, date, and methodology. "
            "Example: \"Rated #1 by [Source] in [Year]\""
        ),
        regulation="FTC Advertising Guidelines",
    ),
    ComplianceRule(
        id="misleading-free",
        category="misleading_claims",
        severity="high",
        name="Misleading Free Offers",
        description='"Free" claims that may have hidden costs or conditions',
        patterns=(
            # Disclaimer must follow on the same line, within 200 characters
            re.compile(
                r"\bfree\b(?![^\n]{0,200}?\b(?:no\s+credit\s+card|no\s+obligation|no\s+strings|"
                r"conditions\s+apply)\b)", I),
            re.compile(r"\bcompletely\s+free\b", I),
            re.compile(r"(?:\bfree|\$0)\s*(?:trial|sample|gift|bonus)\b", I),
        ),
        suggestion=(
            'Clearly disclose all conditions, requirements, or future charges '
            'associated with "free" offers.'
        ),
        regulation="FTC Free Offers Rule",
    ),
    ComplianceRule(
        id="misleading-unique-opportunity",
        category="misleading_claims",
        severity="medium",
        name="Exceptional Opportunity Wording",
        description="Investment presented as a unique or unmissable opportunity",
        patterns=(
            re.compile(r"\bopportunit[ée]\s+unique\b", I),
            re.compile(
                r"\b(?:placement|investissement)\s+(?:inratable|exceptionnel|id[ée]al)\b", I),
            re.compile(r"\bonce[- ]in[- ]a[- ]lifetime\s+(?:investment|opportunity)\b", I),
        ),
        suggestion=(
            "Describe the product's characteristics factually and present its "
            "risks with the same prominence as its advantages."
        ),
        regulation="AMF DOC-2011-24 / ESMA34-45-1272",
    ),

    # --- Unsubstantiated claims ---

    ComplianceRule(
        id="unsubstantiated-clinical",
        category="unsubstantiated_claims",
        severity="critical",
        name="Clinical Study Claims",
        description="References to clinical studies or scientific proof without citation",
        patterns=(
            re.compile(r"\b(?:clinically|scientifically|medically)\s*(?:proven|tested|shown|demonstrated)\b", I),
            re.compile(r"\b(?:studies|research|trials)\s*(?:show|prove|demonstrate|confirm)\b", I),
            re.compile(r"\bdoctors?\s*(?:recommend|approve|endorse)\b", I),
            re.compile(r"\blab(?:oratory)?\s*tested\b", I),
        ),
        suggestion="Provide specific study citations including source, date, sample size, and methodology.",
        regulation="FTC Substantiation Doctrine",
    ),
    ComplianceRule(
        id="unsubstantiated-statistics",
        category="unsubstantiated_claims",
        severity="high",
        name="Unattributed Statistics",
        description="Percentage claims or statistics without source",
        patterns=(
            re.compile(
                r"\b\d{1,3}%\s*(?:of\s+)?(?:users?|customers?|people|clients?|patients?)\s*"
                r"(?:say|report|agree|saw|experienced|noticed)\b", I),
            re.compile(r"\b(?:9\s*out\s*of\s*10|8\s*out\s*of\s*10)\b", I),
            re.compile(r"\bstatistics\s+show\b", I),
        ),
        suggestion="Include source, sample size, date, and methodology for all statistics.",
        regulation="FTC Truth in Advertising",
    ),

    # --- Pricing ---

    ComplianceRule(
        id="pricing-hidden",
        category="pricing_issues",
        severity="high",
        name="Hidden Pricing",
        description="Pricing that may hide additional fees or conditions",
        patterns=(
            re.compile(r"\bstarting\s*(?:at|from)\s*\$?\d", I),
            re.compile(r"\bas\s+low\s+as\s*\$?\d", I),
            re.compile(r"\bfrom\s+only\s*\$?\d", I),
            # Any displayed price, to prompt a fee disclosure check
            re.compile(r"\$"),
        ),
        suggestion=(
            'Clearly display all fees, conditions, and the total cost. Use "starting '
            'at" only with clear disclosure of price range.'
        ),
        regulation="FTC Pricing Guidelines",
    ),
    ComplianceRule(
        id="pricing-comparison",
        category="pricing_issues",
        severity="medium",
        name="Price Comparison Claims",
        description="Comparative pricing without substantiation",
        patterns=(
            re.compile(r"\bsave\s*(?:up\s+to\s+)?\d+%", I),
            re.compile(r"\b\d+%\s*(?:off|discount|savings?)\b", I),
            re.compile(r"\bcompared?\s+to\s+(?:retail|competitors?|others?)\b", I),
            re.compile(r"\b(?:was|originally|regularly)\s*\$\d+", I),
        ),
        suggestion=(
            "Substantiate comparison prices with actual market data. Disclose the "
            "basis for comparison."
        ),
        regulation="FTC Price Comparison Guidelines",
    ),

    # --- Missing disclaimers ---

    ComplianceRule(
        id="disclaimer-affiliate",
        category="disclaimer_missing",
        severity="high",
        name="Affiliate Disclosure Missing",
        description="Potential affiliate content without disclosure",
        patterns=(
            re.compile(r"\b(?:affiliate\s+link|partner\s+link|sponsored)\b", I),
            re.compile(r"\bwe\s+(?:may\s+)?earn\s+(?:a\s+)?commission\b", I),
            re.compile(r"\b(?:click|use)\s+(?:this|my|our)\s+link\b", I),
        ),
        suggestion=(
            'Add clear affiliate disclosure: "This post contains affiliate links. '
            'We may earn a commission at no extra cost to you."'
        ),
        regulation="FTC Endorsement Guidelines",
    ),
    ComplianceRule(
        id="disclaimer-results",
        category="disclaimer_missing",
        severity="medium",
        name="Results Disclaimer Missing",
        description="Claims of results without typical results disclaimer",
        patterns=(
            re.compile(r"\b(?:lost|lose)\s+\d+\s*(?:lbs?|pounds?|kg|kilos?)\b", I),
            re.compile(r"\b(?:made|earned|earn)\s*\$[\d,]+\b", I),
            re.compile(r"\b(?:results|outcomes?)\s+(?:may\s+)?vary\b", I),
            re.compile(r"\breal\s+(?:results|customers?|stories)\b", I),
        ),
        suggestion='Add disclaimer: "Results may vary. Individual results depend on many factors."',
        regulation="FTC Testimonial Guidelines",
    ),

    # --- Prohibited terms ---

    ComplianceRule(
        id="prohibited-cure",
        category="prohibited_terms",
        severity="critical",
        name="Cure Claims",
        description="Claims of curing diseases or conditions",
        patterns=(
            re.compile(r"\b(?:cure[sd]?|curing|heal[sd]?|healing)\s+(?:disease|cancer|diabetes|illness|condition)\b", I),
            re.compile(r"\b(?:eliminate|eradicate|destroy)[sd]?\s+(?:disease|virus|bacteria|cancer)\b", I),
            re.compile(r"\bpermanent\s+(?:cure|solution|fix|remedy)\b", I),
        ),
        suggestion='Remove cure claims. Use "may help support" or "traditionally used for" instead.',
        regulation="FDA Drug Claims Regulations",
    ),
    ComplianceRule(
        id="prohibited-miracle",
        category="prohibited_terms",
        severity="high",
        name="Miracle Language",
        description='Use of exaggerated "miracle" terminology',
        patterns=(
            re.compile(
                r"\b(?:miracle|magical|magic|revolutionary|breakthrough)\s*"
                r"(?:product|solution|cure|treatment|formula)\b", I),
            re.compile(r"\bsecret\s*(?:formula|ingredient|method|technique)\b", I),
            re.compile(r"\binstant\s*(?:results?|cure|relief|fix|solution)\b", I),
        ),
        suggestion=(
            "Use factual language instead of exaggerated claims. Focus on specific, "
            "verifiable benefits."
        ),
        regulation="FTC Deceptive Advertising Standards",
    ),

    # --- Urgency ---

    ComplianceRule(
        id="urgency-false",
        category="urgency_manipulation",
        severity="medium",
        name="False Urgency",
        description="Potentially false urgency or scarcity claims",
        patterns=(
            re.compile(r"\b(?:limited\s+time|act\s+now|hurry|last\s+chance|ending\s+soon)\b", I),
            re.compile(r"\b(?:only\s+)?\d+\s*(?:left|remaining|available|in\s+stock)\b", I),
            re.compile(r"\b(?:offer|deal|sale)\s+(?:expires?|ends?)\s+(?:soon|today|tonight|midnight)\b", I),
            re.compile(r"\bdon'?t\s+miss\s+(?:out|this)\b", I),
        ),
        suggestion=(
            "Only use urgency claims when genuinely true. Provide specific end dates "
            "for time-limited offers."
        ),
        regulation="FTC Deceptive Practices",
    ),
    ComplianceRule(
        id="urgency-fomo",
        category="urgency_manipulation",
        severity="low",
        name="FOMO Tactics",
        description="Fear of missing out manipulation",
        patterns=(
            re.compile(r"\beveryone\s+(?:is\s+)?(?:buying|getting|using|joining)\b", I),
            re.compile(r"\bselling\s+fast\b", I),
            re.compile(r"\b(?:popular|trending|viral|selling\s+out)\b", I),
            re.compile(r"\bbefore\s+it'?s?\s+(?:gone|too\s+late|sold\s+out)\b", I),
        ),
        suggestion=(
            "Ensure popularity claims are substantiated with data. Avoid "
            "psychological pressure tactics."
        ),
        regulation="Consumer Protection Standards",
    ),

    # --- Testimonials ---

    ComplianceRule(
        id="testimonial-unverified",
        category="testimonial_issues",
        severity="medium",
        name="Unverified Testimonials",
        description="Testimonials that may not represent typical results",
        patterns=(
            # Quoted statement attributed to a capitalised name
            re.compile(r"[\"“”][^\"“”]*[\"“”][^\"“”\n]{0,80}?[-–—]\s*[A-Z][a-z]+"),
            re.compile(r"\b(?:testimonial|review|feedback)\s+from\b", I),
            re.compile(r"\bcustomer\s+(?:said|says|wrote|reports?)\b", I),
            re.compile(r"\b(?:real\s+)?customer\s+(?:stories|reviews?|testimonials?)\b", I),
        ),
        suggestion='Ensure testimonials are genuine and include "Results may vary" disclaimer.',
        regulation="FTC Endorsement Guides",
    ),
    ComplianceRule(
        id="testimonial-celebrity",
        category="testimonial_issues",
        severity="high",
        name="Celebrity/Influencer Endorsement",
        description="Celebrity mentions that may require disclosure",
        patterns=(
            re.compile(r"\b(?:endorsed|recommended|used|loved)\s+by\s+[A-Z][a-z]+\s+[A-Z][a-z]+"),
            re.compile(r"\bas\s+seen\s+(?:on|in)\s+(?:TV|television|magazine|news)\b", I),
            re.compile(r"\bfeatured\s+(?:on|in)\s+[A-Z]"),
        ),
        suggestion=(
            "Disclose material connections with endorsers. Celebrity endorsements "
            "must reflect genuine use and opinion."
        ),
        regulation="FTC Endorsement Guidelines",
    ),

    # --- Environmental ---

    ComplianceRule(
        id="environmental-green",
        category="environmental_claims",
        severity="high",
        name="Greenwashing",
        description="Environmental claims that may be unsubstantiated",
        patterns=(
            re.compile(r"\b(?:eco-?friendly|environmentally\s+friendly|green|sustainable|carbon\s+neutral)\b", I),
            re.compile(r"\b(?:100%|fully)\s*(?:natural|organic|biodegradable|recyclable)\b", I),
            re.compile(r"\bsave[sd]?\s+the\s+(?:planet|earth|environment)\b", I),
            re.compile(r"\bzero\s*(?:carbon|emissions?|waste)\b", I),
        ),
        suggestion=(
            "Substantiate environmental claims with certifications or data. Be "
            "specific about which aspects are eco-friendly."
        ),
        regulation="FTC Green Guides",
    ),

    # --- Health ---

    ComplianceRule(
        id="health-weight",
        category="health_claims",
        severity="critical",
        name="Weight Loss Claims",
        description="Weight loss claims that may be unrealistic",
        patterns=(
            re.compile(
                r"\blose\s+\d+\s*(?:lbs?|pounds?|kg)\s*(?:in|within|after)?\s*\d*\s*"
                r"(?:days?|weeks?|month)?\b", I),
            re.compile(r"\b(?:rapid|fast|quick|instant)\s+weight\s+loss\b", I),
            re.compile(r"\bno\s+(?:diet|exercise)\s+(?:needed|required|necessary)\b", I),
            re.compile(r"\bburn\s+fat\s+(?:fast|quickly|instantly)\b", I),
        ),
        suggestion='Weight loss claims must be substantiated. Include "Results vary based on diet and exercise."',
        regulation="FTC Weight Loss Advertising Guidelines",
    ),
    ComplianceRule(
        id="health-supplement",
        category="health_claims",
        severity="high",
        name="Supplement Health Claims",
        description="Health benefit claims for supplements",
        patterns=(
            re.compile(r"\b(?:boost[sd]?|improve[sd]?|enhance[sd]?)\s*(?:immunity|immune\s+system|brain|memory|energy)\b", I),
            re.compile(r"\b(?:anti-?aging|anti-?inflammatory|antioxidant)\s*(?:benefits?|properties|effects?)\b", I),
            re.compile(r"\b(?:detox|cleanse|purify)\s*(?:your)?\s*(?:body|system|liver|kidney)\b", I),
        ),
        suggestion=(
            'Add FDA disclaimer: "These statements have not been evaluated by the FDA. '
            'Not intended to diagnose, treat, cure, or prevent any disease."'
        ),
        regulation="DSHEA / FDA Regulations",
    ),

    # --- Financial ---

    ComplianceRule(
        id="financial-income",
        category="financial_claims",
        severity="critical",
        name="Income Claims",
        description="Claims about potential income or earnings",
        patterns=(
            re.compile(r"\b(?:make|earn|generate)\s*\$[\d,]+\s*(?:per|a|each)\s*(?:day|week|month|year)?\b", I),
            re.compile(r"\b(?:passive|residual)\s+income\b", I),
            re.compile(r"\b(?:financial|money)\s+freedom\b", I),
            re.compile(r"\bget\s+rich\b", I),
            re.compile(r"\bquit\s+your\s+job\b", I),
        ),
        suggestion="Include income disclaimer with typical results. Provide verifiable income documentation.",
        regulation="FTC Business Opportunity Rule",
    ),
    ComplianceRule(
        id="financial-guaranteed",
        category="financial_claims",
        severity="critical",
        name="Guaranteed Returns",
        description="Claims of guaranteed financial returns",
        patterns=(
            re.compile(r"\bguaranteed\s+(?:returns?|income|profit|ROI)\b", I),
            re.compile(r"\b(?:risk-?free|no\s+risk)\s+(?:investment|opportunity)\b", I),
            re.compile(r"\b\d+%\s*(?:guaranteed|annual|monthly)\s*(?:return|ROI|yield)\b", I),
            re.compile(r"\b(?:rendement|performance|capital)s?\s+(?:garanti|assur[ée])e?s?\b", I),
            re.compile(r"\bsans\s+(?:aucun\s+)?risque\b", I),
        ),
        suggestion="Remove guaranteed return claims. All investments carry risk - disclose this clearly.",
        regulation="SEC/FTC Investment Advertising Rules; AMF DOC-2011-24",
    ),
    ComplianceRule(
        id="financial-past-performance",
        category="financial_claims",
        severity="info",
        name="Past Performance Reference",
        description="Past performance is quoted; the standard warning must accompany it",
        patterns=(
            re.compile(r"\bpast\s+performance\b", I),
            re.compile(r"\bperformances?\s+pass[ée]es?\b", I),
        ),
        suggestion=(
            "State the reference period and add: \"Past performance is not a "
            "reliable indicator of future results.\""
        ),
        regulation="ESMA34-45-1272 / MiFID II Delegated Regulation Art. 44",
    ),

    # --- Data privacy ---

    ComplianceRule(
        id="privacy-collection",
        category="data_privacy",
        severity="medium",
        name="Data Collection Notice",
        description="Content that implies data collection without disclosure",
        patterns=(
            re.compile(r"\b(?:sign\s+up|subscribe|register|join)\s+(?:for|to|now)\b", I),
            re.compile(r"\b(?:enter|submit)\s+(?:your)?\s*(?:email|phone|info|information)\b", I),
            re.compile(r"\bwe'?ll\s+(?:send|email|contact)\b", I),
        ),
        suggestion="Include privacy policy link and data usage disclosure near sign-up forms.",
        regulation="GDPR / CCPA / CAN-SPAM",
    ),

    # --- Comparative advertising ---

    ComplianceRule(
        id="comparative-unsubstantiated",
        category="comparative_advertising",
        severity="high",
        name="Unsubstantiated Comparison",
        description="Comparative claims without substantiation",
        patterns=(
            re.compile(r"\bbetter\s+than\s+(?:[A-Z][a-z]+|the\s+competition|competitors?|others?|the\s+rest)\b", I),
            re.compile(r"\bunlike\s+(?:other|competitor|[A-Z][a-z]+)\s*(?:products?|brands?|companies?)?\b", I),
            re.compile(r"\b(?:outperforms?|beats?|exceeds?)\s+(?:all|every|any)\s*(?:other)?\b", I),
        ),
        suggestion=(
            "Substantiate comparative claims with objective data. Consider naming "
            "specific competitors carefully."
        ),
        regulation="Lanham Act / Comparative Advertising Guidelines",
    ),

    # --- Target audience ---

    ComplianceRule(
        id="audience-children",
        category="target_audience",
        severity="high",
        name="Child-Directed Marketing",
        description="Content that may be targeting children",
        patterns=(
            re.compile(r"\b(?:kids?|children|child|teen|teenager|young|youth)\s*(?:love|will\s+love|friendly)\b", I),
            re.compile(r"\b(?:fun\s+for|great\s+for|perfect\s+for)\s*(?:kids?|children|the\s+whole\s+family)\b", I),
        ),
        suggestion="Ensure COPPA compliance for child-directed content. Obtain parental consent for data collection.",
        regulation="COPPA",
    ),
]


# ============================================================
# THE CATALOG
# ============================================================

class RuleCatalog:
    """
    Validated, read-only rule table.

    Construction compiles any pattern given as a string and rejects the
    whole catalog on the first defect. After construction the catalog
    only hands out its frozen rules; there is no way to add or replace
    one. Tests build substitute catalogs the same way.
    """

    def __init__(self, rules: Iterable[ComplianceRule], version: str = CATALOG_VERSION):
        self.version = version
        self._rules: tuple[ComplianceRule, ...] = tuple(
            self._validated(rule) for rule in rules
        )
        self._by_id: dict[str, ComplianceRule] = {}
        for rule in self._rules:
            if rule.id in self._by_id:
                raise CatalogError(rule.id, "duplicate rule id")
            self._by_id[rule.id] = rule

    @staticmethod
    def _validated(rule: ComplianceRule) -> ComplianceRule:
        if not rule.id:
            raise CatalogError("<empty>", "rule id is required")
        if rule.severity not in SEVERITIES:
            raise CatalogError(rule.id, f"unknown severity {rule.severity!r}")
        if rule.category not in CATEGORIES:
            raise CatalogError(rule.id, f"unknown category {rule.category!r}")
        if not rule.patterns:
            raise CatalogError(rule.id, "at least one pattern is required")

        compiled = []
        for pattern in rule.patterns:
            if isinstance(pattern, re.Pattern):
                compiled.append(pattern)
                continue
            if not isinstance(pattern, str):
                raise CatalogError(rule.id, f"pattern of type {type(pattern).__name__}")
            try:
                compiled.append(re.compile(pattern, re.IGNORECASE))
            except re.error as exc:
                raise CatalogError(rule.id, f"invalid pattern {pattern!r}: {exc}") from exc
        return replace(rule, patterns=tuple(compiled))

    def __iter__(self) -> Iterator[ComplianceRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

    def get(self, rule_id: str) -> Optional[ComplianceRule]:
        return self._by_id.get(rule_id)

    def by_category(self, category: str) -> list[ComplianceRule]:
        return [r for r in self._rules if r.category == category]

    def by_severity(self, severity: str) -> list[ComplianceRule]:
        return [r for r in self._rules if r.severity == severity]

    def active_rules(self, include_info_level: bool = True) -> list[ComplianceRule]:
        """Rules in catalog order, optionally without info-level ones."""
        if include_info_level:
            return list(self._rules)
        return [r for r in self._rules if r.severity != "info"]

    def describe(
        self,
        category: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> list[dict]:
        """
        Return rule metadata (no compiled patterns) for listing endpoints.
        """
        rules = self._rules
        if category:
            rules = tuple(r for r in rules if r.category == category)
        if severity:
            rules = tuple(r for r in rules if r.severity == severity)
        return [
            {
                "id": r.id,
                "category": r.category,
                "severity": r.severity,
                "name": r.name,
                "description": r.description,
                "suggestion": r.suggestion,
                "regulation": r.regulation,
                "pattern_count": len(r.patterns),
            }
            for r in rules
        ]


# ============================================================
# SINGLETON: built once, never mutated
# ============================================================

default_catalog = RuleCatalog(COMPLIANCE_RULES)
