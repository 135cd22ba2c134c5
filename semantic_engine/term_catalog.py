"""
Term Catalog
============
High-stakes business terms, their categories and risk multipliers, plus the
phrase lists the scorers match against (vague language, exclusion / inclusion /
limit boundary signals).

The catalog is an immutable value. Every component takes it as an argument so
tests can swap in a smaller one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Tuple


class TermCategory:
    PROMISE_WORD = "promise_word"
    LIFECYCLE_VERB = "lifecycle_verb"
    FINANCIAL_STRATEGIC = "financial_strategic"
    STATUS_LABEL = "status_label"
    OWNERSHIP_TERM = "ownership_term"
    GENERAL = "general"

    ALL = (
        PROMISE_WORD, LIFECYCLE_VERB, FINANCIAL_STRATEGIC,
        STATUS_LABEL, OWNERSHIP_TERM, GENERAL,
    )


TERM_RISK_MULTIPLIERS = {
    TermCategory.PROMISE_WORD: 3.0,
    TermCategory.LIFECYCLE_VERB: 2.5,
    TermCategory.FINANCIAL_STRATEGIC: 2.0,
    TermCategory.STATUS_LABEL: 2.0,
    TermCategory.OWNERSHIP_TERM: 1.5,
    TermCategory.GENERAL: 1.0,
}


# ═══════════════════════════════════════════
# TERM LISTS
# ═══════════════════════════════════════════

PROMISE_WORDS = [
    "support", "partner", "partnership", "proactive", "unlimited",
    "guarantee", "guaranteed", "strategic", "premium", "white-glove",
    "white glove", "comprehensive", "full-service", "full service",
    "dedicated", "personalized", "customized", "tailored", "world-class",
    "world class", "best-in-class", "excellence", "exceptional", "committed",
    "commitment", "ensure", "always", "never", "seamless", "turnkey",
    "end-to-end", "holistic", "responsive", "available", "accessible",
    "transparent",
]

LIFECYCLE_VERBS = [
    "onboard", "onboarded", "onboarding", "complete", "completed", "done",
    "finished", "delivered", "launched", "launch", "escalate", "escalated",
    "escalation", "approved", "approve", "approval", "qualified", "qualify",
    "qualification", "handoff", "hand off", "hand-off", "transition",
    "transfer", "implement", "implemented", "implementation", "deploy",
    "deployed", "activate", "activated", "resolve", "resolved", "resolution",
    "close", "closed", "finalize", "finalized",
]

FINANCIAL_STRATEGIC_TERMS = [
    "roi", "ltv", "lifetime value", "margin", "profit", "revenue", "value",
    "investment", "cost", "budget", "pricing", "scope", "deliverable",
    "deliverables", "milestone", "milestones", "outcome", "outcomes",
    "result", "results", "success", "kpi", "metric", "metrics",
    "performance", "growth", "scale", "efficiency", "optimization", "core",
    "focus", "aligned", "alignment",
]

STATUS_LABELS = [
    "priority", "urgent", "critical", "high-priority", "high priority",
    "low-priority", "asap", "immediately", "vip", "tier a", "tier 1", "gold",
    "platinum", "enterprise", "standard", "basic", "at-risk", "at risk",
    "active", "inactive", "pending", "in progress", "on track", "blocked",
    "delayed",
]

OWNERSHIP_TERMS = [
    "owner", "owns", "ownership", "responsible", "responsibility",
    "accountable", "accountability", "lead", "leads", "point of contact",
    "poc", "primary", "secondary", "backup", "assigned", "delegate",
    "delegated", "manage", "managed", "manager", "oversee", "oversight",
]

GENERAL_TERMS = [
    "client", "customer", "project", "engagement", "account", "service",
    "solution", "product", "team", "process", "workflow", "system",
    "platform", "meeting", "call", "review", "update", "report",
    "communication", "feedback", "issue", "problem", "request",
    "requirement", "specification",
]


# ═══════════════════════════════════════════
# PHRASE LISTS
# ═══════════════════════════════════════════

VAGUE_PATTERNS = [
    "as appropriate", "as needed", "reasonable", "reasonably", "timely",
    "adequate", "sufficient", "high-quality", "high quality", "best efforts",
    "good faith", "substantial", "substantially", "material", "materially",
    "significant", "significantly", "appropriate", "appropriately", "proper",
    "properly", "suitable", "suitably", "satisfactory", "acceptable",
    "generally", "typically", "usually", "normally", "approximately",
    "about", "around", "roughly", "promptly", "soon", "quickly",
    "efficiently", "effectively",
]

EXCLUSION_SIGNALS = [
    "does not include", "excludes", "excluding", "not included",
    "outside scope", "out of scope", "not covered", "this is not",
    "we do not", "we will not", "limitations", "restrictions", "exceptions",
]

INCLUSION_SIGNALS = [
    "includes", "including", "specifically", "covers", "covered",
    "encompasses", "consists of", "comprised of", "contains", "features",
]

LIMIT_SIGNALS = [
    "up to", "maximum", "max", "minimum", "min", "limited to",
    "no more than", "no less than", "at least", "at most", "not to exceed",
    "within", "per month", "per week", "per day", "per year",
    "annually", "monthly", "weekly", "daily", "hours",
]


def _build_terms() -> dict:
    terms = {}
    for category, words in (
        (TermCategory.PROMISE_WORD, PROMISE_WORDS),
        (TermCategory.LIFECYCLE_VERB, LIFECYCLE_VERBS),
        (TermCategory.FINANCIAL_STRATEGIC, FINANCIAL_STRATEGIC_TERMS),
        (TermCategory.STATUS_LABEL, STATUS_LABELS),
        (TermCategory.OWNERSHIP_TERM, OWNERSHIP_TERMS),
        (TermCategory.GENERAL, GENERAL_TERMS),
    ):
        for w in words:
            terms[w.lower()] = category
    return terms


@dataclass(frozen=True)
class TermCatalog:
    """Read-only registry of terms and signal phrases."""
    terms: Mapping[str, str]
    risk_multipliers: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(TERM_RISK_MULTIPLIERS))
    )
    vague_patterns: Tuple[str, ...] = tuple(VAGUE_PATTERNS)
    exclusion_signals: Tuple[str, ...] = tuple(EXCLUSION_SIGNALS)
    inclusion_signals: Tuple[str, ...] = tuple(INCLUSION_SIGNALS)
    limit_signals: Tuple[str, ...] = tuple(LIMIT_SIGNALS)

    def __post_init__(self) -> None:
        # freeze caller-supplied dicts so the value cannot drift at runtime
        object.__setattr__(self, "terms", MappingProxyType({k.lower(): v for k, v in dict(self.terms).items()}))
        object.__setattr__(self, "risk_multipliers", MappingProxyType(dict(self.risk_multipliers)))
        missing = sorted(set(self.terms.values()) - set(self.risk_multipliers))
        if missing:
            raise ValueError(f"No risk multiplier for categories: {missing}")

    def category_of(self, term: str) -> Optional[str]:
        return self.terms.get((term or "").lower())

    def is_high_stakes(self, term: str) -> bool:
        return (term or "").lower() in self.terms

    def risk_multiplier(self, category: str) -> float:
        return self.risk_multipliers.get(category, 1.0)

    @property
    def boundary_signals(self) -> Tuple[str, ...]:
        return self.exclusion_signals + self.inclusion_signals + self.limit_signals

    @property
    def scope_signals(self) -> Tuple[str, ...]:
        """Exclusion + inclusion phrases (no limits)."""
        return self.exclusion_signals + self.inclusion_signals


@lru_cache(maxsize=1024)
def term_regex(term: str) -> Pattern:
    """Whole-word / whole-phrase matcher for a catalog term."""
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


DEFAULT_CATALOG = TermCatalog(terms=_build_terms())
