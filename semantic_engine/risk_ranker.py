"""
Risk Ranker
-----------
Scores every analyzed term for business risk and keeps the worst offenders.

    +30  undefined
    +40  inconsistent across documents
    +20  promise word
    +10  more than 5 occurrences

Below 30 the term is dropped. 60+ is critical, 40+ high, otherwise medium.
Ordering: severity first, then occurrence count (descending).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .term_analysis import TermAnalysis
from .term_catalog import TermCategory

MIN_RISK_SCORE = 30
DEFAULT_LIMIT = 10
MAX_EXAMPLES = 2

RISK_ORDER = {"critical": 0, "high": 1, "medium": 2}


@dataclass
class RiskTerm:
    term: str
    risk_level: str
    category: str
    occurrence_count: int
    document_names: Tuple[str, ...]
    issue: str
    recommendation: str
    example_contexts: Tuple[str, ...] = field(default_factory=tuple)
    risk_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "term": self.term,
            "risk_level": self.risk_level,
            "risk_score": self.risk_score,
            "category": self.category,
            "occurrences": self.occurrence_count,
            "documents": list(self.document_names),
            "issue": self.issue,
            "recommendation": self.recommendation,
            "examples": list(self.example_contexts),
        }


def risk_score(t: TermAnalysis) -> int:
    score = 0
    if not t.is_defined:
        score += 30
    if t.inconsistency_detected:
        score += 40
    if t.category == TermCategory.PROMISE_WORD:
        score += 20
    if t.occurrence_count > 5:
        score += 10
    return score


def risk_level(score: int) -> str:
    if score >= 60:
        return "critical"
    if score >= 40:
        return "high"
    return "medium"


def classify_issue(t: TermAnalysis) -> Tuple[str, str]:
    """(issue, recommendation)"""
    if not t.is_defined and t.inconsistency_detected:
        return "undefined_and_inconsistent", f"Create single definition with explicit boundaries for '{t.term}'"
    if not t.is_defined:
        return "undefined", f"Define '{t.term}' with threshold and boundary"
    if t.inconsistency_detected:
        return "inconsistent_meaning", f"Standardize meaning of '{t.term}' across all documents"
    # defined, consistent, but a heavily used promise word
    return "high_frequency_undefined", f"Review usage of '{t.term}' for clarity"


def rank_risk_terms(term_analyses: Sequence[TermAnalysis], limit: int = DEFAULT_LIMIT) -> List[RiskTerm]:
    ranked = []
    for t in term_analyses:
        score = risk_score(t)
        if score < MIN_RISK_SCORE:
            continue
        issue, recommendation = classify_issue(t)
        ranked.append(RiskTerm(
            term=t.term,
            risk_level=risk_level(score),
            category=t.category,
            occurrence_count=t.occurrence_count,
            document_names=t.document_names,
            issue=issue,
            recommendation=recommendation,
            example_contexts=t.sample_contexts[:MAX_EXAMPLES],
            risk_score=score,
        ))

    ranked.sort(key=lambda r: (RISK_ORDER[r.risk_level], -r.occurrence_count))
    return ranked[:limit]
