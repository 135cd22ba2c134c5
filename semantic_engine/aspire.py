# aspire.py
# ASPIRE maturity breakdown: six dimensions read off term categories.
#
# Prospecting and Relationship both read promise words. That pairing is kept
# as-is until product decides whether Relationship gets its own category.

from __future__ import annotations

from typing import Dict, Sequence

from .rounding import round_half_up
from .term_analysis import TermAnalysis
from .term_catalog import TermCategory

EMPTY_DIMENSION_SCORE = 70

ASPIRE_DIMENSIONS = {
    "alignment": TermCategory.OWNERSHIP_TERM,
    "strategy": TermCategory.FINANCIAL_STRATEGIC,
    "prospecting": TermCategory.PROMISE_WORD,
    "integration": TermCategory.LIFECYCLE_VERB,
    "relationship": TermCategory.PROMISE_WORD,
    "engagement": TermCategory.STATUS_LABEL,
}


def dimension_score(terms: Sequence[TermAnalysis]) -> int:
    if not terms:
        return EMPTY_DIMENSION_SCORE
    defined = sum(1 for t in terms if t.is_defined) / len(terms)
    consistent = sum(1 for t in terms if not t.inconsistency_detected) / len(terms)
    return round_half_up(min(100.0, defined * 50 + consistent * 50))


def compute_aspire_scores(term_analyses: Sequence[TermAnalysis]) -> Dict[str, int]:
    return {
        dimension: dimension_score([t for t in term_analyses if t.category == category])
        for dimension, category in ASPIRE_DIMENSIONS.items()
    }
