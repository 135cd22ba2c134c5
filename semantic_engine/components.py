"""
Semantic Score Components
=========================
Six independently weighted scorers. Each returns (score 0-100, details).

C1: DEFINITION COVERAGE (25%)
    - Risk-weighted share of terms carrying an in-text definition
    - complete=1.0, partial=0.6, minimal=0.3, missing=0.0

C2: CONSISTENCY (25%)
    - Risk-weighted share of cross-document terms NOT flagged inconsistent

C3: BOUNDARY CLARITY (20%)
    - Boundary signals (exclusion / inclusion / limit) per promise statement
    - "We provide unlimited support" with no limits = 0

C4: THRESHOLD SPECIFICITY (15%)
    - Penalizes stock hedges ("reasonable", "as needed", "timely") per sentence

C5: JARGON LOAD (10%)
    - Unexplained acronyms per 100 words, stepped into fixed tiers

C6: OWNERSHIP CLARITY (5%)
    - Named owners ("Ops is responsible for") vs vague ones ("someone will")

Every scorer has a fixed fallback for empty input so the composite never
divides by zero.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .definitions import QUALITY_VALUES
from .documents import InputDocument
from .rounding import round_half_up
from .term_analysis import TermAnalysis
from .term_catalog import TermCatalog

DEFINITION_COVERAGE = "Definition Coverage"
CONSISTENCY = "Consistency"
BOUNDARY_CLARITY = "Boundary Clarity"
THRESHOLD_SPECIFICITY = "Threshold Specificity"
JARGON_LOAD = "Jargon Load"
OWNERSHIP_CLARITY = "Ownership Clarity"

# Component weights (sum to 1.0)
WEIGHTS = {
    DEFINITION_COVERAGE: 0.25,
    CONSISTENCY: 0.25,
    BOUNDARY_CLARITY: 0.20,
    THRESHOLD_SPECIFICITY: 0.15,
    JARGON_LOAD: 0.10,
    OWNERSHIP_CLARITY: 0.05,
}

if abs(sum(WEIGHTS.values()) - 1.0) > 1e-9:
    raise ValueError("component weights must sum to 1.0")

JARGON_TIERS = [(0.5, 95), (1.0, 85), (2.0, 70), (4.0, 50)]
JARGON_FLOOR = 30

PROMISE_PATTERNS = [
    re.compile(r"\b(?:we\s+)?(?:will|shall|provide|offer|deliver|ensure|guarantee)\b", re.I),
    re.compile(r"\b(?:unlimited|comprehensive|full.service|all.inclusive)\b", re.I),
    re.compile(r"\b(?:support|partnership|commitment)\b", re.I),
]

CLEAR_OWNER_PATTERNS = [
    re.compile(r"\b(\w+)\s+(?:is|are)\s+responsible\s+for\b", re.I),
    re.compile(r"\b(\w+)\s+owns?\b", re.I),
    re.compile(r"\b(\w+)\s+(?:will|shall)\s+(?:handle|manage|lead)\b", re.I),
    re.compile(r"\bresponsibility\s+of\s+(?:the\s+)?(\w+)", re.I),
]

VAGUE_OWNER_PATTERNS = [
    re.compile(r"\b(?:we|they|someone)\s+will\b", re.I),
    re.compile(r"\bwill\s+be\s+(?:handled|managed)\b", re.I),
    re.compile(r"\bshould\s+be\s+(?:done|completed)\b", re.I),
]

ACRONYM_RE = re.compile(r"\b[A-Z]{2,}\b")
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass
class ComponentResult:
    name: str
    score: float
    details: Dict[str, Any] = field(default_factory=dict)
    weight: float = 0.0

    @property
    def weighted_score(self) -> float:
        return self.score * self.weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "details": dict(self.details),
            "weight": self.weight,
            "weighted_score": round_half_up(self.weighted_score, 4),
        }


# ═══════════════════════════════════════════
# TEXT UTILITIES
# ═══════════════════════════════════════════

def _count_literal(text_lc: str, phrase: str) -> int:
    return text_lc.count(phrase)


def _count_patterns(text: str, patterns: Sequence[re.Pattern]) -> int:
    return sum(len(p.findall(text)) for p in patterns)


def _split_sentences(text: str) -> List[str]:
    return [s for s in SENTENCE_SPLIT_RE.split(text or "") if s.strip()]


def _weighted_share(pairs: Sequence[Tuple[float, float]]) -> float:
    """pairs of (weight, value 0..1) -> weighted mean 0..1"""
    total = sum(w for w, _ in pairs)
    if total <= 0:
        return 0.0
    return sum(w * v for w, v in pairs) / total


# ═══════════════════════════════════════════
# COMPONENT SCORERS
# ═══════════════════════════════════════════

def score_definition_coverage(term_analyses: Sequence[TermAnalysis]) -> Tuple[float, Dict]:
    """C1: DEFINITION COVERAGE: risk-weighted definition quality."""
    if not term_analyses:
        return 50.0, {"terms_found": 0, "terms_defined": 0, "terms_undefined": 0}

    share = _weighted_share([
        (t.risk_multiplier, QUALITY_VALUES[t.definition_quality]) for t in term_analyses
    ])
    defined = sum(1 for t in term_analyses if t.is_defined)

    return round_half_up(share * 100, 1), {
        "terms_found": len(term_analyses),
        "terms_defined": defined,
        "terms_undefined": len(term_analyses) - defined,
    }


def score_consistency(term_analyses: Sequence[TermAnalysis]) -> Tuple[float, Dict]:
    """C2: CONSISTENCY: cross-document terms used with one meaning."""
    cross_doc = [t for t in term_analyses if t.is_cross_document]
    if not cross_doc:
        return 80.0, {"cross_doc_terms": 0, "consistent": 0, "inconsistent": 0}

    share = _weighted_share([
        (t.risk_multiplier, 0.0 if t.inconsistency_detected else 1.0) for t in cross_doc
    ])
    inconsistent = sum(1 for t in cross_doc if t.inconsistency_detected)

    return round_half_up(share * 100, 1), {
        "cross_doc_terms": len(cross_doc),
        "consistent": len(cross_doc) - inconsistent,
        "inconsistent": inconsistent,
    }


def score_boundary_clarity(documents: Sequence[InputDocument], catalog: TermCatalog) -> Tuple[float, Dict]:
    """C3: BOUNDARY CLARITY: boundary signals per promise."""
    promises = 0
    bounded = 0

    for doc in documents:
        text_lc = doc.content.lower()
        promises += _count_patterns(text_lc, PROMISE_PATTERNS)
        bounded += sum(_count_literal(text_lc, s) for s in catalog.boundary_signals)

    ratio = bounded / max(1, promises)
    if promises == 0:
        score = 70.0
    else:
        score = min(100.0, bounded / promises * 100)

    return round_half_up(score, 1), {
        "promises_found": promises,
        "boundary_signals": bounded,
        "ratio": round_half_up(ratio, 2),
    }


def score_threshold_specificity(documents: Sequence[InputDocument], catalog: TermCatalog) -> Tuple[float, Dict]:
    """
    C4: THRESHOLD SPECIFICITY: vague hedges per sentence.

    Only non-blank fragments count as sentences, so the empty tail after a
    closing "." is not a sentence and whitespace-only text takes the fallback.
    """
    sentences = 0
    vague = 0

    for doc in documents:
        sentences += len(_split_sentences(doc.content))
        text_lc = doc.content.lower()
        vague += sum(_count_literal(text_lc, p) for p in catalog.vague_patterns)

    if sentences == 0:
        return 70.0, {"criteria_statements": 0, "vague_patterns_found": vague, "vague_ratio": 0.0}

    vague_ratio = vague / sentences
    score = max(0.0, 100 - vague_ratio * 200)

    return round_half_up(score, 1), {
        "criteria_statements": sentences,
        "vague_patterns_found": vague,
        "vague_ratio": round_half_up(vague_ratio, 3),
    }


def _is_explained(acronym: str, text: str) -> bool:
    # "Return on Investment (ROI)" or "ROI (return on investment)"
    a = re.escape(acronym)
    return bool(re.search(rf"\({a}\)|{a}\s*\([^)]+\)", text))


def jargon_tier(density: float) -> int:
    for ceiling, score in JARGON_TIERS:
        if density <= ceiling:
            return score
    return JARGON_FLOOR


def score_jargon_load(documents: Sequence[InputDocument]) -> Tuple[float, Dict]:
    """C5: JARGON LOAD: unexplained acronyms per 100 words."""
    found: Dict[str, None] = {}
    unexplained: Dict[str, None] = {}

    for doc in documents:
        for acronym in ACRONYM_RE.findall(doc.content):
            if acronym in ("I", "A"):
                continue
            found[acronym] = None
            if not _is_explained(acronym, doc.content):
                unexplained[acronym] = None

    total_words = sum(doc.word_count for doc in documents)
    if total_words == 0:
        return 80, {"acronyms_found": len(found), "unexplained": len(unexplained), "jargon_density": 0.0}

    density = len(unexplained) / (total_words / 100)

    return jargon_tier(density), {
        "acronyms_found": len(found),
        "unexplained": len(unexplained),
        "jargon_density": round_half_up(density, 2),
        "unexplained_acronyms": sorted(unexplained)[:10],
    }


def score_ownership_clarity(documents: Sequence[InputDocument]) -> Tuple[float, Dict]:
    """C6: OWNERSHIP CLARITY: named owners vs vague 'someone will'."""
    clear = 0
    vague = 0

    for doc in documents:
        clear += _count_patterns(doc.content, CLEAR_OWNER_PATTERNS)
        vague += _count_patterns(doc.content, VAGUE_OWNER_PATTERNS)

    total = clear + vague
    score = 70.0 if total == 0 else clear / total * 100

    return round_half_up(score, 1), {
        "responsibility_statements": total,
        "clear_owner": clear,
        "unclear": vague,
    }


# ═══════════════════════════════════════════
# AGGREGATION
# ═══════════════════════════════════════════

def score_components(
    term_analyses: Sequence[TermAnalysis],
    documents: Sequence[InputDocument],
    catalog: TermCatalog,
) -> List[ComponentResult]:
    scored = [
        (DEFINITION_COVERAGE, score_definition_coverage(term_analyses)),
        (CONSISTENCY, score_consistency(term_analyses)),
        (BOUNDARY_CLARITY, score_boundary_clarity(documents, catalog)),
        (THRESHOLD_SPECIFICITY, score_threshold_specificity(documents, catalog)),
        (JARGON_LOAD, score_jargon_load(documents)),
        (OWNERSHIP_CLARITY, score_ownership_clarity(documents)),
    ]
    return [
        ComponentResult(name=name, score=score, details=details, weight=WEIGHTS[name])
        for name, (score, details) in scored
    ]


def weighted_total(components: Sequence[ComponentResult]) -> float:
    """Unrounded weighted composite. Band and Meaning Debt are read off this."""
    return sum(c.weighted_score for c in components)


def aggregate(components: Sequence[ComponentResult]) -> float:
    """Weighted composite, one decimal."""
    return round_half_up(weighted_total(components), 1)
