# term_analysis.py
# Per-term analysis: occurrences + definition + (optional) cross-document consistency.
# Consistency failures are fail-open: the term is recorded as consistent.

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .consistency import ConsistencyChecker
from .definitions import QUALITY_MISSING, detect_definition
from .documents import InputDocument
from .extraction import TermOccurrence
from .term_catalog import TermCatalog, TermCategory

log = logging.getLogger("semantic-terms")

MAX_SAMPLE_CONTEXTS = 5


@dataclass
class TermAnalysis:
    term: str
    category: str
    risk_multiplier: float
    occurrence_count: int
    document_names: Tuple[str, ...]
    is_defined: bool = False
    definition_quality: str = QUALITY_MISSING
    definition_text: Optional[str] = None
    has_threshold: bool = False
    has_boundary: bool = False
    sample_contexts: Tuple[str, ...] = field(default_factory=tuple)
    inconsistency_detected: bool = False

    @property
    def is_cross_document(self) -> bool:
        return len(self.document_names) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "term": self.term,
            "category": self.category,
            "risk_multiplier": self.risk_multiplier,
            "occurrences": self.occurrence_count,
            "documents": list(self.document_names),
            "is_defined": self.is_defined,
            "definition_quality": self.definition_quality,
            "definition_text": self.definition_text,
            "has_threshold": self.has_threshold,
            "has_boundary": self.has_boundary,
            "contexts": list(self.sample_contexts),
            "inconsistency_detected": self.inconsistency_detected,
        }


class ConsistencyStats:
    """Call / failure counters shared by the checker worker threads."""

    def __init__(self) -> None:
        self.calls = 0
        self.failures = 0
        self._lock = threading.Lock()

    def record(self, failed: bool = False) -> None:
        with self._lock:
            if failed:
                self.failures += 1
            else:
                self.calls += 1


def _distinct(names: Sequence[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(names))


def build_term_analysis(
    term: str,
    occurrences: Sequence[TermOccurrence],
    documents: Sequence[InputDocument],
    catalog: TermCatalog,
) -> TermAnalysis:
    category = catalog.category_of(term) or TermCategory.GENERAL
    analysis = TermAnalysis(
        term=term,
        category=category,
        risk_multiplier=catalog.risk_multiplier(category),
        occurrence_count=len(occurrences),
        document_names=_distinct([o.document_name for o in occurrences]),
        sample_contexts=tuple(o.context for o in occurrences[:MAX_SAMPLE_CONTEXTS]),
    )

    definition = detect_definition(term, documents, catalog)
    if definition:
        analysis.is_defined = True
        analysis.definition_quality = definition.quality
        analysis.definition_text = definition.text
        analysis.has_threshold = definition.has_threshold
        analysis.has_boundary = definition.has_boundary

    return analysis


def check_term_consistency(
    analysis: TermAnalysis,
    checker: ConsistencyChecker,
    stats: Optional[ConsistencyStats] = None,
) -> bool:
    """Ask the capability about the first two sample contexts. Never raises."""
    if len(analysis.sample_contexts) < 2:
        return False
    if stats is not None:
        stats.record()
    try:
        return bool(checker.check_consistency(
            analysis.term, analysis.sample_contexts[0], analysis.sample_contexts[1]
        ))
    except Exception as e:
        if stats is not None:
            stats.record(failed=True)
        log.warning(f"Consistency check failed for '{analysis.term}', treating as consistent: {e}")
        return False


def analyze_terms(
    occurrences: Mapping[str, Sequence[TermOccurrence]],
    documents: Sequence[InputDocument],
    catalog: TermCatalog,
    checker: Optional[ConsistencyChecker] = None,
    max_workers: int = 1,
    stats: Optional[ConsistencyStats] = None,
) -> List[TermAnalysis]:
    analyses = [
        build_term_analysis(term, occs, documents, catalog)
        for term, occs in occurrences.items()
    ]

    if checker is None:
        return analyses

    pending = [a for a in analyses if a.is_cross_document]
    if not pending:
        return analyses

    if max_workers > 1 and len(pending) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(pending))) as ex:
            verdicts = list(ex.map(lambda a: check_term_consistency(a, checker, stats), pending))
    else:
        verdicts = [check_term_consistency(a, checker, stats) for a in pending]

    for analysis, inconsistent in zip(pending, verdicts):
        analysis.inconsistency_detected = inconsistent

    return analyses
