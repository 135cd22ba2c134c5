# extraction.py
# Term occurrence extraction (scan every document for every catalog term).

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from .documents import InputDocument
from .term_catalog import TermCatalog, term_regex

CONTEXT_RADIUS = 100


@dataclass(frozen=True)
class TermOccurrence:
    term: str
    document_id: str
    document_name: str
    context: str


def context_window(text: str, start: int, end: int, radius: int = CONTEXT_RADIUS) -> str:
    lo = max(0, start - radius)
    hi = min(len(text), end + radius)
    return text[lo:hi].strip()


def extract_occurrences(
    documents: Sequence[InputDocument],
    catalog: TermCatalog,
) -> Dict[str, List[TermOccurrence]]:
    """
    Map each catalog term that appears at least once to its occurrences,
    ordered by document, then by position inside the document.
    Matching is case-insensitive; contexts keep the original casing.
    """
    occurrences: Dict[str, List[TermOccurrence]] = {}

    for doc in documents:
        text = doc.content
        for term in catalog.terms:
            for m in term_regex(term).finditer(text):
                occurrences.setdefault(term, []).append(TermOccurrence(
                    term=term,
                    document_id=doc.id,
                    document_name=doc.name,
                    context=context_window(text, m.start(), m.end()),
                ))

    return occurrences
