"""
Definition Detector
===================
Looks for an explicit in-text definition of a term and grades it.

    "Support means responding within 24 hours, excluding hardware failures."
        -> threshold ("within", "hours") + boundary ("excluding") -> complete

Templates are tried in order and the first hit wins. Across documents the
earliest document with a definition wins and the scan stops there.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence

from .documents import InputDocument
from .term_catalog import TermCatalog

MAX_DEFINITION_CHARS = 200

QUALITY_COMPLETE = "complete"
QUALITY_PARTIAL = "partial"
QUALITY_MINIMAL = "minimal"
QUALITY_MISSING = "missing"

QUALITY_VALUES = {
    QUALITY_COMPLETE: 1.0,
    QUALITY_PARTIAL: 0.6,
    QUALITY_MINIMAL: 0.3,
    QUALITY_MISSING: 0.0,
}

# Captured definition body stops at the next sentence terminator.
_BODY = r"([^.!?]+)"
_Q = r"[\"'“”‘’]?"


@dataclass(frozen=True)
class DefinitionMatch:
    text: str
    has_threshold: bool
    has_boundary: bool

    @property
    def quality(self) -> str:
        if self.has_threshold and self.has_boundary:
            return QUALITY_COMPLETE
        if self.has_threshold or self.has_boundary:
            return QUALITY_PARTIAL
        return QUALITY_MINIMAL


def definition_templates(term: str) -> List[Pattern]:
    t = re.escape(term.lower())
    return [
        re.compile(rf"\b{t}{_Q}\s+(?:means?|is defined as|refers to)\s+{_Q}{_BODY}", re.I),
        re.compile(rf"\b(?:by|when we say)\s+{_Q}{t}{_Q},?\s+(?:we mean|this means)\s+{_BODY}", re.I),
        re.compile(rf"{_Q}\b{t}{_Q}\s*[-:]\s*{_BODY}", re.I),
        re.compile(rf"\bdefinition of\s+{_Q}{t}{_Q}\s*[-:]\s*{_BODY}", re.I),
    ]


def classify_definition(text: str, catalog: TermCatalog) -> DefinitionMatch:
    body = text.lower()
    return DefinitionMatch(
        text=text,
        has_threshold=any(s in body for s in catalog.limit_signals),
        has_boundary=any(s in body for s in catalog.scope_signals),
    )


def find_definition(term: str, text: str, catalog: TermCatalog) -> Optional[DefinitionMatch]:
    """First template match in one document's text, or None."""
    content = (text or "").lower()
    for pattern in definition_templates(term):
        m = pattern.search(content)
        if m:
            body = m.group(1).strip()[:MAX_DEFINITION_CHARS]
            return classify_definition(body, catalog)
    return None


def detect_definition(
    term: str,
    documents: Sequence[InputDocument],
    catalog: TermCatalog,
) -> Optional[DefinitionMatch]:
    for doc in documents:
        found = find_definition(term, doc.content, catalog)
        if found:
            return found
    return None
