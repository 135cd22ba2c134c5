"""
tests/test_terms.py - Catalog, input boundary, extraction, definitions, term analysis
"""

import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from semantic_engine import (
    DEFAULT_CATALOG, ConsistencyChecker, InputDocument, InvalidInput, TermCatalog, TermCategory,
    analyze_terms, detect_definition, extract_occurrences, find_definition, parse_documents,
)
from semantic_engine.extraction import CONTEXT_RADIUS
from semantic_engine.term_analysis import ConsistencyStats


def make_doc(content, name="Doc"):
    return InputDocument(id=name.lower(), name=name, content=content, word_count=len(content.split()))


SMALL_CATALOG = TermCatalog(terms={"support": TermCategory.PROMISE_WORD, "client": TermCategory.GENERAL})


class RecordingChecker(ConsistencyChecker):
    name = "recording"

    def __init__(self, verdict=True):
        self.verdict = verdict
        self.seen = []

    def check_consistency(self, term, context_a, context_b):
        self.seen.append((term, context_a, context_b))
        return self.verdict


class BrokenChecker(ConsistencyChecker):
    def check_consistency(self, term, context_a, context_b):
        raise ConnectionError("no route to host")


# ═══════════════════════════════════════════
# CATALOG
# ═══════════════════════════════════════════

def test_every_category_has_one_multiplier():
    for category in set(DEFAULT_CATALOG.terms.values()):
        assert category in DEFAULT_CATALOG.risk_multipliers
    assert DEFAULT_CATALOG.risk_multiplier(TermCategory.PROMISE_WORD) == 3.0
    assert DEFAULT_CATALOG.risk_multiplier(TermCategory.GENERAL) == 1.0


def test_catalog_lookup_is_case_insensitive():
    assert DEFAULT_CATALOG.category_of("Support") == TermCategory.PROMISE_WORD
    assert DEFAULT_CATALOG.is_high_stakes("ROI")
    assert not DEFAULT_CATALOG.is_high_stakes("banana")


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOG.terms["banana"] = TermCategory.GENERAL


def test_catalog_rejects_category_without_multiplier():
    with pytest.raises(ValueError):
        TermCatalog(terms={"widget": "gadget_term"})


# ═══════════════════════════════════════════
# INPUT BOUNDARY
# ═══════════════════════════════════════════

def test_parse_documents_defaults():
    docs = parse_documents([{"content": "one two three"}])
    assert docs[0].id == "doc_1"
    assert docs[0].name == "Document 1"
    assert docs[0].word_count == 3
    assert docs[0].type == "text"


def test_parse_documents_keeps_given_word_count():
    docs = parse_documents([{"content": "one two", "wordCount": 40, "type": "website"}])
    assert docs[0].word_count == 40


@pytest.mark.parametrize("raw", [None, [], {"content": "x"}, "text", [{"content": 5}], [42]])
def test_parse_documents_rejects(raw):
    with pytest.raises(InvalidInput):
        parse_documents(raw)


def test_input_document_wire_form():
    wire = make_doc("hello world").to_dict()
    assert wire["wordCount"] == 2
    assert "metadata" not in wire


# ═══════════════════════════════════════════
# EXTRACTION
# ═══════════════════════════════════════════

def test_whole_word_matching_only():
    """'clients' and 'supported' do not match 'client' / 'support'."""
    occ = extract_occurrences([make_doc("Clients supported. Support the client.")], SMALL_CATALOG)
    assert len(occ["support"]) == 1
    assert len(occ["client"]) == 1


def test_occurrences_ordered_by_document_then_position():
    docs = [make_doc("support one. support two.", "A"), make_doc("support three.", "B")]
    occ = extract_occurrences(docs, SMALL_CATALOG)["support"]
    assert [o.document_name for o in occ] == ["A", "A", "B"]
    assert occ[0].context.startswith("support one")


def test_context_window_keeps_original_case_and_radius():
    text = "x" * 300 + " Support " + "y" * 300
    occ = extract_occurrences([make_doc(text)], SMALL_CATALOG)["support"][0]
    assert "Support" in occ.context
    assert len(occ.context) <= len("Support") + 2 * CONTEXT_RADIUS


def test_absent_terms_not_reported():
    occ = extract_occurrences([make_doc("Nothing relevant here.")], SMALL_CATALOG)
    assert occ == {}


def test_multiword_terms_match():
    occ = extract_occurrences([make_doc("Your Point of Contact is Dana.")], DEFAULT_CATALOG)
    assert "point of contact" in occ


# ═══════════════════════════════════════════
# DEFINITIONS
# ═══════════════════════════════════════════

@pytest.mark.parametrize("text", [
    "Support means a reply from our team.",
    "Support is defined as a reply from our team.",
    "Support refers to a reply from our team.",
    'By "support", we mean a reply from our team.',
    "When we say support, this means a reply from our team.",
    "Support: a reply from our team.",
    "Definition of support - a reply from our team.",
])
def test_definition_templates(text):
    found = find_definition("support", text, DEFAULT_CATALOG)
    assert found is not None
    assert found.text == "a reply from our team"
    assert found.quality == "minimal"


def test_partial_definition_threshold_only():
    found = find_definition("support", "Support means a reply within one day.", DEFAULT_CATALOG)
    assert found.has_threshold and not found.has_boundary
    assert found.quality == "partial"


def test_definition_truncated():
    text = "Support means " + "word " * 100 + "."
    found = find_definition("support", text, DEFAULT_CATALOG)
    assert len(found.text) == 200


def test_no_definition():
    assert find_definition("support", "We offer support to everyone.", DEFAULT_CATALOG) is None


def test_first_document_with_definition_wins():
    docs = [
        make_doc("Nothing here.", "A"),
        make_doc("Support means email only.", "B"),
        make_doc("Support means phone within 2 hours, excluding weekends.", "C"),
    ]
    found = detect_definition("support", docs, DEFAULT_CATALOG)
    assert found.text == "email only"
    assert found.quality == "minimal"


# ═══════════════════════════════════════════
# TERM ANALYSIS
# ═══════════════════════════════════════════

def _analyze(docs, **kw):
    occ = extract_occurrences(docs, SMALL_CATALOG)
    return {a.term: a for a in analyze_terms(occ, docs, SMALL_CATALOG, **kw)}


def test_missing_quality_iff_undefined():
    docs = [make_doc("Support means email only. Ask the client.")]
    analyses = _analyze(docs)
    assert analyses["support"].is_defined and analyses["support"].definition_quality == "minimal"
    assert not analyses["client"].is_defined and analyses["client"].definition_quality == "missing"


def test_sample_contexts_capped_at_five():
    docs = [make_doc(". ".join(["support"] * 8))]
    analysis = _analyze(docs)["support"]
    assert analysis.occurrence_count == 8
    assert len(analysis.sample_contexts) == 5


def test_single_document_terms_never_checked():
    checker = RecordingChecker(verdict=True)
    analyses = _analyze([make_doc("support. support.")], checker=checker)
    assert checker.seen == []
    assert analyses["support"].inconsistency_detected is False


def test_cross_document_terms_checked_with_first_two_contexts():
    checker = RecordingChecker(verdict=True)
    docs = [make_doc("Phone support.", "A"), make_doc("Email support.", "B")]
    analyses = _analyze(docs, checker=checker)
    assert checker.seen == [("support", "Phone support.", "Email support.")]
    assert analyses["support"].inconsistency_detected is True
    assert analyses["support"].document_names == ("A", "B")


def test_broken_checker_fails_open():
    stats = ConsistencyStats()
    docs = [make_doc("Phone support.", "A"), make_doc("Email support.", "B")]
    analyses = _analyze(docs, checker=BrokenChecker(), stats=stats)
    assert analyses["support"].inconsistency_detected is False
    assert (stats.calls, stats.failures) == (1, 1)


def test_term_analysis_wire_form():
    analysis = _analyze([make_doc("Support means email only.")])["support"]
    wire = analysis.to_dict()
    assert wire["risk_multiplier"] == 3.0
    assert wire["definition_text"] == "email only"
    assert wire["documents"] == ["Doc"]
