"""
tests/test_smoke.py - Smoke Tests for the Semantic Score API
=============================================================
Runs on every PR. Must all pass before merge.

Tests:
  - /health returns JSON with the engine version
  - /api/analyze returns a complete, JSON-serializable Analysis Result
  - Bad requests come back as 400 with an error message
  - /api/scrape-website wraps the scraper (network monkeypatched)
"""

import os
import sys
import json
import pytest

# Setup Flask test env
os.environ["TESTING"] = "1"
os.environ["TRACE_ENABLED"] = "0"
os.environ.pop("ANTHROPIC_API_KEY", None)

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import app as app_module
from app import app
from semantic_engine import ENGINE_VERSION, InputDocument


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


SAMPLE_DOC = {
    "id": "doc_1",
    "name": "Service Agreement",
    "content": "We provide unlimited support to all clients. The account manager is responsible for onboarding.",
    "wordCount": 14,
    "type": "document",
}


# ═══════════════════════════════════════════
# HEALTH
# ═══════════════════════════════════════════

def test_health_json(client):
    """Health endpoint returns valid JSON with status ok."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data["status"] == "ok"
    assert data["version"] == ENGINE_VERSION


# ═══════════════════════════════════════════
# ANALYZE
# ═══════════════════════════════════════════

def test_analyze_returns_full_result(client):
    """A single document produces every Analysis Result field."""
    r = client.post("/api/analyze", json={"documents": [SAMPLE_DOC], "companySize": 20})
    assert r.status_code == 200
    data = r.get_json()
    for key in ("overall_score", "score_band", "components", "aspire_scores",
                "total_terms_analyzed", "high_risk_terms", "meaning_debt",
                "action_plan", "documents_analyzed", "total_word_count",
                "analysis_timestamp", "version", "meta"):
        assert key in data, f"missing {key}"
    assert data["documents_analyzed"] == 1
    assert data["total_word_count"] == 14
    assert len(data["components"]) == 6
    assert set(data["aspire_scores"]) == {
        "alignment", "strategy", "prospecting", "integration", "relationship", "engagement",
    }
    json.dumps(data)


def test_analyze_accepts_inputs_alias(client):
    """'inputs' is accepted in place of 'documents'."""
    r = client.post("/api/analyze", json={"inputs": [SAMPLE_DOC], "useAI": False})
    assert r.status_code == 200
    assert r.get_json()["meta"]["consistency_checked"] is False


def test_analyze_latency_reported(client):
    r = client.post("/api/analyze", json={"documents": [SAMPLE_DOC]})
    assert r.get_json()["meta"]["latency_ms"] >= 0


@pytest.mark.parametrize("body", [
    {},
    {"documents": []},
    {"documents": "not a list"},
    {"documents": [{"name": "no content"}]},
    {"documents": [SAMPLE_DOC], "companySize": 0},
    {"documents": [SAMPLE_DOC], "companySize": "fifty"},
    {"documents": [SAMPLE_DOC], "useConsistencyCheck": "yes"},
    {"documents": [dict(SAMPLE_DOC, type="spreadsheet")]},
    {"documents": [dict(SAMPLE_DOC, wordCount=-1)]},
])
def test_analyze_rejects_bad_input(client, body):
    """Invalid requests return 400 with an error message, never 500."""
    r = client.post("/api/analyze", json=body)
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_analyze_rejects_non_json(client):
    r = client.post("/api/analyze", data="hello", content_type="text/plain")
    assert r.status_code == 400


def test_analyze_internal_error_is_500(client, monkeypatch):
    """Unexpected engine errors are reported, not leaked as HTML tracebacks."""
    def boom(payload):
        raise RuntimeError("engine exploded")
    monkeypatch.setattr(app_module, "analyze_payload", boom)
    r = client.post("/api/analyze", json={"documents": [SAMPLE_DOC]})
    assert r.status_code == 500
    assert r.get_json()["error"] == "engine exploded"


# ═══════════════════════════════════════════
# SCRAPE
# ═══════════════════════════════════════════

def _page(name):
    text = f"{name} page text about support and onboarding."
    return InputDocument(id=f"web_{name.lower()}", name=f"Website: {name}", content=text,
                         word_count=len(text.split()), type="website",
                         metadata={"url": f"https://example.com/{name.lower()}", "pageName": name})


def test_scrape_website(client, monkeypatch):
    """Scraped pages come back as Input Documents in wire form."""
    calls = {}

    def fake_scrape(url, max_pages=10):
        calls["url"], calls["max_pages"] = url, max_pages
        return [_page("Homepage"), _page("About")]

    monkeypatch.setattr(app_module, "scrape_website", fake_scrape)
    r = client.post("/api/scrape-website", json={"url": "example.com", "maxPages": 5})
    assert r.status_code == 200
    data = r.get_json()
    assert data["success"] is True
    assert data["pagesScraped"] == 2
    assert data["pages"][0]["type"] == "website"
    assert data["pages"][0]["wordCount"] > 0
    assert calls == {"url": "example.com", "max_pages": 5}


def test_scrape_website_caps_max_pages(client, monkeypatch):
    seen = {}

    def fake_scrape(url, max_pages=10):
        seen["max_pages"] = max_pages
        return [_page("Homepage")]

    monkeypatch.setattr(app_module, "scrape_website", fake_scrape)
    client.post("/api/scrape-website", json={"url": "example.com", "maxPages": 500})
    assert seen["max_pages"] == app_module.MAX_SCRAPE_PAGES


def test_scrape_website_requires_url(client):
    r = client.post("/api/scrape-website", json={})
    assert r.status_code == 400
    assert r.get_json()["error"] == "URL is required"


def test_scrape_website_no_pages_is_400(client, monkeypatch):
    monkeypatch.setattr(app_module, "scrape_website", lambda url, max_pages=10: [])
    r = client.post("/api/scrape-website", json={"url": "example.com"})
    assert r.status_code == 400
    assert "Could not extract content" in r.get_json()["error"]


def test_scraped_pages_feed_analyze(client, monkeypatch):
    """Scrape output can be posted straight back to /api/analyze."""
    monkeypatch.setattr(app_module, "scrape_website",
                        lambda url, max_pages=10: [_page("Homepage"), _page("Pricing")])
    pages = client.post("/api/scrape-website", json={"url": "example.com"}).get_json()["pages"]
    r = client.post("/api/analyze", json={"documents": pages, "useConsistencyCheck": False})
    assert r.status_code == 200
    assert r.get_json()["documents_analyzed"] == 2
