import os
import time
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from semantic_engine import ENGINE_VERSION, InvalidInput, analyze_payload
from site_scraper import DEFAULT_MAX_PAGES, scrape_website

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
log = logging.getLogger("semantic-score")

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": os.getenv("CORS_ORIGINS", "*").split(",")}})

# ============================================================
# SEMANTIC SCORE API
#
# POST /api/analyze         documents -> Semantic Score + remediation plan
# POST /api/scrape-website  url -> website pages as input documents
# GET  /health
# ============================================================
MAX_SCRAPE_PAGES = 25


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "version": ENGINE_VERSION})


@app.route("/api/analyze", methods=["POST"])
def api_analyze():
    """Score a document corpus. Body: {documents, companySize, useConsistencyCheck}."""
    t0 = time.time()
    payload = request.get_json(silent=True)
    if payload is None:
        return jsonify({"error": "Request body must be JSON"}), 400

    try:
        result = analyze_payload(payload)
    except InvalidInput as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        log.exception("Analysis error")
        return jsonify({"error": str(e) or "Analysis failed"}), 500

    out = result.to_dict()
    out["meta"]["latency_ms"] = int((time.time() - t0) * 1000)
    log.info(f"analyze: {out['documents_analyzed']} docs, score {out['overall_score']} ({out['score_band']})")
    return jsonify(out)


@app.route("/api/scrape-website", methods=["POST"])
def api_scrape_website():
    """Fetch a site's key pages. Body: {url, maxPages}."""
    payload = request.get_json(silent=True) or {}
    url = (payload.get("url") or "").strip()
    if not url:
        return jsonify({"error": "URL is required"}), 400

    max_pages = payload.get("maxPages", DEFAULT_MAX_PAGES)
    if isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages < 1:
        return jsonify({"error": "'maxPages' must be a positive integer"}), 400
    max_pages = min(max_pages, MAX_SCRAPE_PAGES)

    try:
        pages = scrape_website(url, max_pages=max_pages)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        log.exception("Scrape error")
        return jsonify({"error": str(e) or "Scraping failed"}), 500

    if not pages:
        return jsonify({
            "error": "Could not extract content from website. The site may be blocking automated access."
        }), 400

    return jsonify({
        "success": True,
        "pages": [p.to_dict() for p in pages],
        "pagesScraped": len(pages),
    })


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)), debug=False)
