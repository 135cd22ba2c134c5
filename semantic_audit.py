"""
Semantic Score - Batch Auditor
==============================
Scores a corpus of plain-text files (and optionally a website) and prints the
Analysis Result as JSON.

Run:
  python semantic_audit.py proposal.txt onboarding.md
  python semantic_audit.py notes.txt --url example.com --max-pages 5
  python semantic_audit.py *.txt --company-size 120 --no-consistency
  python semantic_audit.py *.txt --output report.json

Consistency checks use ANTHROPIC_API_KEY when set; without it they are skipped.
"""
import os
import sys
import json
import logging
import argparse
from typing import List

from semantic_engine import InputDocument, InvalidInput, analyze_payload
from semantic_engine.documents import count_words
from site_scraper import DEFAULT_MAX_PAGES, scrape_website

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
log = logging.getLogger("audit")


def load_documents(paths: List[str]) -> List[InputDocument]:
    docs = []
    for i, path in enumerate(paths):
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
        docs.append(InputDocument(
            id=f"file_{i + 1}",
            name=os.path.basename(path),
            content=text,
            word_count=count_words(text),
            type="document",
            metadata={"path": os.path.abspath(path)},
        ))
        log.info(f"  loaded {path} ({docs[-1].word_count} words)")
    return docs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Semantic Score audit for a document corpus")
    parser.add_argument("files", nargs="*", help="plain-text documents")
    parser.add_argument("--url", help="also scrape this website's key pages")
    parser.add_argument("--max-pages", type=int, default=DEFAULT_MAX_PAGES)
    parser.add_argument("--company-size", type=int, default=50)
    parser.add_argument("--no-consistency", action="store_true", help="skip cross-document consistency checks")
    parser.add_argument("--output", help="write JSON here instead of stdout")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    documents = load_documents(args.files)
    if args.url:
        documents.extend(scrape_website(args.url, max_pages=args.max_pages))

    try:
        result = analyze_payload({
            "documents": documents,
            "companySize": args.company_size,
            "useConsistencyCheck": not args.no_consistency,
        })
    except InvalidInput as e:
        log.error(f"Cannot analyze: {e}")
        return 2

    out = json.dumps(result.to_dict(), indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(out + "\n")
        log.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(out + "\n")

    log.info(f"Semantic Score: {result.overall_score} ({result.score_band}), "
             f"{len(result.high_risk_terms)} high-risk terms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
