"""
Semantic Score - Website Text Acquisition
==========================================
SCRAPE ONLY. No scoring. Turns a website's key pages into Input Documents
(type "website") the engine can analyze.

Strategy:
- Normalise the URL (https:// when no scheme given)
- Fetch the homepage, then a fixed list of key paths (/about, /services, ...)
- HTML only; strip script/style/nav/header/footer/aside chrome
- Drop cookie / copyright / legal boilerplate
- Pages with < 100 characters of text are skipped
- Identical pages (redirects to the homepage etc.) are kept once

Run:
  python site_scraper.py https://example.com --max-pages 5
"""
import re
import sys
import json
import time
import uuid
import hashlib
import logging
import argparse
from typing import List, Optional
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from semantic_engine.documents import InputDocument, count_words

log = logging.getLogger("scraper")

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SemanticScoreBot/1.0; +https://semanticscore.com)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

IMPORTANT_PATHS = [
    "/", "/about", "/about-us", "/services", "/solutions",
    "/products", "/pricing", "/how-it-works", "/process",
    "/our-process", "/approach", "/why-us", "/faq",
]

DEFAULT_MAX_PAGES = 10
PAGE_TIMEOUT = 10
MIN_PAGE_CHARS = 100
POLITE_DELAY = 0.3

STRIP_TAGS = ["head", "script", "style", "noscript", "nav", "header", "footer", "aside"]

BOILERPLATE_PATTERNS = [
    re.compile(r"©.*?\d{4}"),
    re.compile(r"All [Rr]ights [Rr]eserved"),
    re.compile(r"[Pp]rivacy [Pp]olicy"),
    re.compile(r"[Tt]erms of [Ss]ervice"),
    re.compile(r"[Cc]ookie [Pp]olicy"),
]


def normalize_url(url: str) -> str:
    url = (url or "").strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def page_name(path: str) -> str:
    if path == "/":
        return "Homepage"
    return path.strip("/").replace("-", " ").title()


def fetch_page(url: str, session=None, timeout: int = PAGE_TIMEOUT) -> Optional[str]:
    """HTML body of the page, or None when it is unreachable or not HTML."""
    http = session or requests
    try:
        resp = http.get(url, headers=HEADERS, timeout=timeout, allow_redirects=True)
        resp.raise_for_status()
    except requests.RequestException as e:
        log.debug(f"  Could not fetch {url}: {e}")
        return None
    if "text/html" not in resp.headers.get("content-type", ""):
        log.debug(f"  Skipping non-HTML page {url}")
        return None
    return resp.text


def clean_text(text: str) -> str:
    text = re.sub(r"\s+", " ", text or "").strip()
    for pat in BOILERPLATE_PATTERNS:
        text = pat.sub("", text)
    return re.sub(r"\s{2,}", " ", text).strip()


def extract_text(html: str) -> str:
    """Visible body text with page chrome removed."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(STRIP_TAGS):
        tag.decompose()
    return clean_text(soup.get_text(separator=" "))


def build_document(url: str, name: str, text: str) -> InputDocument:
    return InputDocument(
        id=f"web_{uuid.uuid4().hex[:12]}",
        name=f"Website: {name}",
        content=text,
        word_count=count_words(text),
        type="website",
        metadata={"url": url, "pageName": name},
    )


def scrape_page(url: str, name: str, session=None) -> Optional[InputDocument]:
    html = fetch_page(url, session=session)
    if not html:
        return None
    text = extract_text(html)
    if len(text) < MIN_PAGE_CHARS:
        log.debug(f"  Too little text on {url} ({len(text)} chars)")
        return None
    return build_document(url, name, text)


def scrape_website(url: str, max_pages: int = DEFAULT_MAX_PAGES, session=None,
                   delay: float = POLITE_DELAY) -> List[InputDocument]:
    """Homepage first, then key paths, until max_pages documents are collected."""
    url = normalize_url(url)
    parsed = urlparse(url)
    if not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")
    base_url = f"{parsed.scheme}://{parsed.netloc}"

    pages: List[InputDocument] = []
    seen_urls = set()
    seen_checksums = set()

    def add(page_url: str, name: str) -> None:
        log.info(f"  -> {page_url}")
        doc = scrape_page(page_url, name, session=session)
        seen_urls.add(page_url)
        if not doc:
            return
        cs = hashlib.md5(doc.content[:500].encode()).hexdigest()
        if cs in seen_checksums:
            return
        seen_checksums.add(cs)
        pages.append(doc)

    add(url, "Homepage")

    for path in IMPORTANT_PATHS:
        if len(pages) >= max_pages:
            break
        page_url = urljoin(base_url, path)
        if page_url in seen_urls or page_url.rstrip("/") == url.rstrip("/"):
            continue
        add(page_url, page_name(path))
        if delay:
            time.sleep(delay)

    log.info(f"  {len(pages)} pages extracted from {base_url}")
    return pages


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    parser = argparse.ArgumentParser(description="Extract key-page text from a website")
    parser.add_argument("url")
    parser.add_argument("--max-pages", type=int, default=DEFAULT_MAX_PAGES)
    args = parser.parse_args(argv)

    pages = scrape_website(args.url, max_pages=args.max_pages)
    json.dump({"pages": [p.to_dict() for p in pages], "pagesScraped": len(pages)}, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if pages else 1


if __name__ == "__main__":
    sys.exit(main())
