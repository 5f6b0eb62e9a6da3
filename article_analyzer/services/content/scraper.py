"""Article text scrapers: a lightweight HTTP tier and a rendered-browser tier."""

from __future__ import annotations

import logging
import re

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup
from playwright.sync_api import sync_playwright

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0
MIN_SCRAPED_LENGTH = 250
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; article-analyzer/0.1)"

# Checked in order; the first element that exists wins.
CONTENT_SELECTORS: tuple[str, ...] = (
    "article",
    '[role="main"]',
    ".article-content",
    ".post-content",
    ".entry-content",
    "main",
)
RENDERED_SELECTORS: tuple[str, ...] = CONTENT_SELECTORS + ("body",)

WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def extract_main_text(
    html: str, selectors: tuple[str, ...] = CONTENT_SELECTORS, fallback_to_body: bool = True
) -> str:
    """Return collapsed text of the first content region matched by ``selectors``."""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    text = ""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            text = element.get_text(separator=" ")
            break

    if not text.strip() and fallback_to_body and soup.body is not None:
        text = soup.body.get_text(separator=" ")
    return collapse_whitespace(text)


def scrape_with_requests(
    url: str,
    *,
    timeout: float = REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    min_length: int = MIN_SCRAPED_LENGTH,
) -> str | None:
    """Fetch ``url`` and parse it statically. Returns None on any failure."""
    try:
        resp = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        resp.raise_for_status()
        content = extract_main_text(resp.text, CONTENT_SELECTORS)
    except Exception as exc:  # noqa: BLE001 - tiers fail soft
        logger.info("  Lightweight scrape failed for %s: %s", url, exc)
        return None

    if len(content) < min_length:
        logger.info("  Lightweight scrape too short (%d chars) for %s", len(content), url)
        return None
    return content


def scrape_with_browser(
    url: str,
    *,
    timeout: float = REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    min_length: int = MIN_SCRAPED_LENGTH,
) -> str | None:
    """Render ``url`` in headless Chromium before extracting text. Returns None on any failure."""
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                context = browser.new_context(user_agent=user_agent)
                page = context.new_page()
                page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)
                html = page.content()
            finally:
                browser.close()
        content = extract_main_text(html or "", RENDERED_SELECTORS, fallback_to_body=False)
    except Exception as exc:  # noqa: BLE001 - tiers fail soft
        logger.info("  Rendered scrape failed for %s: %s", url, exc)
        return None

    if len(content) < min_length:
        logger.info("  Rendered scrape too short (%d chars) for %s", len(content), url)
        return None
    return content
