from pathlib import Path

import requests  # type: ignore[import-untyped]
from playwright.sync_api import Error as PlaywrightError

from article_analyzer.services.content import scraper

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_extract_prefers_article_and_strips_scripts() -> None:
    text = scraper.extract_main_text(load_fixture("article_page.html"))
    assert text.startswith("Space heaters recalled after fires")
    assert "recalled 40,000 space heaters after reports" in text
    assert "inline script text" not in text
    assert "Main wrapper text" not in text
    assert "  " not in text


def test_extract_role_main_before_entry_content() -> None:
    text = scraper.extract_main_text(load_fixture("role_main_page.html"))
    assert text == "Crib recall The crib slats can detach, posing an entrapment hazard."


def test_extract_falls_back_to_body() -> None:
    text = scraper.extract_main_text(load_fixture("body_only_page.html"))
    assert text == "Plain body text with no recognised content container."


def test_extract_without_body_fallback_returns_empty() -> None:
    html = load_fixture("body_only_page.html")
    assert scraper.extract_main_text(html, fallback_to_body=False) == ""
    assert scraper.extract_main_text(html, scraper.RENDERED_SELECTORS, fallback_to_body=False)


def test_scrape_with_requests_returns_long_text(monkeypatch) -> None:
    body = "Hazard details. " * 30
    calls: list[tuple[str, float]] = []

    def fake_get(url, headers=None, timeout=None):
        calls.append((url, timeout))
        return FakeResponse(f"<html><body><article>{body}</article></body></html>")

    monkeypatch.setattr(scraper.requests, "get", fake_get)
    text = scraper.scrape_with_requests("https://news.example.com/a", timeout=3.0)
    assert text == body.strip()
    assert calls == [("https://news.example.com/a", 3.0)]


def test_scrape_with_requests_rejects_short_text(monkeypatch) -> None:
    monkeypatch.setattr(
        scraper.requests,
        "get",
        lambda url, headers=None, timeout=None: FakeResponse("<article>too short</article>"),
    )
    assert scraper.scrape_with_requests("https://news.example.com/a") is None


def test_scrape_with_requests_fails_soft_on_errors(monkeypatch) -> None:
    def timeout_get(url, headers=None, timeout=None):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(scraper.requests, "get", timeout_get)
    assert scraper.scrape_with_requests("https://news.example.com/a") is None

    monkeypatch.setattr(
        scraper.requests,
        "get",
        lambda url, headers=None, timeout=None: FakeResponse("forbidden", status_code=403),
    )
    assert scraper.scrape_with_requests("https://news.example.com/a") is None


class FakePage:
    def __init__(self, html: str) -> None:
        self.html = html
        self.goto_calls: list[tuple[str, str, float]] = []

    def goto(self, url: str, wait_until: str, timeout: float) -> None:
        self.goto_calls.append((url, wait_until, timeout))

    def content(self) -> str:
        return self.html


class FakeBrowser:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closed = False

    def new_context(self, user_agent: str):
        return self

    def new_page(self) -> FakePage:
        return self.page

    def close(self) -> None:
        self.closed = True


class FakePlaywright:
    def __init__(self, browser: FakeBrowser) -> None:
        self.chromium = self
        self.browser = browser

    def launch(self, headless: bool) -> FakeBrowser:
        return self.browser

    def __enter__(self) -> "FakePlaywright":
        return self

    def __exit__(self, *exc) -> None:
        return None


def test_scrape_with_browser_uses_rendered_html(monkeypatch) -> None:
    rendered = "Rendered paragraph. " * 20
    page = FakePage(f"<html><body><div id='app'>{rendered}</div></body></html>")
    browser = FakeBrowser(page)
    monkeypatch.setattr(scraper, "sync_playwright", lambda: FakePlaywright(browser))

    text = scraper.scrape_with_browser("https://news.example.com/spa", timeout=5.0)
    assert text == rendered.strip()
    assert page.goto_calls == [("https://news.example.com/spa", "domcontentloaded", 5000.0)]
    assert browser.closed


def test_scrape_with_browser_fails_soft(monkeypatch) -> None:
    def broken():
        raise PlaywrightError("Executable doesn't exist")

    monkeypatch.setattr(scraper, "sync_playwright", broken)
    assert scraper.scrape_with_browser("https://news.example.com/spa") is None


def test_scrape_with_requests_fails_soft_on_unparsable_url() -> None:
    url = "http://" + "a" * 70 + ".com"
    assert scraper.scrape_with_requests(url, timeout=2.0) is None


def test_scrape_with_requests_fails_soft_on_unexpected_errors(monkeypatch) -> None:
    def broken_get(url, headers=None, timeout=None):
        raise ValueError("Invalid URL label")

    monkeypatch.setattr(scraper.requests, "get", broken_get)
    assert scraper.scrape_with_requests("https://news.example.com/a") is None


def test_scrape_with_browser_fails_soft_on_unexpected_errors(monkeypatch) -> None:
    def broken():
        raise RuntimeError("browser crashed")

    monkeypatch.setattr(scraper, "sync_playwright", broken)
    assert scraper.scrape_with_browser("https://news.example.com/spa") is None
