"""Guarantee every article has usable text, scraping it when needed."""

from __future__ import annotations

import logging
from typing import Callable

from article_analyzer.db.models import Article, ArticleContent
from article_analyzer.db.repository import Repository
from article_analyzer.services.content import scraper
from article_analyzer.services.content.policy import (
    CreateNew,
    Decision,
    KeepExisting,
    Provenance,
    ReplaceWith,
    Tier,
    TryTier,
    next_step,
)

logger = logging.getLogger(__name__)

ScrapeFn = Callable[[str], str | None]


class ContentAcquirer:
    """Applies the content policy for one article at a time and persists the outcome."""

    def __init__(
        self,
        repository: Repository,
        scrape_lightweight: ScrapeFn = scraper.scrape_with_requests,
        scrape_rendered: ScrapeFn = scraper.scrape_with_browser,
    ) -> None:
        self.repository = repository
        self._scrapers: dict[Tier, ScrapeFn] = {
            Tier.LIGHTWEIGHT: scrape_lightweight,
            Tier.RENDERED: scrape_rendered,
        }

    def acquire(self, article: Article) -> str:
        stored_row = self.repository.get_article_content(article.id)
        stored = stored_row.content if stored_row is not None else None
        url = (article.url or "").strip()

        if stored is not None:
            logger.info("  Stored content: %d chars", len(stored))

        attempts: dict[Tier, str | None] = {}
        step = next_step(stored, bool(url), article.description, attempts)
        while isinstance(step, TryTier):
            logger.info("  Trying %s scrape: %s", step.tier.value, url)
            attempts[step.tier] = self._scrapers[step.tier](url)
            step = next_step(stored, bool(url), article.description, attempts)

        return self._apply(article, stored_row, step)

    def _apply(
        self, article: Article, stored_row: ArticleContent | None, decision: Decision
    ) -> str:
        if isinstance(decision, KeepExisting):
            logger.info("  Using stored content (%d chars)", len(decision.text))
            return decision.text

        if isinstance(decision, ReplaceWith):
            logger.info(
                "  Replacing stored content (%d chars) with %d chars",
                len(stored_row.content),
                len(decision.text),
            )
            self.repository.delete_article_content(stored_row)
            self._persist(article.id, decision.text, decision.provenance)
            return decision.text

        if isinstance(decision, CreateNew):
            logger.info("  Saving new content (%d chars)", len(decision.text))
            self._persist(article.id, decision.text, decision.provenance)
            return decision.text

        raise TypeError(f"Unexpected content decision: {decision!r}")

    def _persist(self, article_id: int, text: str, provenance: Provenance) -> None:
        self.repository.create_article_content(
            article_id,
            text,
            scraped_with_requests=provenance.scraped_with_requests,
            scraped_with_browser=provenance.scraped_with_browser,
        )
