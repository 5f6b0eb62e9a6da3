"""Candidate selection: which articles still need an AI decision."""

from __future__ import annotations

import logging

from article_analyzer.db.models import Article
from article_analyzer.db.repository import Repository

logger = logging.getLogger(__name__)

DEFAULT_RATING_THRESHOLD = 0.4


class Selector:
    def __init__(
        self,
        repository: Repository,
        scorer_entity_id: int,
        threshold: float = DEFAULT_RATING_THRESHOLD,
    ) -> None:
        self.repository = repository
        self.scorer_entity_id = scorer_entity_id
        self.threshold = threshold

    def excluded_article_ids(self) -> set[int]:
        """Articles already decided by a human or by any AI run."""
        excluded = set(self.repository.human_approved_article_ids())
        excluded.update(self.repository.ai_approved_article_ids())
        logger.info("Found %d previously processed articles", len(excluded))
        return excluded

    def select(self) -> list[Article]:
        """Eligible articles, newest first."""
        excluded = self.excluded_article_ids()
        article_ids = self.repository.eligible_article_ids(
            self.scorer_entity_id, self.threshold, excluded
        )
        if not article_ids:
            logger.info("No eligible articles found.")
            return []
        return self.repository.get_articles(article_ids)
