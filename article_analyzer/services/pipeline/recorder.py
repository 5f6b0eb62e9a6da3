"""Persist classification outcomes."""

from __future__ import annotations

import logging

from article_analyzer.db.models import Article, AttributeRecord
from article_analyzer.db.repository import Repository
from article_analyzer.services.llm.classifier import ClassificationResult, is_approved

logger = logging.getLogger(__name__)

STRING_KEYS = ("product", "state", "hazard")
NUMERIC_KEYS = ("relevance_score", "united_states_score")


def build_attribute_rows(
    article_id: int, entity_id: int, result: ClassificationResult
) -> list[AttributeRecord]:
    """One row per classified key; only the slot matching the value's type is filled."""
    rows = [
        AttributeRecord(
            article_id=article_id,
            entity_who_categorizes_id=entity_id,
            key=key,
            value_string=getattr(result, key),
            value_number=None,
        )
        for key in STRING_KEYS
    ]
    rows.extend(
        AttributeRecord(
            article_id=article_id,
            entity_who_categorizes_id=entity_id,
            key=key,
            value_string=None,
            value_number=float(getattr(result, key)),
        )
        for key in NUMERIC_KEYS
    )
    return rows


class ResultRecorder:
    """Writes the approval row, attribute rows and optional state link for an article."""

    def __init__(self, repository: Repository, ai_id: int, entity_id: int) -> None:
        self.repository = repository
        self.ai_id = ai_id
        self.entity_id = entity_id

    def record(
        self, article: Article, acquired_text: str, result: ClassificationResult | None
    ) -> bool:
        approved = is_approved(result)
        logger.debug("  Recording article %s (%d chars analyzed)", article.id, len(acquired_text))

        if approved:
            self.repository.create_approval(
                article_id=article.id,
                artificial_intelligence_id=self.ai_id,
                is_approved=True,
                headline=article.title,
                publication_name=article.publication_name,
                publication_date=article.published_date,
                url=article.url,
            )
        else:
            self.repository.create_approval(
                article_id=article.id,
                artificial_intelligence_id=self.ai_id,
                is_approved=False,
            )

        if result is None:
            return False

        self.repository.create_attributes(build_attribute_rows(article.id, self.entity_id, result))

        if approved:
            self._link_state(article, result.state)
        return approved

    def _link_state(self, article: Article, state_name: str) -> None:
        if not state_name.strip():
            logger.warning("  No state returned for approved article %s", article.id)
            return
        state = self.repository.find_state_by_name(state_name)
        if state is None:
            logger.warning("  State %r not found; no state link created", state_name)
            return
        self.repository.create_geo_link(article.id, state.id)
        logger.info("  Linked article %s to state %s", article.id, state.name)
