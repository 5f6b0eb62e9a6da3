"""Read and write operations the analyzer needs from the datastore."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from article_analyzer.db.models import (
    ApprovalRecord,
    Article,
    ArticleContent,
    ArticleScoreContract,
    ArtificialIntelligence,
    AttributeRecord,
    EntityWhoCategorizedArticle,
    GeoLinkRecord,
    HumanApproval,
    State,
)


class Repository:
    """Thin query layer over a SQLAlchemy session.

    Every write commits immediately: a run that aborts midway keeps whatever
    it already recorded.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # Identities -------------------------------------------------------------

    def get_ai_by_name(self, name: str) -> ArtificialIntelligence | None:
        stmt = select(ArtificialIntelligence).where(ArtificialIntelligence.name == name)
        return self.session.scalars(stmt).first()

    def get_entity_for_ai(self, ai_id: int) -> EntityWhoCategorizedArticle | None:
        stmt = select(EntityWhoCategorizedArticle).where(
            EntityWhoCategorizedArticle.artificial_intelligence_id == ai_id
        )
        return self.session.scalars(stmt).first()

    # Selection --------------------------------------------------------------

    def human_approved_article_ids(self) -> list[int]:
        return list(self.session.scalars(select(HumanApproval.article_id)))

    def ai_approved_article_ids(self) -> list[int]:
        return list(self.session.scalars(select(ApprovalRecord.article_id)))

    def eligible_article_ids(
        self, scorer_entity_id: int, threshold: float, exclude: Iterable[int]
    ) -> list[int]:
        """Ids rated above ``threshold`` by the scorer, newest first."""
        stmt = (
            select(ArticleScoreContract.article_id)
            .where(
                ArticleScoreContract.entity_who_categorizes_id == scorer_entity_id,
                ArticleScoreContract.keyword_rating > threshold,
            )
            .distinct()
            .order_by(ArticleScoreContract.article_id.desc())
        )
        excluded = list(exclude)
        if excluded:
            stmt = stmt.where(ArticleScoreContract.article_id.notin_(excluded))
        return list(self.session.scalars(stmt))

    def get_articles(self, article_ids: Iterable[int]) -> list[Article]:
        ids = list(article_ids)
        if not ids:
            return []
        stmt = select(Article).where(Article.id.in_(ids)).order_by(Article.id.desc())
        return list(self.session.scalars(stmt))

    # Content ----------------------------------------------------------------

    def get_article_content(self, article_id: int) -> ArticleContent | None:
        stmt = select(ArticleContent).where(ArticleContent.article_id == article_id)
        return self.session.scalars(stmt).first()

    def create_article_content(
        self,
        article_id: int,
        content: str,
        *,
        scraped_with_requests: bool,
        scraped_with_browser: bool | None,
    ) -> ArticleContent:
        row = ArticleContent(
            article_id=article_id,
            content=content,
            scraped_with_requests=scraped_with_requests,
            scraped_with_browser=scraped_with_browser,
        )
        self.session.add(row)
        self.session.commit()
        return row

    def delete_article_content(self, row: ArticleContent) -> None:
        self.session.delete(row)
        self.session.commit()

    # Results ----------------------------------------------------------------

    def create_approval(
        self,
        *,
        article_id: int,
        artificial_intelligence_id: int,
        is_approved: bool,
        headline: str | None = None,
        publication_name: str | None = None,
        publication_date: str | None = None,
        url: str | None = None,
    ) -> ApprovalRecord:
        row = ApprovalRecord(
            article_id=article_id,
            artificial_intelligence_id=artificial_intelligence_id,
            is_approved=is_approved,
            headline_for_pdf_report=headline,
            publication_name_for_pdf_report=publication_name,
            publication_date_for_pdf_report=publication_date,
            url_for_pdf_report=url,
        )
        self.session.add(row)
        self.session.commit()
        return row

    def create_attributes(self, rows: Iterable[AttributeRecord]) -> None:
        self.session.add_all(list(rows))
        self.session.commit()

    def find_state_by_name(self, name: str) -> State | None:
        stmt = select(State).where(func.lower(State.name) == name.lower())
        return self.session.scalars(stmt).first()

    def create_geo_link(self, article_id: int, state_id: int) -> GeoLinkRecord:
        row = GeoLinkRecord(article_id=article_id, state_id=state_id)
        self.session.add(row)
        self.session.commit()
        return row
