"""ORM models for the NewsNexus tables the analyzer reads and writes.

Table and column names match the existing datastore (camelCase columns,
pluralized table names), while Python attributes stay snake_case.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


class Article(TimestampMixin, Base):
    __tablename__ = "Articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str | None] = mapped_column(String, nullable=True)
    publication_name: Mapped[str | None] = mapped_column("publicationName", String, nullable=True)
    published_date: Mapped[str | None] = mapped_column("publishedDate", String, nullable=True)


class ArticleContent(TimestampMixin, Base):
    __tablename__ = "ArticleContents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    article_id: Mapped[int] = mapped_column(
        "articleId", ForeignKey("Articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    scraped_with_requests: Mapped[bool] = mapped_column(
        "scrapeStatusCheerio", Boolean, nullable=False, default=False
    )
    # NULL means the rendered tier was never attempted for this row.
    scraped_with_browser: Mapped[bool | None] = mapped_column(
        "scrapeStatusPuppeteer", Boolean, nullable=True
    )


class ArtificialIntelligence(TimestampMixin, Base):
    __tablename__ = "ArtificialIntelligences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)


class EntityWhoCategorizedArticle(TimestampMixin, Base):
    __tablename__ = "EntityWhoCategorizedArticles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    artificial_intelligence_id: Mapped[int | None] = mapped_column(
        "artificialIntelligenceId", ForeignKey("ArtificialIntelligences.id"), nullable=True
    )
    user_id: Mapped[int | None] = mapped_column("userId", Integer, nullable=True)


class ArticleScoreContract(TimestampMixin, Base):
    """Relevance rating a scoring entity gave an article upstream."""

    __tablename__ = "ArticleEntityWhoCategorizedArticleContracts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    article_id: Mapped[int] = mapped_column(
        "articleId", ForeignKey("Articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    entity_who_categorizes_id: Mapped[int] = mapped_column(
        "entityWhoCategorizesId", ForeignKey("EntityWhoCategorizedArticles.id"), nullable=False
    )
    keyword: Mapped[str | None] = mapped_column(String, nullable=True)
    keyword_rating: Mapped[float | None] = mapped_column("keywordRating", Float, nullable=True)


class HumanApproval(TimestampMixin, Base):
    __tablename__ = "ArticleApproveds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    article_id: Mapped[int] = mapped_column(
        "articleId", ForeignKey("Articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int | None] = mapped_column("userId", Integer, nullable=True)
    is_approved: Mapped[bool] = mapped_column("isApproved", Boolean, nullable=False, default=True)


class ApprovalRecord(TimestampMixin, Base):
    """One row per classification attempt by an AI system."""

    __tablename__ = "ArticlesApproved02"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    article_id: Mapped[int] = mapped_column(
        "articleId", ForeignKey("Articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    artificial_intelligence_id: Mapped[int] = mapped_column(
        "artificialIntelligenceId", ForeignKey("ArtificialIntelligences.id"), nullable=False
    )
    is_approved: Mapped[bool] = mapped_column("isApproved", Boolean, nullable=False)
    headline_for_pdf_report: Mapped[str | None] = mapped_column(
        "headlineForPdfReport", String, nullable=True
    )
    publication_name_for_pdf_report: Mapped[str | None] = mapped_column(
        "publicationNameForPdfReport", String, nullable=True
    )
    publication_date_for_pdf_report: Mapped[str | None] = mapped_column(
        "publicationDateForPdfReport", String, nullable=True
    )
    url_for_pdf_report: Mapped[str | None] = mapped_column("urlForPdfReport", String, nullable=True)


class AttributeRecord(TimestampMixin, Base):
    """A single classified key/value an AI system attached to an article."""

    __tablename__ = "ArticleEntityWhoCategorizedArticleContracts02"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    article_id: Mapped[int] = mapped_column(
        "articleId", ForeignKey("Articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    entity_who_categorizes_id: Mapped[int] = mapped_column(
        "entityWhoCategorizesId", ForeignKey("EntityWhoCategorizedArticles.id"), nullable=False
    )
    key: Mapped[str] = mapped_column(String, nullable=False)
    value_string: Mapped[str | None] = mapped_column("valueString", Text, nullable=True)
    value_number: Mapped[float | None] = mapped_column("valueNumber", Float, nullable=True)


class State(TimestampMixin, Base):
    __tablename__ = "States"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    abbreviation: Mapped[str | None] = mapped_column(String, nullable=True)


class GeoLinkRecord(TimestampMixin, Base):
    __tablename__ = "ArticleStateContract02s"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    article_id: Mapped[int] = mapped_column(
        "articleId", ForeignKey("Articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    state_id: Mapped[int] = mapped_column("stateId", ForeignKey("States.id"), nullable=False)
