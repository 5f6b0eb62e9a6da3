from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from article_analyzer.db.models import (
    Article,
    ArticleScoreContract,
    ArtificialIntelligence,
    Base,
    EntityWhoCategorizedArticle,
    State,
)
from article_analyzer.db.repository import Repository


@pytest.fixture
def session() -> Iterator[Session]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine, expire_on_commit=False) as db:
        yield db
    engine.dispose()


@pytest.fixture
def repository(session: Session) -> Repository:
    return Repository(session)


def add_article(session: Session, article_id: int, **fields: object) -> Article:
    values: dict[str, object] = {
        "title": f"Article {article_id}",
        "description": f"Description of article {article_id}",
        "url": f"https://news.example.com/{article_id}",
        "publication_name": "Example Gazette",
        "published_date": "2024-05-01",
    }
    values.update(fields)
    article = Article(id=article_id, **values)
    session.add(article)
    session.commit()
    return article


def add_ai_entity(session: Session, name: str) -> tuple[int, int]:
    ai = ArtificialIntelligence(name=name)
    session.add(ai)
    session.flush()
    entity = EntityWhoCategorizedArticle(artificial_intelligence_id=ai.id)
    session.add(entity)
    session.commit()
    return ai.id, entity.id


def add_rating(session: Session, article_id: int, entity_id: int, rating: float) -> None:
    session.add(
        ArticleScoreContract(
            article_id=article_id,
            entity_who_categorizes_id=entity_id,
            keyword="product safety",
            keyword_rating=rating,
        )
    )
    session.commit()


def add_state(session: Session, name: str, abbreviation: str) -> State:
    state = State(name=name, abbreviation=abbreviation)
    session.add(state)
    session.commit()
    return state
