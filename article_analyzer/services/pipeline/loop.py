"""Sequential article processing with an approval target and a circuit breaker.

Counters live in an immutable ``LoopState`` that the transition functions
return updated copies of, so the stopping rules can be exercised without any
I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial

from article_analyzer.config import Settings
from article_analyzer.db.repository import Repository
from article_analyzer.errors import InitializationError
from article_analyzer.services.content import scraper
from article_analyzer.services.content.acquirer import ContentAcquirer
from article_analyzer.services.llm.classifier import Classifier
from article_analyzer.services.llm.client import LLMClient
from article_analyzer.services.llm.prompt import DEFAULT_TEMPLATE_PATH, build_prompt, load_template
from article_analyzer.services.pipeline.recorder import ResultRecorder
from article_analyzer.services.pipeline.selector import Selector

logger = logging.getLogger(__name__)

MAX_CONSECUTIVE_FAILURES = 3


class RunStatus(str, Enum):
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class LoopState:
    analyzed: int = 0
    approved: int = 0
    consecutive_failures: int = 0


@dataclass(frozen=True)
class RunSummary:
    status: RunStatus
    reason: str
    analyzed: int
    approved: int

    @property
    def exit_code(self) -> int:
        return 0 if self.status is RunStatus.DONE else 1


def register_classification(state: LoopState, result_present: bool) -> LoopState:
    if result_present:
        return replace(state, consecutive_failures=0)
    return replace(state, consecutive_failures=state.consecutive_failures + 1)


def register_recording(state: LoopState, approved: bool) -> LoopState:
    return replace(state, approved=state.approved + 1) if approved else state


def check_terminal(state: LoopState, target: int) -> RunSummary | None:
    """Return a summary if the run must stop now, else None."""
    if state.consecutive_failures >= MAX_CONSECUTIVE_FAILURES:
        return RunSummary(
            RunStatus.ABORTED,
            f"{state.consecutive_failures} consecutive classification failures",
            state.analyzed,
            state.approved,
        )
    if state.approved >= target:
        return RunSummary(
            RunStatus.DONE,
            f"target reached: {state.approved}/{target} articles approved",
            state.analyzed,
            state.approved,
        )
    return None


@dataclass(frozen=True)
class Identities:
    scorer_entity_id: int
    ai_id: int
    entity_id: int


def resolve_identities(repository: Repository, scorer_name: str, app_name: str) -> Identities:
    """Look up the gating scorer and this service's own categorizing identity."""
    scorer_ai = repository.get_ai_by_name(scorer_name)
    if scorer_ai is None:
        raise InitializationError(f"Could not find AI system {scorer_name!r}")
    scorer_entity = repository.get_entity_for_ai(scorer_ai.id)
    if scorer_entity is None:
        raise InitializationError(
            f"Could not find EntityWhoCategorizedArticle for AI system ID {scorer_ai.id}"
        )

    own_ai = repository.get_ai_by_name(app_name)
    if own_ai is None:
        raise InitializationError(f"Could not find AI system {app_name!r}")
    own_entity = repository.get_entity_for_ai(own_ai.id)
    if own_entity is None:
        raise InitializationError(
            f"Could not find EntityWhoCategorizedArticle for AI system ID {own_ai.id}"
        )

    logger.info("Scorer %s -> entity %s", scorer_ai.name, scorer_entity.id)
    logger.info("Service %s -> AI %s, entity %s", own_ai.name, own_ai.id, own_entity.id)
    return Identities(
        scorer_entity_id=scorer_entity.id, ai_id=own_ai.id, entity_id=own_entity.id
    )


class ProcessingLoop:
    def __init__(
        self,
        selector: Selector,
        acquirer: ContentAcquirer,
        classifier: Classifier,
        recorder: ResultRecorder,
        target: int,
        prompt_template: str | None = None,
    ) -> None:
        self.selector = selector
        self.acquirer = acquirer
        self.classifier = classifier
        self.recorder = recorder
        self.target = target
        self.prompt_template = prompt_template

    def run(self) -> RunSummary:
        """Process eligible articles until a terminal condition.

        Errors raised while acquiring content or recording results propagate.
        """
        logger.info("Target approved articles: %d", self.target)
        articles = self.selector.select()
        logger.info("Found %d eligible articles to process", len(articles))

        state = LoopState()
        for index, article in enumerate(articles, start=1):
            summary = check_terminal(state, self.target)
            if summary is not None:
                return self._finish(summary)

            state = replace(state, analyzed=state.analyzed + 1)
            logger.info(
                "[%d/%d] Processing article %s: %s", index, len(articles), article.id, article.title
            )
            logger.info("  Progress: %d/%d approved", state.approved, self.target)

            text = self.acquirer.acquire(article)
            prompt = build_prompt(article.title, article.description, text, self.prompt_template)
            result = self.classifier.classify(prompt)
            state = register_classification(state, result is not None)

            if result is None:
                logger.warning(
                    "  Classification failed (%d/%d consecutive); skipping article %s",
                    state.consecutive_failures,
                    MAX_CONSECUTIVE_FAILURES,
                    article.id,
                )
                summary = check_terminal(state, self.target)
                if summary is not None and summary.status is RunStatus.ABORTED:
                    return self._finish(summary)
                continue

            logger.info(
                "  product=%r state=%r hazard=%r relevance=%s us=%s",
                result.product,
                result.state,
                result.hazard,
                result.relevance_score,
                result.united_states_score,
            )
            approved = self.recorder.record(article, text, result)
            state = register_recording(state, approved)
            logger.info("  %s", "APPROVED" if approved else "Not approved")

        summary = check_terminal(state, self.target)
        if summary is None or summary.status is not RunStatus.DONE:
            summary = RunSummary(
                RunStatus.DONE, "no more eligible articles", state.analyzed, state.approved
            )
        return self._finish(summary)

    @staticmethod
    def _finish(summary: RunSummary) -> RunSummary:
        log = logger.info if summary.status is RunStatus.DONE else logger.error
        log("Run %s: %s", summary.status.value, summary.reason)
        logger.info("Total articles analyzed: %d", summary.analyzed)
        logger.info("Total articles approved: %d", summary.approved)
        return summary


def build_processing_loop(
    repository: Repository, settings: Settings, target: int | None = None
) -> ProcessingLoop:
    """Resolve identities and wire every component from settings."""
    identities = resolve_identities(repository, settings.semantic_scorer_name, settings.name_app)

    acquirer = ContentAcquirer(
        repository,
        scrape_lightweight=partial(
            scraper.scrape_with_requests,
            timeout=settings.scrape_timeout_seconds,
            user_agent=settings.scrape_user_agent,
        ),
        scrape_rendered=partial(
            scraper.scrape_with_browser,
            timeout=settings.scrape_timeout_seconds,
            user_agent=settings.scrape_user_agent,
        ),
    )
    client = LLMClient(
        base_url=settings.llm_base_url,
        api_key=settings.openai_api_key,
        default_model=settings.llm_model,
        timeout_s=settings.llm_timeout_seconds,
    )
    return ProcessingLoop(
        selector=Selector(
            repository, identities.scorer_entity_id, settings.keyword_rating_threshold
        ),
        acquirer=acquirer,
        classifier=Classifier(client, max_tokens=settings.llm_max_tokens),
        recorder=ResultRecorder(repository, identities.ai_id, identities.entity_id),
        target=settings.target_approved_article_count if target is None else target,
        prompt_template=load_template(settings.prompt_template_path or DEFAULT_TEMPLATE_PATH),
    )
