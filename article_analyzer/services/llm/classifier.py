"""Relevance classification through the language model."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from article_analyzer.services.llm.client import LLMClient, LLMError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 1000
# Discrete whitelist: 6 and 11 are out, and so is 9.5.
APPROVAL_SCORES = frozenset({7, 8, 9, 10})

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class ClassificationResult(BaseModel):
    """The five fields the model must return, with strict primitive types."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    product: str
    state: str
    hazard: str
    relevance_score: int | float
    united_states_score: int | float

    @field_validator("relevance_score", "united_states_score", mode="before")
    @classmethod
    def _reject_booleans(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("score must be a number, not a boolean")
        return value


@dataclass(frozen=True)
class ValidResult:
    result: ClassificationResult


@dataclass(frozen=True)
class Malformed:
    reason: str


ParsedClassification = ValidResult | Malformed


def parse_classification(raw: str | None) -> ParsedClassification:
    """Parse a model reply into a result; never raises."""
    if raw is None or not raw.strip():
        return Malformed("empty response")

    # Tolerates code fences or chatter around the object.
    match = JSON_OBJECT_PATTERN.search(raw)
    if not match:
        return Malformed("no JSON object in response")

    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        return Malformed(f"invalid JSON: {exc}")
    if not isinstance(payload, dict):
        return Malformed("response JSON is not an object")

    try:
        return ValidResult(ClassificationResult.model_validate(payload))
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        return Malformed(f"invalid or missing fields: {fields or exc}")


def is_approved(result: ClassificationResult | None) -> bool:
    return result is not None and result.relevance_score in APPROVAL_SCORES


class Classifier:
    """Sends the prompt to the model and validates its reply."""

    def __init__(
        self,
        client: LLMClient,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    def classify(self, prompt: str) -> ClassificationResult | None:
        """Return the parsed result, or None when the model gave nothing usable."""
        try:
            raw = self.client.chat(
                [{"role": "user", "content": prompt}],
                model=self.model,
                temperature=0,
                max_tokens=self.max_tokens,
                json_mode=True,
            )
        except LLMError as exc:
            logger.warning("  Classification request failed: %s", exc)
            return None

        parsed = parse_classification(raw)
        if isinstance(parsed, Malformed):
            logger.warning("  Unusable classification response: %s", parsed.reason)
            logger.debug("  Raw response: %r", raw)
            return None
        return parsed.result
