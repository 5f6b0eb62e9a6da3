"""CLI smoke test for the classification call."""

from __future__ import annotations

import argparse
import sys

from article_analyzer.config import get_settings
from article_analyzer.services.llm.classifier import Classifier, is_approved
from article_analyzer.services.llm.client import LLMClient
from article_analyzer.services.llm.prompt import build_prompt


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify one hand-written article.")
    parser.add_argument("--title", default="Space heater recalled after fires in Ohio homes")
    parser.add_argument(
        "--description",
        default="A manufacturer recalled 40,000 space heaters after reports of overheating.",
    )
    parser.add_argument("--content", default="", help="Article body text.")
    parser.add_argument(
        "--model", default=None, help="Model name (defaults to LLM_MODEL from settings)."
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = get_settings()
    client = LLMClient(
        base_url=settings.llm_base_url,
        api_key=settings.openai_api_key,
        default_model=settings.llm_model,
        timeout_s=settings.llm_timeout_seconds,
    )
    classifier = Classifier(client, model=args.model, max_tokens=settings.llm_max_tokens)
    result = classifier.classify(build_prompt(args.title, args.description, args.content))
    if result is None:
        print("LLM error: no usable classification returned", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    print(f"approved={is_approved(result)}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
