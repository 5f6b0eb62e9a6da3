"""Run the LLM article analyzer until the approval target is reached."""

from __future__ import annotations

import argparse
import logging

from article_analyzer.config import get_settings
from article_analyzer.db.repository import Repository
from article_analyzer.db.session import create_db_engine, create_session_factory
from article_analyzer.errors import InitializationError
from article_analyzer.logging_config import configure_logging
from article_analyzer.services.pipeline.loop import build_processing_loop

logger = logging.getLogger("article_analyzer")


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Classify candidate articles with an LLM.")
    parser.add_argument(
        "--target",
        type=int,
        default=settings.target_approved_article_count,
        help="Stop after this many approvals (default: TARGET_APPROVED_ARTICLE_COUNT).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--log-file",
        default=str(settings.log_file_path),
        help="Log file, overwritten on each run.",
    )
    return parser.parse_args()


def main() -> int:
    settings = get_settings()
    args = parse_args()
    configure_logging(level=args.log_level.upper(), log_file=args.log_file)
    logger.info("=== NewsNexus LLM Article Analyzer ===")

    engine = create_db_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        with session_factory() as session:
            loop = build_processing_loop(Repository(session), settings, target=args.target)
            summary = loop.run()
    except InitializationError as exc:
        logger.error("Initialization failed: %s", exc)
        return 1
    except Exception as exc:  # noqa: BLE001 - top-level entrypoint guard
        logger.exception("Fatal error: %s", exc)
        return 1
    finally:
        engine.dispose()

    logger.info("Service exiting.")
    return summary.exit_code


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
