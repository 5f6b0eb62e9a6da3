"""Preview what each scraping tier extracts from a URL, without touching the database."""

from __future__ import annotations

import argparse
import json

from article_analyzer.config import get_settings
from article_analyzer.services.content.scraper import scrape_with_browser, scrape_with_requests


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the scraping tiers against one URL.")
    parser.add_argument("url")
    parser.add_argument(
        "--tier",
        choices=["lightweight", "rendered", "both"],
        default="both",
        help="Which tier(s) to run.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.scrape_timeout_seconds,
        help="Fetch/navigation timeout in seconds.",
    )
    parser.add_argument("--preview-chars", type=int, default=300)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = get_settings()
    tiers = {
        "lightweight": scrape_with_requests,
        "rendered": scrape_with_browser,
    }
    selected = list(tiers) if args.tier == "both" else [args.tier]

    report: dict[str, dict[str, object]] = {}
    for name in selected:
        text = tiers[name](args.url, timeout=args.timeout, user_agent=settings.scrape_user_agent)
        report[name] = {
            "ok": text is not None,
            "length": len(text) if text else 0,
            "preview": (text or "")[: args.preview_chars],
        }
        print(f"[info] {name}: ok={text is not None} length={report[name]['length']}")

    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0 if any(item["ok"] for item in report.values()) else 1


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
