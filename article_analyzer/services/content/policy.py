"""Decision rules for choosing an article's content.

``next_step`` is pure: given the stored content (if any), whether the article
has a URL, and the scrape results gathered so far, it either asks for one more
scraping tier or returns a final decision. The acquirer performs the I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

MIN_STORED_LENGTH = 400
MIN_SCRAPED_LENGTH = 250


class Tier(str, Enum):
    LIGHTWEIGHT = "lightweight"
    RENDERED = "rendered"


@dataclass(frozen=True)
class Provenance:
    scraped_with_requests: bool
    # None: the rendered tier was not attempted.
    scraped_with_browser: bool | None


LIGHTWEIGHT_PROVENANCE = Provenance(scraped_with_requests=True, scraped_with_browser=None)
RENDERED_PROVENANCE = Provenance(scraped_with_requests=False, scraped_with_browser=True)
FALLBACK_PROVENANCE = Provenance(scraped_with_requests=False, scraped_with_browser=False)

TIER_PROVENANCE = {
    Tier.LIGHTWEIGHT: LIGHTWEIGHT_PROVENANCE,
    Tier.RENDERED: RENDERED_PROVENANCE,
}


@dataclass(frozen=True)
class KeepExisting:
    text: str


@dataclass(frozen=True)
class ReplaceWith:
    text: str
    provenance: Provenance


@dataclass(frozen=True)
class CreateNew:
    text: str
    provenance: Provenance


@dataclass(frozen=True)
class TryTier:
    tier: Tier


Decision = KeepExisting | ReplaceWith | CreateNew
Step = Decision | TryTier


def next_step(
    stored: str | None,
    has_url: bool,
    description: str | None,
    attempts: Mapping[Tier, str | None],
) -> Step:
    """Return the next tier to try, or the final content decision.

    ``attempts`` maps each tier already tried to its result (None when the
    tier produced nothing usable). Tiers are always tried lightweight first.
    """
    if stored is not None:
        return _improve_stored(stored, has_url, attempts)

    if not has_url:
        return CreateNew(description or "", FALLBACK_PROVENANCE)

    for tier in (Tier.LIGHTWEIGHT, Tier.RENDERED):
        if tier not in attempts:
            return TryTier(tier)
        text = attempts[tier]
        if text is not None and len(text) >= MIN_SCRAPED_LENGTH:
            return CreateNew(text, TIER_PROVENANCE[tier])
    return CreateNew(description or "", FALLBACK_PROVENANCE)


def _improve_stored(stored: str, has_url: bool, attempts: Mapping[Tier, str | None]) -> Step:
    if len(stored) >= MIN_STORED_LENGTH or not has_url:
        return KeepExisting(stored)

    if Tier.LIGHTWEIGHT not in attempts:
        return TryTier(Tier.LIGHTWEIGHT)
    text = attempts[Tier.LIGHTWEIGHT]
    if text is not None and len(text) >= MIN_STORED_LENGTH and len(text) > len(stored):
        return ReplaceWith(text, LIGHTWEIGHT_PROVENANCE)

    if Tier.RENDERED not in attempts:
        return TryTier(Tier.RENDERED)
    text = attempts[Tier.RENDERED]
    if text is not None and len(text) >= MIN_SCRAPED_LENGTH and len(text) > len(stored):
        return ReplaceWith(text, RENDERED_PROVENANCE)

    # Never downgrade stored content.
    return KeepExisting(stored)
