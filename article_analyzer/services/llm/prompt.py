"""Classification prompt construction."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parents[2] / "templates" / "classification_prompt.md"

PLACEHOLDER_PATTERN = re.compile(r"\{(articleTitle|articleDescription|articleContent)\}")


@lru_cache(maxsize=None)
def load_template(path: Path = DEFAULT_TEMPLATE_PATH) -> str:
    """Read a prompt template once per path."""
    return Path(path).read_text(encoding="utf-8")


def build_prompt(
    title: str | None,
    description: str | None,
    content: str | None,
    template: str | None = None,
) -> str:
    """Substitute article fields into the template, verbatim, wherever they occur.

    Substitution is a single pass, so placeholder-like text inside an article
    field is never expanded again.
    """
    text = template if template is not None else load_template()
    values = {
        "articleTitle": title or "",
        "articleDescription": description or "",
        "articleContent": content or "",
    }
    return PLACEHOLDER_PATTERN.sub(lambda match: values[match.group(1)], text)
