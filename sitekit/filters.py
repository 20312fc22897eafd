from __future__ import annotations

from .dates import date_display, format_date
from .render import strip_tags
from .tags import group_by
from .utils import relative_url

EXCERPT_SEPARATOR = "<!--more-->"
EXCERPT_WORDS = 30


def excerpt(content: str) -> str:
    if EXCERPT_SEPARATOR in content:
        return strip_tags(content.split(EXCERPT_SEPARATOR, 1)[0])
    return " ".join(strip_tags(content).split()[:EXCERPT_WORDS])


FILTERS = {
    "dateDisplay": date_display,
    "date": format_date,
    "excerpt": excerpt,
    "groupby": group_by,
    "relative_url": relative_url,
}
