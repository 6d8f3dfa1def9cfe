from __future__ import annotations

import html
from typing import Sequence

from .models import Article, RawEntry


def resolve_content(entry: RawEntry) -> str:
    """Content if present, else summary, else empty; entities decoded."""
    if entry.content:
        s = entry.content
    elif entry.summary:
        s = entry.summary
    else:
        s = ""
    return html.unescape(s)


def to_article(entry: RawEntry, tags: Sequence[str] = ()) -> Article:
    """
    Convert a RawEntry into an Article carrying the feed list's tags.

    Tags come from the feed list only, never from the entry itself.
    """
    return Article(
        title=entry.title,
        link=entry.link,
        published_at=entry.published_at,
        content=resolve_content(entry),
        tags=tuple(tags),
    )
