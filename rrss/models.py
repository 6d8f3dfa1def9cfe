from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple


@dataclass(frozen=True)
class RawEntry:
    """
    A feed entry as handed over by the parser, before dedup and assembly.

    `content` and `summary` are kept separate; choosing between them is the
    assembler's job.
    """
    title: str
    link: str
    published_at: datetime
    content: str = ""
    summary: str = ""


@dataclass
class Article:
    """
    Canonical unit flowing from the feed reader to a renderer.

    Only `content` may change after assembly, and only through a content filter.
    """
    title: str
    link: str
    published_at: datetime
    content: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FeedLine:
    url: str
    tags: Tuple[str, ...] = ()
