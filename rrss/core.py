from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

import structlog

from .filters import FilterRegistry
from .ledger import Ledger
from .models import Article, FeedLine, RawEntry
from .normalizer import to_article

logger = structlog.get_logger()


class EntrySource(Protocol):
    def fetch(self, url: str) -> List[RawEntry]:  # pragma: no cover - interface
        ...


def sort_articles(articles: Iterable[Article]) -> List[Article]:
    """Oldest first. The sort is stable, so equal dates keep feed list order."""
    return sorted(articles, key=lambda a: a.published_at)


class FeedReader:
    """
    Drives the feed list through fetch, dedup and assembly.

    Pipeline per line: fetch → drop already-seen entries → assemble Article →
    content filter. `collect` then merges every line and sorts oldest first.
    """

    def __init__(
        self,
        source: EntrySource,
        ledger: Ledger,
        filters: Optional[FilterRegistry] = None,
    ) -> None:
        self.source = source
        self.ledger = ledger
        self.filters = filters if filters is not None else FilterRegistry()

    def load_feed(self, line: FeedLine) -> List[Article]:
        articles: List[Article] = []
        for entry in self.source.fetch(line.url):
            if self.ledger.seen(entry):
                continue
            article = to_article(entry, line.tags)
            self.filters.apply(line.url, article)
            articles.append(article)
        logger.debug("feed_loaded", url=line.url, items=len(articles))
        return articles

    def collect(self, lines: Iterable[FeedLine]) -> List[Article]:
        articles: List[Article] = []
        for line in lines:
            articles.extend(self.load_feed(line))
        return sort_articles(articles)
