from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional

import requests
import structlog

from .config import DEFAULT_TIMEOUT
from .exceptions import FilterError
from .models import Article

logger = structlog.get_logger()

ContentFilter = Callable[[Article], None]

EXPLOSM_FEED = "http://feeds.feedburner.com/Explosm"


def absolutize_src(line: str) -> str:
    """Turn the first protocol-relative `src="//..."` into an http URL."""
    return line.replace('src="', 'src="http:', 1)


class ScrapeFilter:
    """
    Replace an article's content with one line of its linked page.

    The page at `article.link` is scanned line by line; the first line holding
    `marker` becomes the new content after `transform`. Without a match the
    content is left alone.
    """

    def __init__(
        self,
        marker: str,
        *,
        transform: Callable[[str], str] = absolutize_src,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.marker = marker
        self.transform = transform
        self.session = session
        self.timeout = timeout

    def __call__(self, article: Article) -> None:
        http = self.session or requests
        try:
            response = http.get(article.link, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FilterError(f"Cannot scrape {article.link}: {e}") from e

        for line in response.text.splitlines():
            if self.marker in line:
                article.content = self.transform(line)
                return
        logger.debug("filter_marker_missing", link=article.link, marker=self.marker)


class FilterRegistry:
    """Feed URL -> content filter. Lookups are by exact URL string."""

    def __init__(self, filters: Optional[Dict[str, ContentFilter]] = None) -> None:
        self._filters: Dict[str, ContentFilter] = dict(filters or {})

    def register(self, url: str, fn: ContentFilter) -> None:
        self._filters[url] = fn

    def get(self, url: str) -> Optional[ContentFilter]:
        return self._filters.get(url)

    def apply(self, url: str, article: Article) -> None:
        fn = self._filters.get(url)
        if fn is not None:
            fn(article)

    def __contains__(self, url: object) -> bool:
        return url in self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)


def default_filters(
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FilterRegistry:
    return FilterRegistry({
        EXPLOSM_FEED: ScrapeFilter("main-comic", session=session, timeout=timeout),
    })
