from __future__ import annotations

from typing import Any, Dict, List, Optional

import feedparser
import requests
import structlog

from .config import Config, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .exceptions import FeedFetchError
from .models import RawEntry
from .parser import parse_entry

logger = structlog.get_logger()


def fetch_feed_entries(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict[str, Any]]:
    """
    Fetch a single feed URL and return its entries.

    Raises FeedFetchError on network/HTTP errors, or when the feed is malformed
    (bozo) or not a feed at all, and nothing could be salvaged from it.
    """
    http = session or requests
    try:
        response = http.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e})") from e

    feed = feedparser.parse(response.content)
    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise FeedFetchError(f"Feed has no entries: {url}")

    if not entries and (getattr(feed, "bozo", 0) or not getattr(feed, "version", "")):
        exc = getattr(feed, "bozo_exception", None)
        msg = f"Invalid RSS/Atom feed: {url}"
        if exc:
            msg += f" ({exc})"
        raise FeedFetchError(msg)
    return entries


class FeedSource:
    """
    Turns a feed URL into RawEntry records.

    A feed that cannot be loaded yields nothing, so one bad line in the feed
    list does not stop the others.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session

    def fetch(self, url: str) -> List[RawEntry]:
        logger.debug("fetching_feed", url=url)
        try:
            entries = fetch_feed_entries(
                url,
                session=self.session,
                user_agent=self.config.user_agent,
                timeout=self.config.timeout,
            )
        except FeedFetchError as e:
            logger.warning("feed_load_failed", url=url, error=str(e))
            return []
        return [parse_entry(e) for e in entries]
