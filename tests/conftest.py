"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from typing import Dict, List
from unittest.mock import Mock

import pytest
import requests

from rrss.config import Config
from rrss.ledger import Ledger
from rrss.models import Article, RawEntry


class FakeSource:
    """Serves canned entries per URL and records what was asked for."""

    def __init__(self, feeds: Dict[str, List[RawEntry]]):
        self.feeds = feeds
        self.calls: List[str] = []

    def fetch(self, url):
        self.calls.append(url)
        return list(self.feeds.get(url, []))


def make_entry(n, day=15, link=None, **kwargs):
    return RawEntry(
        title=kwargs.pop("title", f"Item {n}"),
        link=link if link is not None else f"https://example.com/{n}",
        published_at=kwargs.pop("published_at", datetime(2024, 1, day, 12, n % 60, tzinfo=timezone.utc)),
        content=kwargs.pop("content", f"<p>body {n}</p>"),
        summary=kwargs.pop("summary", ""),
    )


def make_response(body=b"", status=200):
    """A requests.Response stand-in."""
    response = Mock()
    response.content = body
    response.text = body.decode("utf-8") if isinstance(body, bytes) else body
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return response


@pytest.fixture
def config(tmp_path):
    """Config rooted in a fresh temporary directory."""
    return Config(root=tmp_path / "out")


@pytest.fixture
def ledger(config):
    return Ledger(config.ledger_path)


@pytest.fixture
def sample_article():
    return Article(
        title="Test Company Raises $50M",
        link="https://example.com/2024/01/15/test-article/",
        published_at=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        content="<p>Test Company announced today a Series B.</p>",
        tags=("news", "money"),
    )


SAMPLE_RSS = b"""<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Example</title>
    <link>https://example.com/</link>
    <description>Example feed</description>
    <item>
      <title>First post</title>
      <link>https://example.com/first</link>
      <pubDate>Mon, 15 Jan 2024 10:00:00 +0200</pubDate>
      <description>First summary</description>
      <content:encoded><![CDATA[<p>First content</p>]]></content:encoded>
    </item>
    <item>
      <title>Second post</title>
      <link>https://example.com/second</link>
      <pubDate>Sun, 14 Jan 2024 09:00:00 GMT</pubDate>
      <description>Second summary</description>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def sample_rss():
    return SAMPLE_RSS
