"""
rrss

An RSS/Atom reader that remembers what it has already shown and writes new
items as plain text, barf entries, or blagh entries.

Core ideas:
- Input: a feed list, one `<url> [tag ...]` per line
- Process: fetch → drop seen items → assemble → content filter → sort (oldest first)
- Output: stdout, `root/src/<N>/...` (barf) or `root/YYYY/MM/DD/<N>/index` (blagh)

Example
-------
from rrss import Config, FeedReader, FeedSource, Ledger, default_filters, make_renderer
from rrss.feedlist import read_feed_list

config = Config(root="out", format="barf")
ledger = Ledger(config.ledger_path)
reader = FeedReader(FeedSource(config), ledger, default_filters())

articles = reader.collect(read_feed_list("feeds"))
make_renderer(config.format, config, ledger).render(articles)
"""
from .models import Article, FeedLine, RawEntry
from .config import Config
from .ledger import Ledger, LedgerKey
from .fetcher import FeedSource
from .filters import FilterRegistry, default_filters
from .core import FeedReader, sort_articles
from .renderers import make_renderer

__all__ = [
    "Article",
    "FeedLine",
    "RawEntry",
    "Config",
    "Ledger",
    "LedgerKey",
    "FeedSource",
    "FilterRegistry",
    "default_filters",
    "FeedReader",
    "sort_articles",
    "make_renderer",
]
