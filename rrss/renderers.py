"""
Output backends. Each takes the sorted articles of one run.

- plain: text blocks on a stream, nothing remembered
- barf: `root/src/<N>/{title,link,date,body,tags/<tag>}`
- blagh: `root/<YYYY>/<MM>/<DD>/<N>/index`

The two directory backends pick the next number by looking at what is already
on disk and record each article in the ledger once its files are written.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Sequence, TextIO

import structlog

from .config import Config
from .exceptions import RenderError, UsageError
from .ledger import Ledger
from .models import Article

logger = structlog.get_logger()

OUTPUT_MODE = 0o775


def ensure_dir(path: Path) -> None:
    try:
        os.makedirs(path, mode=OUTPUT_MODE, exist_ok=True)
    except OSError as e:
        raise RenderError(f"Cannot create directory {path}: {e}") from e


def write_file(directory: Path, name: str, content: str) -> None:
    path = directory / name
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content + "\n")
        os.chmod(path, OUTPUT_MODE)
    except OSError as e:
        raise RenderError(f"Cannot write {path}: {e}") from e


def touch(path: Path) -> None:
    try:
        path.touch(mode=OUTPUT_MODE)
    except OSError as e:
        raise RenderError(f"Cannot create {path}: {e}") from e


def list_names(directory: Path) -> list:
    try:
        return os.listdir(directory)
    except OSError as e:
        raise RenderError(f"Cannot list {directory}: {e}") from e


def last_article_number(directory: Path) -> int:
    """Highest integer entry name in `directory`, 0 if there is none."""
    numbers = [int(name) for name in list_names(directory) if name.isdecimal()]
    return max(numbers, default=0)


class Renderer(Protocol):
    def render(self, articles: Sequence[Article]) -> None:  # pragma: no cover - interface
        ...


class PlainTextRenderer:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def render(self, articles: Sequence[Article]) -> None:
        out = self.stream or sys.stdout
        for a in articles:
            out.write(f"title: {a.title}\nlink: {a.link}\ndate: {a.published_at}\n{a.content}\n\n")


class DirectorySequenceRenderer:
    # http://code.9front.org/hg/barf
    def __init__(self, config: Config, ledger: Ledger) -> None:
        self.dest = config.sequence_dir
        self.ledger = ledger

    def render(self, articles: Sequence[Article]) -> None:
        ensure_dir(self.dest)
        n = last_article_number(self.dest)
        for a in articles:
            n += 1
            d = self.dest / str(n)
            ensure_dir(d)
            write_file(d, "title", a.title)
            write_file(d, "link", a.link)
            write_file(d, "date", str(a.published_at))
            write_file(d, "body", a.content)
            if a.tags:
                ensure_dir(d / "tags")
                for tag in a.tags:
                    touch(d / "tags" / tag)
            self.ledger.mark(a)
            logger.debug("article_rendered", path=str(d), link=a.link)


class DateBucketedRenderer:
    # http://werc.cat-v.org/apps/blagh
    def __init__(self, config: Config, ledger: Ledger) -> None:
        self.root = config.root
        self.ledger = ledger

    def bucket(self, article: Article) -> Path:
        dt = article.published_at
        return self.root / f"{dt.year:d}" / f"{dt.month:02d}" / f"{dt.day:02d}"

    def render(self, articles: Sequence[Article]) -> None:
        for a in articles:
            bucket = self.bucket(a)
            ensure_dir(bucket)
            d = bucket / str(len(list_names(bucket)))
            ensure_dir(d)
            write_file(d, "index", f"{a.title}\n===\n\n{a.content}\n")
            self.ledger.mark(a)
            logger.debug("article_rendered", path=str(d), link=a.link)


RendererFactory = Callable[[Config, Ledger, Optional[TextIO]], Renderer]


def _plain(config: Config, ledger: Ledger, stream: Optional[TextIO]) -> Renderer:
    return PlainTextRenderer(stream)


def _barf(config: Config, ledger: Ledger, stream: Optional[TextIO]) -> Renderer:
    return DirectorySequenceRenderer(config, ledger)


def _blagh(config: Config, ledger: Ledger, stream: Optional[TextIO]) -> Renderer:
    return DateBucketedRenderer(config, ledger)


RENDERERS: Dict[str, RendererFactory] = {
    "": _plain,
    "plain": _plain,
    "barf": _barf,
    "blagh": _blagh,
}


def make_renderer(fmt: str, config: Config, ledger: Ledger,
                  stream: Optional[TextIO] = None) -> Renderer:
    try:
        factory = RENDERERS[fmt or ""]
    except KeyError:
        raise UsageError(f"unknown output format: {fmt!r}") from None
    return factory(config, ledger, stream)
