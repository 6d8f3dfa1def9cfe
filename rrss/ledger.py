from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import IO, Union

import structlog

from .exceptions import LedgerError
from .models import Article, RawEntry

logger = structlog.get_logger()

LEDGER_MODE = 0o775


class LedgerKey(str, Enum):
    """How an item is written to the ledger. One deployment uses one key."""
    DATED = "dated"  # "{unix_ts}_{link}": same link on another date is new
    LINK = "link"    # "{link}"


def make_identifier(item: Union[Article, RawEntry], key: LedgerKey = LedgerKey.DATED) -> str:
    link = item.link or "empty"
    if key is LedgerKey.LINK:
        return link
    return f"{int(item.published_at.timestamp())}_{link}"


class Ledger:
    """
    Append-only record of items already rendered, one identifier per line.

    Lookups are exact matches against whole lines. There is no locking: only one
    run may use a given ledger path at a time.
    """

    def __init__(self, path: Union[str, Path], key: LedgerKey = LedgerKey.DATED) -> None:
        self.path = Path(path)
        self.key = LedgerKey(key)

    def identifier(self, item: Union[Article, RawEntry]) -> str:
        return make_identifier(item, self.key)

    def _open(self, flags: int, mode: str) -> IO[str]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, flags | os.O_CREAT, LEDGER_MODE)
        try:
            return os.fdopen(fd, mode, encoding="utf-8")
        except BaseException:
            os.close(fd)
            raise

    def is_seen(self, identifier: str) -> bool:
        """
        Return True if `identifier` is already in the ledger.

        An unreadable ledger counts as "seen" so nothing gets rendered twice.
        """
        try:
            with self._open(os.O_RDONLY, "r") as f:
                for line in f:
                    if line.rstrip("\r\n") == identifier:
                        return True
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("ledger_unreadable", path=str(self.path), error=str(e))
            return True
        return False

    def mark_seen(self, identifier: str) -> None:
        try:
            with self._open(os.O_WRONLY | os.O_APPEND, "a") as f:
                f.write(identifier + "\n")
        except OSError as e:
            raise LedgerError(f"Cannot write ledger {self.path}: {e}") from e

    def seen(self, item: Union[Article, RawEntry]) -> bool:
        return self.is_seen(self.identifier(item))

    def mark(self, item: Union[Article, RawEntry]) -> None:
        self.mark_seen(self.identifier(item))
