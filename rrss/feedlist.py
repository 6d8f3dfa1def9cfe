from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from .exceptions import FeedListError
from .models import FeedLine


def is_valid_tag(tag: str) -> bool:
    if tag in (".", ".."):
        return False
    return not any(sep in tag for sep in ("/", os.sep, "\0"))


def parse_feed_list(lines: Iterable[str]) -> Iterator[FeedLine]:
    """
    Parse feed list lines of the form `<url>[ <tag> ...]`.

    Tags given on a line stay active for every following line until another
    line brings its own. Blank lines are skipped. Tags end up as file names,
    so `.`, `..` and anything holding a path separator are rejected.
    """
    tags: Tuple[str, ...] = ()
    for lineno, line in enumerate(lines, 1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) > 1:
            tags = tuple(fields[1:])
            for tag in tags:
                if not is_valid_tag(tag):
                    raise FeedListError(f"line {lineno}: tag {tag!r} cannot be used as a file name")
        yield FeedLine(url=fields[0], tags=tags)


def read_feed_list(path: Union[str, Path]) -> List[FeedLine]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return list(parse_feed_list(f))
    except (OSError, UnicodeDecodeError) as e:
        raise FeedListError(f"Cannot read feed list {path}: {e}") from e
