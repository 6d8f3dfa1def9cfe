from __future__ import annotations

import calendar
import time
import warnings
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from dateutil import parser as date_parser
from dateutil.parser import UnknownTimezoneWarning

from .models import RawEntry

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Zone abbreviations common in RFC 822 feed dates
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UT": timezone.utc,
    "UTC": timezone.utc,
    "Z": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}


def _to_datetime(entry: Dict[str, Any]) -> Optional[datetime]:
    """
    Convert feed entry date fields to a timezone-aware datetime.

    The raw date string is preferred because it keeps the feed's own offset;
    feedparser's *_parsed structs are already normalized to UTC. A string whose
    zone is not understood defers to the struct, and is read as UTC only when
    there is none.
    Priority: published -> updated -> created, each string first then struct.
    """
    for key in ("published", "updated", "created"):
        s = entry.get(key)
        val = entry.get(key + "_parsed")
        struct = val if isinstance(val, time.struct_time) else None
        if isinstance(s, str) and s.strip():
            try:
                with warnings.catch_warnings():
                    warnings.simplefilter("ignore", UnknownTimezoneWarning)
                    dt = date_parser.parse(s, tzinfos=TZINFOS)
            except (ValueError, OverflowError):
                dt = None
            if dt is not None and dt.tzinfo is not None:
                return dt
            if dt is not None and struct is None:
                return dt.replace(tzinfo=timezone.utc)
        if struct is not None:
            return datetime.fromtimestamp(calendar.timegm(struct), tz=timezone.utc)
    return None


def _get_content(entry: Dict[str, Any]) -> str:
    # feedparser exposes <content:encoded>/<content> as a list of dicts
    content = entry.get("content")
    if isinstance(content, list):
        for c in content:
            value = c.get("value") if isinstance(c, dict) else None
            if isinstance(value, str) and value:
                return value
    return ""


def parse_entry(entry: Dict[str, Any]) -> RawEntry:
    """
    Map a raw feed entry (from feedparser) to a RawEntry.

    Entries without any usable date get the Unix epoch so that their ledger
    identifier is the same on every run.
    """
    title = (entry.get("title") or "").strip()
    link = (entry.get("link") or entry.get("feedburner_origlink") or "").strip()
    summary = entry.get("summary") or entry.get("description") or ""
    published_at = _to_datetime(entry) or EPOCH

    return RawEntry(
        title=title,
        link=link,
        published_at=published_at,
        content=_get_content(entry),
        summary=summary,
    )
