from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import requests
import structlog
from dotenv import load_dotenv

from .config import Config
from .core import FeedReader
from .exceptions import RrssError
from .feedlist import read_feed_list
from .fetcher import FeedSource
from .filters import default_filters
from .ledger import Ledger
from .logs import configure_logging
from .renderers import make_renderer

logger = structlog.get_logger()

FORMATS = ("barf", "blagh")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rrss",
        description="RSS feed reader that outputs plain text, barf or blagh entries.",
    )
    parser.add_argument("-d", dest="debug", action="store_true",
                        help="print debug msgs to stderr")
    parser.add_argument("-f", dest="format", choices=FORMATS, default="",
                        help="output format (default: plain text on stdout)")
    parser.add_argument("-r", dest="root", default=None,
                        help="output root (default: $RRSS_ROOT or .)")
    parser.add_argument("feedlist", help="feed file: one `<url> [tag ...]` per line")
    return parser


def run(config: Config, feedlist: str) -> None:
    ledger = Ledger(config.ledger_path, config.ledger_key)
    renderer = make_renderer(config.format, config, ledger)
    lines = read_feed_list(feedlist)

    with requests.Session() as session:
        reader = FeedReader(
            FeedSource(config, session=session),
            ledger,
            default_filters(session=session, timeout=config.timeout),
        )
        articles = reader.collect(lines)

    renderer.render(articles)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        config = Config.from_env(root=args.root, format=args.format, debug=args.debug)
    except ValueError as e:
        parser.error(f"bad configuration: {e}")
    try:
        run(config, args.feedlist)
    except RrssError as e:
        logger.critical("fatal_error", error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
