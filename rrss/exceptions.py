class RrssError(Exception):
    """Base class for errors that end a run."""


class FeedFetchError(RrssError):
    """Raised when an RSS/Atom feed cannot be fetched or parsed."""


class FilterError(RrssError):
    """Raised when a registered content filter cannot rewrite an article."""


class LedgerError(RrssError):
    """Raised when the seen-items ledger cannot be written."""


class RenderError(RrssError):
    """Raised when a renderer cannot write its output."""


class FeedListError(RrssError):
    """Raised when the feed list file cannot be read."""


class UsageError(RrssError):
    """Raised on an invalid command line or output format."""
