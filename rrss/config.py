from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .ledger import LedgerKey

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; hjdicks)"
DEFAULT_TIMEOUT = 30.0


@dataclass
class Config:
    """
    Run configuration, built once at startup and passed to every component
    that touches the filesystem or the network.

    Environment variables (also read from `.env` by the CLI):
    - RRSS_ROOT: output root, overridden by `-r`
    - RRSS_LEDGER_KEY: "dated" (default) or "link"
    - RRSS_USER_AGENT: User-Agent header for feed requests
    - RRSS_TIMEOUT: request timeout in seconds
    """
    root: Path = Path(".")
    format: str = ""
    debug: bool = False
    ledger_key: LedgerKey = LedgerKey.DATED
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self.ledger_key = LedgerKey(self.ledger_key)

    @property
    def ledger_path(self) -> Path:
        return self.root / "links"

    @property
    def sequence_dir(self) -> Path:
        return self.root / "src"

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        values = {
            "root": Path(os.getenv("RRSS_ROOT") or "."),
            "ledger_key": os.getenv("RRSS_LEDGER_KEY") or LedgerKey.DATED.value,
            "user_agent": os.getenv("RRSS_USER_AGENT") or DEFAULT_USER_AGENT,
            "timeout": float(os.getenv("RRSS_TIMEOUT") or DEFAULT_TIMEOUT),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
