"""Scan configuration."""

from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError
from .pipeline import MATCH_ON

DEFAULT_CONCURRENCY = 10
DEFAULT_TIMEOUT = 10
OUTPUT_FORMATS = ("json", "md")


@dataclass(frozen=True)
class ScanConfig:
    concurrency: int = DEFAULT_CONCURRENCY
    timeout: int = DEFAULT_TIMEOUT
    https: bool = False
    verify_tls: bool = False
    only_vulnerable: bool = False
    hide_fails: bool = False
    emoji: bool = False
    match_on: str = "body"
    fingerprints: Optional[str] = None
    output: Optional[str] = None
    format: str = "json"

    def __post_init__(self):
        if not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ConfigError(f"concurrency must be a positive integer, got {self.concurrency!r}")
        if not isinstance(self.timeout, int) or self.timeout < 1:
            raise ConfigError(f"timeout must be a positive integer, got {self.timeout!r}")
        if self.match_on not in MATCH_ON:
            raise ConfigError(f"match_on must be one of {', '.join(MATCH_ON)}, got {self.match_on!r}")
        if self.format not in OUTPUT_FORMATS:
            raise ConfigError(f"format must be one of {', '.join(OUTPUT_FORMATS)}, got {self.format!r}")

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"
