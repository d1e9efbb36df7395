"""Shared data models for the takeover scanner."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Status(Enum):
    """Terminal state of one target's detection pipeline."""
    NOT_FOUND = "not found"
    RESOLUTION_ERROR = "resolution error"
    HTTP_ERROR = "http error"
    RESPONSE_ERROR = "response error"
    VULNERABLE = "vulnerable"
    NOT_VULNERABLE = "not vulnerable"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class Fingerprint:
    """A known "unclaimed resource" signature of a third-party service."""
    service: str
    signature: str
    requires_nxdomain: bool = False
    regex: bool = False
    documentation_url: str = ""
    discussion_url: str = ""
    cnames: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScanOutcome:
    """The single result produced for one scan target."""
    target: str
    status: Status
    fingerprint: Optional[Fingerprint] = None
    evidence: str = ""
    cname: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def vulnerable(self) -> bool:
        return self.status is Status.VULNERABLE

    def to_dict(self) -> dict:
        fp = self.fingerprint
        return {
            "subdomain": self.target,
            "status": self.status.value,
            "engine": fp.service if fp else "",
            "documentation": fp.documentation_url if fp else "",
            "discussion": fp.discussion_url if fp else "",
            "cname": self.cname or "",
            "evidence": self.evidence,
        }


# ── resolution results ─────────────────────────────────────────

@dataclass(frozen=True)
class NotFound:
    """The name has no resolvable record at all."""
    host: str


@dataclass(frozen=True)
class Dangling:
    """The name is a CNAME to another host.

    ``unclaimed`` is set when the CNAME target itself has no address record.
    """
    host: str
    cname: str
    unclaimed: bool = False


@dataclass(frozen=True)
class Direct:
    """The name resolves without pointing elsewhere."""
    host: str


@dataclass(frozen=True)
class ResolutionError:
    """The DNS lookup itself failed (timeout, SERVFAIL, ...)."""
    host: str
    message: str = ""


# ── probe results ──────────────────────────────────────────────

@dataclass(frozen=True)
class ProbeOK:
    body: str
    status_code: int


@dataclass(frozen=True)
class ProbeError:
    kind: str              # "http" or "response"
    message: str = ""


# ── match result ───────────────────────────────────────────────

@dataclass(frozen=True)
class MatchResult:
    """Outcome of running the catalog over one piece of evidence.

    ``candidate`` is the first fingerprint whose signature occurred in the
    evidence, confirmed or not. ``fingerprint`` is only set when confirmed.
    """
    vulnerable: bool = False
    fingerprint: Optional[Fingerprint] = None
    candidate: Optional[Fingerprint] = None
    excerpt: str = ""
