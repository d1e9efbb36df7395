"""Per-target detection pipeline: resolve, probe, match."""

import logging
from typing import Sequence

from .base import BaseProber, BaseResolver
from .matcher import match
from .models import (
    Dangling,
    Direct,
    Fingerprint,
    MatchResult,
    NotFound,
    ProbeError,
    ResolutionError,
    ScanOutcome,
    Status,
)

logger = logging.getLogger(__name__)

MATCH_ON = ("body", "cname", "both")
BODY_PREVIEW = 200


class DetectionPipeline:
    """Classify a single target. Safe to share between worker threads."""

    def __init__(
        self,
        catalog: Sequence[Fingerprint],
        resolver: BaseResolver,
        prober: BaseProber,
        match_on: str = "body",
    ):
        if match_on not in MATCH_ON:
            raise ValueError(f"match_on must be one of {', '.join(MATCH_ON)}")
        self.catalog = tuple(catalog)
        self.resolver = resolver
        self.prober = prober
        self.match_on = match_on

    def run(self, target: str) -> ScanOutcome:
        resolution = self.resolver.resolve(target)

        if isinstance(resolution, NotFound):
            return ScanOutcome(target=target, status=Status.NOT_FOUND, evidence=resolution.host)

        if isinstance(resolution, ResolutionError):
            return ScanOutcome(target=target, status=Status.RESOLUTION_ERROR, evidence=resolution.message)

        if isinstance(resolution, Dangling):
            cname, unclaimed = resolution.cname, resolution.unclaimed
        elif isinstance(resolution, Direct):
            cname, unclaimed = None, False
        else:
            raise TypeError(f"unexpected resolution result: {resolution!r}")

        result = self.prober.probe(target)
        if isinstance(result, ProbeError):
            status = Status.RESPONSE_ERROR if result.kind == "response" else Status.HTTP_ERROR
            return ScanOutcome(target=target, status=status, evidence=result.message, cname=cname)

        found = self._match(result.body, cname or resolution.host, unclaimed)
        if found.vulnerable:
            logger.info("%s matches %s", target, found.fingerprint.service)
            return ScanOutcome(
                target=target,
                status=Status.VULNERABLE,
                fingerprint=found.fingerprint,
                evidence=found.excerpt,
                cname=cname,
                status_code=result.status_code,
            )

        evidence = found.excerpt or " ".join(result.body[:BODY_PREVIEW].split())
        return ScanOutcome(
            target=target,
            status=Status.NOT_VULNERABLE,
            evidence=evidence,
            cname=cname,
            status_code=result.status_code,
        )

    def _match(self, body: str, cname: str, unclaimed: bool) -> MatchResult:
        """Apply the evidence policy: body, cname, or body then cname."""
        if self.match_on == "cname":
            return match(cname, self.catalog, unclaimed)
        found = match(body, self.catalog, unclaimed)
        if self.match_on == "both" and found.candidate is None:
            return match(cname, self.catalog, unclaimed)
        return found
