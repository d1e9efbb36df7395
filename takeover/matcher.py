"""Fingerprint matching.

The catalog is walked in stored order and the first fingerprint whose
signature occurs in the evidence decides the result. A fingerprint flagged
``requires_nxdomain`` only confirms a takeover when the caller reports that
the CNAME target has no further resolvable record; otherwise the platform
page alone is not proof and the target is classified not vulnerable.

Signatures are literal text unless the catalog entry sets ``regex``.
"""

import re
from functools import lru_cache
from typing import Optional, Sequence

from .models import Fingerprint, MatchResult

EXCERPT_RADIUS = 80


@lru_cache(maxsize=512)
def compile_signature(signature: str) -> "re.Pattern":
    """Compile a regex signature; raises ``re.error`` when it is invalid."""
    return re.compile(signature, re.S)


def find(signature: str, evidence: str, regex: bool = False) -> Optional[tuple]:
    """Return the (start, end) span of signature in evidence, or None."""
    if not signature:
        return None
    if regex:
        m = compile_signature(signature).search(evidence)
        return m.span() if m else None
    index = evidence.find(signature)
    if index >= 0:
        return index, index + len(signature)
    return None


def excerpt(evidence: str, span: tuple, radius: int = EXCERPT_RADIUS) -> str:
    start = max(span[0] - radius, 0)
    end = min(span[1] + radius, len(evidence))
    return " ".join(evidence[start:end].split())


def match(evidence: str, catalog: Sequence[Fingerprint], unclaimed: bool = False) -> MatchResult:
    """
    Run the catalog over a piece of evidence.

    Args:
        evidence: Response body or CNAME target
        catalog: Fingerprints in priority order
        unclaimed: The target's CNAME points at a name with no address record

    Returns:
        MatchResult; ``vulnerable`` only for a confirmed first candidate
    """
    if not evidence:
        return MatchResult()

    for fp in catalog:
        span = find(fp.signature, evidence, regex=fp.regex)
        if span is None:
            continue
        confirmed = unclaimed if fp.requires_nxdomain else True
        return MatchResult(
            vulnerable=confirmed,
            fingerprint=fp if confirmed else None,
            candidate=fp,
            excerpt=excerpt(evidence, span),
        )

    return MatchResult()
