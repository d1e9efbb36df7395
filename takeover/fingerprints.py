"""Fingerprint catalog loading.

The catalog uses the community ``can-i-take-over-xyz`` JSON layout: a list
of objects with ``service``, ``fingerprint``, ``nxdomain``, ``documentation``
and ``discussion`` keys. An optional ``regex`` key marks a fingerprint whose
signature is a regular expression rather than literal text. The catalog is
loaded once before any target is dispatched and returned as an immutable tuple.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests

from .exceptions import FingerprintLoadError
from .matcher import compile_signature
from .models import Fingerprint

logger = logging.getLogger(__name__)

DEFAULT_FINGERPRINTS = Path(__file__).parent / "data" / "fingerprints.json"
FINGERPRINTS_URL = "https://raw.githubusercontent.com/EdOverflow/can-i-take-over-xyz/master/fingerprints.json"

Catalog = Tuple[Fingerprint, ...]


def load_fingerprints(source: Optional[str] = None, timeout: int = 30) -> Catalog:
    """
    Load the fingerprint catalog.

    Args:
        source: File path, http(s) URL, or None for the bundled catalog
        timeout: Download timeout when source is a URL

    Raises:
        FingerprintLoadError: the catalog could not be read or parsed
    """
    if source is None:
        source = str(DEFAULT_FINGERPRINTS)

    if source.startswith(("http://", "https://")):
        entries = _download(source, timeout)
    else:
        entries = _read(Path(source))

    catalog = parse_fingerprints(entries)
    logger.info("Loaded %d fingerprints from %s", len(catalog), source)
    return catalog


def parse_fingerprints(entries: Any) -> Catalog:
    """Turn raw JSON entries into Fingerprints, keeping file order."""
    if not isinstance(entries, list):
        raise FingerprintLoadError("fingerprint catalog must be a JSON list")

    catalog: List[Fingerprint] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise FingerprintLoadError(f"invalid fingerprint entry: {entry!r}")
        fp = _to_fingerprint(entry)
        if fp is not None:
            catalog.append(fp)
    return tuple(catalog)


def _to_fingerprint(entry: Dict[str, Any]) -> Optional[Fingerprint]:
    signature = (entry.get("fingerprint") or "").strip()
    # Entries without a body signature or known to be safe never confirm anything.
    if not signature or entry.get("vulnerable") is False:
        return None

    cnames = entry.get("cname") or []
    if isinstance(cnames, str):
        cnames = [cnames]

    regex = bool(entry.get("regex", False))
    if regex:
        try:
            compile_signature(signature)
        except re.error as e:
            raise FingerprintLoadError(
                f"invalid regex fingerprint for {entry.get('service')!r}: {e}"
            ) from e

    return Fingerprint(
        service=str(entry.get("service") or "Unknown"),
        signature=signature,
        requires_nxdomain=bool(entry.get("nxdomain", False)),
        regex=regex,
        documentation_url=str(entry.get("documentation") or ""),
        discussion_url=str(entry.get("discussion") or ""),
        cnames=tuple(str(c) for c in cnames),
    )


def _read(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FingerprintLoadError(f"cannot read fingerprints from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FingerprintLoadError(f"invalid fingerprint JSON in {path}: {e}") from e


def _download(url: str, timeout: int) -> Any:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        raise FingerprintLoadError(f"cannot download fingerprints from {url}: {e}") from e
    except ValueError as e:
        raise FingerprintLoadError(f"invalid fingerprint JSON from {url}: {e}") from e
