"""Subdomain takeover detection core."""

from .base import BaseProber, BaseResolver
from .config import ScanConfig
from .dispatcher import Dispatcher
from .exceptions import (
    ConfigError,
    FingerprintLoadError,
    TakeoverError,
    TargetLoadError,
)
from .fingerprints import load_fingerprints
from .matcher import match
from .models import Fingerprint, ScanOutcome, Status
from .pipeline import DetectionPipeline
from .prober import HTTPProber
from .resolver import DNSResolver
from .targets import load_targets

__version__ = "1.0.0"

__all__ = [
    "BaseProber",
    "BaseResolver",
    "ConfigError",
    "DNSResolver",
    "DetectionPipeline",
    "Dispatcher",
    "Fingerprint",
    "FingerprintLoadError",
    "HTTPProber",
    "ScanConfig",
    "ScanOutcome",
    "Status",
    "TakeoverError",
    "TargetLoadError",
    "load_fingerprints",
    "load_targets",
    "match",
]
