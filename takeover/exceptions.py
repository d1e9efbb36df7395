"""Errors that abort a scan run before any target is dispatched."""


class TakeoverError(Exception):
    """Base class for fatal scanner errors."""


class ConfigError(TakeoverError):
    """Invalid scan configuration."""


class FingerprintLoadError(TakeoverError):
    """The fingerprint catalog could not be loaded."""


class TargetLoadError(TakeoverError):
    """The target list could not be loaded."""
