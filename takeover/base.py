"""Base classes for the network-facing pipeline stages."""

from abc import ABC, abstractmethod
from typing import Union

from .models import Dangling, Direct, NotFound, ProbeError, ProbeOK, ResolutionError

ResolutionResult = Union[NotFound, Dangling, Direct, ResolutionError]
ProbeResult = Union[ProbeOK, ProbeError]


class BaseResolver(ABC):
    """Base class for DNS resolvers used by the detection pipeline."""

    def __init__(self, timeout: int = 10):
        """
        Initialize resolver.

        Args:
            timeout: DNS query lifetime in seconds
        """
        self.timeout = timeout

    @abstractmethod
    def resolve(self, host: str) -> ResolutionResult:
        """
        Classify the DNS state of a host.

        Returns:
            NotFound, Dangling, Direct or ResolutionError
        """
        pass


class BaseProber(ABC):
    """Base class for HTTP probers used by the detection pipeline."""

    def __init__(self, https: bool = False, timeout: int = 10, verify_tls: bool = False):
        """
        Initialize prober.

        Args:
            https: Use https:// for targets given without a scheme
            timeout: Request timeout in seconds
            verify_tls: Validate TLS certificates
        """
        self.https = https
        self.timeout = timeout
        self.verify_tls = verify_tls

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"

    def build_url(self, host: str) -> str:
        """Return host verbatim if it already carries a scheme, else prefix one."""
        if has_scheme(host):
            return host
        return f"{self.scheme}://{host}"

    @abstractmethod
    def probe(self, host: str) -> ProbeResult:
        """Issue exactly one request against host."""
        pass


def has_scheme(value: str) -> bool:
    lowered = value.lower()
    return lowered.startswith("http://") or lowered.startswith("https://")
