"""DNS resolution stage: tells dangling CNAMEs apart from missing names."""

import logging
from typing import List
from urllib.parse import urlparse

import dns.exception
import dns.resolver

from .base import BaseResolver, ResolutionResult, has_scheme
from .models import Dangling, Direct, NotFound, ResolutionError

logger = logging.getLogger(__name__)


def hostname(target: str) -> str:
    """Strip scheme, port and path from a target."""
    if has_scheme(target):
        target = urlparse(target).hostname or ""
    else:
        target = target.split("/", 1)[0].split(":", 1)[0]
    return target.strip().rstrip(".").lower()


class DNSResolver(BaseResolver):
    """Resolver backed by dnspython."""

    ADDRESS_TYPES = ["A", "AAAA"]

    def __init__(self, timeout: int = 10, nameservers: List[str] = None):
        super().__init__(timeout=timeout)
        self.nameservers = nameservers

    def _resolver(self) -> dns.resolver.Resolver:
        resolver = dns.resolver.Resolver()
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout
        if self.nameservers:
            resolver.nameservers = self.nameservers
        return resolver

    def resolve(self, target: str) -> ResolutionResult:
        host = hostname(target)
        if not host:
            return NotFound(host=target)

        resolver = self._resolver()
        try:
            cname = self._cname(resolver, host)
            if cname and cname != host:
                unclaimed = not self._has_address(resolver, cname)
                logger.debug("%s is a CNAME to %s (unclaimed=%s)", host, cname, unclaimed)
                return Dangling(host=host, cname=cname, unclaimed=unclaimed)

            if self._has_address(resolver, host):
                return Direct(host=host)
        except dns.exception.DNSException as e:
            logger.debug("DNS lookup failed for %s: %s", host, e)
            return ResolutionError(host=host, message=str(e) or e.__class__.__name__)

        return NotFound(host=host)

    def _query(self, resolver: dns.resolver.Resolver, name: str, rtype: str) -> List[str]:
        """Return the records of one type; an empty list for NXDOMAIN or no answer."""
        try:
            answers = resolver.resolve(name, rtype)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return []
        return [str(rdata) for rdata in answers]

    def _cname(self, resolver: dns.resolver.Resolver, host: str) -> str:
        records = self._query(resolver, host, "CNAME")
        if not records:
            return ""
        return records[0].rstrip(".").lower()

    def _has_address(self, resolver: dns.resolver.Resolver, host: str) -> bool:
        for rtype in self.ADDRESS_TYPES:
            if self._query(resolver, host, rtype):
                return True
        return False
