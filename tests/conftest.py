import threading

import pytest

from takeover.base import BaseProber, BaseResolver
from takeover.models import Dangling, Direct, Fingerprint, NotFound, ProbeOK


class StubResolver(BaseResolver):
    """Resolver answering from a fixed table; unknown hosts are NotFound."""

    def __init__(self, table=None):
        super().__init__()
        self.table = table or {}
        self.calls = []

    def resolve(self, host):
        self.calls.append(host)
        return self.table.get(host, NotFound(host=host))


class StubProber(BaseProber):
    """Prober answering from a fixed table and counting invocations."""

    def __init__(self, table=None, default=None):
        super().__init__()
        self.table = table or {}
        self.default = default or ProbeOK(body="", status_code=200)
        self.calls = []
        self._lock = threading.Lock()

    def probe(self, host):
        with self._lock:
            self.calls.append(host)
        return self.table.get(host, self.default)


S3 = Fingerprint(
    service="AWS S3",
    signature="NoSuchBucket",
    requires_nxdomain=False,
    documentation_url="https://docs.aws.amazon.com/s3",
    discussion_url="https://github.com/EdOverflow/can-i-take-over-xyz/issues/36",
)
AZURE = Fingerprint(service="Microsoft Azure", signature="404 Web Site not found", requires_nxdomain=True)
GITHUB = Fingerprint(service="Github", signature="There isn't a GitHub Pages site here.")
NGROK = Fingerprint(service="Ngrok", signature=r"Tunnel .*\.ngrok\.io not found", regex=True)


@pytest.fixture
def catalog():
    return (S3, AZURE, GITHUB, NGROK)


@pytest.fixture
def stub_resolver():
    return StubResolver({
        "stale.example.com": Dangling(host="stale.example.com", cname="ghost-bucket.s3.amazonaws.com"),
        "azure.example.com": Dangling(host="azure.example.com", cname="gone.azurewebsites.net", unclaimed=True),
        "claimed.example.com": Dangling(host="claimed.example.com", cname="live.azurewebsites.net"),
        "www.example.com": Direct(host="www.example.com"),
    })
