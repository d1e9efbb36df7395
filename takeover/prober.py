"""HTTP probe stage."""

import logging
import time

import requests
import urllib3

from .base import BaseProber, ProbeResult
from .models import ProbeError, ProbeOK

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; takeover-scanner/1.0)"
CHUNK_SIZE = 16 * 1024
MAX_BODY = 1024 * 1024

# Decommissioned third-party endpoints routinely serve broken certificates.
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

TRANSPORT_ERRORS = (
    requests.exceptions.Timeout,
    requests.exceptions.ConnectionError,
    requests.exceptions.TooManyRedirects,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidSchema,
    requests.exceptions.MissingSchema,
)

# ProtocolError and DecodeError both derive from urllib3 HTTPError.
BODY_ERRORS = (
    urllib3.exceptions.HTTPError,
    OSError,
)


class DeadlineExceeded(Exception):
    """The request ran past its total time budget."""


class HTTPProber(BaseProber):
    """Prober that issues a single GET with requests.

    ``timeout`` is a total deadline covering connect, headers and body.
    Reads are made with ``read1`` so each one returns as soon as any data
    arrives, and the deadline is checked between them.
    """

    def probe(self, host: str) -> ProbeResult:
        url = self.build_url(host)
        deadline = time.monotonic() + self.timeout
        try:
            response = requests.get(
                url,
                timeout=self.timeout,
                verify=self.verify_tls,
                stream=True,
                headers={"User-Agent": USER_AGENT},
            )
        except TRANSPORT_ERRORS as e:
            logger.debug("HTTP request to %s failed: %s", url, e)
            return ProbeError(kind="http", message=str(e))

        try:
            content = _read_body(response, deadline, MAX_BODY)
        except DeadlineExceeded as e:
            logger.debug("HTTP request to %s exceeded %ss", url, self.timeout)
            return ProbeError(kind="http", message=str(e))
        except urllib3.exceptions.ReadTimeoutError as e:
            logger.debug("HTTP request to %s timed out reading the body: %s", url, e)
            return ProbeError(kind="http", message=str(e))
        except BODY_ERRORS as e:
            logger.debug("Could not read response body from %s: %s", url, e)
            return ProbeError(kind="response", message=str(e))
        finally:
            response.close()

        return ProbeOK(body=_decode(content, response.encoding), status_code=response.status_code)


def _read_body(response: requests.Response, deadline: float, limit: int) -> bytes:
    """Read at most ``limit`` bytes of the body before ``deadline``."""
    chunks = []
    size = 0
    while size < limit:
        if time.monotonic() >= deadline:
            raise DeadlineExceeded("response body not received before the deadline")
        chunk = response.raw.read1(CHUNK_SIZE, decode_content=True)
        if not chunk:
            break
        chunks.append(chunk)
        size += len(chunk)
    if time.monotonic() > deadline and size < limit:
        raise DeadlineExceeded("response body not received before the deadline")
    return b"".join(chunks)[:limit]


def _decode(content: bytes, encoding: str = None) -> str:
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")
