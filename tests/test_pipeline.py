import pytest

from takeover.models import Dangling, Direct, Fingerprint, ProbeError, ProbeOK, ResolutionError, Status
from takeover.pipeline import DetectionPipeline

from conftest import AZURE, S3, StubProber, StubResolver


def make_pipeline(catalog, resolver, prober, match_on="body"):
    return DetectionPipeline(catalog, resolver=resolver, prober=prober, match_on=match_on)


def test_dangling_cname_with_fingerprint_is_vulnerable(catalog, stub_resolver):
    prober = StubProber({"stale.example.com": ProbeOK(body="<Error><Code>NoSuchBucket</Code></Error>", status_code=404)})
    outcome = make_pipeline(catalog, stub_resolver, prober).run("stale.example.com")

    assert outcome.status is Status.VULNERABLE
    assert outcome.fingerprint == S3
    assert outcome.fingerprint.service == "AWS S3"
    assert outcome.cname == "ghost-bucket.s3.amazonaws.com"
    assert outcome.status_code == 404
    assert "NoSuchBucket" in outcome.evidence


def test_missing_record_is_not_found_without_probe(catalog):
    resolver = StubResolver()
    prober = StubProber()
    outcome = make_pipeline(catalog, resolver, prober).run("live.example.com")

    assert outcome.status is Status.NOT_FOUND
    assert outcome.fingerprint is None
    assert prober.calls == []


def test_resolution_error_is_terminal(catalog):
    resolver = StubResolver({"flaky.example.com": ResolutionError(host="flaky.example.com", message="SERVFAIL")})
    prober = StubProber()
    outcome = make_pipeline(catalog, resolver, prober).run("flaky.example.com")

    assert outcome.status is Status.RESOLUTION_ERROR
    assert outcome.evidence == "SERVFAIL"
    assert prober.calls == []


def test_probe_timeout_is_http_error(catalog):
    resolver = StubResolver({"slow.example.com": Direct(host="slow.example.com")})
    prober = StubProber({"slow.example.com": ProbeError(kind="http", message="Read timed out")})
    outcome = make_pipeline(catalog, resolver, prober).run("slow.example.com")

    assert outcome.status is Status.HTTP_ERROR
    assert outcome.fingerprint is None


def test_unreadable_body_is_response_error(catalog, stub_resolver):
    prober = StubProber({"www.example.com": ProbeError(kind="response", message="truncated")})
    outcome = make_pipeline(catalog, stub_resolver, prober).run("www.example.com")
    assert outcome.status is Status.RESPONSE_ERROR


def test_nxdomain_fingerprint_with_claimable_record_is_not_vulnerable(catalog, stub_resolver):
    prober = StubProber(default=ProbeOK(body="404 Web Site not found", status_code=404))
    outcome = make_pipeline(catalog, stub_resolver, prober).run("claimed.example.com")

    assert outcome.status is Status.NOT_VULNERABLE
    assert outcome.fingerprint is None


def test_nxdomain_fingerprint_with_unclaimed_cname_is_vulnerable(catalog, stub_resolver):
    prober = StubProber(default=ProbeOK(body="404 Web Site not found", status_code=404))
    outcome = make_pipeline(catalog, stub_resolver, prober).run("azure.example.com")

    assert outcome.status is Status.VULNERABLE
    assert outcome.fingerprint == AZURE


def test_plain_page_is_not_vulnerable(catalog, stub_resolver):
    prober = StubProber(default=ProbeOK(body="<html>  Hello\n world </html>", status_code=200))
    outcome = make_pipeline(catalog, stub_resolver, prober).run("www.example.com")

    assert outcome.status is Status.NOT_VULNERABLE
    assert outcome.evidence == "<html> Hello world </html>"
    assert outcome.cname is None


def test_probe_uses_original_target(catalog, stub_resolver):
    prober = StubProber()
    make_pipeline(catalog, stub_resolver, prober).run("stale.example.com")
    assert prober.calls == ["stale.example.com"]


def test_match_on_cname():
    resolver = StubResolver({
        "a.example.com": Direct(host="a.example.com"),
        "c.example.com": Dangling(host="c.example.com", cname="x.nosuchbucket.example"),
    })
    prober = StubProber(default=ProbeOK(body="NoSuchBucket", status_code=404))

    # The body would match, but only the CNAME string is inspected.
    pipeline = make_pipeline((S3,), resolver, prober, match_on="cname")
    assert pipeline.run("a.example.com").status is Status.NOT_VULNERABLE
    assert pipeline.run("c.example.com").status is Status.NOT_VULNERABLE

    bucket_host = Fingerprint(service="Bucket host", signature="nosuchbucket")
    outcome = make_pipeline((bucket_host,), resolver, prober, match_on="cname").run("c.example.com")
    assert outcome.status is Status.VULNERABLE
    assert outcome.evidence == "x.nosuchbucket.example"


def test_match_on_both_falls_back_to_cname(stub_resolver):
    s3_host = Fingerprint(service="AWS S3 host", signature="s3.amazonaws.com")
    prober = StubProber(default=ProbeOK(body="<html>ok</html>", status_code=200))

    body_only = make_pipeline((s3_host,), stub_resolver, prober, match_on="body")
    assert body_only.run("stale.example.com").status is Status.NOT_VULNERABLE

    both = make_pipeline((s3_host,), stub_resolver, prober, match_on="both")
    outcome = both.run("stale.example.com")
    assert outcome.status is Status.VULNERABLE
    assert outcome.fingerprint == s3_host


def test_pipeline_is_idempotent(catalog, stub_resolver):
    prober = StubProber(default=ProbeOK(body="NoSuchBucket", status_code=404))
    pipeline = make_pipeline(catalog, stub_resolver, prober)
    assert pipeline.run("stale.example.com") == pipeline.run("stale.example.com")
    assert pipeline.run("nothing.example.com") == pipeline.run("nothing.example.com")


def test_invalid_match_on(catalog, stub_resolver):
    with pytest.raises(ValueError):
        make_pipeline(catalog, stub_resolver, StubProber(), match_on="headers")
