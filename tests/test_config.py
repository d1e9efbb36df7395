import pytest

from takeover.config import ScanConfig
from takeover.exceptions import ConfigError


def test_defaults():
    config = ScanConfig()
    assert config.concurrency == 10
    assert config.timeout == 10
    assert config.scheme == "http"
    assert not config.verify_tls
    assert config.match_on == "body"
    assert not config.emoji


def test_https_scheme():
    assert ScanConfig(https=True).scheme == "https"


@pytest.mark.parametrize("kwargs", [
    {"concurrency": 0},
    {"concurrency": -3},
    {"timeout": 0},
    {"match_on": "headers"},
    {"format": "xml"},
])
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        ScanConfig(**kwargs)
