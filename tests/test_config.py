"""
Tests for client configuration.
"""
import dataclasses
import logging

import pytest

from popsigner_sdk.config import (
    ClientConfig, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ENV_API_KEY, ENV_API_URL, ENV_TIMEOUT,
)
from tests.test_helpers import TEST_API_KEY


@pytest.fixture
def clean_env(monkeypatch):
    for name in (ENV_API_KEY, ENV_API_URL, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults():
    config = ClientConfig(api_key=TEST_API_KEY)

    assert config.base_url == DEFAULT_BASE_URL == "https://api.popsigner.com"
    assert config.timeout == DEFAULT_TIMEOUT == 30.0
    assert config.user_agent.startswith("popsigner-sdk/")


def test_api_key_is_required():
    with pytest.raises(ValueError, match="api_key"):
        ClientConfig(api_key="")
    with pytest.raises(ValueError, match="api_key"):
        ClientConfig(api_key="   ")


def test_api_key_is_not_in_repr():
    assert TEST_API_KEY not in repr(ClientConfig(api_key=TEST_API_KEY))


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValueError, match="timeout"):
        ClientConfig(api_key=TEST_API_KEY, timeout=timeout)


def test_trailing_slash_is_stripped():
    config = ClientConfig(api_key=TEST_API_KEY, base_url="https://api.example.com/")
    assert config.base_url == "https://api.example.com"


def test_config_is_immutable():
    config = ClientConfig(api_key=TEST_API_KEY)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.timeout = 1


@pytest.mark.parametrize("bad_url", ["api.example.com", "ftp://api.example.com", "https://"])
def test_malformed_base_url(bad_url):
    with pytest.raises(ValueError, match="Invalid base URL"):
        ClientConfig(api_key=TEST_API_KEY, base_url=bad_url)


def test_plain_http_is_rejected_for_remote_hosts():
    with pytest.raises(ValueError, match="https://"):
        ClientConfig(api_key=TEST_API_KEY, base_url="http://api.example.com")


def test_plain_http_allowed_for_loopback():
    config = ClientConfig(api_key=TEST_API_KEY, base_url="http://localhost:8080")
    assert config.base_url == "http://localhost:8080"


def test_allow_insecure_logs_warning(caplog):
    with caplog.at_level(logging.WARNING):
        config = ClientConfig(api_key=TEST_API_KEY, base_url="http://dev.internal", allow_insecure=True)

    assert config.base_url == "http://dev.internal"
    assert "insecure HTTP" in caplog.text


class TestFromEnv:
    def test_reads_environment(self, clean_env):
        clean_env.setenv(ENV_API_KEY, "psk_env")
        clean_env.setenv(ENV_API_URL, "https://staging.example.com/")
        clean_env.setenv(ENV_TIMEOUT, "12.5")

        config = ClientConfig.from_env()

        assert config.api_key == "psk_env"
        assert config.base_url == "https://staging.example.com"
        assert config.timeout == 12.5

    def test_overrides_win(self, clean_env):
        clean_env.setenv(ENV_API_KEY, "psk_env")
        clean_env.setenv(ENV_TIMEOUT, "12")

        config = ClientConfig.from_env(api_key="psk_flag", timeout=3, base_url=None)

        assert config.api_key == "psk_flag"
        assert config.timeout == 3
        assert config.base_url == DEFAULT_BASE_URL

    def test_missing_key(self, clean_env):
        with pytest.raises(ValueError, match=ENV_API_KEY):
            ClientConfig.from_env()

    def test_bad_timeout(self, clean_env):
        clean_env.setenv(ENV_API_KEY, "psk_env")
        clean_env.setenv(ENV_TIMEOUT, "soon")

        with pytest.raises(ValueError, match=ENV_TIMEOUT):
            ClientConfig.from_env()
