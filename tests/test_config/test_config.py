import pytest
from web3 import AsyncWeb3

from universal_sig.config import (
    DEFAULT_REQUEST_TIMEOUT,
    VerifierSettings,
    create_async_web3,
    get_settings_from_env,
)
from universal_sig.engine.exceptions import ConfigurationError


def test_settings_from_env(monkeypatch):
    """Environment variables populate VerifierSettings."""
    monkeypatch.setenv("UNIVERSAL_SIG_RPC_URL", "https://rpc.example.org")
    monkeypatch.setenv("UNIVERSAL_SIG_RPC_TIMEOUT", "15")

    settings = get_settings_from_env()
    assert settings.rpc_url == "https://rpc.example.org"
    assert settings.request_timeout == 15


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("UNIVERSAL_SIG_RPC_URL", raising=False)
    monkeypatch.delenv("UNIVERSAL_SIG_RPC_TIMEOUT", raising=False)

    settings = get_settings_from_env()
    assert settings.rpc_url is None
    assert settings.request_timeout == DEFAULT_REQUEST_TIMEOUT


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("UNIVERSAL_SIG_RPC_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        get_settings_from_env()


def test_create_async_web3_explicit_url():
    w3 = create_async_web3(VerifierSettings(), rpc_url="https://rpc.example.org")
    assert isinstance(w3, AsyncWeb3)
    assert w3.provider.endpoint_uri == "https://rpc.example.org"


def test_create_async_web3_from_settings():
    w3 = create_async_web3(VerifierSettings(rpc_url="https://node.example.org", request_timeout=5))
    assert w3.provider.endpoint_uri == "https://node.example.org"


def test_create_async_web3_requires_url(monkeypatch):
    monkeypatch.delenv("UNIVERSAL_SIG_RPC_URL", raising=False)
    with pytest.raises(ConfigurationError):
        create_async_web3()
