"""
Environment-aware configuration for building node clients.

Settings are read from the process environment, with a ``.env`` file in
the working directory loaded first.

Environment variables:
    UNIVERSAL_SIG_RPC_URL:      JSON-RPC endpoint used for ``eth_call``.
    UNIVERSAL_SIG_RPC_TIMEOUT:  Per-request timeout in seconds (default 60).
"""

import os
from typing import Optional

import dotenv
from pydantic import BaseModel, Field
from web3 import AsyncWeb3

from .engine.exceptions import ConfigurationError

dotenv.load_dotenv()

DEFAULT_REQUEST_TIMEOUT = 60


class VerifierSettings(BaseModel):
    """Connection settings for the node that runs the validator simulation."""
    rpc_url: Optional[str] = Field(default=None, description="JSON-RPC endpoint URL")
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0, description="Request timeout (seconds)")


def get_settings_from_env() -> VerifierSettings:
    """
    Load ``VerifierSettings`` from environment variables.

    Raises:
        ConfigurationError: If ``UNIVERSAL_SIG_RPC_TIMEOUT`` is not a number.

    Example:
        # In your .env file or environment setup:
        # UNIVERSAL_SIG_RPC_URL=https://eth.llamarpc.com
        settings = get_settings_from_env()
    """
    raw_timeout = os.getenv("UNIVERSAL_SIG_RPC_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        raise ConfigurationError(
            f"UNIVERSAL_SIG_RPC_TIMEOUT must be a number, got {raw_timeout!r}"
        )
    return VerifierSettings(rpc_url=os.getenv("UNIVERSAL_SIG_RPC_URL"), request_timeout=timeout)


def create_async_web3(
    settings: Optional[VerifierSettings] = None,
    *,
    rpc_url: Optional[str] = None,
) -> AsyncWeb3:
    """
    Create an ``AsyncWeb3`` client for verification calls.

    ``rpc_url`` takes precedence over ``settings.rpc_url``; ``settings``
    defaults to ``get_settings_from_env()``.

    Raises:
        ConfigurationError: If no RPC URL can be resolved.
    """
    settings = settings or get_settings_from_env()
    url = rpc_url or settings.rpc_url
    if not url:
        raise ConfigurationError(
            "No RPC URL configured. Pass rpc_url or set 'UNIVERSAL_SIG_RPC_URL'."
        )

    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
        url,
        request_kwargs={"timeout": settings.request_timeout}
    ))
