"""
universal_sig

ERC-6492 universal signature verification. A single ``eth_call`` that
simulates deploying the universal signature validator answers whether a
signature over a hash is valid for an EOA, a deployed ERC-1271 wallet, or a
not-yet-deployed (counterfactual) smart account.
"""

from .adapters.evm import (
    BytesSignature,
    CallExecutor,
    CallFailed,
    CallReverted,
    CallSucceeded,
    CompactSignature,
    ECDSASignature,
    ERC6492Signature,
    HexSignature,
    ValidatorCall,
    Web3CallExecutor,
    build_validator_call,
    hash_message,
    hash_typed_data,
    interpret_call_outcome,
    is_erc6492_signature,
    normalize_signature,
    verify_hash,
    verify_message,
    verify_typed_data,
)
from .config import VerifierSettings, create_async_web3, get_settings_from_env
from .engine.exceptions import ConfigurationError, SignatureEncodingError

__all__ = [
    "BytesSignature",
    "CallExecutor",
    "CallFailed",
    "CallReverted",
    "CallSucceeded",
    "CompactSignature",
    "ECDSASignature",
    "ERC6492Signature",
    "HexSignature",
    "ValidatorCall",
    "Web3CallExecutor",
    "build_validator_call",
    "hash_message",
    "hash_typed_data",
    "interpret_call_outcome",
    "is_erc6492_signature",
    "normalize_signature",
    "verify_hash",
    "verify_message",
    "verify_typed_data",
    "VerifierSettings",
    "create_async_web3",
    "get_settings_from_env",
    "ConfigurationError",
    "SignatureEncodingError",
]
