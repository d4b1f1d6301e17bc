from .evm import (
    CallExecutor,
    CallFailed,
    CallReverted,
    CallSucceeded,
    ERC6492Signature,
    Web3CallExecutor,
    normalize_signature,
    verify_hash,
    verify_message,
    verify_typed_data,
)

__all__ = [
    "CallExecutor",
    "CallFailed",
    "CallReverted",
    "CallSucceeded",
    "ERC6492Signature",
    "Web3CallExecutor",
    "normalize_signature",
    "verify_hash",
    "verify_message",
    "verify_typed_data",
]
