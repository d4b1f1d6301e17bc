"""
EVM Universal Signature Verification

On-chain verification of a signature over a hash for any kind of signer:
an EOA, a deployed ERC-1271 smart-contract wallet, or a counterfactual
account whose signature is ERC-6492 wrapped. No local ECDSA recovery is
performed; instead the universal signature validator is "deployed" inside
an ``eth_call`` simulation and its constructor reports the verdict.

Flow
----
1. ``normalize_signature`` -- canonical hex from any accepted signature form.
2. ``build_validator_call`` -- validator bytecode + ABI-encoded
   ``(signer, hash, signature)``; block selector and factory fields are
   copied through.
3. ``CallExecutor.execute`` -- the only network round trip.
4. ``interpret_call_outcome`` -- ``0x01`` is valid, anything else
   (including empty data or a revert) is invalid, and every other failure
   is re-raised unchanged.

Current coverage
----------------
verify_hash
    Verify a signature over a 32-byte hash.
verify_message
    Hash an EIP-191 personal message, then ``verify_hash``.
verify_typed_data
    Hash EIP-712 typed data, then ``verify_hash``.
"""

from typing import Any, Dict, Optional, Sequence, Union

from eth_abi import encode
from eth_account.messages import encode_defunct, encode_typed_data
from eth_utils import keccak, to_bytes, to_checksum_address
from structlog import get_logger
from web3 import AsyncWeb3

from .constants import (
    EMPTY_RETURN_DEFAULT,
    UNIVERSAL_SIGNATURE_VALIDATOR_BYTECODE,
    VALID_SIGNATURE_SENTINEL,
)
from .executors import (
    CallExecutor,
    CallFailed,
    CallReverted,
    CallSucceeded,
    SimulationOutcome,
    Web3CallExecutor,
)
from .schemas import ValidatorCall
from .signatures import SignatureLike, normalize_signature
from .standards import UniversalSignatureValidatorABI

logger = get_logger(__name__)

HexOrBytes = Union[str, bytes]

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _as_bytes(value: HexOrBytes) -> bytes:
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    return bytes(value)


def _resolve_executor(client: Union[CallExecutor, AsyncWeb3]) -> CallExecutor:
    """Accept either a ready ``CallExecutor`` or an ``AsyncWeb3`` to wrap."""
    if isinstance(client, CallExecutor):
        return client
    return Web3CallExecutor(client)


def _signable_to_hash(signable) -> str:
    digest = keccak(b"\x19" + signable.version + signable.header + signable.body)
    return "0x" + digest.hex()


# ---------------------------------------------------------------------------
# Validator call builder
# ---------------------------------------------------------------------------


def encode_deploy_data(
    *,
    bytecode: HexOrBytes,
    constructor_types: Sequence[str],
    args: Sequence[Any],
) -> str:
    """
    Concatenate creation ``bytecode`` with ABI-encoded constructor ``args``.

    Args:
        bytecode:          Contract creation code (hex, 0x prefix optional, or bytes).
        constructor_types: Ordered constructor input types.
        args:              Constructor arguments matching ``constructor_types``.

    Returns:
        0x-prefixed deployment data.
    """
    return "0x" + (_as_bytes(bytecode) + encode(list(constructor_types), list(args))).hex()


def build_validator_call(
    *,
    address: str,
    hash: HexOrBytes,
    signature: str,
    block_number: Optional[int] = None,
    block_tag: Optional[str] = None,
    factory: Optional[str] = None,
    factory_data: Optional[HexOrBytes] = None,
) -> ValidatorCall:
    """
    Build the deploy-style call that runs the universal validator.

    No network I/O. ``block_number`` / ``block_tag`` and ``factory`` /
    ``factory_data`` are copied into the request exactly as given.

    Args:
        address:      Claimed signer address.
        hash:         32-byte hash that was signed.
        signature:    Normalized 0x-prefixed signature hex.
        block_number: Optional block height to simulate against.
        block_tag:    Optional block tag (mutually exclusive with ``block_number``).
        factory:      Optional counterfactual account factory address.
        factory_data: Optional counterfactual account factory calldata.

    Returns:
        Immutable ``ValidatorCall``.

    Raises:
        ValueError: If the address is invalid or the hash is not 32 bytes.
        pydantic.ValidationError: If both block selectors are supplied.
    """
    hash_bytes = _as_bytes(hash)
    if len(hash_bytes) != 32:
        raise ValueError(f"hash must be 32 bytes, got {len(hash_bytes)}")

    data = encode_deploy_data(
        bytecode=UNIVERSAL_SIGNATURE_VALIDATOR_BYTECODE,
        constructor_types=UniversalSignatureValidatorABI().constructor_types(),
        args=[to_checksum_address(address), hash_bytes, _as_bytes(signature)],
    )
    return ValidatorCall(
        data=data,
        block_number=block_number,
        block_tag=block_tag,
        factory=factory,
        factory_data=factory_data,
    )


# ---------------------------------------------------------------------------
# Result interpreter
# ---------------------------------------------------------------------------


def interpret_call_outcome(outcome: SimulationOutcome) -> bool:
    """
    Map a simulation outcome onto the verification verdict.

    - ``CallSucceeded``: ``True`` iff the return data is exactly ``0x01``;
      empty data is read as ``0x00``.
    - ``CallReverted``: ``False``. The validator reverts for malformed
      signatures, unrecoverable signers and failed factory deployments.
    - ``CallFailed``: the wrapped error is raised unchanged.

    Raises:
        Exception: Whatever error a ``CallFailed`` outcome carries.
        TypeError: If ``outcome`` is not a known outcome type.
    """
    if isinstance(outcome, CallSucceeded):
        return (outcome.data or EMPTY_RETURN_DEFAULT) == VALID_SIGNATURE_SENTINEL
    if isinstance(outcome, CallReverted):
        return False
    if isinstance(outcome, CallFailed):
        raise outcome.error
    raise TypeError(f"Unsupported simulation outcome: {type(outcome).__name__}")


# ---------------------------------------------------------------------------
# Hash verification
# ---------------------------------------------------------------------------


async def verify_hash(
    client: Union[CallExecutor, AsyncWeb3],
    *,
    address: str,
    hash: HexOrBytes,
    signature: SignatureLike,
    block_number: Optional[int] = None,
    block_tag: Optional[str] = None,
    factory: Optional[str] = None,
    factory_data: Optional[HexOrBytes] = None,
) -> bool:
    """
    Verify a signature over ``hash`` for ``address`` using ERC-6492.

    Works for EOAs, deployed ERC-1271 wallets, and counterfactual wallets
    (pass an ERC-6492 wrapped signature). The validator deployment is
    simulated with ``eth_call``; nothing is broadcast.

    Args:
        client:       A ``CallExecutor``, or an ``AsyncWeb3`` instance which is
                      wrapped in ``Web3CallExecutor``.
        address:      Address that supposedly signed ``hash``.
        hash:         32-byte hash (0x hex or bytes).
        signature:    Hex string, raw bytes, a structured ``{r, s, v|yParity}``
                      / ``{r, yParityAndS}`` mapping, or a signature model.
        block_number: Optional block height to verify against.
        block_tag:    Optional block tag to verify against.
        factory:      Optional counterfactual factory address, forwarded to
                      the call request.
        factory_data: Optional counterfactual factory calldata, forwarded to
                      the call request.

    Returns:
        ``True`` if the validator returned ``0x01``, ``False`` otherwise.

    Raises:
        SignatureEncodingError: If the signature cannot be normalized. Raised
            before any RPC traffic.
        Exception: Any non-revert failure of the call (timeouts, RPC errors)
            propagates unchanged.

    Example::

        valid = await verify_hash(
            w3,
            address="0xAbc...",
            hash="0x" + "11" * 32,
            signature="0x...",
        )
    """
    signature_hex = normalize_signature(signature)
    call = build_validator_call(
        address=address,
        hash=hash,
        signature=signature_hex,
        block_number=block_number,
        block_tag=block_tag,
        factory=factory,
        factory_data=factory_data,
    )
    logger.debug(
        "verify_hash.call_built",
        address=address,
        block_identifier=call.block_identifier,
        data_length=len(call.data),
    )

    outcome = await _resolve_executor(client).execute(call)

    if isinstance(outcome, CallReverted):
        logger.info("verify_hash.reverted", address=address, reason=str(outcome.error))
    elif isinstance(outcome, CallFailed):
        logger.warning(
            "verify_hash.call_failed",
            address=address,
            error_type=type(outcome.error).__name__,
            error=str(outcome.error),
        )

    return interpret_call_outcome(outcome)


# ---------------------------------------------------------------------------
# Message / typed-data verification
# ---------------------------------------------------------------------------


def hash_message(message: Union[str, bytes, Dict[str, HexOrBytes]]) -> str:
    """
    EIP-191 personal-message hash.

    ``message`` may be text, raw bytes, or ``{"raw": <hex or bytes>}`` for
    data that should be hashed byte-for-byte rather than as UTF-8 text.
    """
    if isinstance(message, dict):
        raw = message["raw"]
        if isinstance(raw, str):
            signable = encode_defunct(hexstr=raw)
        else:
            signable = encode_defunct(primitive=bytes(raw))
    elif isinstance(message, str):
        signable = encode_defunct(text=message)
    else:
        signable = encode_defunct(primitive=bytes(message))
    return _signable_to_hash(signable)


def hash_typed_data(typed_data: Dict[str, Any]) -> str:
    """EIP-712 hash of a full typed-data payload (``types``, ``primaryType``, ``domain``, ``message``)."""
    return _signable_to_hash(encode_typed_data(full_message=typed_data))


async def verify_message(
    client: Union[CallExecutor, AsyncWeb3],
    *,
    address: str,
    message: Union[str, bytes, Dict[str, HexOrBytes]],
    signature: SignatureLike,
    block_number: Optional[int] = None,
    block_tag: Optional[str] = None,
    factory: Optional[str] = None,
    factory_data: Optional[HexOrBytes] = None,
) -> bool:
    """Verify an EIP-191 signed message. See ``verify_hash`` for the remaining arguments."""
    return await verify_hash(
        client,
        address=address,
        hash=hash_message(message),
        signature=signature,
        block_number=block_number,
        block_tag=block_tag,
        factory=factory,
        factory_data=factory_data,
    )


async def verify_typed_data(
    client: Union[CallExecutor, AsyncWeb3],
    *,
    address: str,
    typed_data: Dict[str, Any],
    signature: SignatureLike,
    block_number: Optional[int] = None,
    block_tag: Optional[str] = None,
    factory: Optional[str] = None,
    factory_data: Optional[HexOrBytes] = None,
) -> bool:
    """
    Verify an EIP-712 typed-data signature.

    ``typed_data`` is the full payload accepted by ``eth_signTypedData_v4``.
    See ``verify_hash`` for the remaining arguments.
    """
    return await verify_hash(
        client,
        address=address,
        hash=hash_typed_data(typed_data),
        signature=signature,
        block_number=block_number,
        block_tag=block_tag,
        factory=factory,
        factory_data=factory_data,
    )
