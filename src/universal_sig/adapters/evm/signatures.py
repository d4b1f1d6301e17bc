"""
EVM Signature Normalization

Turns any accepted signature representation into the canonical 0x-prefixed
hex string handed to the universal validator. Everything here is pure and
in-process; no RPC calls are made.

Exported helpers
----------------
normalize_signature
    Coerce the input into a signature variant and return its canonical hex.

to_signature_input
    Map a plain ``str`` / ``bytes`` / ``dict`` (or an existing variant) onto
    one of ``HexSignature``, ``BytesSignature``, ``ECDSASignature`` or
    ``CompactSignature``.

serialize_signature, compact_to_signature
    Structured encoders, re-exported from ``encoding``.
"""

from typing import Any, Mapping, Union

from pydantic import TypeAdapter, ValidationError

from ...engine.exceptions import SignatureEncodingError
from ...schemas.bases import BaseSignature
from .encoding import compact_to_signature, serialize_signature
from .schemas import (
    BytesSignature,
    CompactSignature,
    ECDSASignature,
    HexSignature,
    SignatureInput,
)

_SIGNATURE_ADAPTER = TypeAdapter(SignatureInput)

_COMPACT_KEYS = ("yParityAndS", "y_parity_and_s")

SignatureLike = Union[str, bytes, bytearray, memoryview, Mapping[str, Any], BaseSignature]


# ---------------------------------------------------------------------------
# Input coercion
# ---------------------------------------------------------------------------


def to_signature_input(signature: SignatureLike) -> BaseSignature:
    """
    Map a caller-supplied signature onto its variant model.

    - a ``BaseSignature`` instance is returned as is
    - ``str`` becomes ``HexSignature``
    - ``bytes`` / ``bytearray`` / ``memoryview`` become ``BytesSignature``
    - a mapping with ``signature_type`` becomes that variant
    - a mapping with ``r`` and ``yParityAndS`` becomes ``CompactSignature``
    - a mapping with ``r`` and ``s`` becomes ``ECDSASignature``

    Raises:
        SignatureEncodingError: If the input matches no variant or fails
            the variant's validation.
    """
    if isinstance(signature, BaseSignature):
        return signature

    try:
        if isinstance(signature, str):
            return HexSignature(signature=signature)
        if isinstance(signature, (bytes, bytearray, memoryview)):
            return BytesSignature(signature=bytes(signature))
        if isinstance(signature, Mapping):
            if "signature_type" in signature:
                return _SIGNATURE_ADAPTER.validate_python(dict(signature))
            if "r" in signature and any(key in signature for key in _COMPACT_KEYS):
                return CompactSignature.model_validate(dict(signature))
            if "r" in signature and "s" in signature:
                return ECDSASignature.model_validate(dict(signature))
    except ValidationError as exc:
        raise SignatureEncodingError(f"Malformed signature: {exc}") from exc

    raise SignatureEncodingError(
        f"Unsupported signature input of type {type(signature).__name__}"
    )


def normalize_signature(signature: SignatureLike) -> str:
    """
    Return the canonical 0x-prefixed hex encoding of ``signature``.

    Hex strings come back unchanged, raw bytes are hex-encoded, and
    structured records are serialized with :func:`serialize_signature`.
    Equivalent signatures in different forms produce identical output.

    Raises:
        SignatureEncodingError: If the signature cannot be encoded.
    """
    return to_signature_input(signature).to_hex()
