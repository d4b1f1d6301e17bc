"""
Structured ECDSA signature encoding.

Pure helpers that turn ``r`` / ``s`` plus recovery data into the 65-byte
``r || s || (0x1b | 0x1c)`` form. Both the signature models and the
normalizer import from here.
"""

from typing import Optional, Tuple

from ...engine.exceptions import SignatureEncodingError
from .constants import SECP256K1_N


def _resolve_y_parity(v: Optional[int], y_parity: Optional[int]) -> int:
    if y_parity in (0, 1):
        return y_parity
    if v is not None and (v in (27, 28) or v >= 35):
        return 1 if v % 2 == 0 else 0
    raise SignatureEncodingError(
        f"Invalid `v` or `yParity` value: v={v!r}, yParity={y_parity!r}"
    )


def serialize_signature(
    *,
    r: int,
    s: int,
    v: Optional[int] = None,
    y_parity: Optional[int] = None,
) -> str:
    """
    Encode an ECDSA signature in the 65-byte ``r || s || v`` form.

    ``r`` and ``s`` are written as 32-byte big-endian words. The trailing
    byte is ``0x1b`` for parity 0 and ``0x1c`` for parity 1, whichever way
    the parity was supplied. ``y_parity`` takes precedence over ``v``; a
    legacy ``v`` of 27/28 or an EIP-155 ``v >= 35`` maps to parity by its
    low bit (odd -> 0, even -> 1).

    Args:
        r: Signature ``r`` scalar.
        s: Signature ``s`` scalar.
        v: Legacy recovery value.
        y_parity: Recovery parity bit.

    Returns:
        0x-prefixed 132-character lowercase hex string.

    Raises:
        SignatureEncodingError: If ``r`` or ``s`` is outside ``[1, n)`` for
            secp256k1, or neither ``v`` nor ``y_parity`` yields a parity.

    Example::

        serialize_signature(r=0x11 << 248, s=0x22 << 248, v=28)
        # '0x1100...2200...1c'
    """
    for name, scalar in (("r", r), ("s", s)):
        if not 1 <= scalar < SECP256K1_N:
            raise SignatureEncodingError(
                f"Invalid signature component {name}: must satisfy 1 <= {name} < n"
            )

    parity = _resolve_y_parity(v, y_parity)
    return (
        "0x"
        + r.to_bytes(32, "big").hex()
        + s.to_bytes(32, "big").hex()
        + ("1b" if parity == 0 else "1c")
    )


def compact_to_signature(y_parity_and_s: int) -> Tuple[int, int]:
    """
    Unpack an EIP-2098 ``yParityAndS`` word.

    Returns:
        ``(s, y_parity)`` where ``y_parity`` is the top bit and ``s`` the
        remaining 255 bits.

    Raises:
        SignatureEncodingError: If the word does not fit in 256 bits.
    """
    if not 0 <= y_parity_and_s < 1 << 256:
        raise SignatureEncodingError("yParityAndS must fit in 32 bytes")
    return y_parity_and_s & ((1 << 255) - 1), y_parity_and_s >> 255
