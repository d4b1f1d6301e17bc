"""
EVM Adapter Schema Models

Pydantic models for universal signature verification. All classes inherit
from the base schema hierarchy in ``schemas.bases``.

Signature input variants (discriminated on ``signature_type``):
    - HexSignature: 0x-prefixed hex string, passed through untouched.
    - BytesSignature: raw signature bytes.
    - ECDSASignature: structured ``r`` / ``s`` with ``v`` or ``yParity``.
    - CompactSignature: EIP-2098 ``r`` / ``yParityAndS``.

Request classes:
    - ValidatorCall: deploy-style ``eth_call`` request for the universal
      signature validator, with block selector and counterfactual factory
      fields carried through as given.
"""

from typing import Annotated, Literal, Optional, Union

from eth_utils import is_hex
from pydantic import ConfigDict, Field, field_validator, model_validator

from ...schemas.bases import BaseSignature, CanonicalModel
from .encoding import compact_to_signature, serialize_signature


def _to_scalar(value):
    """Accept ints, raw big-endian bytes or 0x-prefixed hex strings for 256-bit scalars."""
    if isinstance(value, str):
        if not value.startswith(("0x", "0X")):
            raise ValueError("scalar strings must be 0x-prefixed hex; pass decimal values as int")
        return int(value, 16)
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    return value


class HexSignature(BaseSignature):
    """
    Signature already in 0x-prefixed hex form.

    ``to_hex`` returns ``signature`` exactly as supplied; no re-encoding,
    no case folding.

    Example::

        HexSignature(signature="0x" + "ab" * 65).to_hex()
    """

    signature_type: Literal["hex"] = Field(default="hex", description="Variant tag")
    signature: str = Field(..., description="0x-prefixed hex-encoded signature")

    @field_validator("signature")
    @classmethod
    def check_hex(cls, value: str) -> str:
        if not value.startswith("0x") or not is_hex(value):
            raise ValueError("signature must be a 0x-prefixed hex string")
        return value

    def to_hex(self) -> str:
        return self.signature


class BytesSignature(BaseSignature):
    """Raw signature bytes, hex-encoded on normalization."""

    signature_type: Literal["bytes"] = Field(default="bytes", description="Variant tag")
    signature: bytes = Field(..., description="Raw signature bytes")

    def to_hex(self) -> str:
        return "0x" + self.signature.hex()


class ECDSASignature(BaseSignature):
    """
    Structured secp256k1 signature.

    Either ``v`` or ``yParity`` must be supplied. ``r`` and ``s`` accept
    ints, big-endian bytes or 0x-prefixed hex strings; both are stored as
    ints. Strings are always read as hex, so a string without the ``0x``
    prefix (e.g. a decimal value) is rejected.

    Attributes:
        signature_type: Always ``"ecdsa"``.
        r: Signature ``r`` scalar.
        s: Signature ``s`` scalar.
        v: Legacy recovery value (27 / 28, or EIP-155 ``v >= 35``).
        y_parity: Recovery parity bit (0 / 1). Alias ``yParity``.

    Example::

        sig = ECDSASignature(r="0x" + "1" * 64, s="0x" + "2" * 64, v=27)
        sig.to_hex()  # r || s || 0x1b
    """

    signature_type: Literal["ecdsa"] = Field(default="ecdsa", description="Variant tag")
    r: int = Field(..., ge=0, description="Signature r component")
    s: int = Field(..., ge=0, description="Signature s component")
    v: Optional[int] = Field(default=None, ge=0, description="Legacy recovery value")
    y_parity: Optional[int] = Field(default=None, alias="yParity", description="Recovery parity (0 or 1)")

    @field_validator("r", "s", mode="before")
    @classmethod
    def parse_scalar(cls, value):
        return _to_scalar(value)

    @model_validator(mode="after")
    def require_recovery(self):
        if self.v is None and self.y_parity is None:
            raise ValueError("either 'v' or 'yParity' is required")
        return self

    def to_hex(self) -> str:
        return serialize_signature(r=self.r, s=self.s, v=self.v, y_parity=self.y_parity)


class CompactSignature(BaseSignature):
    """
    EIP-2098 compact signature: ``r`` plus ``yParityAndS``.

    The top bit of ``y_parity_and_s`` is the recovery parity and the low
    255 bits are ``s``. Normalizes to the same 65-byte encoding as the
    equivalent :class:`ECDSASignature`. Scalars follow the same input rules
    as :class:`ECDSASignature`: string values must be 0x-prefixed hex.
    """

    signature_type: Literal["compact"] = Field(default="compact", description="Variant tag")
    r: int = Field(..., ge=0, description="Signature r component")
    y_parity_and_s: int = Field(..., ge=0, alias="yParityAndS", description="Parity bit and s packed")

    @field_validator("r", "y_parity_and_s", mode="before")
    @classmethod
    def parse_scalar(cls, value):
        return _to_scalar(value)

    def to_hex(self) -> str:
        s, y_parity = compact_to_signature(self.y_parity_and_s)
        return serialize_signature(r=self.r, s=s, y_parity=y_parity)


SignatureInput = Annotated[
    Union[HexSignature, BytesSignature, ECDSASignature, CompactSignature],
    Field(discriminator="signature_type"),
]


class ValidatorCall(CanonicalModel):
    """
    Deploy-style ``eth_call`` request that runs the universal validator.

    ``data`` is the validator creation bytecode followed by the ABI-encoded
    constructor args. The remaining fields are copied from the caller
    unmodified; the builder never inspects them.

    Attributes:
        data: 0x-prefixed deployment bytes.
        block_number: Block height to simulate against.
        block_tag: Block tag (``"latest"``, ``"pending"``, ...).
        factory: Counterfactual account factory address.
        factory_data: Calldata for ``factory`` that deploys the account.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: str = Field(..., description="Validator bytecode + encoded constructor args")
    block_number: Optional[int] = Field(default=None, ge=0, description="Block number selector")
    block_tag: Optional[str] = Field(default=None, description="Block tag selector")
    factory: Optional[str] = Field(default=None, description="Account factory address")
    factory_data: Optional[Union[str, bytes]] = Field(default=None, description="Account factory calldata")

    @model_validator(mode="after")
    def single_block_selector(self):
        if self.block_number is not None and self.block_tag is not None:
            raise ValueError("'block_number' and 'block_tag' are mutually exclusive")
        return self

    @property
    def block_identifier(self) -> Optional[Union[int, str]]:
        """Block selector in the form ``web3.eth.call`` expects, or ``None`` for the default."""
        if self.block_number is not None:
            return self.block_number
        return self.block_tag
