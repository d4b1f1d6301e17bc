from dataclasses import dataclass
from typing import Any, Dict, List, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import to_bytes, to_checksum_address

from .constants import (
    ERC6492_MAGIC_SUFFIX,
    ERC6492_WRAPPER_TYPES,
    UNIVERSAL_SIGNATURE_VALIDATOR_ABI,
)


def _as_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    return bytes(value)


# -----------------------------
# Universal signature validator ABI
# -----------------------------

@dataclass
class UniversalSignatureValidatorABI:
    """
    ABI definition of the universal signature validator contract.

    Use ``to_list()`` to get the full ABI list accepted by
    ``web3.eth.contract`` and ``constructor_types()`` for the ordered
    constructor argument types used when encoding deploy data.
    """

    def to_list(self) -> List[Dict[str, Any]]:
        """Return the full ABI as a list compatible with ``web3.eth.contract``."""
        return list(UNIVERSAL_SIGNATURE_VALIDATOR_ABI)

    def constructor_types(self) -> List[str]:
        """Return the constructor input types, e.g. ``["address", "bytes32", "bytes"]``."""
        for entry in UNIVERSAL_SIGNATURE_VALIDATOR_ABI:
            if entry["type"] == "constructor":
                return [arg["type"] for arg in entry["inputs"]]
        raise ValueError("Validator ABI has no constructor entry")


# -----------------------------
# ERC-6492: counterfactual signature wrapper
# -----------------------------

@dataclass
class ERC6492Signature:
    """
    A signature wrapped for a smart account that may not be deployed yet.

    The wire form is ``abi.encode(factory, factory_data, signature)``
    followed by the 32-byte ``0x6492...6492`` magic suffix. The universal
    validator recognises the suffix, calls ``factory`` with
    ``factory_data`` to deploy the account inside the simulation, then
    checks ``signature`` against it via ERC-1271.

    Attributes:
        factory: Address of the account factory.
        factory_data: Calldata that deploys the account through ``factory``.
        signature: The inner signature produced by the account's signer.
    """

    factory: str
    factory_data: bytes
    signature: bytes

    def wrap(self) -> str:
        """Return the 0x-prefixed ERC-6492 wrapped signature."""
        body = encode(
            ERC6492_WRAPPER_TYPES,
            [to_checksum_address(self.factory), self.factory_data, self.signature],
        )
        return "0x" + (body + ERC6492_MAGIC_SUFFIX).hex()

    @classmethod
    def parse(cls, signature: Union[str, bytes]) -> "ERC6492Signature":
        """
        Decode a wrapped signature back into its parts.

        Raises:
            ValueError: If the magic suffix is missing or the body is not a
                valid ``(address, bytes, bytes)`` encoding.
        """
        raw = _as_bytes(signature)
        if not raw.endswith(ERC6492_MAGIC_SUFFIX):
            raise ValueError("Signature is not ERC-6492 wrapped (magic suffix missing)")

        try:
            factory, factory_data, inner = decode(
                ERC6492_WRAPPER_TYPES, raw[: -len(ERC6492_MAGIC_SUFFIX)]
            )
        except DecodingError as exc:
            raise ValueError(f"Malformed ERC-6492 signature body: {exc}") from exc
        return cls(
            factory=to_checksum_address(factory),
            factory_data=bytes(factory_data),
            signature=bytes(inner),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dict suitable for serialization or logging."""
        return {
            "factory": self.factory,
            "factory_data": "0x" + self.factory_data.hex(),
            "signature": "0x" + self.signature.hex(),
        }


def is_erc6492_signature(signature: Union[str, bytes]) -> bool:
    """Return ``True`` when ``signature`` ends with the ERC-6492 magic suffix."""
    return _as_bytes(signature).endswith(ERC6492_MAGIC_SUFFIX)
