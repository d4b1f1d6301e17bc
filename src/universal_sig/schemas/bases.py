"""
Base Schema Models

Foundation classes shared by the EVM schema models.

Core Classes:
    - CanonicalModel: Pydantic base model for all schema objects
    - BaseSignature: Abstract signature input variant

Dependencies:
    - pydantic: For data validation and serialization
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Pydantic base model shared by every schema in the package.

    Fields may be populated either by their Python name or by their alias,
    so ``yParity`` and ``y_parity`` are both accepted on input.

    Example:
        class MyModel(CanonicalModel):
            name: str
            value: int

        MyModel(name="test", value=123).to_dict()
        # {'name': 'test', 'value': 123}
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model to dictionary representation.

        Returns:
            Dict[str, Any]: Dictionary with all model fields.
        """
        return self.model_dump()


class BaseSignature(CanonicalModel, ABC):
    """
    Abstract base class for the accepted signature representations.

    Each concrete subclass is one tag of the signature input variant and
    carries a literal ``signature_type`` discriminator. Subclasses implement
    ``to_hex`` which produces the canonical 0x-prefixed hex encoding.

    Attributes:
        signature_type: Variant tag (e.g. ``"hex"``, ``"bytes"``, ``"ecdsa"``)
    """

    signature_type: str = Field(..., description="Signature representation tag")

    @abstractmethod
    def to_hex(self) -> str:
        """
        Return the canonical 0x-prefixed hex encoding of the signature.

        Raises:
            SignatureEncodingError: If the signature cannot be encoded.
        """
