from .bases import BaseSignature, CanonicalModel

__all__ = [
    "BaseSignature",
    "CanonicalModel",
]
