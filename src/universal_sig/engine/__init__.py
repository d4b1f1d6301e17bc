from .exceptions import BaseException, ConfigurationError, SignatureEncodingError

__all__ = [
    "BaseException",
    "ConfigurationError",
    "SignatureEncodingError",
]
