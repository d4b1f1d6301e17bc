"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by the verification flow. All
exceptions inherit from the project ``BaseException`` for unified exception
handling.

An invalid signature is never an exception: verification answers ``False``.
Only failures that happen before the simulated call (malformed input, missing
configuration) are raised from this hierarchy. Errors raised by the node
client during the call itself (timeouts, RPC errors) propagate unchanged as
whatever type the client raised.

Exception Hierarchy:
    BaseException (root)
    ├── SignatureEncodingError
    └── ConfigurationError
"""


class BaseException(Exception):
    """
    Root exception class for all project-specific exceptions.

    All custom exceptions should inherit from this class to enable
    unified exception handling and centralized error processing.
    """
    pass


class SignatureEncodingError(BaseException, ValueError):
    """
    Raised when a signature cannot be normalized into canonical hex form.

    This includes scenarios such as:
    - ``r`` or ``s`` outside the secp256k1 scalar range ``[1, n)``
    - Missing or invalid recovery data (``v`` / ``yParity``)
    - A string signature that is not 0x-prefixed hexadecimal
    - An input of an unsupported type

    Always raised synchronously, before any RPC traffic.
    """
    pass


class ConfigurationError(BaseException):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - No RPC URL supplied and ``UNIVERSAL_SIG_RPC_URL`` unset
    - Non-numeric request timeout in the environment
    """
    pass
