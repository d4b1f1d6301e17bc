from .schemas import (
    HexSignature,
    BytesSignature,
    ECDSASignature,
    CompactSignature,
    SignatureInput,
    ValidatorCall,
)
from .signatures import (
    normalize_signature,
    to_signature_input,
    serialize_signature,
    compact_to_signature,
)
from .standards import (
    ERC6492Signature,
    UniversalSignatureValidatorABI,
    is_erc6492_signature,
)
from .executors import (
    CallExecutor,
    CallSucceeded,
    CallReverted,
    CallFailed,
    SimulationOutcome,
    Web3CallExecutor,
)
from .verifies import (
    encode_deploy_data,
    build_validator_call,
    interpret_call_outcome,
    verify_hash,
    verify_message,
    verify_typed_data,
    hash_message,
    hash_typed_data,
)

__all__ = [
    "HexSignature",
    "BytesSignature",
    "ECDSASignature",
    "CompactSignature",
    "SignatureInput",
    "ValidatorCall",
    "normalize_signature",
    "to_signature_input",
    "serialize_signature",
    "compact_to_signature",
    "ERC6492Signature",
    "UniversalSignatureValidatorABI",
    "is_erc6492_signature",
    "CallExecutor",
    "CallSucceeded",
    "CallReverted",
    "CallFailed",
    "SimulationOutcome",
    "Web3CallExecutor",
    "encode_deploy_data",
    "build_validator_call",
    "interpret_call_outcome",
    "verify_hash",
    "verify_message",
    "verify_typed_data",
    "hash_message",
    "hash_typed_data",
]
