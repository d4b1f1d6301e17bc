"""
Universal Signature Validator Artifacts

Fixed on-chain artifacts used by the ERC-6492 verification flow: the
validator contract's creation bytecode and ABI, the value its constructor
returns for a valid signature, and the ERC-6492 wrapper magic suffix.

None of these are configurable per call.
"""

from typing import Any, Dict, List

# ---------------------------------------------------------------------------
# Universal signature validator
# ---------------------------------------------------------------------------

#: Creation bytecode of the universal signature validator. Deploying it with
#: constructor args ``(address, bytes32, bytes)`` runs ERC-6492 unwrapping,
#: ERC-1271 ``isValidSignature`` and ``ecrecover`` in the constructor and
#: returns a single byte (``0x01`` valid, ``0x00`` invalid).
UNIVERSAL_SIGNATURE_VALIDATOR_BYTECODE: str = (
    "608060405234801561001057600080fd5b50604051610694380380610694833981016040"
    "81905261002f9161051e565b600061003c848484610048565b9050806000526001601ff3"
    "5b60007f6492649264926492649264926492649264926492649264926492649264926492"
    "6100748361040c565b036101e75760006060808480602001905181019061009291906105"
    "77565b60405192955090935091506000906001600160a01b038516906100b69085906105"
    "dd565b6000604051808303816000865af19150503d80600081146100f357604051915060"
    "1f19603f3d011682016040523d82523d6000602084013e6100f8565b606091505b505090"
    "50876001600160a01b03163b60000361016057806101605760405162461bcd60e51b8152"
    "60206004820152601e60248201527f5369676e617475726556616c696461746f723a2064"
    "65706c6f796d656e74000060448201526064015b60405180910390fd5b604051630b135d"
    "3f60e11b808252906001600160a01b038a1690631626ba7e90610190908b908790600401"
    "6105f9565b602060405180830381865afa1580156101ad573d6000803e3d6000fd5b5050"
    "50506040513d601f19601f820116820180604052508101906101d19190610633565b6001"
    "600160e01b03191614945050505050610405565b6001600160a01b0384163b1561027a57"
    "604051630b135d3f60e11b808252906001600160a01b03861690631626ba7e9061022790"
    "879087906004016105f9565b602060405180830381865afa158015610244573d6000803e"
    "3d6000fd5b505050506040513d601f19601f820116820180604052508101906102689190"
    "610633565b6001600160e01b031916149050610405565b81516041146102df5760405162"
    "461bcd60e51b815260206004820152603a60248201526000805160206106748339815191"
    "5260448201527f3a20696e76616c6964207369676e6174757265206c656e677468000000"
    "0000006064820152608401610157565b6102e7610425565b506020820151604080840151"
    "8451859392600091859190811061030c5761030c61065d565b016020015160f81c905060"
    "1b811480159061032b57508060ff16601c14155b1561038c5760405162461bcd60e51b81"
    "5260206004820152603b602482015260008051602061067483398151915260448201527f"
    "3a20696e76616c6964207369676e617475726520762076616c7565000000000060648201"
    "52608401610157565b60408051600081526020810180835289905260ff83169181019190"
    "915260608101849052608081018390526001600160a01b0389169060019060a001602060"
    "4051602081039080840390855afa1580156103ea573d6000803e3d6000fd5b5050506020"
    "60405103516001600160a01b0316149450505050505b9392505050565b60006020825110"
    "1561041d57600080fd5b508051015190565b604051806060016040528060039060208202"
    "80368337509192915050565b6001600160a01b038116811461045857600080fd5b50565b"
    "634e487b7160e01b600052604160045260246000fd5b60005b8381101561048c57818101"
    "5183820152602001610474565b50506000910152565b600082601f8301126104a6576000"
    "80fd5b81516001600160401b038111156104bf576104bf61045b565b604051601f820160"
    "1f19908116603f011681016001600160401b03811182821017156104ed576104ed61045b"
    "565b60405281815283820160200185101561050557600080fd5b61051682602083016020"
    "8701610471565b949350505050565b60008060006060848603121561053357600080fd5b"
    "835161053e81610443565b6020850151604086015191945092506001600160401b038111"
    "1561056157600080fd5b61056d86828701610495565b9150509250925092565b60008060"
    "006060848603121561058c57600080fd5b835161059781610443565b6020850151909350"
    "6001600160401b038111156105b357600080fd5b6105bf86828701610495565b60408601"
    "5190935090506001600160401b0381111561056157600080fd5b600082516105ef818460"
    "208701610471565b9190910192915050565b828152604060208201526000825180604084"
    "015261061e816060850160208701610471565b601f01601f191691909101606001939250"
    "5050565b60006020828403121561064557600080fd5b81516001600160e01b0319811681"
    "1461040557600080fd5b634e487b7160e01b600052603260045260246000fdfe5369676e"
    "617475726556616c696461746f72237265636f7665725369676e6572"
)

UNIVERSAL_SIGNATURE_VALIDATOR_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "address", "name": "_signer", "type": "address"},
            {"internalType": "bytes32", "name": "_hash", "type": "bytes32"},
            {"internalType": "bytes", "name": "_signature", "type": "bytes"},
        ],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "_signer", "type": "address"},
            {"internalType": "bytes32", "name": "_hash", "type": "bytes32"},
            {"internalType": "bytes", "name": "_signature", "type": "bytes"},
        ],
        "name": "isValidSig",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

#: Return data of a validator deployment whose signature checked out.
VALID_SIGNATURE_SENTINEL: bytes = b"\x01"

#: Substituted for empty return data before comparing with the sentinel.
EMPTY_RETURN_DEFAULT: bytes = b"\x00"

# ---------------------------------------------------------------------------
# ERC-6492 / ERC-1271 constants
# ---------------------------------------------------------------------------

#: 32-byte suffix marking a signature as ERC-6492 wrapped.
ERC6492_MAGIC_SUFFIX: bytes = bytes.fromhex("6492" * 16)

#: ABI types of an ERC-6492 wrapper body: ``(factory, factoryData, signature)``.
ERC6492_WRAPPER_TYPES: List[str] = ["address", "bytes", "bytes"]

# ---------------------------------------------------------------------------
# secp256k1
# ---------------------------------------------------------------------------

#: Order of the secp256k1 group; valid ``r`` / ``s`` scalars lie in ``[1, n)``.
SECP256K1_N: int = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
