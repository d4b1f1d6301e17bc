"""
Universal verification flow tests.

Covers the validator call builder, the outcome interpreter, and the async
verify_hash / verify_message / verify_typed_data entry points against fake
executors.

Usage:
    pytest tests/test_adapter/test_verifies.py -v
"""

import asyncio
import typing

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import keccak
from pydantic import ValidationError
from web3.exceptions import ContractLogicError

from test_mocks import (
    MOCK_EOA_ADDRESS,
    MOCK_FACTORY_ADDRESS,
    MOCK_FACTORY_DATA,
    MOCK_HASH,
    MOCK_SIGNATURE_BYTES,
    MOCK_SIGNATURE_HEX,
    MOCK_SIGNATURE_RSV,
    MOCK_SIGNER_ADDRESS,
    MOCK_SIGNER_CHECKSUM,
    MOCK_SIGNER_PRIVATE_KEY,
    MOCK_TYPED_DATA,
    FakeCallExecutor,
    RaisingCallExecutor,
    create_mock_web3,
    decode_validator_args,
)

from universal_sig.adapters.evm.executors import (
    CallFailed,
    CallReverted,
    CallSucceeded,
)
from universal_sig.adapters.evm.signatures import SignatureLike
from universal_sig.adapters.evm.standards import ERC6492Signature
from universal_sig.adapters.evm.verifies import (
    build_validator_call,
    encode_deploy_data,
    hash_message,
    hash_typed_data,
    interpret_call_outcome,
    verify_hash,
    verify_message,
    verify_typed_data,
)
from universal_sig.engine.exceptions import SignatureEncodingError


# ========================================================================
# Test Fixtures
# ========================================================================

@pytest.fixture
def valid_executor():
    """Executor whose validator simulation returns 0x01."""
    return FakeCallExecutor(CallSucceeded(data=b"\x01"))


# ========================================================================
# Validator Call Builder
# ========================================================================

class TestBuildValidatorCall:
    """Deploy-data encoding and pass-through of optional fields."""

    def test_encodes_constructor_args(self):
        call = build_validator_call(
            address=MOCK_SIGNER_ADDRESS, hash=MOCK_HASH, signature=MOCK_SIGNATURE_HEX
        )
        address, hash_bytes, signature = decode_validator_args(call)

        assert address == MOCK_SIGNER_CHECKSUM
        assert hash_bytes == bytes.fromhex(MOCK_HASH[2:])
        assert signature == MOCK_SIGNATURE_BYTES

    def test_defaults_leave_optional_fields_empty(self):
        call = build_validator_call(
            address=MOCK_SIGNER_ADDRESS, hash=MOCK_HASH, signature=MOCK_SIGNATURE_HEX
        )
        assert call.block_identifier is None
        assert call.factory is None
        assert call.factory_data is None

    def test_passes_through_factory_and_block(self):
        call = build_validator_call(
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
            block_number=19_000_000,
            factory=MOCK_FACTORY_ADDRESS,
            factory_data=MOCK_FACTORY_DATA,
        )
        fields = call.to_dict()
        assert fields["factory"] == MOCK_FACTORY_ADDRESS
        assert fields["factory_data"] == MOCK_FACTORY_DATA
        assert call.block_identifier == 19_000_000

    def test_block_tag(self):
        call = build_validator_call(
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
            block_tag="safe",
        )
        assert call.block_identifier == "safe"

    def test_block_number_and_tag_are_exclusive(self):
        with pytest.raises(ValidationError):
            build_validator_call(
                address=MOCK_SIGNER_ADDRESS,
                hash=MOCK_HASH,
                signature=MOCK_SIGNATURE_HEX,
                block_number=1,
                block_tag="latest",
            )

    def test_hash_must_be_32_bytes(self):
        with pytest.raises(ValueError):
            build_validator_call(
                address=MOCK_SIGNER_ADDRESS, hash="0x1234", signature=MOCK_SIGNATURE_HEX
            )

    def test_call_is_immutable(self):
        call = build_validator_call(
            address=MOCK_SIGNER_ADDRESS, hash=MOCK_HASH, signature=MOCK_SIGNATURE_HEX
        )
        with pytest.raises(ValidationError):
            call.factory = MOCK_FACTORY_ADDRESS

    def test_encode_deploy_data(self):
        data = encode_deploy_data(bytecode="0x6080", constructor_types=["uint256"], args=[1])
        assert data == "0x6080" + "00" * 31 + "01"


# ========================================================================
# Result Interpreter
# ========================================================================

class TestInterpretCallOutcome:
    """Sentinel comparison and the revert / failure split."""

    @pytest.mark.parametrize(
        "data, expected",
        [
            (b"\x01", True),
            (b"\x00", False),
            (b"", False),
            (b"\x00\x01", False),
            (b"\x01\x00", False),
            (b"\x02", False),
        ],
    )
    def test_return_data(self, data, expected):
        assert interpret_call_outcome(CallSucceeded(data=data)) is expected

    def test_revert_is_invalid(self):
        outcome = CallReverted(error=ContractLogicError("execution reverted"))
        assert interpret_call_outcome(outcome) is False

    def test_failure_is_reraised(self):
        error = ConnectionError("node unreachable")
        with pytest.raises(ConnectionError) as exc_info:
            interpret_call_outcome(CallFailed(error=error))
        assert exc_info.value is error

    def test_unknown_outcome(self):
        with pytest.raises(TypeError):
            interpret_call_outcome(b"\x01")


# ========================================================================
# verify_hash
# ========================================================================

class TestVerifyHash:
    """End-to-end verification against fake executors."""

    @pytest.mark.asyncio
    async def test_valid_signature(self, valid_executor):
        result = await verify_hash(
            valid_executor,
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
        )
        assert result is True
        assert len(valid_executor.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "outcome",
        [
            CallSucceeded(data=b"\x00"),
            CallSucceeded(data=b""),
            CallReverted(error=ContractLogicError("execution reverted")),
        ],
    )
    async def test_invalid_signature(self, outcome):
        executor = FakeCallExecutor(outcome)
        result = await verify_hash(
            executor,
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
        )
        assert result is False

    @pytest.mark.asyncio
    async def test_transport_timeout_propagates(self):
        timeout = asyncio.TimeoutError("request timed out")
        executor = FakeCallExecutor(CallFailed(error=timeout))

        with pytest.raises(asyncio.TimeoutError) as exc_info:
            await verify_hash(
                executor,
                address=MOCK_SIGNER_ADDRESS,
                hash=MOCK_HASH,
                signature=MOCK_SIGNATURE_HEX,
            )
        assert exc_info.value is timeout

    @pytest.mark.asyncio
    async def test_executor_exception_propagates(self):
        error = ConnectionError("connection reset")
        with pytest.raises(ConnectionError) as exc_info:
            await verify_hash(
                RaisingCallExecutor(error),
                address=MOCK_SIGNER_ADDRESS,
                hash=MOCK_HASH,
                signature=MOCK_SIGNATURE_HEX,
            )
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_encoding_error_before_any_call(self, valid_executor):
        with pytest.raises(SignatureEncodingError):
            await verify_hash(
                valid_executor,
                address=MOCK_SIGNER_ADDRESS,
                hash=MOCK_HASH,
                signature={"r": 0, "s": 1, "v": 27},
            )
        assert valid_executor.calls == []

    @pytest.mark.asyncio
    async def test_signature_forms_build_identical_calls(self, valid_executor):
        for signature in (MOCK_SIGNATURE_HEX, MOCK_SIGNATURE_BYTES, MOCK_SIGNATURE_RSV):
            await verify_hash(
                valid_executor,
                address=MOCK_SIGNER_ADDRESS,
                hash=MOCK_HASH,
                signature=signature,
            )
        first = valid_executor.calls[0]
        assert all(call == first for call in valid_executor.calls)

    @pytest.mark.asyncio
    async def test_factory_fields_forwarded(self, valid_executor):
        factory_data = bytes.fromhex("c5265d5d") + b"\x00" * 32
        await verify_hash(
            valid_executor,
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
            factory=MOCK_FACTORY_ADDRESS,
            factory_data=factory_data,
            block_tag="pending",
        )
        call = valid_executor.calls[0]
        assert call.factory == MOCK_FACTORY_ADDRESS
        assert call.factory_data == factory_data
        assert call.block_tag == "pending"

    @pytest.mark.asyncio
    async def test_repeated_calls_are_idempotent(self, valid_executor):
        kwargs = dict(address=MOCK_SIGNER_ADDRESS, hash=MOCK_HASH, signature=MOCK_SIGNATURE_HEX)
        first = await verify_hash(valid_executor, **kwargs)
        second = await verify_hash(valid_executor, **kwargs)

        assert first is second is True
        assert valid_executor.calls[0] == valid_executor.calls[1]

    @pytest.mark.asyncio
    async def test_concurrent_verifications(self, valid_executor):
        results = await asyncio.gather(*[
            verify_hash(
                valid_executor,
                address=MOCK_SIGNER_ADDRESS,
                hash=MOCK_HASH,
                signature=MOCK_SIGNATURE_HEX,
            )
            for _ in range(5)
        ])
        assert results == [True] * 5

    @pytest.mark.asyncio
    async def test_erc6492_wrapped_signature_is_passed_intact(self, valid_executor):
        wrapped = ERC6492Signature(
            factory=MOCK_FACTORY_ADDRESS,
            factory_data=bytes.fromhex(MOCK_FACTORY_DATA[2:]),
            signature=MOCK_SIGNATURE_BYTES,
        ).wrap()

        assert await verify_hash(
            valid_executor,
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=wrapped,
        )
        _, _, signature = decode_validator_args(valid_executor.calls[0])
        assert "0x" + signature.hex() == wrapped

    @pytest.mark.asyncio
    async def test_accepts_async_web3(self):
        w3 = create_mock_web3(return_value=b"\x01")
        result = await verify_hash(
            w3,
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
        )
        assert result is True
        w3.eth.call.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_async_web3_revert_is_invalid(self):
        w3 = create_mock_web3(side_effect=ContractLogicError("execution reverted"))
        result = await verify_hash(
            w3,
            address=MOCK_SIGNER_ADDRESS,
            hash=MOCK_HASH,
            signature=MOCK_SIGNATURE_HEX,
        )
        assert result is False


# ========================================================================
# Message and typed-data verification
# ========================================================================

class TestMessageHashing:
    """EIP-191 and EIP-712 hashing used ahead of verify_hash."""

    def test_hash_message_text(self):
        expected = keccak(b"\x19Ethereum Signed Message:\n11hello world")
        assert hash_message("hello world") == "0x" + expected.hex()

    def test_hash_message_raw(self):
        raw = b"\x01\x02\x03"
        expected = "0x" + keccak(b"\x19Ethereum Signed Message:\n3" + raw).hex()
        assert hash_message({"raw": raw}) == expected
        assert hash_message({"raw": "0x010203"}) == expected
        assert hash_message(raw) == expected

    def test_hash_message_matches_eth_account(self):
        signed = Account.sign_message(
            encode_defunct(text="hello"), private_key=MOCK_SIGNER_PRIVATE_KEY
        )
        assert hash_message("hello") == "0x" + bytes(signed.message_hash).hex()

    def test_hash_typed_data_matches_eth_account(self):
        signed = Account.sign_typed_data(
            MOCK_SIGNER_PRIVATE_KEY, full_message=MOCK_TYPED_DATA
        )
        assert hash_typed_data(MOCK_TYPED_DATA) == "0x" + bytes(signed.message_hash).hex()


class TestVerifyMessage:
    """verify_message / verify_typed_data delegate with the right hash."""

    @pytest.mark.asyncio
    async def test_verify_message_uses_eip191_hash(self, valid_executor):
        signed = Account.sign_message(
            encode_defunct(text="hello"), private_key=MOCK_SIGNER_PRIVATE_KEY
        )
        result = await verify_message(
            valid_executor,
            address=MOCK_EOA_ADDRESS,
            message="hello",
            signature=bytes(signed.signature),
        )
        assert result is True

        address, hash_bytes, signature = decode_validator_args(valid_executor.calls[0])
        assert address == MOCK_EOA_ADDRESS
        assert hash_bytes == bytes(signed.message_hash)
        assert signature == bytes(signed.signature)

    @pytest.mark.asyncio
    async def test_verify_typed_data_uses_eip712_hash(self, valid_executor):
        signed = Account.sign_typed_data(
            MOCK_SIGNER_PRIVATE_KEY, full_message=MOCK_TYPED_DATA
        )
        result = await verify_typed_data(
            valid_executor,
            address=MOCK_EOA_ADDRESS,
            typed_data=MOCK_TYPED_DATA,
            signature={"r": signed.r, "s": signed.s, "v": signed.v},
        )
        assert result is True

        _, hash_bytes, signature = decode_validator_args(valid_executor.calls[0])
        assert hash_bytes == bytes(signed.message_hash)
        assert signature == bytes(signed.signature)

    @pytest.mark.asyncio
    async def test_verify_message_revert(self):
        executor = FakeCallExecutor(CallReverted(error=ContractLogicError("execution reverted")))
        result = await verify_message(
            executor,
            address=MOCK_EOA_ADDRESS,
            message="hello",
            signature=MOCK_SIGNATURE_HEX,
        )
        assert result is False


@pytest.mark.parametrize("verifier", [verify_hash, verify_message, verify_typed_data])
def test_signature_parameter_accepts_every_form(verifier):
    assert typing.get_type_hints(verifier)["signature"] == SignatureLike
