"""
Simulated call execution.

Defines the capability the verifier depends on for running the validator
deployment against chain state, and the outcome type it returns. Executors
report a revert and any other failure as distinct outcomes instead of
raising, so the verifier's recovery policy is an exhaustive match on three
cases rather than exception-type inspection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Union

from structlog import get_logger
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError

from .schemas import ValidatorCall

logger = get_logger(__name__)


@dataclass(frozen=True)
class CallSucceeded:
    """The simulation ran to completion and returned ``data``."""

    data: bytes


@dataclass(frozen=True)
class CallReverted:
    """The simulated contract logic reverted."""

    error: Exception


@dataclass(frozen=True)
class CallFailed:
    """The call could not be carried out (transport, node, or request error)."""

    error: Exception


SimulationOutcome = Union[CallSucceeded, CallReverted, CallFailed]


class CallExecutor(ABC):
    """Read-only call capability used by the verifier."""

    @abstractmethod
    async def execute(self, call: ValidatorCall) -> SimulationOutcome:
        """
        Run ``call`` against the selected (or latest) chain state.

        Implementations must return ``CallReverted`` only for an execution
        revert and wrap every other failure in ``CallFailed``. Cancellation
        is never captured.
        """


class Web3CallExecutor(CallExecutor):
    """
    ``CallExecutor`` backed by ``AsyncWeb3.eth.call``.

    Timeouts come from the provider's ``request_kwargs``; see
    ``universal_sig.config.create_async_web3``.

    Example::

        executor = Web3CallExecutor(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url)))
        outcome = await executor.execute(call)
    """

    def __init__(self, w3: AsyncWeb3) -> None:
        self.w3 = w3

    def _build_transaction(self, call: ValidatorCall) -> Dict[str, Any]:
        if call.factory is not None or call.factory_data is not None:
            # A deployless call has no ``to``; the factory pair does not
            # change the eth_call payload.
            logger.debug(
                "web3_call_executor.factory_ignored",
                factory=call.factory,
            )
        return {"data": call.data}

    async def execute(self, call: ValidatorCall) -> SimulationOutcome:
        transaction = self._build_transaction(call)
        try:
            data = await self.w3.eth.call(
                transaction, block_identifier=call.block_identifier
            )
        except ContractLogicError as exc:
            return CallReverted(error=exc)
        except Exception as exc:
            return CallFailed(error=exc)
        return CallSucceeded(data=bytes(data))
