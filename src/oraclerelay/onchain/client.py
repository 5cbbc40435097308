"""Chain client interface and its web3 implementation."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol

from eth_account import Account
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ContractLogicError, TimeExhausted

from oraclerelay.core.exceptions import (
    ChainQueryError,
    EstimationFailedError,
    SendFailedError,
    TransactionUnconfirmedError,
)
from oraclerelay.core.models import OracleRequest
from oraclerelay.onchain.abi import FULFILL_FUNCTION, REQUEST_EVENT

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount

    from oraclerelay.config import RelaySettings
    from oraclerelay.onchain.deployment import DeploymentConfig

logger = logging.getLogger(__name__)


class FulfillmentCall(BaseModel):
    """Arguments of the contract call that delivers an outcome."""

    model_config = ConfigDict(frozen=True)

    request_id: bytes
    entity_id: str
    value: int = Field(..., ge=0)
    data_locator: str

    @property
    def request_id_hex(self) -> str:
        return "0x" + self.request_id.hex()


class ChainClient(Protocol):
    """What the relay needs from the chain."""

    async def get_height(self) -> int:
        """Current block height. Raises ChainQueryError."""
        ...

    async def get_request_events(self, from_block: int, to_block: int) -> list[OracleRequest]:
        """Request events in [from_block, to_block], in log order. Raises ChainQueryError."""
        ...

    async def estimate_cost(self, call: FulfillmentCall) -> int:
        """Gas estimate for the call. Raises EstimationFailedError."""
        ...

    async def send(self, call: FulfillmentCall, gas: int) -> str:
        """Sign and send the call, returning the tx hash. Raises SendFailedError."""
        ...


def request_from_log(log: Any) -> OracleRequest:
    """Convert a decoded request event log into an OracleRequest."""
    args = log["args"]
    return OracleRequest(
        request_id=bytes(args["requestId"]),
        entity_id=args["userId"],
        entity_name=args["userName"],
        source_block=log["blockNumber"],
        requester=args.get("requester"),
        log_index=log.get("logIndex"),
    )


class Web3ChainClient:
    """
    ChainClient backed by an ``AsyncWeb3`` instance and a local signing account.

    Every RPC round-trip is bounded by ``call_timeout``.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        contract_address: str,
        abi: list[dict[str, Any]],
        account: "LocalAccount",
        *,
        chain_id: int | None = None,
        call_timeout: float = 30.0,
        wait_for_receipt: bool = True,
        receipt_timeout: float = 120.0,
        event_name: str = REQUEST_EVENT,
        function_name: str = FULFILL_FUNCTION,
    ) -> None:
        self._w3 = w3
        self._account = account
        self._chain_id = chain_id
        self._call_timeout = call_timeout
        self._wait_for_receipt = wait_for_receipt
        self._receipt_timeout = receipt_timeout
        self._event_name = event_name
        self._function_name = function_name
        self.contract_address = AsyncWeb3.to_checksum_address(contract_address)
        self._contract = w3.eth.contract(address=self.contract_address, abi=abi)

    @property
    def address(self) -> str:
        """Address of the sending account."""
        return self._account.address

    @classmethod
    def from_settings(
        cls,
        settings: "RelaySettings",
        deployment: "DeploymentConfig",
    ) -> "Web3ChainClient":
        """Create a client from settings. Raises ConfigurationError if incomplete."""
        settings.require_chain_credentials()
        contract_address = deployment.require_contract_address()

        w3 = AsyncWeb3(
            AsyncHTTPProvider(
                settings.rpc_url,
                request_kwargs={"timeout": settings.chain_call_timeout},
            )
        )
        account = Account.from_key(settings.private_key.get_secret_value())
        logger.info(f"Account loaded: {account.address}")
        logger.info(f"Contract: {contract_address} on {deployment.network}")

        return cls(
            w3,
            contract_address,
            deployment.abi,
            account,
            chain_id=settings.chain_id,
            call_timeout=settings.chain_call_timeout,
            wait_for_receipt=settings.wait_for_receipt,
            receipt_timeout=settings.receipt_timeout,
        )

    def _fulfill(self, call: FulfillmentCall):
        fn = getattr(self._contract.functions, self._function_name)
        return fn(call.request_id, call.entity_id, call.value, call.data_locator)

    async def get_height(self) -> int:
        try:
            async with asyncio.timeout(self._call_timeout):
                return await self._w3.eth.block_number
        except Exception as e:
            raise ChainQueryError(f"Failed to read block height: {e}") from e

    async def get_request_events(self, from_block: int, to_block: int) -> list[OracleRequest]:
        event = getattr(self._contract.events, self._event_name)
        try:
            async with asyncio.timeout(self._call_timeout):
                logs = await event.get_logs(from_block=from_block, to_block=to_block)
        except Exception as e:
            raise ChainQueryError(
                f"Failed to query {self._event_name} events in [{from_block}, {to_block}]: {e}",
                details={"from_block": from_block, "to_block": to_block},
            ) from e

        requests = []
        for log in logs:
            try:
                requests.append(request_from_log(log))
            except (KeyError, TypeError, ValidationError) as e:
                tx = log.get("transactionHash")
                logger.warning(f"Skipping malformed {self._event_name} log (tx {tx}): {e}")
        return requests

    async def estimate_cost(self, call: FulfillmentCall) -> int:
        try:
            async with asyncio.timeout(self._call_timeout):
                return await self._fulfill(call).estimate_gas({"from": self.address})
        except ContractLogicError as e:
            raise EstimationFailedError(
                f"Contract rejected {self._function_name}: {e}",
                request_id=call.request_id_hex,
                reverted=True,
            ) from e
        except Exception as e:
            raise EstimationFailedError(
                f"Gas estimation failed: {e}",
                request_id=call.request_id_hex,
            ) from e

    async def send(self, call: FulfillmentCall, gas: int) -> str:
        try:
            async with asyncio.timeout(self._call_timeout):
                nonce = await self._w3.eth.get_transaction_count(self.address, "pending")
                params: dict[str, Any] = {"from": self.address, "nonce": nonce, "gas": gas}
                if self._chain_id is not None:
                    params["chainId"] = self._chain_id
                tx = await self._fulfill(call).build_transaction(params)
                signed = self._account.sign_transaction(tx)
                tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            raise SendFailedError(
                f"Failed to send {self._function_name}: {e}",
                request_id=call.request_id_hex,
            ) from e

        tx_hex = self._w3.to_hex(tx_hash)
        if self._wait_for_receipt:
            await self._await_receipt(call, tx_hex)
        return tx_hex

    async def _await_receipt(self, call: FulfillmentCall, tx_hex: str) -> None:
        try:
            receipt = await self._w3.eth.wait_for_transaction_receipt(
                tx_hex, timeout=self._receipt_timeout
            )
        except TimeExhausted as e:
            raise TransactionUnconfirmedError(
                f"Transaction {tx_hex} sent but not mined within {self._receipt_timeout}s",
                request_id=call.request_id_hex,
                tx_hash=tx_hex,
            ) from e
        except Exception as e:
            raise TransactionUnconfirmedError(
                f"Transaction {tx_hex} sent but its receipt could not be fetched: {e}",
                request_id=call.request_id_hex,
                tx_hash=tx_hex,
            ) from e

        if receipt["status"] != 1:
            raise SendFailedError(
                f"Transaction {tx_hex} reverted",
                request_id=call.request_id_hex,
                details={"tx_hash": tx_hex},
            )

    async def close(self) -> None:
        provider = self._w3.provider
        disconnect = getattr(provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
