"""Wallet collaborator: view calls and signed transactions against the composer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, Tuple

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import Web3Exception

from ..errors import ConfigurationError, ExecutionError
from .abi import COMPOSER_ABI

logger = logging.getLogger(__name__)

DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_REQUEST_TIMEOUT = 30.0

# Raised by web3.py and its HTTP transport for RPC failures.
TRANSPORT_ERRORS = (Web3Exception, ValueError, OSError)


@dataclass(frozen=True)
class ContractCall:
    """A single composer function invocation, independent of transport."""

    contract: str
    function: str
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class TransactionReceipt:
    transaction_hash: str
    status: int
    block_number: Optional[int] = None
    gas_used: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class Wallet(Protocol):
    def address(self) -> str:
        ...

    def call(self, request: ContractCall) -> Any:
        ...

    def sign_and_send(self, request: ContractCall) -> TransactionReceipt:
        ...


class Web3Wallet:
    """Local-key wallet talking JSON-RPC through web3.py."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        chain_id: int,
        *,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        abi: Sequence[dict] = COMPOSER_ABI,
    ) -> None:
        try:
            self._account: LocalAccount = Account.from_key(private_key)
        except (ValueError, TypeError) as exc:
            raise ConfigurationError("WALLET_PRIVATE_KEY is not a valid private key") from exc
        self._web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout}))
        self._chain_id = chain_id
        self._receipt_timeout = receipt_timeout
        self._abi = list(abi)

    def address(self) -> str:
        return self._account.address

    def _function(self, request: ContractCall):
        contract = self._web3.eth.contract(address=Web3.to_checksum_address(request.contract), abi=self._abi)
        return contract.functions[request.function](*request.args)

    def call(self, request: ContractCall) -> Any:
        return self._function(request).call({"from": self._account.address})

    def sign_and_send(self, request: ContractCall) -> TransactionReceipt:
        sender = self._account.address
        tx = self._function(request).build_transaction(
            {
                "from": sender,
                "nonce": self._web3.eth.get_transaction_count(sender, "pending"),
                "chainId": self._chain_id,
            }
        )
        signed = self._account.sign_transaction(tx)
        tx_hash = self._web3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Submitted %s transaction %s", request.function, Web3.to_hex(tx_hash))

        raw_receipt = self._web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout)
        receipt = TransactionReceipt(
            transaction_hash=Web3.to_hex(raw_receipt["transactionHash"]),
            status=int(raw_receipt.get("status", 0)),
            block_number=raw_receipt.get("blockNumber"),
            gas_used=raw_receipt.get("gasUsed"),
        )
        if not receipt.succeeded:
            raise ExecutionError(
                f"{request.function} transaction reverted",
                details={"transactionHash": receipt.transaction_hash, "blockNumber": receipt.block_number},
            )
        logger.info("Confirmed %s in block %s", receipt.transaction_hash, receipt.block_number)
        return receipt

