"""Shared fixtures: real registry data, fake wallet collaborators."""

from typing import Any, Dict, List

import pytest

from composer_agent.client import ComposerClient, ContractCall, TransactionReceipt
from composer_agent.registry import ChainRegistry
from composer_agent.registry.chains import ARBITRUM
from composer_agent.tools import ToolDispatcher, build_composer_tools

WALLET_ADDRESS = "0x1111111111111111111111111111111111111111"
TX_HASH = "0x" + "ab" * 32


class FakeWallet:
    def __init__(self, views: Dict[str, Any] | None = None, receipt: TransactionReceipt | None = None):
        self.views = views or {}
        self.receipt = receipt or TransactionReceipt(transaction_hash=TX_HASH, status=1, block_number=10)
        self.calls: List[ContractCall] = []
        self.sent: List[ContractCall] = []
        self.error: Exception | None = None

    def address(self) -> str:
        return WALLET_ADDRESS

    def call(self, request: ContractCall) -> Any:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.views[request.function]

    def sign_and_send(self, request: ContractCall) -> TransactionReceipt:
        self.sent.append(request)
        if self.error is not None:
            raise self.error
        return self.receipt

    @property
    def external_calls(self) -> int:
        return len(self.calls) + len(self.sent)


@pytest.fixture
def deployment():
    return ChainRegistry().lookup(ARBITRUM.id)


@pytest.fixture
def wallet():
    return FakeWallet(
        views={
            "getCollateralBalance": 2_500_000_000_000_000_000,
            "getDebtBalance": 5_000_000,
            "getHealthFactor": 1_750_000_000_000_000_000,
        }
    )


@pytest.fixture
def client(wallet, deployment):
    return ComposerClient(wallet, deployment)


@pytest.fixture
def dispatcher(client, deployment):
    return ToolDispatcher(build_composer_tools(client), deployment)
