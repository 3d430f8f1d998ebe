from types import SimpleNamespace

import pytest

from composer_agent.client import ContractCall, Web3Wallet
from composer_agent.errors import ConfigurationError, ExecutionError

KEY = "0x" + "33" * 32
COMPOSER = "0x1b7966315eF0259de890F38f1bDB95Acc03caCdD"
TX = b"\xcd" * 32


class FakeFunction:
    def __init__(self, name, args, log):
        self.name = name
        self.args = args
        self.log = log

    def call(self, params):
        self.log.append(("call", self.name, self.args, params))
        return 42

    def build_transaction(self, params):
        self.log.append(("build", self.name, self.args, params))
        return {"data": "0x", **params}


class FakeFunctions:
    def __init__(self, log):
        self.log = log

    def __getitem__(self, name):
        return lambda *args: FakeFunction(name, args, self.log)


class FakeEth:
    def __init__(self, status):
        self.status = status
        self.log = []
        self.sent = []

    def contract(self, address, abi):
        self.log.append(("contract", address))
        return SimpleNamespace(functions=FakeFunctions(self.log))

    def get_transaction_count(self, address, block):
        return 7

    def send_raw_transaction(self, raw):
        self.sent.append(raw)
        return TX

    def wait_for_transaction_receipt(self, tx_hash, timeout):
        self.log.append(("wait", timeout))
        return {"transactionHash": tx_hash, "status": self.status, "blockNumber": 99, "gasUsed": 21000}


def make_wallet(status=1):
    wallet = Web3Wallet("http://localhost:8545", KEY, 42161, receipt_timeout=15)
    eth = FakeEth(status)
    wallet._web3 = SimpleNamespace(eth=eth)
    wallet._account = SimpleNamespace(
        address=wallet.address(),
        sign_transaction=lambda tx: SimpleNamespace(raw_transaction=b"signed"),
    )
    return wallet, eth


def test_invalid_private_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Web3Wallet("http://localhost:8545", "not-a-key", 42161)


def test_view_call_uses_wallet_address():
    wallet, eth = make_wallet()
    assert wallet.call(ContractCall(COMPOSER, "getHealthFactor", (wallet.address(),))) == 42
    kind, name, args, params = eth.log[-1]
    assert (kind, name) == ("call", "getHealthFactor")
    assert params == {"from": wallet.address()}


def test_sign_and_send_waits_for_confirmation():
    wallet, eth = make_wallet()
    receipt = wallet.sign_and_send(ContractCall(COMPOSER, "swapDebt", ("0xa", "0xb", 1)))

    build = next(entry for entry in eth.log if entry[0] == "build")
    assert build[3] == {"from": wallet.address(), "nonce": 7, "chainId": 42161}
    assert eth.sent == [b"signed"]
    assert ("wait", 15) in eth.log
    assert receipt.transaction_hash == "0x" + "cd" * 32
    assert receipt.block_number == 99


def test_reverted_receipt_raises_execution_error():
    wallet, _ = make_wallet(status=0)
    with pytest.raises(ExecutionError, match="reverted") as excinfo:
        wallet.sign_and_send(ContractCall(COMPOSER, "openMarginPosition", ()))
    assert excinfo.value.details["blockNumber"] == 99
