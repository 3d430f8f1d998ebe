import pytest

from composer_agent import cli
from composer_agent.config import Settings
from composer_agent.errors import UnknownChain
from composer_agent.registry import ChainRegistry
from composer_agent.runtime import build_runtime

from conftest import FakeWallet

KEY = "0x" + "22" * 32


def scripted(*lines):
    pending = list(lines)

    def input_fn(prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)

    return input_fn


@pytest.fixture
def settings():
    return Settings(chain_name="arbitrum", rpc_url="http://localhost:8545", private_key=KEY)


@pytest.fixture
def runtime(settings, wallet):
    return build_runtime(settings, wallet=wallet)


def test_build_runtime_binds_selected_chain(runtime):
    description = runtime.describe()
    assert description["chainId"] == 42161
    assert list(description["tools"])[0] == "get_collateral_balance"


def test_build_runtime_fails_fast_for_unconfigured_chain(wallet):
    registry = ChainRegistry(addresses={})
    settings = Settings(chain_name="arbitrum", rpc_url="http://x", private_key=KEY)
    with pytest.raises(UnknownChain):
        build_runtime(settings, wallet=wallet, registry=registry)


def test_build_runtime_fallback_opt_in(wallet):
    settings = Settings(chain_name="taiko", rpc_url="http://x", private_key=KEY, allow_chain_fallback=True)
    assert build_runtime(settings, wallet=wallet).deployment.chain.name == "arbitrum"


def test_execute_command_prints_balances(runtime):
    lines = []
    assert cli.execute_command(runtime.dispatcher, "get-debt usdc", lines.append) is None
    assert lines[0].startswith("Debt balance:")
    assert '"balance": "5.0"' in lines[0]


def test_execute_command_requires_symbol(runtime, wallet):
    lines = []
    cli.execute_command(runtime.dispatcher, "get-collateral", lines.append)
    assert lines == ["Token symbol is required"]
    assert wallet.external_calls == 0


def test_execute_command_reports_errors_and_unknown_commands(runtime):
    lines = []
    cli.execute_command(runtime.dispatcher, "get-debt DOGE", lines.append)
    cli.execute_command(runtime.dispatcher, "dance", lines.append)
    assert lines == ["Error (TokenNotFound): Token DOGE not found", "Unknown command. Type 'exit' to quit."]


def test_cli_mode_loop_switches_and_exits(runtime):
    lines = []
    assert cli.run_cli_mode(runtime, scripted("get-health", "ai"), lines.append) == cli.MODE_AI
    assert any(line.startswith("Health factor:") for line in lines)
    assert cli.run_cli_mode(runtime, scripted("", "exit"), lines.append) == cli.MODE_EXIT
    assert cli.run_cli_mode(runtime, scripted(), lines.append) == cli.MODE_EXIT


def test_ai_mode_loop(runtime):
    class FakeSession:
        def __init__(self):
            self.prompts = []

        def ask(self, prompt):
            self.prompts.append(prompt)
            return "All good"

    session = FakeSession()
    lines = []
    assert cli.run_ai_mode(runtime, session, scripted("what is my health?", "cli"), lines.append) == cli.MODE_CLI
    assert session.prompts == ["what is my health?"]
    assert "All good" in lines


def test_main_exits_non_zero_without_configuration(monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_env", lambda path=None: {})
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["arbitrum", "--mode", "cli"])
    assert excinfo.value.code == 1
    assert "ARBITRUM_RPC_URL" in capsys.readouterr().err


def test_main_rejects_unsupported_chain(monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_env", lambda path=None: {"WALLET_PRIVATE_KEY": KEY})
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["solana"])
    assert excinfo.value.code == 1
    assert "Supported chains" in capsys.readouterr().err


def test_main_runs_command_mode(monkeypatch, capsys):
    env = {"BASE_RPC_URL": "http://base", "WALLET_PRIVATE_KEY": KEY}
    monkeypatch.setattr(cli, "load_env", lambda path=None: env)
    monkeypatch.setattr(
        cli,
        "build_runtime",
        lambda settings: build_runtime(settings, wallet=FakeWallet(views={"getHealthFactor": 2 * 10**18})),
    )

    cli.main(["base"], input_fn=scripted("1", "get-chain", "get-health", "exit"))

    out = capsys.readouterr().out
    assert "Using chain: BASE" in out
    assert '"chainId": 8453' in out
    assert '"healthFactor": "2.0"' in out


def test_main_falls_back_to_cli_without_openai_key(monkeypatch, capsys):
    env = {"ARBITRUM_RPC_URL": "http://arb", "WALLET_PRIVATE_KEY": KEY}
    monkeypatch.setattr(cli, "load_env", lambda path=None: env)
    monkeypatch.setattr(cli, "build_runtime", lambda settings: build_runtime(settings, wallet=FakeWallet()))

    cli.main(["--mode", "ai"], input_fn=scripted("exit"))

    captured = capsys.readouterr()
    assert "OPENAI_API_KEY" in captured.err
    assert "Available commands:" in captured.out
