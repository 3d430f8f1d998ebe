import pytest

from composer_agent.config import Settings
from composer_agent.errors import ConfigurationError

KEY = "0x" + "11" * 32


def test_settings_from_env():
    settings = Settings.from_env(
        "Optimism",
        {
            "OPTIMISM_RPC_URL": "https://optimism.example",
            "WALLET_PRIVATE_KEY": KEY,
            "OPENAI_API_KEY": "sk-test",
            "COMPOSER_RECEIPT_TIMEOUT": "30",
            "COMPOSER_AI_ALLOW_WRITES": "yes",
        },
    )
    assert settings.chain_name == "optimism"
    assert settings.rpc_url == "https://optimism.example"
    assert settings.receipt_timeout == 30.0
    assert settings.ai_allow_writes is True
    assert settings.allow_chain_fallback is False
    assert settings.ai_max_steps == 5


@pytest.mark.parametrize(
    "env, message",
    [
        ({"WALLET_PRIVATE_KEY": KEY}, "ARBITRUM_RPC_URL"),
        ({"ARBITRUM_RPC_URL": "http://localhost:8545"}, "WALLET_PRIVATE_KEY"),
        (
            {"ARBITRUM_RPC_URL": "http://x", "WALLET_PRIVATE_KEY": KEY, "COMPOSER_RECEIPT_TIMEOUT": "-1"},
            "COMPOSER_RECEIPT_TIMEOUT",
        ),
        (
            {"ARBITRUM_RPC_URL": "http://x", "WALLET_PRIVATE_KEY": KEY, "COMPOSER_AI_ALLOW_WRITES": "maybe"},
            "COMPOSER_AI_ALLOW_WRITES",
        ),
        (
            {"ARBITRUM_RPC_URL": "http://x", "WALLET_PRIVATE_KEY": KEY, "COMPOSER_AI_MAX_STEPS": "0.5"},
            "COMPOSER_AI_MAX_STEPS",
        ),
        (
            {"ARBITRUM_RPC_URL": "http://x", "WALLET_PRIVATE_KEY": KEY, "COMPOSER_AI_MAX_STEPS": "0"},
            "COMPOSER_AI_MAX_STEPS",
        ),
    ],
)
def test_missing_or_malformed_settings(env, message):
    with pytest.raises(ConfigurationError, match=message):
        Settings.from_env("arbitrum", env)


def test_chain_without_deployment_needs_fallback_opt_in():
    env = {"MANTLE_RPC_URL": "http://mantle", "WALLET_PRIVATE_KEY": KEY}
    with pytest.raises(ConfigurationError, match="Unsupported chain"):
        Settings.from_env("mantle", env)

    settings = Settings.from_env("mantle", {**env, "COMPOSER_ALLOW_CHAIN_FALLBACK": "1"})
    assert settings.allow_chain_fallback is True


def test_unknown_chain_is_rejected():
    with pytest.raises(ConfigurationError, match="Supported chains"):
        Settings.from_env("solana", {"SOLANA_RPC_URL": "x", "WALLET_PRIVATE_KEY": KEY})
