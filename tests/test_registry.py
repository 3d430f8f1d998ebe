import pytest

from composer_agent.errors import ConfigurationError, TokenNotFound, UnknownChain
from composer_agent.registry import (
    COMPOSER_ADDRESSES,
    DEFAULT_CHAIN,
    KNOWN_CHAINS,
    ChainRegistry,
    Token,
    chain_by_name,
    find_token_by_symbol,
)
from composer_agent.registry.chains import ARBITRUM, BASE, BNB, MANTLE, OPTIMISM


def test_every_supported_chain_has_tokens_and_composer():
    registry = ChainRegistry()
    assert set(registry.supported_chain_ids()) == set(COMPOSER_ADDRESSES)
    for chain_id in registry.supported_chain_ids():
        deployment = registry.lookup(chain_id)
        assert deployment.tokens
        assert deployment.composer_address.startswith("0x")
        assert all(token.chain_id == chain_id for token in deployment.tokens)


def test_unknown_chain_id_fails():
    with pytest.raises(UnknownChain):
        ChainRegistry().lookup(999999)


def test_known_chain_without_deployment_fails_fast():
    with pytest.raises(UnknownChain):
        ChainRegistry().lookup(MANTLE.id)


def test_fallback_is_explicit_opt_in():
    deployment = ChainRegistry().lookup(MANTLE.id, fallback=True)
    assert deployment.chain == DEFAULT_CHAIN


def test_find_token_by_symbol_is_case_insensitive():
    tokens = ChainRegistry().lookup(ARBITRUM.id).tokens
    assert find_token_by_symbol(tokens, "usdc") == find_token_by_symbol(tokens, "USDC")
    assert find_token_by_symbol(tokens, "UsDc").decimals == 6
    assert find_token_by_symbol(tokens, "DOGE") is None


def test_same_symbol_differs_across_chains():
    registry = ChainRegistry()
    arbitrum_usdc = registry.lookup(ARBITRUM.id).require_token("USDC")
    bnb_usdc = registry.lookup(BNB.id).require_token("USDC")
    assert arbitrum_usdc != bnb_usdc
    assert bnb_usdc.decimals == 18


def test_require_token_raises_token_not_found():
    deployment = ChainRegistry().lookup(BASE.id)
    with pytest.raises(TokenNotFound) as excinfo:
        deployment.require_token("WBTC")
    assert excinfo.value.details == {"symbol": "WBTC", "chainId": BASE.id}


def test_chain_by_name():
    assert chain_by_name(" Optimism ") == OPTIMISM
    with pytest.raises(UnknownChain):
        chain_by_name("solana")
    assert len({chain.id for chain in KNOWN_CHAINS}) == len(KNOWN_CHAINS)


def test_supports_chain_by_id_or_name():
    deployment = ChainRegistry().lookup(ARBITRUM.id)
    assert deployment.supports_chain(ARBITRUM)
    assert deployment.supports_chain(ARBITRUM.model_copy(update={"id": 1}))
    assert not deployment.supports_chain(OPTIMISM)


def test_deployment_overrides():
    custom = Token(symbol="GMX", name="GMX", address="0xfc5A1A6EB076a2C7aD06eD22C90d7E710E35ad0a", decimals=18, chain_id=ARBITRUM.id)
    deployment = ChainRegistry().deployment(
        ARBITRUM.id,
        composer_address="0x0000000000000000000000000000000000000001",
        tokens=[custom],
    )
    assert deployment.composer_address.endswith("01")
    assert deployment.tokens == (custom,)


def test_deployment_rejects_empty_or_foreign_tokens():
    registry = ChainRegistry()
    with pytest.raises(ConfigurationError):
        registry.deployment(ARBITRUM.id, tokens=[])
    foreign = registry.lookup(OPTIMISM.id).tokens
    with pytest.raises(ConfigurationError):
        registry.deployment(ARBITRUM.id, tokens=foreign)
