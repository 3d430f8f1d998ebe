"""Chain, token and composer deployment registry."""
from .chains import DEFAULT_CHAIN, KNOWN_CHAINS, Chain, chain_by_id, chain_by_name
from .deployments import COMPOSER_ADDRESSES, ChainDeployment, ChainRegistry
from .tokens import TOKENS_BY_CHAIN, Token, find_token_by_symbol

__all__ = [
    "COMPOSER_ADDRESSES",
    "DEFAULT_CHAIN",
    "KNOWN_CHAINS",
    "TOKENS_BY_CHAIN",
    "Chain",
    "ChainDeployment",
    "ChainRegistry",
    "Token",
    "chain_by_id",
    "chain_by_name",
    "find_token_by_symbol",
]
