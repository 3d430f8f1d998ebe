"""Token tables for every chain with a composer deployment."""
from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .chains import ARBITRUM, BASE, BNB, ETHEREUM, OPTIMISM, POLYGON


class Token(BaseModel):
    """ERC-20 token metadata; identity is (chain_id, address), never the symbol."""

    symbol: str
    name: str
    address: str
    decimals: int = Field(ge=0)
    chain_id: int = Field(alias="chainId")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def describe(self) -> Dict[str, object]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "decimals": self.decimals,
            "address": self.address,
        }


def _token(symbol: str, name: str, address: str, decimals: int, chain_id: int) -> Token:
    return Token(symbol=symbol, name=name, address=address, decimals=decimals, chain_id=chain_id)


def _chain_tokens(chain_id: int, rows: Iterable[Tuple[str, str, str, int]]) -> Tuple[Token, ...]:
    return tuple(_token(symbol, name, address, decimals, chain_id) for symbol, name, address, decimals in rows)


TOKENS_BY_CHAIN: Dict[int, Tuple[Token, ...]] = {
    ARBITRUM.id: _chain_tokens(
        ARBITRUM.id,
        [
            ("WETH", "Wrapped Ether", "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18),
            ("USDC", "USD Coin", "0xaf88d065e77c8cC2239327C5EDb3A432268e5831", 6),
            ("USDT", "Tether USD", "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9", 6),
            ("DAI", "Dai Stablecoin", "0xDA10009cBd5D07dd0CeCc66161FC93D7c9000da1", 18),
            ("WBTC", "Wrapped Bitcoin", "0x2f2a2543B76A4166549F7aaB2e75Bef0aefC5B0f", 8),
        ],
    ),
    ETHEREUM.id: _chain_tokens(
        ETHEREUM.id,
        [
            ("WETH", "Wrapped Ether", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
            ("USDC", "USD Coin", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
            ("USDT", "Tether USD", "0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
            ("DAI", "Dai Stablecoin", "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18),
            ("WBTC", "Wrapped Bitcoin", "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 8),
        ],
    ),
    OPTIMISM.id: _chain_tokens(
        OPTIMISM.id,
        [
            ("WETH", "Wrapped Ether", "0x4200000000000000000000000000000000000006", 18),
            ("USDC", "USD Coin", "0x7F5c764cBc14f9669B88837ca1490cCa17c31607", 6),
            ("USDT", "Tether USD", "0x94b008aA00579c1307B0EF2c499aD98a8ce58e58", 6),
            ("DAI", "Dai Stablecoin", "0xDA10009cBd5D07dd0CeCc66161FC93D7c9000da1", 18),
            ("WBTC", "Wrapped Bitcoin", "0x68f180fcCe6836688e9084f035309E29Bf0A2095", 8),
        ],
    ),
    BASE.id: _chain_tokens(
        BASE.id,
        [
            ("WETH", "Wrapped Ether", "0x4200000000000000000000000000000000000006", 18),
            ("USDC", "USD Coin", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", 6),
            ("DAI", "Dai Stablecoin", "0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb", 18),
        ],
    ),
    POLYGON.id: _chain_tokens(
        POLYGON.id,
        [
            ("WETH", "Wrapped Ether", "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619", 18),
            ("USDC", "USD Coin", "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174", 6),
            ("USDT", "Tether USD", "0xc2132D05D31c914a87C6611C10748AEb04B58e8F", 6),
            ("DAI", "Dai Stablecoin", "0x8f3Cf7ad23Cd3CaDbD9735AFf958023239c6A063", 18),
            ("WBTC", "Wrapped Bitcoin", "0x1BFD67037B42Cf73acF2047067bd4F2C47D9BfD6", 8),
        ],
    ),
    # Stablecoins on BNB Chain use 18 decimals.
    BNB.id: _chain_tokens(
        BNB.id,
        [
            ("WBNB", "Wrapped BNB", "0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c", 18),
            ("USDC", "USD Coin", "0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d", 18),
            ("USDT", "Tether USD", "0x55d398326f99059fF775485246999027B3197955", 18),
            ("DAI", "Dai Stablecoin", "0x1AF3F329e8BE154074D8769D1FFa4eE058B1DBc3", 18),
            ("BTCB", "Bitcoin BEP2", "0x7130d2A12B9BCbFAe4f2634d864A1Ee1Ce3Ead9c", 18),
        ],
    ),
}


def find_token_by_symbol(tokens: Iterable[Token], symbol: str) -> Optional[Token]:
    """Return the token whose symbol matches case-insensitively, if any."""

    normalized = symbol.strip().lower()
    for token in tokens:
        if token.symbol.lower() == normalized:
            return token
    return None
