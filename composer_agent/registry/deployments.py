"""Composer contract deployments keyed by chain id."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..errors import ConfigurationError, TokenNotFound, UnknownChain
from .chains import ARBITRUM, BASE, BNB, DEFAULT_CHAIN, ETHEREUM, OPTIMISM, POLYGON, Chain, chain_by_id
from .tokens import TOKENS_BY_CHAIN, Token, find_token_by_symbol

logger = logging.getLogger(__name__)

COMPOSER_ADDRESSES: Dict[int, str] = {
    ARBITRUM.id: "0x1b7966315eF0259de890F38f1bDB95Acc03caCdD",
    ETHEREUM.id: "0x5FbDB2315678afecb367f032d93F642f64180aa3",
    OPTIMISM.id: "0x8A791620dd6260079BF849Dc5567aDC3F2FdC318",
    BASE.id: "0x610178dA211FEF7D417bC0e6FeD39F05609AD788",
    POLYGON.id: "0xB7f8BC63BbcaD18155201308C8f3540b07f84F5e",
    BNB.id: "0xA51c1fc2f0D1a1b8494Ed1FE312d7C3a78Ed91C0",
}


@dataclass(frozen=True)
class ChainDeployment:
    """The (composer address, token set) pair every tool is bound to."""

    chain: Chain
    composer_address: str
    tokens: Tuple[Token, ...]

    @property
    def chain_id(self) -> int:
        return self.chain.id

    def find_token(self, symbol: str) -> Optional[Token]:
        return find_token_by_symbol(self.tokens, symbol)

    def require_token(self, symbol: str) -> Token:
        token = self.find_token(symbol)
        if token is None:
            raise TokenNotFound(symbol, self.chain.id)
        return token

    def supports_chain(self, chain: Chain) -> bool:
        return chain.id == self.chain.id or chain.name.lower() == self.chain.name


class ChainRegistry:
    """Read-only lookup from chain id to its composer deployment."""

    def __init__(
        self,
        addresses: Optional[Mapping[int, str]] = None,
        tokens: Optional[Mapping[int, Iterable[Token]]] = None,
    ) -> None:
        self._addresses: Dict[int, str] = dict(COMPOSER_ADDRESSES if addresses is None else addresses)
        source = TOKENS_BY_CHAIN if tokens is None else tokens
        self._tokens: Dict[int, Tuple[Token, ...]] = {chain_id: tuple(items) for chain_id, items in source.items()}

    def supported_chain_ids(self) -> Tuple[int, ...]:
        return tuple(
            chain_id for chain_id in self._addresses if self._tokens.get(chain_id)
        )

    def lookup(self, chain_id: int, *, fallback: bool = False) -> ChainDeployment:
        """Return the deployment for ``chain_id``.

        With ``fallback=True`` an unconfigured chain resolves to the default
        chain's deployment instead of raising ``UnknownChain``.
        """

        address = self._addresses.get(chain_id)
        tokens = self._tokens.get(chain_id)
        if address and tokens:
            return ChainDeployment(chain=chain_by_id(chain_id), composer_address=address, tokens=tokens)
        if fallback and chain_id != DEFAULT_CHAIN.id:
            logger.warning(
                "No composer deployment for chain %s, falling back to %s",
                chain_id,
                DEFAULT_CHAIN.name,
            )
            return self.lookup(DEFAULT_CHAIN.id)
        raise UnknownChain(chain_id)

    def deployment(
        self,
        chain_id: int,
        *,
        composer_address: Optional[str] = None,
        tokens: Optional[Iterable[Token]] = None,
        fallback: bool = False,
    ) -> ChainDeployment:
        """Build a deployment, letting callers override the address or tokens."""

        if composer_address is None or tokens is None:
            base = self.lookup(chain_id, fallback=fallback)
        else:
            base = ChainDeployment(chain=chain_by_id(chain_id), composer_address=composer_address, tokens=())

        token_set = base.tokens if tokens is None else tuple(tokens)
        if not token_set:
            raise ConfigurationError(f"No tokens configured for chain {chain_id}")
        foreign = [token.symbol for token in token_set if token.chain_id != base.chain.id]
        if foreign:
            raise ConfigurationError(
                f"Tokens {', '.join(foreign)} do not belong to chain {base.chain.id}"
            )
        return ChainDeployment(
            chain=base.chain,
            composer_address=composer_address or base.composer_address,
            tokens=token_set,
        )
