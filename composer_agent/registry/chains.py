"""Static catalogue of EVM chains the composer plugin knows about."""
from __future__ import annotations

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict

from ..errors import UnknownChain


class Chain(BaseModel):
    name: str
    id: int

    model_config = ConfigDict(frozen=True)


ARBITRUM = Chain(name="arbitrum", id=42161)
BASE = Chain(name="base", id=8453)
BNB = Chain(name="bnb", id=56)
ETHEREUM = Chain(name="ethereum", id=1)
MANTLE = Chain(name="mantle", id=5000)
OPTIMISM = Chain(name="optimism", id=10)
POLYGON = Chain(name="polygon", id=137)
TAIKO = Chain(name="taiko", id=167004)
VENUS = Chain(name="venus", id=13370)

KNOWN_CHAINS: Tuple[Chain, ...] = (
    ARBITRUM,
    BASE,
    BNB,
    ETHEREUM,
    MANTLE,
    OPTIMISM,
    POLYGON,
    TAIKO,
    VENUS,
)

DEFAULT_CHAIN = ARBITRUM

_BY_ID: Dict[int, Chain] = {chain.id: chain for chain in KNOWN_CHAINS}
_BY_NAME: Dict[str, Chain] = {chain.name: chain for chain in KNOWN_CHAINS}


def chain_by_id(chain_id: int) -> Chain:
    chain = _BY_ID.get(chain_id)
    if chain is None:
        raise UnknownChain(chain_id)
    return chain


def chain_by_name(name: str) -> Chain:
    """Resolve a chain selector such as ``"Optimism"`` case-insensitively."""

    chain = _BY_NAME.get(name.strip().lower())
    if chain is None:
        raise UnknownChain(name)
    return chain
