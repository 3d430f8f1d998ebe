"""Registration table binding each composer operation to its validator and handler."""
from __future__ import annotations

from typing import Any, Dict, List

from ..client import ComposerClient
from ..registry import ChainDeployment
from ..validation import (
    CloseMarginPosition,
    CloseMarginPositionInput,
    EmptyInput,
    NoParams,
    OpenMarginPosition,
    OpenMarginPositionInput,
    TokenInput,
    TokenQuery,
    TokenSwap,
    TokenSwapInput,
)
from .base import ToolRegistry, ToolSpec

TOOL_ORDER = (
    "get_collateral_balance",
    "get_debt_balance",
    "get_health_factor",
    "get_supported_tokens",
    "get_chain_info",
    "open_margin_position",
    "close_margin_position",
    "swap_collateral",
    "swap_debt",
)


def supported_tokens(deployment: ChainDeployment) -> Dict[str, Any]:
    return {
        "tokens": [token.describe() for token in deployment.tokens],
        "chainId": deployment.chain_id,
    }


def chain_info(deployment: ChainDeployment) -> Dict[str, Any]:
    return {
        "chainId": deployment.chain_id,
        "chainName": deployment.chain.name,
        "composerAddress": deployment.composer_address,
    }


def build_composer_tools(client: ComposerClient) -> ToolRegistry:
    deployment = client.deployment

    def get_collateral_balance(params: TokenQuery) -> Dict[str, Any]:
        return client.get_collateral_balance(params.token)

    def get_debt_balance(params: TokenQuery) -> Dict[str, Any]:
        return client.get_debt_balance(params.token)

    def get_health_factor(params: NoParams) -> Dict[str, Any]:
        return client.get_health_factor()

    def get_supported_tokens(params: NoParams) -> Dict[str, Any]:
        return supported_tokens(deployment)

    def get_chain_info(params: NoParams) -> Dict[str, Any]:
        return chain_info(deployment)

    def open_margin_position(params: OpenMarginPosition) -> Dict[str, Any]:
        return client.open_margin_position(params)

    def close_margin_position(params: CloseMarginPosition) -> Dict[str, Any]:
        return client.close_margin_position(params)

    def swap_collateral(params: TokenSwap) -> Dict[str, Any]:
        return client.swap_collateral(params)

    def swap_debt(params: TokenSwap) -> Dict[str, Any]:
        return client.swap_debt(params)

    specs: List[ToolSpec] = [
        ToolSpec(
            name="get_collateral_balance",
            description="Get the collateral balance of a token for the connected wallet",
            input_model=TokenInput,
            handler=get_collateral_balance,
        ),
        ToolSpec(
            name="get_debt_balance",
            description="Get the debt balance of a token for the connected wallet",
            input_model=TokenInput,
            handler=get_debt_balance,
        ),
        ToolSpec(
            name="get_health_factor",
            description="Get the health factor of the connected wallet",
            input_model=EmptyInput,
            handler=get_health_factor,
        ),
        ToolSpec(
            name="get_supported_tokens",
            description="Get the list of supported tokens for the current chain",
            input_model=EmptyInput,
            handler=get_supported_tokens,
        ),
        ToolSpec(
            name="get_chain_info",
            description="Get information about the current chain",
            input_model=EmptyInput,
            handler=get_chain_info,
        ),
        ToolSpec(
            name="open_margin_position",
            description="Open a margin position with leverage",
            input_model=OpenMarginPositionInput,
            handler=open_margin_position,
            mutates=True,
        ),
        ToolSpec(
            name="close_margin_position",
            description="Close a margin position, fully or by repaying part of the debt",
            input_model=CloseMarginPositionInput,
            handler=close_margin_position,
            mutates=True,
        ),
        ToolSpec(
            name="swap_collateral",
            description="Swap one collateral token for another",
            input_model=TokenSwapInput,
            handler=swap_collateral,
            mutates=True,
        ),
        ToolSpec(
            name="swap_debt",
            description="Swap one debt token for another",
            input_model=TokenSwapInput,
            handler=swap_debt,
            mutates=True,
        ),
    ]
    return ToolRegistry(specs)
