"""Factory wiring registry, wallet, client and dispatcher for one chain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .client import ComposerClient, Wallet, Web3Wallet
from .config import DEFAULT_AGENT_CONFIG, AgentConfig, Settings
from .registry import ChainDeployment, ChainRegistry, chain_by_name
from .tools import ToolDispatcher, build_composer_tools


@dataclass(frozen=True)
class ComposerRuntime:
    config: AgentConfig
    settings: Settings
    deployment: ChainDeployment
    client: ComposerClient
    dispatcher: ToolDispatcher

    def describe(self) -> Dict[str, object]:
        return {
            "name": self.config.name,
            "version": self.config.version,
            "chain": self.deployment.chain.name,
            "chainId": self.deployment.chain_id,
            "tools": {name: spec.description for name, spec in self.dispatcher.registry.all().items()},
        }


def build_runtime(
    settings: Settings,
    *,
    wallet: Optional[Wallet] = None,
    registry: Optional[ChainRegistry] = None,
    config: AgentConfig = DEFAULT_AGENT_CONFIG,
) -> ComposerRuntime:
    chain = chain_by_name(settings.chain_name)
    deployment = (registry or ChainRegistry()).lookup(chain.id, fallback=settings.allow_chain_fallback)

    if wallet is None:
        wallet = Web3Wallet(
            settings.rpc_url,
            settings.private_key,
            chain.id,
            receipt_timeout=settings.receipt_timeout,
        )

    client = ComposerClient(wallet, deployment)
    dispatcher = ToolDispatcher(build_composer_tools(client), deployment)
    return ComposerRuntime(
        config=config,
        settings=settings,
        deployment=deployment,
        client=client,
        dispatcher=dispatcher,
    )
