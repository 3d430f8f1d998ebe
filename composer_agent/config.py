"""Core configuration for the composer agent runtime."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigurationError
from .registry.chains import KNOWN_CHAINS

PROJECT_ROOT = Path(__file__).resolve().parent.parent

CHAIN_CHOICES: Tuple[str, ...] = ("arbitrum", "ethereum", "optimism", "base", "polygon", "bnb")
KNOWN_CHAIN_NAMES: Tuple[str, ...] = tuple(chain.name for chain in KNOWN_CHAINS)
DEFAULT_CHAIN_NAME = "arbitrum"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_AI_MAX_STEPS = 5

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class AgentConfig:
    """High level description of the agent runtime."""

    name: str
    version: str


DEFAULT_AGENT_CONFIG = AgentConfig(name="1delta Composer Agent", version="0.1.0")


@dataclass(frozen=True)
class Settings:
    """Everything read from the environment, built once at entry."""

    chain_name: str
    rpc_url: str
    private_key: str
    openai_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    ai_max_steps: int = DEFAULT_AI_MAX_STEPS
    ai_allow_writes: bool = False
    allow_chain_fallback: bool = False

    @staticmethod
    def rpc_env_var(chain_name: str) -> str:
        return f"{chain_name.upper()}_RPC_URL"

    @classmethod
    def from_env(cls, chain_name: str = DEFAULT_CHAIN_NAME, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        chain_name = chain_name.strip().lower()
        allow_fallback = _flag(env, "COMPOSER_ALLOW_CHAIN_FALLBACK")
        # Chains without a deployment are only accepted with the explicit fallback opt-in.
        known = chain_name in CHAIN_CHOICES or (allow_fallback and chain_name in KNOWN_CHAIN_NAMES)
        if not known:
            raise ConfigurationError(
                f"Unsupported chain: {chain_name}. Supported chains: {', '.join(CHAIN_CHOICES)}"
            )

        rpc_var = cls.rpc_env_var(chain_name)
        rpc_url = env.get(rpc_var)
        if not rpc_url:
            raise ConfigurationError(f"Missing environment variable: {rpc_var}")
        private_key = env.get("WALLET_PRIVATE_KEY")
        if not private_key:
            raise ConfigurationError("Missing environment variable: WALLET_PRIVATE_KEY")

        return cls(
            chain_name=chain_name,
            rpc_url=rpc_url,
            private_key=private_key,
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            model=env.get("COMPOSER_AI_MODEL") or DEFAULT_MODEL,
            receipt_timeout=_positive_float(env, "COMPOSER_RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT),
            ai_max_steps=_positive_int(env, "COMPOSER_AI_MAX_STEPS", DEFAULT_AI_MAX_STEPS),
            ai_allow_writes=_flag(env, "COMPOSER_AI_ALLOW_WRITES"),
            allow_chain_fallback=allow_fallback,
        )


def load_env(path: str | None = None) -> Dict[str, str]:
    env_path = Path(path) if path else PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(str(env_path))
    load_dotenv()
    return dict(os.environ)


def _flag(env: Mapping[str, str], name: str) -> bool:
    value = env.get(name, "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return parsed


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return parsed
