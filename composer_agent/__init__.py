"""1delta composer margin trading agent: registry, validation, tools and front-ends."""
from .config import DEFAULT_AGENT_CONFIG, AgentConfig, Settings
from .errors import (
    ComposerError,
    ConfigurationError,
    ExecutionError,
    TokenNotFound,
    UnknownChain,
    UnknownTool,
    ValidationError,
)
from .runtime import ComposerRuntime, build_runtime

__all__ = [
    "DEFAULT_AGENT_CONFIG",
    "AgentConfig",
    "ComposerError",
    "ComposerRuntime",
    "ConfigurationError",
    "ExecutionError",
    "Settings",
    "TokenNotFound",
    "UnknownChain",
    "UnknownTool",
    "ValidationError",
    "build_runtime",
]
