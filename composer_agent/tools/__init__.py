"""Tool registration and dispatch."""
from .base import ToolOutcome, ToolRegistry, ToolSpec
from .composer_tools import TOOL_ORDER, build_composer_tools, chain_info, supported_tokens
from .dispatcher import ToolDispatcher

__all__ = [
    "TOOL_ORDER",
    "ToolDispatcher",
    "ToolOutcome",
    "ToolRegistry",
    "ToolSpec",
    "build_composer_tools",
    "chain_info",
    "supported_tokens",
]
