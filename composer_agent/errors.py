"""Error taxonomy shared by the registry, validator, client and dispatcher."""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class ComposerError(Exception):
    """Base class for request-terminal failures surfaced to CLI and AI callers."""

    code = "ComposerError"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class ConfigurationError(ComposerError):
    code = "ConfigurationError"


class UnknownChain(ComposerError):
    code = "UnknownChain"

    def __init__(self, chain: Any) -> None:
        super().__init__(f"No composer configuration for chain {chain}", details={"chain": chain})
        self.chain = chain


class TokenNotFound(ComposerError):
    code = "TokenNotFound"

    def __init__(self, symbol: str, chain_id: Optional[int] = None) -> None:
        details: Dict[str, Any] = {"symbol": symbol}
        if chain_id is not None:
            details["chainId"] = chain_id
        super().__init__(f"Token {symbol} not found", details=details)
        self.symbol = symbol


class ValidationError(ComposerError):
    """Raised when raw tool arguments violate an operation's constraints."""

    code = "ValidationError"

    def __init__(self, message: str, *, problems: Optional[List[str]] = None) -> None:
        super().__init__(message, details={"problems": problems} if problems else None)
        self.problems = problems or [message]


class UnknownTool(ComposerError):
    code = "UnknownTool"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}", details={"tool": name})
        self.name = name


class ExecutionError(ComposerError):
    """Wraps RPC failures and reverted transactions; never retried."""

    code = "ExecutionError"

    def __init__(self, message: str, *, cause: Optional[BaseException] = None, details: Optional[Dict[str, Any]] = None) -> None:
        merged = dict(details or {})
        if cause is not None:
            merged.setdefault("cause", f"{type(cause).__name__}: {cause}")
        super().__init__(message, details=merged)
        self.cause = cause
