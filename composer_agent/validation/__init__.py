"""Tool argument validation."""
from .params import (
    MAX_LEVERAGE,
    MIN_LEVERAGE,
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
    ToolInput,
    parameters_schema,
    parse_input,
    validate_params,
)

__all__ = [
    "MAX_LEVERAGE",
    "MIN_LEVERAGE",
    "CloseMarginPosition",
    "CloseMarginPositionInput",
    "EmptyInput",
    "NoParams",
    "OpenMarginPosition",
    "OpenMarginPositionInput",
    "TokenInput",
    "TokenQuery",
    "TokenSwap",
    "TokenSwapInput",
    "ToolInput",
    "parameters_schema",
    "parse_input",
    "validate_params",
]
