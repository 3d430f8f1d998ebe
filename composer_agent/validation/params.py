"""Schema-checked tool inputs and the typed parameter structs they resolve to."""
from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..registry import ChainDeployment, Token
from ..units import LEVERAGE_DECIMALS, UINT256_MAX, number_to_units, parse_units

logger = logging.getLogger(__name__)

MIN_LEVERAGE = 1
MAX_LEVERAGE = 10


# ------------------------------------------------------------
#  Resolved parameter structs
# ------------------------------------------------------------
@dataclass(frozen=True)
class TokenQuery:
    token: Token


@dataclass(frozen=True)
class OpenMarginPosition:
    collateral_token: Token
    debt_token: Token
    collateral_amount: str
    collateral_amount_base: int
    leverage: float
    leverage_base: int


@dataclass(frozen=True)
class CloseMarginPosition:
    collateral_token: Token
    debt_token: Token
    close_all: bool
    repay_amount: Optional[str]
    repay_amount_base: int


@dataclass(frozen=True)
class TokenSwap:
    from_token: Token
    to_token: Token
    amount: str
    amount_base: int


@dataclass(frozen=True)
class NoParams:
    pass


# ------------------------------------------------------------
#  Raw tool inputs (wire names are camelCase)
# ------------------------------------------------------------
class ToolInput(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    @abstractmethod
    def resolve(self, deployment: ChainDeployment) -> Any:
        """Resolve symbols and amounts against ``deployment``."""


class EmptyInput(ToolInput):
    def resolve(self, deployment: ChainDeployment) -> NoParams:
        return NoParams()


class TokenInput(ToolInput):
    token: str = Field(min_length=1, description="The token symbol to query, e.g. USDC")

    def resolve(self, deployment: ChainDeployment) -> TokenQuery:
        return TokenQuery(token=deployment.require_token(self.token))


class OpenMarginPositionInput(ToolInput):
    collateral_token: str = Field(alias="collateralToken", min_length=1, description="The token symbol to use as collateral")
    debt_token: str = Field(alias="debtToken", min_length=1, description="The token symbol to borrow")
    collateral_amount: str = Field(alias="collateralAmount", description="The amount of collateral to supply, as a decimal string")
    leverage: float = Field(
        ge=MIN_LEVERAGE,
        le=MAX_LEVERAGE,
        allow_inf_nan=False,
        description="The leverage factor (1-10)",
    )

    @field_validator("leverage", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("leverage must be a number, not a boolean")
        return value

    def resolve(self, deployment: ChainDeployment) -> OpenMarginPosition:
        collateral = deployment.require_token(self.collateral_token)
        debt = deployment.require_token(self.debt_token)
        return OpenMarginPosition(
            collateral_token=collateral,
            debt_token=debt,
            collateral_amount=self.collateral_amount,
            collateral_amount_base=_amount("collateralAmount", self.collateral_amount, collateral),
            leverage=self.leverage,
            leverage_base=number_to_units(self.leverage, LEVERAGE_DECIMALS),
        )


class CloseMarginPositionInput(ToolInput):
    collateral_token: str = Field(alias="collateralToken", min_length=1, description="The token symbol used as collateral")
    debt_token: str = Field(alias="debtToken", min_length=1, description="The token symbol borrowed")
    repay_amount: Optional[str] = Field(
        default=None,
        alias="repayAmount",
        description="The amount of debt to repay (required when closeAll is false)",
    )
    close_all: bool = Field(default=True, alias="closeAll", description="Whether to close the entire position")

    def resolve(self, deployment: ChainDeployment) -> CloseMarginPosition:
        collateral = deployment.require_token(self.collateral_token)
        debt = deployment.require_token(self.debt_token)
        if self.close_all:
            # The contract ignores the amount for a full close.
            if self.repay_amount is not None:
                logger.debug("Ignoring repayAmount %s because closeAll is set", self.repay_amount)
            return CloseMarginPosition(
                collateral_token=collateral,
                debt_token=debt,
                close_all=True,
                repay_amount=None,
                repay_amount_base=0,
            )
        if self.repay_amount is None:
            raise ValidationError(
                "repayAmount is required when closeAll is false",
                problems=["repayAmount: field required when closeAll is false"],
            )
        return CloseMarginPosition(
            collateral_token=collateral,
            debt_token=debt,
            close_all=False,
            repay_amount=self.repay_amount,
            repay_amount_base=_amount("repayAmount", self.repay_amount, debt),
        )


class TokenSwapInput(ToolInput):
    from_token: str = Field(alias="fromToken", min_length=1, description="The token symbol to swap from")
    to_token: str = Field(alias="toToken", min_length=1, description="The token symbol to swap to")
    amount: str = Field(description="The amount to swap, as a decimal string")

    def resolve(self, deployment: ChainDeployment) -> TokenSwap:
        source = deployment.require_token(self.from_token)
        target = deployment.require_token(self.to_token)
        return TokenSwap(
            from_token=source,
            to_token=target,
            amount=self.amount,
            amount_base=_amount("amount", self.amount, source),
        )


# ------------------------------------------------------------
#  Helpers
# ------------------------------------------------------------
InputT = TypeVar("InputT", bound=ToolInput)


def _amount(field: str, value: str, token: Token) -> int:
    try:
        base = parse_units(value, token.decimals)
    except ValueError as exc:
        raise ValidationError(f"{field}: {exc}", problems=[f"{field}: {exc}"]) from exc
    if base > UINT256_MAX:
        problem = f"{field}: '{value}' exceeds the uint256 range"
        raise ValidationError(problem, problems=[problem])
    return base


def _describe_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "params"
    return f"{location}: {error.get('msg', 'invalid value')}"


def parse_input(model: Type[InputT], raw: Optional[Mapping[str, Any]]) -> InputT:
    """Validate raw CLI/AI arguments against ``model``."""

    if raw is not None and not isinstance(raw, Mapping):
        raise ValidationError("Tool arguments must be an object")
    try:
        return model.model_validate(dict(raw or {}))
    except PydanticValidationError as exc:
        problems: List[str] = [_describe_error(error) for error in exc.errors()]
        raise ValidationError("; ".join(problems), problems=problems) from exc


def validate_params(model: Type[ToolInput], raw: Optional[Mapping[str, Any]], deployment: ChainDeployment) -> Any:
    """Run schema validation, then token resolution and precision checks."""

    return parse_input(model, raw).resolve(deployment)


def parameters_schema(model: Type[ToolInput]) -> Dict[str, Any]:
    """JSON schema for a tool input, in the shape function-calling hosts expect."""

    schema = model.model_json_schema(by_alias=True)
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    schema.setdefault("properties", {})
    schema.setdefault("required", [])
    schema["additionalProperties"] = False
    return schema
