"""Thin adapter translating validated operations into composer contract calls."""
from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import ExecutionError
from ..registry import ChainDeployment, Token
from ..units import HEALTH_FACTOR_DECIMALS, format_units
from ..validation import CloseMarginPosition, OpenMarginPosition, TokenSwap
from .wallet import TRANSPORT_ERRORS, ContractCall, TransactionReceipt, Wallet

logger = logging.getLogger(__name__)


class ComposerClient:
    """One external call per operation; results normalized to human units.

    Reads are view calls, writes block until the transaction is confirmed.
    Failures are wrapped in ``ExecutionError`` and never retried.
    """

    def __init__(self, wallet: Wallet, deployment: ChainDeployment) -> None:
        self._wallet = wallet
        self._deployment = deployment

    @property
    def deployment(self) -> ChainDeployment:
        return self._deployment

    def _request(self, function: str, *args: Any) -> ContractCall:
        return ContractCall(contract=self._deployment.composer_address, function=function, args=tuple(args))

    def _call(self, function: str, *args: Any) -> int:
        request = self._request(function, *args)
        try:
            return int(self._wallet.call(request))
        except ExecutionError:
            raise
        except TRANSPORT_ERRORS as exc:
            raise ExecutionError(f"{function} call failed", cause=exc) from exc

    def _transact(self, function: str, *args: Any) -> TransactionReceipt:
        request = self._request(function, *args)
        try:
            return self._wallet.sign_and_send(request)
        except ExecutionError:
            raise
        except TRANSPORT_ERRORS as exc:
            raise ExecutionError(f"{function} transaction failed", cause=exc) from exc

    def _balance(self, function: str, token: Token) -> Dict[str, Any]:
        raw = self._call(function, self._wallet.address(), token.address)
        return {
            "token": token.symbol,
            "balance": format_units(raw, token.decimals),
            "balanceInBaseUnits": str(raw),
        }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_collateral_balance(self, token: Token) -> Dict[str, Any]:
        return self._balance("getCollateralBalance", token)

    def get_debt_balance(self, token: Token) -> Dict[str, Any]:
        return self._balance("getDebtBalance", token)

    def get_health_factor(self) -> Dict[str, Any]:
        raw = self._call("getHealthFactor", self._wallet.address())
        return {
            "healthFactor": format_units(raw, HEALTH_FACTOR_DECIMALS),
            "healthFactorInBaseUnits": str(raw),
            "chainId": self._deployment.chain_id,
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def open_margin_position(self, params: OpenMarginPosition) -> Dict[str, Any]:
        receipt = self._transact(
            "openMarginPosition",
            params.collateral_token.address,
            params.debt_token.address,
            params.collateral_amount_base,
            params.leverage_base,
        )
        return {
            "transactionHash": receipt.transaction_hash,
            "collateralToken": params.collateral_token.symbol,
            "debtToken": params.debt_token.symbol,
            "collateralAmount": format_units(params.collateral_amount_base, params.collateral_token.decimals),
            "collateralAmountInBaseUnits": str(params.collateral_amount_base),
            "leverage": params.leverage,
            "chainId": self._deployment.chain_id,
        }

    def close_margin_position(self, params: CloseMarginPosition) -> Dict[str, Any]:
        receipt = self._transact(
            "closeMarginPosition",
            params.collateral_token.address,
            params.debt_token.address,
            params.repay_amount_base,
            params.close_all,
        )
        repay = None if params.close_all else format_units(params.repay_amount_base, params.debt_token.decimals)
        return {
            "transactionHash": receipt.transaction_hash,
            "collateralToken": params.collateral_token.symbol,
            "debtToken": params.debt_token.symbol,
            "repayAmount": repay,
            "repayAmountInBaseUnits": str(params.repay_amount_base),
            "closeAll": params.close_all,
            "chainId": self._deployment.chain_id,
        }

    def swap_collateral(self, params: TokenSwap) -> Dict[str, Any]:
        return self._swap("swapCollateral", params)

    def swap_debt(self, params: TokenSwap) -> Dict[str, Any]:
        return self._swap("swapDebt", params)

    def _swap(self, function: str, params: TokenSwap) -> Dict[str, Any]:
        receipt = self._transact(function, params.from_token.address, params.to_token.address, params.amount_base)
        return {
            "transactionHash": receipt.transaction_hash,
            "fromToken": params.from_token.symbol,
            "toToken": params.to_token.symbol,
            "amount": format_units(params.amount_base, params.from_token.decimals),
            "amountInBaseUnits": str(params.amount_base),
            "chainId": self._deployment.chain_id,
        }
