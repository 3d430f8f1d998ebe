"""ABI fragment for the composer contract functions the agent calls."""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

_ADDRESS = "address"
_UINT = "uint256"


def _function(name: str, inputs: List[Tuple[str, str]], outputs: List[str], mutability: str) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"internalType": kind, "name": arg, "type": kind} for arg, kind in inputs],
        "outputs": [{"internalType": kind, "name": "", "type": kind} for kind in outputs],
    }


COMPOSER_ABI: List[Dict[str, Any]] = [
    _function("getCollateralBalance", [("user", _ADDRESS), ("token", _ADDRESS)], [_UINT], "view"),
    _function("getDebtBalance", [("user", _ADDRESS), ("token", _ADDRESS)], [_UINT], "view"),
    _function("getHealthFactor", [("user", _ADDRESS)], [_UINT], "view"),
    _function(
        "openMarginPosition",
        [("collateralToken", _ADDRESS), ("debtToken", _ADDRESS), ("collateralAmount", _UINT), ("leverage", _UINT)],
        [],
        "nonpayable",
    ),
    _function(
        "closeMarginPosition",
        [("collateralToken", _ADDRESS), ("debtToken", _ADDRESS), ("repayAmount", _UINT), ("closeAll", "bool")],
        [],
        "nonpayable",
    ),
    _function("swapCollateral", [("fromToken", _ADDRESS), ("toToken", _ADDRESS), ("amount", _UINT)], [], "nonpayable"),
    _function("swapDebt", [("fromToken", _ADDRESS), ("toToken", _ADDRESS), ("amount", _UINT)], [], "nonpayable"),
]
