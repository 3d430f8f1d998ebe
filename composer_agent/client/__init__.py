"""Composer contract client and wallet collaborators."""
from .abi import COMPOSER_ABI
from .composer import ComposerClient
from .wallet import ContractCall, TransactionReceipt, Wallet, Web3Wallet

__all__ = [
    "COMPOSER_ABI",
    "ComposerClient",
    "ContractCall",
    "TransactionReceipt",
    "Wallet",
    "Web3Wallet",
]
