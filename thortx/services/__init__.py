"""Service layer helpers"""

from .transaction_service import TransactionService, get_transaction_service

__all__ = [
    "TransactionService",
    "get_transaction_service",
]
