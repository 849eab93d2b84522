"""
Error Classification

Typed errors raised by the transaction engine, plus the single place where
remote broadcast failures are mapped from node output (result codes and log
text) onto a closed set of kinds. Everything downstream of the transport edge
branches on ``BroadcastErrorKind``, never on message text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """Categories of errors for caller decisions."""

    VALIDATION = "validation"     # Caller defect, never retried
    NETWORK = "network"           # Endpoint unreachable or unhealthy
    BROADCAST = "broadcast"       # Remote rejected the signed transaction
    LOOKUP = "lookup"             # Remote has not indexed the object yet


class BroadcastErrorKind(str, Enum):
    """Closed set of broadcast outcomes recognised at the transport edge."""

    DUPLICATE = "duplicate"                   # Exact bytes already in the mempool cache
    SEQUENCE_MISMATCH = "sequence_mismatch"   # Signer used a stale account sequence
    REJECTED = "rejected"                     # Any other non-zero result code


# Cosmos SDK registered error codes (codespace "sdk")
SDK_CODESPACE = "sdk"
SDK_CODE_WRONG_SEQUENCE = 32
SDK_CODE_TX_IN_MEMPOOL_CACHE = 19

_DUPLICATE_PATTERNS = (
    "tx already exists in cache",
    "tx already in mempool",
)
_SEQUENCE_PATTERNS = (
    "account sequence mismatch",
    "incorrect account sequence",
)


@dataclass
class ErrorContext:
    """Additional context about an error."""

    category: ErrorCategory
    retriable: bool = False
    suggested_action: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class TransactionError(Exception):
    """Base class for every error raised by the engine."""

    category: ErrorCategory = ErrorCategory.VALIDATION
    suggested_action: Optional[str] = None

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.context = ErrorContext(
            category=self.category,
            retriable=False,
            suggested_action=self.suggested_action,
            details=details,
        )


# Validation errors
class InvalidAmount(TransactionError):
    """Amount is not a finite, non-negative number within range."""

    def __init__(self, amount: Any, reason: str = "invalid amount"):
        super().__init__(f"Invalid amount {amount!r}: {reason}", amount=str(amount))
        self.amount = amount
        self.reason = reason


class MissingAsset(TransactionError):
    def __init__(self, message: str = "Asset is required"):
        super().__init__(message)


class MissingDestination(TransactionError):
    def __init__(self, message: str = "Destination address is required for transfers"):
        super().__init__(message)


class MissingMemo(TransactionError):
    def __init__(self, message: str = "Memo is required for deposits"):
        super().__init__(message)


class InvalidTransactionHash(TransactionError):
    def __init__(self, tx_hash: Any):
        super().__init__(f"Malformed transaction hash: {tx_hash!r}", tx_hash=str(tx_hash))
        self.tx_hash = tx_hash


# Network errors
class EndpointUnavailable(TransactionError):
    """Remote endpoint could not be reached or answered with a server error."""

    category = ErrorCategory.NETWORK
    suggested_action = "Check connectivity or switch endpoints"

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message, url=url, status_code=status_code)
        self.url = url
        self.status_code = status_code
        self.context.retriable = True


class UnresolvedModuleAddress(TransactionError):
    category = ErrorCategory.NETWORK

    def __init__(self, network: str, reason: str):
        super().__init__(
            f"Failed to resolve thorchain module address for {network}: {reason}",
            network=network,
        )
        self.network = network


class LookupIncomplete(TransactionError):
    """The node has not indexed the requested object yet.

    Raised only at the provider edge; the status tracker turns it into
    non-terminal stages instead of letting it reach callers.
    """

    category = ErrorCategory.LOOKUP

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} {identifier} not indexed yet", resource=resource, identifier=identifier)
        self.resource = resource
        self.identifier = identifier


# Broadcast errors
class BroadcastError(TransactionError):
    category = ErrorCategory.BROADCAST


class BroadcastRejected(BroadcastError):
    def __init__(self, code: int, raw_log: Optional[str], attempts: int = 1):
        super().__init__(
            f"Transaction rejected with code {code}: {raw_log or 'no log'}",
            code=code,
            raw_log=raw_log,
            attempts=attempts,
        )
        self.code = code
        self.raw_log = raw_log
        self.attempts = attempts


class AlreadySubmitted(BroadcastError):
    """The exact signed bytes were already accepted by the node.

    The original hash cannot be recovered from this response.
    """

    suggested_action = "Check your transaction history before sending again"

    def __init__(self, raw_log: Optional[str], attempts: int = 1):
        super().__init__(
            "Transaction was already submitted; look it up in your history",
            raw_log=raw_log,
            attempts=attempts,
        )
        self.raw_log = raw_log
        self.attempts = attempts


class SequenceConflict(BroadcastError):
    suggested_action = "Check your transaction history, then retry if nothing went through"

    def __init__(self, raw_log: Optional[str], attempts: int):
        super().__init__(
            f"Account sequence mismatch persisted after {attempts} attempt(s)",
            raw_log=raw_log,
            attempts=attempts,
        )
        self.raw_log = raw_log
        self.attempts = attempts


class BroadcastTimeout(BroadcastError):
    """The signer did not answer in time; the node may still have accepted the tx."""

    suggested_action = "Check your transaction history before sending again"

    def __init__(self, operation: str, timeout_seconds: float, attempts: int = 1):
        super().__init__(
            f"{operation} timed out after {timeout_seconds}s",
            operation=operation,
            timeout_seconds=timeout_seconds,
            attempts=attempts,
        )
        self.attempts = attempts


VALIDATION_ERRORS = (InvalidAmount, MissingAsset, MissingDestination, MissingMemo, InvalidTransactionHash)


def classify_broadcast_error(
    code: int,
    raw_log: Optional[str] = None,
    codespace: Optional[str] = None,
) -> Optional[BroadcastErrorKind]:
    """Map a broadcast response (or signer exception text) onto a kind.

    Structured SDK codes win when the codespace identifies them; log text is
    the fallback for nodes and signers that only surface a message.

    Returns:
        None when ``code`` is zero and the log carries no known failure.
    """
    if codespace == SDK_CODESPACE:
        if code == SDK_CODE_TX_IN_MEMPOOL_CACHE:
            return BroadcastErrorKind.DUPLICATE
        if code == SDK_CODE_WRONG_SEQUENCE:
            return BroadcastErrorKind.SEQUENCE_MISMATCH

    text = (raw_log or "").lower()
    if any(pattern in text for pattern in _DUPLICATE_PATTERNS):
        return BroadcastErrorKind.DUPLICATE
    if any(pattern in text for pattern in _SEQUENCE_PATTERNS):
        return BroadcastErrorKind.SEQUENCE_MISMATCH

    if code != 0:
        return BroadcastErrorKind.REJECTED
    return None
