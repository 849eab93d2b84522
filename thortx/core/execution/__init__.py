"""
Transaction Execution Layer

Turns a user intent into a submitted THORChain transaction:
- TransactionBuilder: builds MsgSend / module deposit / MsgDeposit messages
- ModuleAddressResolver: looks up the thorchain module address once per network
- Broadcaster: signs and submits with sequence-conflict recovery

Usage:
    from thortx.core.execution import Broadcaster, TransactionBuilder, TransactionIntent

    intent = TransactionIntent(asset="THOR.RUNE", amount="1.5", destination_address="thor1...")
    result = await broadcaster.broadcast(signer, intent)
"""

from .models import (
    AccountInfo,
    BroadcastResult,
    Coin,
    Fee,
    MessageKind,
    MSG_DEPOSIT_TYPE_URL,
    MSG_SEND_TYPE_URL,
    PreparedTransaction,
    TransactionIntent,
)

from .signer import (
    Signer,
    SigningSession,
)

from .module_resolver import (
    ModuleAddressResolver,
    THORCHAIN_MODULE,
)

from .tx_builder import (
    TransactionBuilder,
    asset_denom,
)

from .broadcaster import (
    Broadcaster,
)

__all__ = [
    # Models
    "AccountInfo",
    "BroadcastResult",
    "Coin",
    "Fee",
    "MessageKind",
    "MSG_DEPOSIT_TYPE_URL",
    "MSG_SEND_TYPE_URL",
    "PreparedTransaction",
    "TransactionIntent",
    # Signer
    "Signer",
    "SigningSession",
    # Module resolution
    "ModuleAddressResolver",
    "THORCHAIN_MODULE",
    # Transaction Builder
    "TransactionBuilder",
    "asset_denom",
    # Broadcaster
    "Broadcaster",
]
