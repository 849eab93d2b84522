"""
Transaction builder for THORChain bank transfers and deposits.
"""

import logging
from typing import Any, Dict, Optional

from ...config import Settings, settings as default_settings
from ..assets import HOME_NATIVE_DENOM, WireAmount, normalize_asset, to_wire
from ..assets.normalizer import NormalizedAsset
from .models import (
    Coin,
    Fee,
    MessageKind,
    MSG_DEPOSIT_TYPE_URL,
    MSG_SEND_TYPE_URL,
    PreparedTransaction,
    TransactionIntent,
)
from .module_resolver import ModuleAddressResolver


logger = logging.getLogger(__name__)


def asset_denom(asset: str) -> str:
    """Bank denom for an asset identifier.

    RUNE maps to ``rune``; other home-chain natives become ``thor/<symbol>``;
    secured, trade and external assets keep their canonical id.
    """
    normalized: NormalizedAsset = normalize_asset(asset)
    if normalized.is_rune:
        return HOME_NATIVE_DENOM
    if normalized.is_home_native:
        return normalized.canonical_id.lower().replace(".", "/", 1)
    return normalized.canonical_id


class TransactionBuilder:
    """
    Builds signer-ready messages from a validated intent.

    Handles:
    - Peer-to-peer transfers (MsgSend)
    - Deposits as a MsgSend to the thorchain module with the memo attached
    - Native MsgDeposit for signers that register the THORChain type
    """

    def __init__(
        self,
        module_resolver: Optional[ModuleAddressResolver] = None,
        settings: Optional[Settings] = None,
    ):
        self.module_resolver = module_resolver
        self._settings = settings or default_settings

    def default_fee(self) -> Fee:
        """Fixed published network fee (0.02 RUNE) and gas limit."""
        return Fee(
            amount=[Coin(denom=self._settings.fee_denom, amount=WireAmount.parse(self._settings.default_fee_amount))],
            gas=self._settings.default_gas_limit,
        )

    @staticmethod
    def _coin(intent: TransactionIntent) -> Coin:
        amount = intent.validate()
        return Coin(denom=asset_denom(intent.asset), amount=to_wire(amount, intent.asset))

    def prepare_send(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        """Transfer ``intent.amount`` of ``intent.asset`` to ``intent.destination_address``."""
        if intent.deposit_mode:
            raise ValueError("prepare_send called with a deposit intent; use prepare_deposit")
        coin = self._coin(intent)
        payload: Dict[str, Any] = {
            "fromAddress": from_address,
            "toAddress": intent.destination_address.strip(),
            "amount": [coin.to_dict()],
        }
        return PreparedTransaction(
            message_kind=MessageKind.SEND,
            type_url=MSG_SEND_TYPE_URL,
            payload=payload,
            coin=coin,
            memo=intent.memo or "",
        )

    async def prepare_deposit(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        """Send to the thorchain module account; the memo tells the protocol what to do."""
        if not intent.deposit_mode:
            raise ValueError("prepare_deposit called with a transfer intent; use prepare_send")
        coin = self._coin(intent)
        if self.module_resolver is None:
            raise RuntimeError("TransactionBuilder has no module resolver configured")
        module_address = await self.module_resolver.resolve()
        payload: Dict[str, Any] = {
            "fromAddress": from_address,
            "toAddress": module_address,
            "amount": [coin.to_dict()],
        }
        return PreparedTransaction(
            message_kind=MessageKind.MODULE_DEPOSIT,
            type_url=MSG_SEND_TYPE_URL,
            payload=payload,
            coin=coin,
            memo=intent.memo.strip(),
        )

    def prepare_native_deposit(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        """Build a THORChain ``MsgDeposit``; no module lookup is needed."""
        if not intent.deposit_mode:
            raise ValueError("prepare_native_deposit called with a transfer intent; use prepare_send")
        coin = self._coin(intent)
        memo = intent.memo.strip()
        payload: Dict[str, Any] = {
            "coins": [coin.to_dict()],
            "memo": memo,
            "signer": from_address,
        }
        return PreparedTransaction(
            message_kind=MessageKind.NATIVE_DEPOSIT,
            type_url=MSG_DEPOSIT_TYPE_URL,
            payload=payload,
            coin=coin,
            memo=memo,
        )

    async def prepare(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        """Dispatch on ``intent.deposit_mode`` and ``intent.native_deposit``."""
        if intent.deposit_mode and intent.native_deposit:
            prepared = self.prepare_native_deposit(from_address, intent)
        elif intent.deposit_mode:
            prepared = await self.prepare_deposit(from_address, intent)
        else:
            prepared = self.prepare_send(from_address, intent)
        logger.debug(
            f"Prepared {prepared.message_kind.value}: {prepared.coin.amount} {prepared.denom} "
            f"-> {prepared.payload.get('toAddress', 'thorchain')}"
        )
        return prepared

