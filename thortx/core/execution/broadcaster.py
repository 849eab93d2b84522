"""
Transaction broadcaster.

Handles one user submission from intent to node answer:
- Intent validation
- Fresh signer session per attempt (no cached account sequence)
- Diagnostic sequence read before signing
- Optional simulation for a gas estimate
- Sign and submit under a timeout
- Sequence-mismatch resubmission and duplicate detection
"""

import asyncio
import dataclasses
import logging
import math
from decimal import Decimal
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from ...config import Settings, settings as default_settings
from ..errors import (
    AlreadySubmitted,
    BroadcastErrorKind,
    BroadcastRejected,
    BroadcastTimeout,
    EndpointUnavailable,
    SequenceConflict,
    TransactionError,
    classify_broadcast_error,
)
from ..network import NetworkCoordinator
from .models import BroadcastResult, Fee, PreparedTransaction, TransactionIntent
from .signer import Signer, SigningSession
from .tx_builder import TransactionBuilder


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Broadcaster:
    """
    Signs and submits prepared transactions.

    Nothing is shared between attempts: every attempt opens its own signer
    session and closes it before returning, so concurrent broadcasts from the
    same key only ever meet at the node, where a stale sequence surfaces as a
    mismatch and is retried here.
    """

    def __init__(
        self,
        coordinator: NetworkCoordinator,
        builder: TransactionBuilder,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.coordinator = coordinator
        self.builder = builder
        self._settings = settings or default_settings
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return 1 + self._settings.sequence_retry_attempts

    async def _with_timeout(self, operation: str, awaitable: Awaitable[T], attempt: int = 1) -> T:
        timeout = self._settings.broadcast_timeout_seconds
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError:
            raise BroadcastTimeout(operation, timeout, attempts=attempt)

    async def _open_session(self, signer: Signer, attempt: int = 1) -> SigningSession:
        return await self._with_timeout(
            "open signer session",
            signer.open_session(self.coordinator.config),
            attempt,
        )

    async def _close_session(self, session: SigningSession) -> None:
        try:
            await session.close()
        except Exception as e:
            logger.warning(f"Failed to close signer session: {e}")

    async def _log_sequence(self, session: SigningSession, attempt: int) -> None:
        """Read the on-chain sequence for diagnostics; failures never block signing."""
        try:
            account = await self._with_timeout("account lookup", session.get_account(session.address), attempt)
            logger.info(
                f"Signing as {session.address}: account_number={account.account_number}, "
                f"sequence={account.sequence}, attempt={attempt}"
            )
        except Exception as e:
            logger.warning(f"Sequence check failed: {e}")

    async def _simulate_gas(self, session: SigningSession, prepared: PreparedTransaction, attempt: int = 1) -> str:
        gas_used = await self._with_timeout(
            "simulate",
            session.simulate([prepared.to_message()], prepared.memo),
            attempt,
        )
        buffered = Decimal(int(gas_used)) * Decimal(str(self._settings.gas_buffer_multiplier))
        return str(math.ceil(buffered))

    async def _submit(
        self,
        session: SigningSession,
        prepared: PreparedTransaction,
        fee: Fee,
        attempt: int,
    ) -> BroadcastResult:
        try:
            result = await self._with_timeout(
                "sign and broadcast",
                session.sign_and_broadcast([prepared.to_message()], fee, prepared.memo),
                attempt,
            )
        except TransactionError:
            raise
        except OSError as e:
            raise EndpointUnavailable(f"Broadcast failed to reach {self.coordinator.config.rpc_base_url}: {e}") from e
        except Exception as e:
            # Signer clients report check-tx failures as exceptions; keep the text for classification
            return BroadcastResult(result_code=-1, transaction_hash="", raw_log=str(e), attempt=attempt)
        return dataclasses.replace(result, attempt=attempt)

    async def _attempt(
        self,
        signer: Signer,
        intent: TransactionIntent,
        attempt: int,
        simulate: bool,
    ) -> BroadcastResult:
        session = await self._open_session(signer, attempt)
        try:
            await self._log_sequence(session, attempt)
            prepared = await self.builder.prepare(session.address, intent)
            fee = self.builder.default_fee()
            if simulate:
                try:
                    fee = Fee(amount=fee.amount, gas=await self._simulate_gas(session, prepared, attempt))
                except Exception as e:
                    logger.warning(f"Simulation failed, using default gas {fee.gas}: {e}")
            return await self._submit(session, prepared, fee, attempt)
        finally:
            await self._close_session(session)

    async def broadcast(
        self,
        signer: Signer,
        intent: TransactionIntent,
        simulate: bool = False,
    ) -> BroadcastResult:
        """
        Build, sign and submit ``intent``.

        Args:
            signer: Wallet capability that opens signing sessions
            intent: Validated before any network call
            simulate: Estimate gas with a dry run before signing

        Returns:
            BroadcastResult accepted by the node (result code 0)

        Raises:
            AlreadySubmitted: node already holds these exact bytes
            SequenceConflict: sequence mismatch persisted through every retry
            BroadcastRejected: any other non-zero result code
        """
        intent.validate()
        network = self.coordinator.mode.value
        attempt = 0

        while True:
            attempt += 1
            with structlog.contextvars.bound_contextvars(network=network, attempt=attempt):
                result = await self._attempt(signer, intent, attempt, simulate)
                kind = classify_broadcast_error(result.result_code, result.raw_log, result.codespace)

                if kind is None:
                    logger.info(f"Transaction accepted: {result.transaction_hash}")
                    return result

                if kind == BroadcastErrorKind.DUPLICATE:
                    logger.warning(f"Transaction already in node cache: {result.raw_log}")
                    raise AlreadySubmitted(result.raw_log, attempts=attempt)

                if kind == BroadcastErrorKind.SEQUENCE_MISMATCH:
                    if attempt >= self.max_attempts:
                        logger.error(f"Sequence mismatch persisted after {attempt} attempt(s): {result.raw_log}")
                        raise SequenceConflict(result.raw_log, attempts=attempt)
                    delay = self._settings.sequence_retry_delay_seconds
                    logger.warning(f"Account sequence mismatch, resubmitting in {delay}s: {result.raw_log}")
                    await self._sleep(delay)
                    continue

                logger.error(f"Transaction rejected with code {result.result_code}: {result.raw_log}")
                raise BroadcastRejected(result.result_code, result.raw_log, attempts=attempt)

    async def estimate_gas(self, signer: Signer, intent: TransactionIntent) -> str:
        """Simulated gas with a safety buffer, or the default gas limit on any failure."""
        intent.validate()
        default_gas = self.builder.default_fee().gas
        session: Optional[SigningSession] = None
        try:
            session = await self._open_session(signer)
            prepared = await self.builder.prepare(session.address, intent)
            return await self._simulate_gas(session, prepared)
        except Exception as e:
            logger.warning(f"Gas estimation failed, using default gas limit: {e}")
            return default_gas
        finally:
            if session is not None:
                await self._close_session(session)
