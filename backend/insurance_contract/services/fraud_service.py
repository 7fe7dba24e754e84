"""
Per-principal abuse gating for claim submission.

Three rules, checked in order: a manual flag blocks everything, a claim must
not follow the previous one within the cooldown, and at most
``max_claims_per_period`` claims may fall inside the trailing lookback window.
"""
import logging
from collections import deque
from typing import List

from insurance_contract.core.errors import FraudCheckError
from insurance_contract.models.config import InsuranceConfig, FRAUD_LOOKBACK_PERIOD
from insurance_contract.models.fraud import FraudMetrics
from insurance_contract.services.context import ContractContext

logger = logging.getLogger(__name__)


def empty_metrics(principal: str) -> FraudMetrics:
    return FraudMetrics(
        principal=principal,
        total_claims=0,
        recent_claims=[],
        last_claim_time=0,
        flagged=False,
        flag_reason="",
    )


def lookback_start(now: int) -> int:
    return max(0, now - FRAUD_LOOKBACK_PERIOD)


class FraudDetector:
    def __init__(self, ctx: ContractContext):
        self.ctx = ctx

    async def get_metrics(self, principal: str) -> FraudMetrics:
        metrics = await self.ctx.store.get_fraud_metrics(principal)
        return metrics if metrics is not None else empty_metrics(principal)

    async def _ids_in_window(self, claim_ids: List[int], now: int) -> List[int]:
        since = lookback_start(now)
        claims = {c.id: c for c in await self.ctx.store.get_claims(claim_ids)}
        return [
            claim_id for claim_id in claim_ids
            if claim_id in claims and claims[claim_id].submission_time >= since
        ]

    async def check(self, principal: str, config: InsuranceConfig, now: int) -> None:
        """Raise FraudCheckError if ``principal`` may not claim now. Writes nothing."""
        metrics = await self.get_metrics(principal)

        if metrics.flagged:
            logger.warning("Claim blocked, %s is flagged: %s", principal, metrics.flag_reason)
            raise FraudCheckError("User is flagged for suspicious activity")

        if metrics.total_claims > 0 and now - metrics.last_claim_time < config.claim_cooldown:
            logger.warning("Claim blocked, %s is inside the cooldown", principal)
            raise FraudCheckError("Claim submitted too soon after previous claim")

        recent = await self._ids_in_window(list(metrics.recent_claims), now)
        if len(recent) >= config.max_claims_per_period:
            logger.warning("Claim blocked, %s has %d recent claims", principal, len(recent))
            raise FraudCheckError("Too many claims in recent period")

    async def record(self, principal: str, claim_id: int, config: InsuranceConfig, now: int) -> FraudMetrics:
        metrics = await self.ctx.store.get_fraud_metrics(principal)
        if metrics is None:
            metrics = empty_metrics(principal)

        # A claim only gets here with fewer than max_claims_per_period in the
        # window, so a ring of that size never drops a live entry.
        window = deque(
            await self._ids_in_window(list(metrics.recent_claims), now),
            maxlen=max(config.max_claims_per_period, 1),
        )
        window.append(claim_id)

        metrics.total_claims = metrics.total_claims + 1
        metrics.last_claim_time = now
        metrics.recent_claims = list(window)
        return await self.ctx.store.put_fraud_metrics(metrics)

    async def flag(self, principal: str, reason: str) -> FraudMetrics:
        metrics = await self.get_metrics(principal)
        metrics.flagged = True
        metrics.flag_reason = reason
        logger.info("User flagged: %s (%s)", principal, reason)
        return await self.ctx.store.put_fraud_metrics(metrics)

    async def unflag(self, principal: str) -> None:
        metrics = await self.ctx.store.get_fraud_metrics(principal)
        if metrics is None:
            return
        metrics.flagged = False
        metrics.flag_reason = ""
        await self.ctx.store.put_fraud_metrics(metrics)
        logger.info("User unflagged: %s", principal)
