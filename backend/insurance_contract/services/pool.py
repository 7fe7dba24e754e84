import logging

from insurance_contract.core.errors import InitializationError, InsufficientPoolError
from insurance_contract.models.config import ContractCounters
from insurance_contract.services.context import ContractContext

logger = logging.getLogger(__name__)


class PremiumPool:
    """Pool balance and global counters. The balance never goes below zero."""

    def __init__(self, ctx: ContractContext):
        self.ctx = ctx

    async def _counters(self) -> ContractCounters:
        counters = await self.ctx.store.get_counters()
        if counters is None:
            raise InitializationError("Contract not initialized")
        return counters

    async def balance(self) -> int:
        counters = await self.ctx.store.get_counters()
        return counters.premium_pool if counters else 0

    async def credit(self, amount: int) -> int:
        counters = await self._counters()
        counters.premium_pool = counters.premium_pool + amount
        await self.ctx.store.put_counters(counters)
        return counters.premium_pool

    async def debit(self, amount: int, reason: str = "Insufficient premium pool") -> int:
        counters = await self._counters()
        if counters.premium_pool < amount:
            raise InsufficientPoolError(reason)
        counters.premium_pool = counters.premium_pool - amount
        await self.ctx.store.put_counters(counters)
        return counters.premium_pool

    async def drain(self) -> int:
        counters = await self._counters()
        drained = counters.premium_pool
        counters.premium_pool = 0
        await self.ctx.store.put_counters(counters)
        return drained

    async def next_claim_id(self) -> int:
        counters = await self._counters()
        counters.claim_counter = counters.claim_counter + 1
        await self.ctx.store.put_counters(counters)
        return counters.claim_counter

    async def count_policy(self) -> None:
        counters = await self._counters()
        counters.total_policies = counters.total_policies + 1
        await self.ctx.store.put_counters(counters)

    async def count_claim(self) -> None:
        counters = await self._counters()
        counters.total_claims = counters.total_claims + 1
        await self.ctx.store.put_counters(counters)

    async def total_policies(self) -> int:
        counters = await self.ctx.store.get_counters()
        return counters.total_policies if counters else 0

    async def total_claims(self) -> int:
        counters = await self.ctx.store.get_counters()
        return counters.total_claims if counters else 0
