"""
Typed key-value view of the contract database.

Each persisted key of the contract has one getter and, where it is mutable,
one setter. Components never touch the session directly so that every
read goes through the same place and sees the current transaction's state.
"""
import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import Iterable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from insurance_contract.models.claim import Claim, ClaimStatus
from insurance_contract.models.config import InsuranceConfig, ContractCounters, SINGLETON_ID
from insurance_contract.models.fraud import FraudMetrics
from insurance_contract.models.policy import Policy, PolicyHolder

logger = logging.getLogger(__name__)

# One writer at a time per database
_write_locks: "weakref.WeakKeyDictionary[Engine, asyncio.Lock]" = weakref.WeakKeyDictionary()


def write_lock(db: AsyncSession) -> asyncio.Lock:
    engine = db.sync_session.get_bind()
    lock = _write_locks.get(engine)
    if lock is None:
        lock = _write_locks[engine] = asyncio.Lock()
    return lock


class ContractStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self):
        """Commit everything done inside the block, or nothing at all.

        Transactions on the same database never interleave: the block only
        starts once every earlier one has committed or rolled back.
        """
        async with write_lock(self.db):
            try:
                yield self
                await self.db.commit()
            except Exception as exc:
                await self.db.rollback()
                logger.warning("Transaction rolled back: %s", exc)
                raise

    async def _put(self, obj):
        self.db.add(obj)
        await self.db.flush()
        return obj

    # Config
    async def get_config(self) -> Optional[InsuranceConfig]:
        return await self.db.get(InsuranceConfig, SINGLETON_ID)

    async def put_config(self, config: InsuranceConfig) -> InsuranceConfig:
        return await self._put(config)

    # PremiumPool, ClaimCounter, TotalPolicies, TotalClaims
    async def get_counters(self) -> Optional[ContractCounters]:
        return await self.db.get(ContractCounters, SINGLETON_ID)

    async def put_counters(self, counters: ContractCounters) -> ContractCounters:
        return await self._put(counters)

    # Policy(owner)
    async def get_policy(self, owner: str) -> Optional[Policy]:
        return await self.db.get(Policy, owner)

    async def put_policy(self, policy: Policy) -> Policy:
        return await self._put(policy)

    # PolicyList
    async def list_policy_holders(self) -> List[str]:
        result = await self.db.execute(select(PolicyHolder.owner).order_by(PolicyHolder.id))
        return list(result.scalars().all())

    async def add_policy_holder(self, owner: str) -> None:
        result = await self.db.execute(select(PolicyHolder).where(PolicyHolder.owner == owner))
        if result.scalars().first() is None:
            await self._put(PolicyHolder(owner=owner))

    # Claim(id)
    async def get_claim(self, claim_id: int) -> Optional[Claim]:
        return await self.db.get(Claim, claim_id)

    async def get_claims(self, claim_ids: Iterable[int]) -> List[Claim]:
        ids = list(claim_ids)
        if not ids:
            return []
        result = await self.db.execute(select(Claim).where(Claim.id.in_(ids)))
        return list(result.scalars().all())

    async def put_claim(self, claim: Claim) -> Claim:
        return await self._put(claim)

    async def list_claims_by_status(self, statuses: Iterable[ClaimStatus]) -> List[Claim]:
        result = await self.db.execute(
            select(Claim).where(Claim.status.in_(list(statuses))).order_by(Claim.id)
        )
        return list(result.scalars().all())

    # UserClaims(owner): ids are allocated monotonically, so id order is insertion order
    async def get_user_claim_ids(self, owner: str) -> List[int]:
        result = await self.db.execute(
            select(Claim.id).where(Claim.policy_owner == owner).order_by(Claim.id)
        )
        return list(result.scalars().all())

    # FraudFlags(user)
    async def get_fraud_metrics(self, principal: str) -> Optional[FraudMetrics]:
        return await self.db.get(FraudMetrics, principal)

    async def put_fraud_metrics(self, metrics: FraudMetrics) -> FraudMetrics:
        return await self._put(metrics)
