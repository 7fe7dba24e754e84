import asyncio

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from insurance_contract.ledger.auth import AllowAllVerifier
from insurance_contract.models.policy import CoverageType
from insurance_contract.services.contract import InsuranceContract
from conftest import ADMIN, ASSET, CONTRACT, DAY, USER, OTHER_USER


async def run_in_own_session(engine, clock, call):
    """Run ``call(contract)`` on a fresh session, the way each API request does."""
    session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        contract = InsuranceContract.from_session(session, clock, AllowAllVerifier(), CONTRACT)
        return await call(contract)


async def test_concurrent_pool_deposits_all_commit(engine, clock, contract):
    results = await asyncio.gather(*[
        run_in_own_session(engine, clock, lambda c: c.add_to_pool(ADMIN, 1_000))
        for _ in range(5)
    ])

    assert sorted(results) == [1_000, 2_000, 3_000, 4_000, 5_000]
    assert await run_in_own_session(engine, clock, lambda c: c.get_premium_pool()) == 5_000


async def test_concurrent_first_purchases_all_commit(engine, clock, contract):
    owners = [ADMIN, USER, OTHER_USER]

    policies = await asyncio.gather(*[
        run_in_own_session(
            engine, clock,
            lambda c, owner=owner: c.purchase_policy(owner, CoverageType.TOKEN, 1_000_000_000, 30 * DAY, "vault"),
        )
        for owner in owners
    ])

    assert sorted(p.owner for p in policies) == sorted(owners)

    async def totals(c):
        return await c.get_total_policies(), await c.get_premium_pool(), await c.get_all_policies()

    total_policies, pool, holders = await run_in_own_session(engine, clock, totals)
    assert total_policies == 3
    assert pool == sum(p.premium_paid for p in policies)
    assert sorted(holders) == sorted(owners)

    custody = await run_in_own_session(engine, clock, lambda c: c.ctx.assets.balance(ASSET, CONTRACT))
    assert custody == pool
