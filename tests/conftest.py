import os

os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from insurance_contract.db.init_db import init_models
from insurance_contract.ledger.assets import SessionAssetLedger
from insurance_contract.ledger.auth import AllowAllVerifier
from insurance_contract.ledger.clock import FixedClock
from insurance_contract.services.contract import InsuranceContract

DAY = 86_400
ADMIN = "admin"
USER = "alice"
OTHER_USER = "bob"
ASSET = "PZL"
CONTRACT = "insurance-contract"
START = 1000
STARTING_BALANCE = 10_000_000_000_000


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine):
    session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def assets(db):
    return SessionAssetLedger(db)


@pytest.fixture
def make_contract(db, clock, assets):
    def _make(verifier=None):
        return InsuranceContract.from_session(
            db, clock, verifier or AllowAllVerifier(), CONTRACT, assets=assets
        )
    return _make


@pytest.fixture
def fund(db, assets):
    async def _fund(holder, amount=STARTING_BALANCE):
        await assets.mint(ASSET, holder, amount)
        await db.commit()
    return _fund


@pytest.fixture
async def contract(make_contract, fund):
    contract = make_contract()
    await contract.initialize(ADMIN, ASSET, 100)
    for holder in (ADMIN, USER, OTHER_USER):
        await fund(holder)
    return contract
