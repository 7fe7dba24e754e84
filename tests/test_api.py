import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from insurance_contract.api import deps
from insurance_contract.core.config import settings
from insurance_contract.ledger.auth import sign_proof
from conftest import ADMIN, ASSET, DAY, START, USER

API = settings.API_V1_STR


def proof(principal, operation):
    return {"X-Principal-Proof": sign_proof(settings.SECRET_KEY, principal, operation)}


@pytest.fixture
async def client(db, clock, fund):
    async def _get_db():
        yield db

    app.dependency_overrides[deps.get_db] = _get_db
    app.dependency_overrides[deps.get_clock] = lambda: clock
    for holder in (ADMIN, USER):
        await fund(holder)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def initialized(client):
    response = await client.post(
        f"{API}/admin/initialize",
        json={"admin": ADMIN, "payment_asset": ASSET, "base_rate": 100},
        headers=proof(ADMIN, "initialize"),
    )
    assert response.status_code == 200
    return client


async def test_root(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


async def test_initialize_requires_proof(client):
    response = await client.post(
        f"{API}/admin/initialize",
        json={"admin": ADMIN, "payment_asset": ASSET, "base_rate": 100},
    )
    assert response.status_code == 403
    assert response.json()["error"] == "AuthorizationError"


async def test_proof_is_bound_to_operation(client):
    response = await client.post(
        f"{API}/admin/initialize",
        json={"admin": ADMIN, "payment_asset": ASSET, "base_rate": 100},
        headers=proof(ADMIN, "set_paused"),
    )
    assert response.status_code == 403


async def test_double_initialize_conflicts(initialized):
    response = await initialized.post(
        f"{API}/admin/initialize",
        json={"admin": ADMIN, "payment_asset": ASSET, "base_rate": 100},
        headers=proof(ADMIN, "initialize"),
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Already initialized"


async def test_config_view_before_initialize(client):
    response = await client.get(f"{API}/views/config")
    assert response.status_code == 409


async def test_premium_quote(initialized):
    response = await initialized.get(
        f"{API}/views/premium",
        params={"coverage_type": "TOKEN", "coverage_amount": 1_000_000_000, "coverage_period": 365 * DAY},
    )
    assert response.status_code == 200
    assert response.json()["premium"] == 10_000_000


async def test_purchase_and_claim_flow(initialized):
    client = initialized
    response = await client.post(
        f"{API}/policies/purchase",
        json={
            "owner": USER,
            "coverage_type": "TOKEN",
            "coverage_amount": 1_000_000_000,
            "coverage_period": 365 * DAY,
            "asset_ref": "token-vault",
        },
        headers=proof(USER, "purchase_policy"),
    )
    assert response.status_code == 200
    policy = response.json()
    assert policy["premium_paid"] == 10_000_000
    assert policy["start_time"] == START
    assert policy["status"] == "ACTIVE"

    assert (await client.get(f"{API}/policies/{USER}/active")).json()["active"] is True
    assert (await client.get(f"{API}/views/pool")).json() == {"premium_pool": 10_000_000}
    assert (await client.get(f"{API}/views/policyholders")).json() == [USER]

    response = await client.post(
        f"{API}/claims/",
        json={
            "claimant": USER,
            "asset_type": "TOKEN",
            "asset_ref": "token-vault",
            "claim_amount": 5_000_000,
            "description": "Bridge exploit",
        },
        headers=proof(USER, "submit_claim"),
    )
    assert response.status_code == 200
    claim_id = response.json()["claim_id"]
    assert claim_id == 1

    response = await client.put(
        f"{API}/claims/{claim_id}/review",
        json={"admin": ADMIN, "approved": True, "review_notes": "ok", "payout_amount": 4_000_000},
        headers=proof(ADMIN, "review_claim"),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "APPROVED"

    response = await client.put(
        f"{API}/claims/{claim_id}/payout",
        json={"admin": ADMIN},
        headers=proof(ADMIN, "process_payout"),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "PAID"
    assert (await client.get(f"{API}/views/pool")).json() == {"premium_pool": 6_000_000}
    assert (await client.get(f"{API}/claims/user/{USER}")).json() == [claim_id]


async def test_invalid_purchase_maps_to_bad_request(initialized):
    response = await initialized.post(
        f"{API}/policies/purchase",
        json={
            "owner": USER,
            "coverage_type": "NFT",
            "coverage_amount": 0,
            "coverage_period": 30 * DAY,
            "asset_ref": "nft",
        },
        headers=proof(USER, "purchase_policy"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid coverage amount"


async def test_missing_policy_is_not_found(initialized):
    response = await initialized.get(f"{API}/policies/nobody")
    assert response.status_code == 404


async def test_fraud_metrics_view(initialized):
    response = await initialized.get(f"{API}/views/fraud/{USER}")
    assert response.status_code == 200
    assert response.json()["total_claims"] == 0
    assert response.json()["recent_claims"] == []
