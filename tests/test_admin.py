import pytest

from insurance_contract.core.errors import (
    AuthorizationError,
    InsufficientPoolError,
    InvalidParameterError,
)
from insurance_contract.models.policy import CoverageType
from conftest import ADMIN, ASSET, CONTRACT, DAY, USER, STARTING_BALANCE


async def test_update_premium_rates(contract):
    config = await contract.update_premium_rates(ADMIN, 200, 300, 120, 400)

    assert config.base_premium_rate == 200
    assert config.nft_multiplier == 300
    assert config.token_multiplier == 120
    assert config.combined_multiplier == 400
    quote = await contract.calculate_premium(CoverageType.TOKEN, 1_000_000_000, 365 * DAY)
    assert quote == 24_000_000


async def test_negative_rates_rejected(contract):
    with pytest.raises(InvalidParameterError):
        await contract.update_premium_rates(ADMIN, -1, 150, 100, 180)
    assert (await contract.get_config()).base_premium_rate == 100


async def test_non_admin_updates_fail(contract):
    with pytest.raises(AuthorizationError, match="Admin only"):
        await contract.update_premium_rates(USER, 1, 1, 1, 1)
    with pytest.raises(AuthorizationError):
        await contract.update_coverage_limits(USER, DAY, 2 * DAY, 10)
    with pytest.raises(AuthorizationError):
        await contract.update_fraud_params(USER, 10, 0)
    with pytest.raises(AuthorizationError):
        await contract.set_paused(USER, True)
    with pytest.raises(AuthorizationError):
        await contract.emergency_withdraw(USER)

    config = await contract.get_config()
    assert config.max_claims_per_period == 3
    assert not config.paused


async def test_update_coverage_limits(contract):
    config = await contract.update_coverage_limits(ADMIN, DAY, 30 * DAY, 5_000)
    assert config.min_coverage_period == DAY
    assert config.max_coverage_period == 30 * DAY
    assert config.max_coverage_amount == 5_000

    with pytest.raises(InvalidParameterError, match="Invalid coverage amount"):
        await contract.purchase_policy(USER, CoverageType.NFT, 5_001, 10 * DAY, "nft")
    with pytest.raises(InvalidParameterError, match="Invalid coverage period"):
        await contract.purchase_policy(USER, CoverageType.NFT, 5_000, 31 * DAY, "nft")
    policy = await contract.purchase_policy(USER, CoverageType.NFT, 5_000, 2 * DAY, "nft")
    assert policy.coverage_amount == 5_000


async def test_inverted_coverage_limits_rejected(contract):
    with pytest.raises(InvalidParameterError):
        await contract.update_coverage_limits(ADMIN, 30 * DAY, DAY, 5_000)
    with pytest.raises(InvalidParameterError):
        await contract.update_coverage_limits(ADMIN, DAY, 30 * DAY, 0)


async def test_update_fraud_params(contract):
    config = await contract.update_fraud_params(ADMIN, 10, DAY)
    assert config.max_claims_per_period == 10
    assert config.claim_cooldown == DAY

    with pytest.raises(InvalidParameterError):
        await contract.update_fraud_params(ADMIN, -1, DAY)


async def test_pause_and_unpause(contract):
    assert (await contract.set_paused(ADMIN, True)).paused
    assert (await contract.get_config()).paused

    assert not (await contract.set_paused(ADMIN, False)).paused
    policy = await contract.purchase_policy(USER, CoverageType.TOKEN, 1_000_000, 30 * DAY, "vault")
    assert policy.owner == USER


async def test_add_and_withdraw_pool(contract, assets):
    assert await contract.add_to_pool(ADMIN, 1_000) == 1_000
    assert await assets.balance(ASSET, ADMIN) == STARTING_BALANCE - 1_000
    assert await assets.balance(ASSET, CONTRACT) == 1_000

    assert await contract.withdraw_from_pool(ADMIN, 400) == 600
    assert await contract.get_premium_pool() == 600
    assert await assets.balance(ASSET, ADMIN) == STARTING_BALANCE - 600


async def test_over_withdraw_fails(contract, assets):
    await contract.add_to_pool(ADMIN, 1_000)

    with pytest.raises(InsufficientPoolError):
        await contract.withdraw_from_pool(ADMIN, 1_001)

    assert await contract.get_premium_pool() == 1_000
    assert await assets.balance(ASSET, CONTRACT) == 1_000


async def test_pool_amounts_must_be_positive(contract):
    with pytest.raises(InvalidParameterError):
        await contract.add_to_pool(ADMIN, 0)
    with pytest.raises(InvalidParameterError):
        await contract.withdraw_from_pool(ADMIN, -5)


async def test_emergency_withdraw_drains_pool(contract, assets):
    policy = await contract.purchase_policy(USER, CoverageType.COMBINED, 1_000_000_000, 90 * DAY, "vault")
    await contract.add_to_pool(ADMIN, 5_000)
    pool = policy.premium_paid + 5_000
    assert await contract.get_premium_pool() == pool

    drained = await contract.emergency_withdraw(ADMIN)

    assert drained == pool
    assert await contract.get_premium_pool() == 0
    assert await assets.balance(ASSET, ADMIN) == STARTING_BALANCE + policy.premium_paid
    assert await assets.balance(ASSET, CONTRACT) == 0


async def test_emergency_withdraw_on_empty_pool(contract):
    assert await contract.emergency_withdraw(ADMIN) == 0
    assert await contract.get_premium_pool() == 0
