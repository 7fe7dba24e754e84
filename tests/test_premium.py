import pytest

from insurance_contract.core.errors import InitializationError
from insurance_contract.models.policy import CoverageType
from conftest import DAY


async def test_full_year_token_premium_is_one_percent(contract):
    premium = await contract.calculate_premium(CoverageType.TOKEN, 1_000_000_000, 365 * DAY)
    assert premium == 10_000_000


async def test_combined_costs_more_than_nft_costs_more_than_token(contract):
    amount, period = 1_000_000_000, 90 * DAY
    token = await contract.calculate_premium(CoverageType.TOKEN, amount, period)
    nft = await contract.calculate_premium(CoverageType.NFT, amount, period)
    combined = await contract.calculate_premium(CoverageType.COMBINED, amount, period)

    assert token > 0
    assert nft > token
    assert combined > nft
    assert nft == amount * 150 * 90 // (365 * 10_000)
    assert combined == amount * 180 * 90 // (365 * 10_000)


async def test_premium_is_non_decreasing_in_amount_and_period(contract):
    amounts = [1, 10_000, 5_000_000, 1_000_000_000, 1_000_000_000_000]
    premiums = [await contract.calculate_premium(CoverageType.NFT, a, 30 * DAY) for a in amounts]
    assert premiums == sorted(premiums)

    periods = [7 * DAY, 30 * DAY, 180 * DAY, 365 * DAY]
    premiums = [await contract.calculate_premium(CoverageType.TOKEN, 1_000_000_000, p) for p in periods]
    assert premiums == sorted(premiums)


async def test_partial_days_are_truncated(contract):
    whole = await contract.calculate_premium(CoverageType.TOKEN, 1_000_000_000, 7 * DAY)
    almost_eight = await contract.calculate_premium(CoverageType.TOKEN, 1_000_000_000, 8 * DAY - 1)
    assert whole == almost_eight


async def test_premium_never_below_one(contract):
    assert await contract.calculate_premium(CoverageType.TOKEN, 1, 7 * DAY) == 1
    # Sub-day period contributes zero days
    assert await contract.calculate_premium(CoverageType.COMBINED, 1_000_000_000, DAY - 1) == 1


async def test_quote_before_initialize_fails(make_contract):
    contract = make_contract()
    with pytest.raises(InitializationError):
        await contract.calculate_premium(CoverageType.TOKEN, 1_000, 7 * DAY)
