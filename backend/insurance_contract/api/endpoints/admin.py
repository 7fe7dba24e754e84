from typing import Any
from fastapi import APIRouter, Depends
from insurance_contract.api import deps
from insurance_contract.schemas.admin import (
    InitializeRequest,
    ConfigResponse,
    FraudMetricsResponse,
    PremiumRatesUpdate,
    CoverageLimitsUpdate,
    FraudParamsUpdate,
    PauseUpdate,
    PoolAmountRequest,
    PoolBalance,
    AdminRequest,
    FlagUserRequest,
    UnflagUserRequest,
)
from insurance_contract.services.contract import InsuranceContract

router = APIRouter()

@router.post("/initialize", response_model=ConfigResponse)
async def initialize(
    request: InitializeRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.initialize(request.admin, request.payment_asset, request.base_rate)

@router.put("/premium-rates", response_model=ConfigResponse)
async def update_premium_rates(
    request: PremiumRatesUpdate,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.update_premium_rates(
        request.admin, request.base_rate, request.nft_mult, request.token_mult, request.combined_mult
    )

@router.put("/coverage-limits", response_model=ConfigResponse)
async def update_coverage_limits(
    request: CoverageLimitsUpdate,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.update_coverage_limits(
        request.admin, request.min_period, request.max_period, request.max_amount
    )

@router.put("/fraud-params", response_model=ConfigResponse)
async def update_fraud_params(
    request: FraudParamsUpdate,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.update_fraud_params(request.admin, request.max_claims, request.cooldown)

@router.put("/paused", response_model=ConfigResponse)
async def set_paused(
    request: PauseUpdate,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.set_paused(request.admin, request.paused)

@router.post("/pool/deposit", response_model=PoolBalance)
async def add_to_pool(
    request: PoolAmountRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return PoolBalance(premium_pool=await contract.add_to_pool(request.admin, request.amount))

@router.post("/pool/withdraw", response_model=PoolBalance)
async def withdraw_from_pool(
    request: PoolAmountRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return PoolBalance(premium_pool=await contract.withdraw_from_pool(request.admin, request.amount))

@router.post("/pool/emergency-withdraw")
async def emergency_withdraw(
    request: AdminRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    """Drain the whole pool to the admin."""
    return {"withdrawn": await contract.emergency_withdraw(request.admin)}

@router.post("/flags", response_model=FraudMetricsResponse)
async def flag_user(
    request: FlagUserRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.flag_user(request.admin, request.user, request.reason)

@router.post("/flags/clear")
async def unflag_user(
    request: UnflagUserRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    await contract.unflag_user(request.admin, request.user)
    return {"user": request.user, "flagged": False}
