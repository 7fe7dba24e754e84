from typing import Any, List
from fastapi import APIRouter, Depends
from insurance_contract.api import deps
from insurance_contract.models.policy import CoverageType
from insurance_contract.schemas.admin import ConfigResponse, FraudMetricsResponse, PoolBalance
from insurance_contract.schemas.policy import PremiumQuote
from insurance_contract.services.contract import InsuranceContract

router = APIRouter()

@router.get("/config", response_model=ConfigResponse)
async def read_config(contract: InsuranceContract = Depends(deps.get_contract)) -> Any:
    return await contract.get_config()

@router.get("/pool", response_model=PoolBalance)
async def read_pool(contract: InsuranceContract = Depends(deps.get_contract)) -> Any:
    return PoolBalance(premium_pool=await contract.get_premium_pool())

@router.get("/totals")
async def read_totals(contract: InsuranceContract = Depends(deps.get_contract)) -> Any:
    return {
        "total_policies": await contract.get_total_policies(),
        "total_claims": await contract.get_total_claims(),
    }

@router.get("/policyholders", response_model=List[str])
async def read_policy_holders(contract: InsuranceContract = Depends(deps.get_contract)) -> Any:
    return await contract.get_all_policies()

@router.get("/fraud/{user}", response_model=FraudMetricsResponse)
async def read_fraud_metrics(user: str, contract: InsuranceContract = Depends(deps.get_contract)) -> Any:
    return await contract.get_fraud_metrics(user)

@router.get("/premium", response_model=PremiumQuote)
async def quote_premium(
    coverage_type: CoverageType,
    coverage_amount: int,
    coverage_period: int,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    premium = await contract.calculate_premium(coverage_type, coverage_amount, coverage_period)
    return PremiumQuote(
        coverage_type=coverage_type,
        coverage_amount=coverage_amount,
        coverage_period=coverage_period,
        premium=premium,
    )
