from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from insurance_contract.api import deps
from insurance_contract.schemas.policy import (
    PolicyPurchase,
    PolicyRenew,
    PolicyCancel,
    PolicyRefund,
    PolicyResponse,
)
from insurance_contract.services.contract import InsuranceContract

router = APIRouter()

@router.post("/purchase", response_model=PolicyResponse)
async def purchase_policy(
    policy_in: PolicyPurchase,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.purchase_policy(
        policy_in.owner,
        policy_in.coverage_type,
        policy_in.coverage_amount,
        policy_in.coverage_period,
        policy_in.asset_ref,
    )

@router.post("/renew", response_model=PolicyResponse)
async def renew_policy(
    request: PolicyRenew,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.renew_policy(request.owner, request.extra_period)

@router.post("/cancel", response_model=PolicyRefund)
async def cancel_policy(
    request: PolicyCancel,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    refund = await contract.cancel_policy(request.owner)
    return PolicyRefund(refund=refund)

@router.get("/{owner}", response_model=PolicyResponse)
async def read_policy(
    owner: str,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    policy = await contract.get_policy(owner)
    if not policy:
        raise HTTPException(status_code=404, detail="Policy not found")
    return policy

@router.get("/{owner}/active")
async def read_policy_active(
    owner: str,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return {"owner": owner, "active": await contract.is_policy_active(owner)}
