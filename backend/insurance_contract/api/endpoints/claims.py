from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException
from insurance_contract.api import deps
from insurance_contract.schemas.claim import (
    ClaimSubmit,
    ClaimSubmitted,
    ClaimResponse,
    ClaimReviewRequest,
    AdminClaimAction,
)
from insurance_contract.services.contract import InsuranceContract

router = APIRouter()

@router.post("/", response_model=ClaimSubmitted)
async def submit_claim(
    claim_in: ClaimSubmit,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    claim_id = await contract.submit_claim(
        claim_in.claimant,
        claim_in.asset_type,
        claim_in.asset_ref,
        claim_in.claim_amount,
        claim_in.description,
    )
    return ClaimSubmitted(claim_id=claim_id)

@router.get("/overdue", response_model=List[int])
async def read_overdue_claims(
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    """Claims still awaiting a decision past the configured review period."""
    return await contract.get_overdue_claims()

@router.get("/user/{owner}", response_model=List[int])
async def read_user_claims(
    owner: str,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.get_user_claims(owner)

@router.get("/{claim_id}", response_model=ClaimResponse)
async def read_claim(
    claim_id: int,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    claim = await contract.get_claim(claim_id)
    if not claim:
        raise HTTPException(status_code=404, detail="Claim not found")
    return claim

@router.put("/{claim_id}/start-review", response_model=ClaimResponse)
async def start_review(
    claim_id: int,
    request: AdminClaimAction,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.start_review(request.admin, claim_id)

@router.put("/{claim_id}/review", response_model=ClaimResponse)
async def review_claim(
    claim_id: int,
    request: ClaimReviewRequest,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.review_claim(
        request.admin, claim_id, request.approved, request.review_notes, request.payout_amount
    )

@router.put("/{claim_id}/payout", response_model=ClaimResponse)
async def process_payout(
    claim_id: int,
    request: AdminClaimAction,
    contract: InsuranceContract = Depends(deps.get_contract),
) -> Any:
    return await contract.process_payout(request.admin, claim_id)
