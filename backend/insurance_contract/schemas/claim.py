from pydantic import BaseModel
from insurance_contract.models.claim import AssetType, ClaimStatus

class ClaimSubmit(BaseModel):
    claimant: str
    asset_type: AssetType
    asset_ref: str
    claim_amount: int
    description: str = ""

class ClaimSubmitted(BaseModel):
    claim_id: int

class ClaimResponse(BaseModel):
    id: int
    policy_owner: str
    asset_type: AssetType
    asset_ref: str
    claim_amount: int
    description: str
    submission_time: int
    status: ClaimStatus
    review_notes: str
    payout_amount: int
    payout_time: int

    class Config:
        from_attributes = True

class AdminClaimAction(BaseModel):
    admin: str

class ClaimReviewRequest(BaseModel):
    admin: str
    approved: bool
    review_notes: str = ""
    payout_amount: int = 0
