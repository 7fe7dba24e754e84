from pydantic import BaseModel
from insurance_contract.models.policy import CoverageType, PolicyStatus

class PolicyPurchase(BaseModel):
    owner: str
    coverage_type: CoverageType
    coverage_amount: int
    coverage_period: int
    asset_ref: str

class PolicyRenew(BaseModel):
    owner: str
    extra_period: int

class PolicyCancel(BaseModel):
    owner: str

class PolicyRefund(BaseModel):
    refund: int

class PolicyResponse(BaseModel):
    owner: str
    coverage_type: CoverageType
    coverage_amount: int
    premium_paid: int
    start_time: int
    end_time: int
    status: PolicyStatus
    asset_ref: str

    class Config:
        from_attributes = True

class PremiumQuote(BaseModel):
    coverage_type: CoverageType
    coverage_amount: int
    coverage_period: int
    premium: int
