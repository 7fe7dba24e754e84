from typing import List
from pydantic import BaseModel

class InitializeRequest(BaseModel):
    admin: str
    payment_asset: str
    base_rate: int

class ConfigResponse(BaseModel):
    admin: str
    payment_asset: str
    base_premium_rate: int
    nft_multiplier: int
    token_multiplier: int
    combined_multiplier: int
    min_coverage_period: int
    max_coverage_period: int
    max_coverage_amount: int
    claim_review_period: int
    max_claims_per_period: int
    claim_cooldown: int
    paused: bool

    class Config:
        from_attributes = True

class FraudMetricsResponse(BaseModel):
    principal: str
    total_claims: int
    recent_claims: List[int]
    last_claim_time: int
    flagged: bool
    flag_reason: str

    class Config:
        from_attributes = True

class PremiumRatesUpdate(BaseModel):
    admin: str
    base_rate: int
    nft_mult: int
    token_mult: int
    combined_mult: int

class CoverageLimitsUpdate(BaseModel):
    admin: str
    min_period: int
    max_period: int
    max_amount: int

class FraudParamsUpdate(BaseModel):
    admin: str
    max_claims: int
    cooldown: int

class PauseUpdate(BaseModel):
    admin: str
    paused: bool

class PoolAmountRequest(BaseModel):
    admin: str
    amount: int

class AdminRequest(BaseModel):
    admin: str

class FlagUserRequest(BaseModel):
    admin: str
    user: str
    reason: str = ""

class UnflagUserRequest(BaseModel):
    admin: str
    user: str

class PoolBalance(BaseModel):
    premium_pool: int
