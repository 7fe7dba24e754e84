from sqlalchemy import Column, Integer, BigInteger, String, Boolean
from insurance_contract.db.base import Base, Amount

SECONDS_PER_DAY = 86_400
BASIS_POINTS = 10_000
FRAUD_LOOKBACK_PERIOD = 30 * SECONDS_PER_DAY

# Seeded by initialize(); rates are percentages of 100 (150 => x1.5)
DEFAULT_NFT_MULTIPLIER = 150
DEFAULT_TOKEN_MULTIPLIER = 100
DEFAULT_COMBINED_MULTIPLIER = 180
DEFAULT_MIN_COVERAGE_PERIOD = 7 * SECONDS_PER_DAY
DEFAULT_MAX_COVERAGE_PERIOD = 365 * SECONDS_PER_DAY
DEFAULT_MAX_COVERAGE_AMOUNT = 1_000_000_000_000
DEFAULT_CLAIM_REVIEW_PERIOD = 7 * SECONDS_PER_DAY
DEFAULT_MAX_CLAIMS_PER_PERIOD = 3
DEFAULT_CLAIM_COOLDOWN = 7 * SECONDS_PER_DAY

SINGLETON_ID = 1

class InsuranceConfig(Base):
    __tablename__ = "insurance_config"

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    admin = Column(String, nullable=False)
    payment_asset = Column(String, nullable=False)
    base_premium_rate = Column(Integer, nullable=False)  # basis points
    nft_multiplier = Column(Integer, nullable=False, default=DEFAULT_NFT_MULTIPLIER)
    token_multiplier = Column(Integer, nullable=False, default=DEFAULT_TOKEN_MULTIPLIER)
    combined_multiplier = Column(Integer, nullable=False, default=DEFAULT_COMBINED_MULTIPLIER)
    min_coverage_period = Column(BigInteger, nullable=False, default=DEFAULT_MIN_COVERAGE_PERIOD)
    max_coverage_period = Column(BigInteger, nullable=False, default=DEFAULT_MAX_COVERAGE_PERIOD)
    max_coverage_amount = Column(Amount, nullable=False, default=DEFAULT_MAX_COVERAGE_AMOUNT)
    claim_review_period = Column(BigInteger, nullable=False, default=DEFAULT_CLAIM_REVIEW_PERIOD)
    max_claims_per_period = Column(Integer, nullable=False, default=DEFAULT_MAX_CLAIMS_PER_PERIOD)
    claim_cooldown = Column(BigInteger, nullable=False, default=DEFAULT_CLAIM_COOLDOWN)
    paused = Column(Boolean, nullable=False, default=False)

class ContractCounters(Base):
    """Premium pool and the monotonic counters, kept in one singleton row."""
    __tablename__ = "contract_counters"

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    premium_pool = Column(Amount, nullable=False, default=0)
    claim_counter = Column(BigInteger, nullable=False, default=0)
    total_policies = Column(BigInteger, nullable=False, default=0)
    total_claims = Column(BigInteger, nullable=False, default=0)
