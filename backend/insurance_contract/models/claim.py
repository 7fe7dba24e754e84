import enum
from sqlalchemy import Column, BigInteger, String, Text, Enum
from insurance_contract.db.base import Base, Amount

class ClaimStatus(str, enum.Enum):
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PAID = "PAID"

class AssetType(str, enum.Enum):
    NFT = "NFT"
    TOKEN = "TOKEN"

# Statuses a review may still decide
REVIEWABLE_STATUSES = (ClaimStatus.SUBMITTED, ClaimStatus.UNDER_REVIEW)

class Claim(Base):
    __tablename__ = "claims"

    # Allocated from the global claim counter, never by the database
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    policy_owner = Column(String, index=True, nullable=False)
    asset_type = Column(Enum(AssetType), nullable=False)
    asset_ref = Column(String, nullable=False)
    claim_amount = Column(Amount, nullable=False)
    description = Column(Text, nullable=False, default="")
    submission_time = Column(BigInteger, nullable=False)

    status = Column(Enum(ClaimStatus), default=ClaimStatus.SUBMITTED, nullable=False)

    review_notes = Column(Text, nullable=False, default="")
    payout_amount = Column(Amount, nullable=False, default=0)
    payout_time = Column(BigInteger, nullable=False, default=0)  # 0 until paid
