import enum
from sqlalchemy import Column, Integer, BigInteger, String, Enum
from insurance_contract.db.base import Base, Amount

class CoverageType(str, enum.Enum):
    NFT = "NFT"
    TOKEN = "TOKEN"
    COMBINED = "COMBINED"

class PolicyStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"

class Policy(Base):
    """One record per owner; a new purchase replaces a non-active record."""
    __tablename__ = "policies"

    owner = Column(String, primary_key=True)
    coverage_type = Column(Enum(CoverageType), nullable=False)
    coverage_amount = Column(Amount, nullable=False)
    premium_paid = Column(Amount, nullable=False)  # cumulative across renewals
    start_time = Column(BigInteger, nullable=False)
    end_time = Column(BigInteger, nullable=False)
    status = Column(Enum(PolicyStatus), default=PolicyStatus.ACTIVE, nullable=False)
    asset_ref = Column(String, nullable=False)

    def in_force(self, now: int) -> bool:
        return self.status == PolicyStatus.ACTIVE and self.start_time <= now <= self.end_time

class PolicyHolder(Base):
    """Append-only list of every owner that ever purchased, in first-purchase order."""
    __tablename__ = "policy_holders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String, unique=True, nullable=False)
