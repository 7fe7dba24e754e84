from sqlalchemy import Column, Integer, BigInteger, String, Boolean, JSON, Text
from insurance_contract.db.base import Base

class FraudMetrics(Base):
    __tablename__ = "fraud_metrics"

    principal = Column(String, primary_key=True)
    total_claims = Column(Integer, nullable=False, default=0)
    # Claim ids inside the lookback window, oldest first
    recent_claims = Column(JSON, nullable=False, default=list)
    last_claim_time = Column(BigInteger, nullable=False, default=0)
    flagged = Column(Boolean, nullable=False, default=False)
    flag_reason = Column(Text, nullable=False, default="")
