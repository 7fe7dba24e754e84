from sqlalchemy import Column, String
from insurance_contract.db.base import Base, Amount

class AssetBalance(Base):
    """Holder balances for the session-backed asset ledger."""
    __tablename__ = "asset_balances"

    asset = Column(String, primary_key=True)
    holder = Column(String, primary_key=True)
    balance = Column(Amount, nullable=False, default=0)
