from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from insurance_contract.core.config import settings
from insurance_contract.db.session import get_db
from insurance_contract.ledger.auth import HmacProofVerifier
from insurance_contract.ledger.clock import SystemClock
from insurance_contract.services.contract import InsuranceContract

_clock = SystemClock()

def get_clock():
    return _clock

def get_verifier(x_principal_proof: Optional[str] = Header(default=None)):
    return HmacProofVerifier(settings.SECRET_KEY, x_principal_proof)

def get_contract(
    db: AsyncSession = Depends(get_db),
    clock=Depends(get_clock),
    verifier=Depends(get_verifier),
) -> InsuranceContract:
    return InsuranceContract.from_session(db, clock, verifier, settings.CONTRACT_PRINCIPAL)
