"""
Per-call dependencies shared by every contract component.
"""
from dataclasses import dataclass

from insurance_contract.core.errors import AuthorizationError
from insurance_contract.db.store import ContractStore
from insurance_contract.ledger.assets import AssetLedger
from insurance_contract.ledger.auth import AuthVerifier
from insurance_contract.ledger.clock import LedgerClock


@dataclass
class ContractContext:
    store: ContractStore
    clock: LedgerClock
    auth: AuthVerifier
    assets: AssetLedger
    contract_principal: str

    def now(self) -> int:
        return self.clock.timestamp()

    def require_auth(self, principal: str, operation: str) -> None:
        if not self.auth.verify(principal, operation):
            raise AuthorizationError(f"Authorization failed for {principal} on {operation}")
