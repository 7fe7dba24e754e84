from .config import InsuranceConfig, ContractCounters
from .policy import Policy, PolicyHolder, PolicyStatus, CoverageType
from .claim import Claim, ClaimStatus, AssetType
from .fraud import FraudMetrics
from .ledger import AssetBalance

__all__ = [
    "InsuranceConfig",
    "ContractCounters",
    "Policy",
    "PolicyHolder",
    "PolicyStatus",
    "CoverageType",
    "Claim",
    "ClaimStatus",
    "AssetType",
    "FraudMetrics",
    "AssetBalance",
]
