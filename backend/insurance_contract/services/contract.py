"""
Entry points of the insurance contract.

Every mutating call runs in one store transaction: it either commits in full
or leaves no trace, including transfers made on the session asset ledger.
Entities are returned as pydantic snapshots, never as live ORM rows.
"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from insurance_contract.db.store import ContractStore
from insurance_contract.ledger.assets import AssetLedger, SessionAssetLedger
from insurance_contract.ledger.auth import AuthVerifier
from insurance_contract.ledger.clock import LedgerClock
from insurance_contract.models.claim import AssetType
from insurance_contract.models.policy import CoverageType
from insurance_contract.schemas.admin import ConfigResponse, FraudMetricsResponse
from insurance_contract.schemas.claim import ClaimResponse
from insurance_contract.schemas.policy import PolicyResponse
from insurance_contract.services.admin_service import AdminService
from insurance_contract.services.claim_service import ClaimService
from insurance_contract.services.config_store import ConfigStore
from insurance_contract.services.context import ContractContext
from insurance_contract.services.fraud_service import FraudDetector
from insurance_contract.services.policy_service import PolicyService
from insurance_contract.services.pool import PremiumPool
from insurance_contract.services.premium import calculate_premium


class InsuranceContract:
    def __init__(self, ctx: ContractContext):
        self.ctx = ctx
        self.config = ConfigStore(ctx)
        self.pool = PremiumPool(ctx)
        self.fraud = FraudDetector(ctx)
        self.policies = PolicyService(ctx, self.config, self.pool)
        self.claims = ClaimService(ctx, self.config, self.pool, self.fraud)
        self.admin = AdminService(ctx, self.config, self.pool, self.fraud)

    @classmethod
    def from_session(
        cls,
        db: AsyncSession,
        clock: LedgerClock,
        auth: AuthVerifier,
        contract_principal: str,
        assets: Optional[AssetLedger] = None,
    ) -> "InsuranceContract":
        ctx = ContractContext(
            store=ContractStore(db),
            clock=clock,
            auth=auth,
            assets=assets if assets is not None else SessionAssetLedger(db),
            contract_principal=contract_principal,
        )
        return cls(ctx)

    def _transaction(self):
        return self.ctx.store.transaction()

    # Initialization

    async def initialize(self, admin: str, payment_asset: str, base_rate: int) -> ConfigResponse:
        async with self._transaction():
            config = await self.config.initialize(admin, payment_asset, base_rate)
            return ConfigResponse.model_validate(config)

    # Policies

    async def purchase_policy(
        self,
        owner: str,
        coverage_type: CoverageType,
        coverage_amount: int,
        coverage_period: int,
        asset_ref: str,
    ) -> PolicyResponse:
        async with self._transaction():
            policy = await self.policies.purchase_policy(
                owner, coverage_type, coverage_amount, coverage_period, asset_ref
            )
            return PolicyResponse.model_validate(policy)

    async def renew_policy(self, owner: str, extra_period: int) -> PolicyResponse:
        async with self._transaction():
            policy = await self.policies.renew_policy(owner, extra_period)
            return PolicyResponse.model_validate(policy)

    async def cancel_policy(self, owner: str) -> int:
        async with self._transaction():
            return await self.policies.cancel_policy(owner)

    # Claims

    async def submit_claim(
        self,
        claimant: str,
        asset_type: AssetType,
        asset_ref: str,
        claim_amount: int,
        description: str,
    ) -> int:
        async with self._transaction():
            return await self.claims.submit_claim(claimant, asset_type, asset_ref, claim_amount, description)

    async def start_review(self, admin: str, claim_id: int) -> ClaimResponse:
        async with self._transaction():
            claim = await self.claims.start_review(admin, claim_id)
            return ClaimResponse.model_validate(claim)

    async def review_claim(
        self,
        admin: str,
        claim_id: int,
        approved: bool,
        review_notes: str,
        payout_amount: int,
    ) -> ClaimResponse:
        async with self._transaction():
            claim = await self.claims.review_claim(admin, claim_id, approved, review_notes, payout_amount)
            return ClaimResponse.model_validate(claim)

    async def process_payout(self, admin: str, claim_id: int) -> ClaimResponse:
        async with self._transaction():
            claim = await self.claims.process_payout(admin, claim_id)
            return ClaimResponse.model_validate(claim)

    # Admin

    async def update_premium_rates(
        self, admin: str, base_rate: int, nft_mult: int, token_mult: int, combined_mult: int
    ) -> ConfigResponse:
        async with self._transaction():
            config = await self.admin.update_premium_rates(admin, base_rate, nft_mult, token_mult, combined_mult)
            return ConfigResponse.model_validate(config)

    async def update_coverage_limits(
        self, admin: str, min_period: int, max_period: int, max_amount: int
    ) -> ConfigResponse:
        async with self._transaction():
            config = await self.admin.update_coverage_limits(admin, min_period, max_period, max_amount)
            return ConfigResponse.model_validate(config)

    async def update_fraud_params(self, admin: str, max_claims: int, cooldown: int) -> ConfigResponse:
        async with self._transaction():
            config = await self.admin.update_fraud_params(admin, max_claims, cooldown)
            return ConfigResponse.model_validate(config)

    async def set_paused(self, admin: str, paused: bool) -> ConfigResponse:
        async with self._transaction():
            config = await self.admin.set_paused(admin, paused)
            return ConfigResponse.model_validate(config)

    async def add_to_pool(self, admin: str, amount: int) -> int:
        async with self._transaction():
            return await self.admin.add_to_pool(admin, amount)

    async def withdraw_from_pool(self, admin: str, amount: int) -> int:
        async with self._transaction():
            return await self.admin.withdraw_from_pool(admin, amount)

    async def emergency_withdraw(self, admin: str) -> int:
        async with self._transaction():
            return await self.admin.emergency_withdraw(admin)

    async def flag_user(self, admin: str, user: str, reason: str) -> FraudMetricsResponse:
        async with self._transaction():
            metrics = await self.admin.flag_user(admin, user, reason)
            return FraudMetricsResponse.model_validate(metrics)

    async def unflag_user(self, admin: str, user: str) -> None:
        async with self._transaction():
            await self.admin.unflag_user(admin, user)

    # Views: no authorization, no mutation

    async def get_policy(self, owner: str) -> Optional[PolicyResponse]:
        policy = await self.policies.get_policy(owner)
        return PolicyResponse.model_validate(policy) if policy else None

    async def get_claim(self, claim_id: int) -> Optional[ClaimResponse]:
        claim = await self.claims.get_claim(claim_id)
        return ClaimResponse.model_validate(claim) if claim else None

    async def get_user_claims(self, owner: str) -> List[int]:
        return await self.claims.get_user_claims(owner)

    async def get_all_policies(self) -> List[str]:
        return await self.policies.get_all_policies()

    async def is_policy_active(self, owner: str) -> bool:
        return await self.policies.is_policy_active(owner)

    async def get_premium_pool(self) -> int:
        return await self.pool.balance()

    async def get_config(self) -> ConfigResponse:
        return ConfigResponse.model_validate(await self.config.load())

    async def get_fraud_metrics(self, user: str) -> FraudMetricsResponse:
        return FraudMetricsResponse.model_validate(await self.fraud.get_metrics(user))

    async def calculate_premium(
        self, coverage_type: CoverageType, coverage_amount: int, coverage_period: int
    ) -> int:
        config = await self.config.load()
        return calculate_premium(config, coverage_type, coverage_amount, coverage_period)

    async def get_total_policies(self) -> int:
        return await self.pool.total_policies()

    async def get_total_claims(self) -> int:
        return await self.pool.total_claims()

    async def get_overdue_claims(self) -> List[int]:
        return await self.claims.get_overdue_claims()
