"""
Policy lifecycle: purchase, renew, cancel.
"""
import logging
from typing import List, Optional

from insurance_contract.core.errors import InvalidParameterError, NotFoundError, StateError
from insurance_contract.models.policy import Policy, PolicyStatus, CoverageType
from insurance_contract.services.config_store import ConfigStore
from insurance_contract.services.context import ContractContext
from insurance_contract.services.pool import PremiumPool
from insurance_contract.services.premium import calculate_premium

logger = logging.getLogger(__name__)


class PolicyService:
    def __init__(self, ctx: ContractContext, config: ConfigStore, pool: PremiumPool):
        self.ctx = ctx
        self.config = config
        self.pool = pool

    async def purchase_policy(
        self,
        owner: str,
        coverage_type: CoverageType,
        coverage_amount: int,
        coverage_period: int,
        asset_ref: str,
    ) -> Policy:
        self.ctx.require_auth(owner, "purchase_policy")
        config = await self.config.require_not_paused()

        if coverage_amount <= 0 or coverage_amount > config.max_coverage_amount:
            raise InvalidParameterError("Invalid coverage amount")
        if coverage_period < config.min_coverage_period or coverage_period > config.max_coverage_period:
            raise InvalidParameterError("Invalid coverage period")

        # A lapsed record is still stored Active; it is extended with renew_policy
        existing = await self.ctx.store.get_policy(owner)
        if existing is not None and existing.status == PolicyStatus.ACTIVE:
            raise StateError("User already has an active policy")

        now = self.ctx.now()

        premium = calculate_premium(config, coverage_type, coverage_amount, coverage_period)
        await self.ctx.assets.transfer(config.payment_asset, owner, self.ctx.contract_principal, premium)

        if existing is None:
            policy = Policy(owner=owner)
        else:
            policy = existing
        policy.coverage_type = coverage_type
        policy.coverage_amount = coverage_amount
        policy.premium_paid = premium
        policy.start_time = now
        policy.end_time = now + coverage_period
        policy.status = PolicyStatus.ACTIVE
        policy.asset_ref = asset_ref
        await self.ctx.store.put_policy(policy)

        await self.ctx.store.add_policy_holder(owner)
        await self.pool.credit(premium)
        await self.pool.count_policy()

        logger.info(
            "Policy purchased: owner=%s type=%s amount=%s period=%s premium=%s",
            owner, coverage_type.value, coverage_amount, coverage_period, premium,
        )
        return policy

    async def renew_policy(self, owner: str, extra_period: int) -> Policy:
        """
        Extend coverage by ``extra_period`` from the later of the current end
        and now. The whole span from the original start is bounded by the
        maximum coverage period; the premium is charged for the extension only.
        """
        self.ctx.require_auth(owner, "renew_policy")
        config = await self.config.require_not_paused()

        policy = await self.ctx.store.get_policy(owner)
        if policy is None:
            raise NotFoundError("Policy not found")
        if policy.status not in (PolicyStatus.ACTIVE, PolicyStatus.EXPIRED):
            raise StateError("Policy cannot be renewed")
        if extra_period <= 0:
            raise InvalidParameterError("Invalid coverage period")

        now = self.ctx.now()
        new_end_time = max(policy.end_time, now) + extra_period
        if new_end_time - policy.start_time > config.max_coverage_period:
            raise InvalidParameterError("Total coverage period exceeds maximum")

        additional_premium = calculate_premium(
            config, policy.coverage_type, policy.coverage_amount, extra_period
        )
        await self.ctx.assets.transfer(
            config.payment_asset, owner, self.ctx.contract_principal, additional_premium
        )

        policy.end_time = new_end_time
        policy.premium_paid = policy.premium_paid + additional_premium
        policy.status = PolicyStatus.ACTIVE
        await self.ctx.store.put_policy(policy)
        await self.pool.credit(additional_premium)

        logger.info(
            "Policy renewed: owner=%s new_end=%s premium=%s", owner, new_end_time, additional_premium
        )
        return policy

    async def cancel_policy(self, owner: str) -> int:
        """Cancel for good and refund the unexpired share of premium_paid."""
        self.ctx.require_auth(owner, "cancel_policy")
        config = await self.config.load()

        policy = await self.ctx.store.get_policy(owner)
        if policy is None:
            raise NotFoundError("Policy not found")
        if policy.status != PolicyStatus.ACTIVE:
            raise StateError("Policy is not active")

        now = self.ctx.now()
        total_period = policy.end_time - policy.start_time
        remaining_period = max(0, policy.end_time - now)
        refund = 0
        if remaining_period > 0:
            refund = (policy.premium_paid * remaining_period) // total_period

        policy.status = PolicyStatus.CANCELLED
        await self.ctx.store.put_policy(policy)

        if refund > 0:
            await self.pool.debit(refund, "Insufficient premium pool for refund")
            await self.ctx.assets.transfer(config.payment_asset, self.ctx.contract_principal, owner, refund)

        logger.info("Policy cancelled: owner=%s refund=%s", owner, refund)
        return refund

    # Views

    async def get_policy(self, owner: str) -> Optional[Policy]:
        return await self.ctx.store.get_policy(owner)

    async def get_all_policies(self) -> List[str]:
        return await self.ctx.store.list_policy_holders()

    async def is_policy_active(self, owner: str) -> bool:
        policy = await self.ctx.store.get_policy(owner)
        if policy is None:
            return False
        return policy.in_force(self.ctx.now())
