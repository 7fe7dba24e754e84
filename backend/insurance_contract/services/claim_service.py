"""
Claim lifecycle: submit, review, payout.

SUBMITTED -> (UNDER_REVIEW) -> APPROVED | REJECTED, and APPROVED -> PAID.
REJECTED and PAID are terminal.
"""
import logging
from typing import List, Optional

from insurance_contract.core.errors import InvalidParameterError, NotFoundError, StateError
from insurance_contract.models.claim import Claim, ClaimStatus, AssetType, REVIEWABLE_STATUSES
from insurance_contract.models.policy import Policy, PolicyStatus, CoverageType
from insurance_contract.services.config_store import ConfigStore
from insurance_contract.services.context import ContractContext
from insurance_contract.services.fraud_service import FraudDetector
from insurance_contract.services.pool import PremiumPool

logger = logging.getLogger(__name__)


def check_asset_covered(policy: Policy, asset_type: AssetType) -> None:
    if policy.coverage_type == CoverageType.NFT and asset_type == AssetType.TOKEN:
        raise InvalidParameterError("Policy does not cover tokens")
    if policy.coverage_type == CoverageType.TOKEN and asset_type == AssetType.NFT:
        raise InvalidParameterError("Policy does not cover NFTs")


class ClaimService:
    def __init__(self, ctx: ContractContext, config: ConfigStore, pool: PremiumPool, fraud: FraudDetector):
        self.ctx = ctx
        self.config = config
        self.pool = pool
        self.fraud = fraud

    async def submit_claim(
        self,
        claimant: str,
        asset_type: AssetType,
        asset_ref: str,
        claim_amount: int,
        description: str,
    ) -> int:
        """Create a SUBMITTED claim against the claimant's in-force policy and return its id."""
        self.ctx.require_auth(claimant, "submit_claim")
        config = await self.config.require_not_paused()

        policy = await self.ctx.store.get_policy(claimant)
        if policy is None:
            raise NotFoundError("No active policy found")
        if policy.status != PolicyStatus.ACTIVE:
            raise StateError("Policy is not active")

        now = self.ctx.now()
        if now < policy.start_time or now > policy.end_time:
            raise StateError("Outside coverage period")

        check_asset_covered(policy, asset_type)

        if claim_amount <= 0 or claim_amount > policy.coverage_amount:
            raise InvalidParameterError("Invalid claim amount")

        await self.fraud.check(claimant, config, now)

        claim_id = await self.pool.next_claim_id()
        claim = Claim(
            id=claim_id,
            policy_owner=claimant,
            asset_type=asset_type,
            asset_ref=asset_ref,
            claim_amount=claim_amount,
            description=description,
            submission_time=now,
            status=ClaimStatus.SUBMITTED,
            review_notes="",
            payout_amount=0,
            payout_time=0,
        )
        await self.ctx.store.put_claim(claim)

        await self.fraud.record(claimant, claim_id, config, now)
        await self.pool.count_claim()

        logger.info("Claim %s submitted by %s for %s", claim_id, claimant, claim_amount)
        return claim_id

    async def _get_claim_or_raise(self, claim_id: int) -> Claim:
        claim = await self.ctx.store.get_claim(claim_id)
        if claim is None:
            raise NotFoundError("Claim not found")
        return claim

    async def start_review(self, admin: str, claim_id: int) -> Claim:
        await self.config.require_admin(admin, "start_review")

        claim = await self._get_claim_or_raise(claim_id)
        if claim.status != ClaimStatus.SUBMITTED:
            raise StateError("Claim must be SUBMITTED to start review")

        claim.status = ClaimStatus.UNDER_REVIEW
        await self.ctx.store.put_claim(claim)
        logger.info("Claim %s under review", claim_id)
        return claim

    async def review_claim(
        self,
        admin: str,
        claim_id: int,
        approved: bool,
        review_notes: str,
        payout_amount: int,
    ) -> Claim:
        await self.config.require_admin(admin, "review_claim")

        claim = await self._get_claim_or_raise(claim_id)
        if claim.status not in REVIEWABLE_STATUSES:
            raise StateError("Claim cannot be reviewed")

        if approved:
            if payout_amount <= 0 or payout_amount > claim.claim_amount:
                raise InvalidParameterError("Invalid payout amount")
            claim.status = ClaimStatus.APPROVED
            claim.payout_amount = payout_amount
        else:
            claim.status = ClaimStatus.REJECTED
            claim.payout_amount = 0

        claim.review_notes = review_notes
        await self.ctx.store.put_claim(claim)

        logger.info("Claim %s reviewed: %s payout=%s", claim_id, claim.status.value, claim.payout_amount)
        return claim

    async def process_payout(self, admin: str, claim_id: int) -> Claim:
        config = await self.config.require_admin(admin, "process_payout")

        claim = await self._get_claim_or_raise(claim_id)
        if claim.status != ClaimStatus.APPROVED:
            raise StateError("Claim is not approved")

        await self.pool.debit(claim.payout_amount)
        await self.ctx.assets.transfer(
            config.payment_asset, self.ctx.contract_principal, claim.policy_owner, claim.payout_amount
        )

        claim.status = ClaimStatus.PAID
        claim.payout_time = self.ctx.now()
        await self.ctx.store.put_claim(claim)

        logger.info("Claim %s paid %s to %s", claim_id, claim.payout_amount, claim.policy_owner)
        return claim

    # Views

    async def get_claim(self, claim_id: int) -> Optional[Claim]:
        return await self.ctx.store.get_claim(claim_id)

    async def get_user_claims(self, owner: str) -> List[int]:
        return await self.ctx.store.get_user_claim_ids(owner)

    async def get_overdue_claims(self) -> List[int]:
        """Ids of undecided claims whose review period has run out."""
        config = await self.config.load()
        now = self.ctx.now()
        pending = await self.ctx.store.list_claims_by_status(REVIEWABLE_STATUSES)
        return [
            c.id for c in pending
            if c.submission_time + config.claim_review_period < now
        ]
