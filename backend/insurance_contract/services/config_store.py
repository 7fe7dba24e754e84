import logging

from insurance_contract.core.errors import (
    AuthorizationError,
    ContractPausedError,
    InitializationError,
    InvalidParameterError,
)
from insurance_contract.models.config import (
    InsuranceConfig,
    ContractCounters,
    SINGLETON_ID,
    DEFAULT_NFT_MULTIPLIER,
    DEFAULT_TOKEN_MULTIPLIER,
    DEFAULT_COMBINED_MULTIPLIER,
    DEFAULT_MIN_COVERAGE_PERIOD,
    DEFAULT_MAX_COVERAGE_PERIOD,
    DEFAULT_MAX_COVERAGE_AMOUNT,
    DEFAULT_CLAIM_REVIEW_PERIOD,
    DEFAULT_MAX_CLAIMS_PER_PERIOD,
    DEFAULT_CLAIM_COOLDOWN,
)
from insurance_contract.services.context import ContractContext

logger = logging.getLogger(__name__)


class ConfigStore:
    """Holds the single administrative configuration."""

    def __init__(self, ctx: ContractContext):
        self.ctx = ctx

    async def initialize(self, admin: str, payment_asset: str, base_rate: int) -> InsuranceConfig:
        self.ctx.require_auth(admin, "initialize")

        if await self.ctx.store.get_config() is not None:
            raise InitializationError("Already initialized")
        if base_rate < 0:
            raise InvalidParameterError("Base premium rate must be non-negative")

        config = InsuranceConfig(
            id=SINGLETON_ID,
            admin=admin,
            payment_asset=payment_asset,
            base_premium_rate=base_rate,
            nft_multiplier=DEFAULT_NFT_MULTIPLIER,
            token_multiplier=DEFAULT_TOKEN_MULTIPLIER,
            combined_multiplier=DEFAULT_COMBINED_MULTIPLIER,
            min_coverage_period=DEFAULT_MIN_COVERAGE_PERIOD,
            max_coverage_period=DEFAULT_MAX_COVERAGE_PERIOD,
            max_coverage_amount=DEFAULT_MAX_COVERAGE_AMOUNT,
            claim_review_period=DEFAULT_CLAIM_REVIEW_PERIOD,
            max_claims_per_period=DEFAULT_MAX_CLAIMS_PER_PERIOD,
            claim_cooldown=DEFAULT_CLAIM_COOLDOWN,
            paused=False,
        )
        await self.ctx.store.put_config(config)
        await self.ctx.store.put_counters(
            ContractCounters(
                id=SINGLETON_ID,
                premium_pool=0,
                claim_counter=0,
                total_policies=0,
                total_claims=0,
            )
        )
        logger.info("Contract initialized: admin=%s asset=%s base_rate=%s", admin, payment_asset, base_rate)
        return config

    async def load(self) -> InsuranceConfig:
        config = await self.ctx.store.get_config()
        if config is None:
            raise InitializationError("Contract not initialized")
        return config

    async def require_admin(self, admin: str, operation: str) -> InsuranceConfig:
        """Authorize ``admin`` for ``operation`` and check it is the stored admin."""
        self.ctx.require_auth(admin, operation)
        config = await self.load()
        if config.admin != admin:
            raise AuthorizationError("Admin only")
        return config

    async def require_not_paused(self) -> InsuranceConfig:
        config = await self.load()
        if config.paused:
            raise ContractPausedError("Contract is paused")
        return config
