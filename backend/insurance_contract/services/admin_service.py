import logging

from insurance_contract.core.errors import InvalidParameterError
from insurance_contract.models.config import InsuranceConfig
from insurance_contract.models.fraud import FraudMetrics
from insurance_contract.services.config_store import ConfigStore
from insurance_contract.services.context import ContractContext
from insurance_contract.services.fraud_service import FraudDetector
from insurance_contract.services.pool import PremiumPool

logger = logging.getLogger(__name__)


def _require_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise InvalidParameterError(f"{name} must be non-negative")


class AdminService:
    """Admin-only mutation of rates, limits, fraud parameters, pause flag and pool."""

    def __init__(self, ctx: ContractContext, config: ConfigStore, pool: PremiumPool, fraud: FraudDetector):
        self.ctx = ctx
        self.config = config
        self.pool = pool
        self.fraud = fraud

    async def update_premium_rates(
        self, admin: str, base_rate: int, nft_mult: int, token_mult: int, combined_mult: int
    ) -> InsuranceConfig:
        config = await self.config.require_admin(admin, "update_premium_rates")
        _require_non_negative(
            base_rate=base_rate, nft_mult=nft_mult, token_mult=token_mult, combined_mult=combined_mult
        )

        config.base_premium_rate = base_rate
        config.nft_multiplier = nft_mult
        config.token_multiplier = token_mult
        config.combined_multiplier = combined_mult
        await self.ctx.store.put_config(config)
        logger.info(
            "Premium rates updated: base=%s nft=%s token=%s combined=%s",
            base_rate, nft_mult, token_mult, combined_mult,
        )
        return config

    async def update_coverage_limits(
        self, admin: str, min_period: int, max_period: int, max_amount: int
    ) -> InsuranceConfig:
        config = await self.config.require_admin(admin, "update_coverage_limits")
        _require_non_negative(min_period=min_period, max_period=max_period)
        if min_period > max_period:
            raise InvalidParameterError("min_period must not exceed max_period")
        if max_amount <= 0:
            raise InvalidParameterError("max_amount must be positive")

        config.min_coverage_period = min_period
        config.max_coverage_period = max_period
        config.max_coverage_amount = max_amount
        await self.ctx.store.put_config(config)
        logger.info("Coverage limits updated: period=[%s, %s] max_amount=%s", min_period, max_period, max_amount)
        return config

    async def update_fraud_params(self, admin: str, max_claims: int, cooldown: int) -> InsuranceConfig:
        config = await self.config.require_admin(admin, "update_fraud_params")
        _require_non_negative(max_claims=max_claims, cooldown=cooldown)

        config.max_claims_per_period = max_claims
        config.claim_cooldown = cooldown
        await self.ctx.store.put_config(config)
        logger.info("Fraud params updated: max_claims=%s cooldown=%s", max_claims, cooldown)
        return config

    async def set_paused(self, admin: str, paused: bool) -> InsuranceConfig:
        config = await self.config.require_admin(admin, "set_paused")
        config.paused = paused
        await self.ctx.store.put_config(config)
        logger.info("Contract %s", "paused" if paused else "unpaused")
        return config

    async def add_to_pool(self, admin: str, amount: int) -> int:
        config = await self.config.require_admin(admin, "add_to_pool")
        if amount <= 0:
            raise InvalidParameterError("Amount must be positive")

        await self.ctx.assets.transfer(config.payment_asset, admin, self.ctx.contract_principal, amount)
        balance = await self.pool.credit(amount)
        logger.info("Pool deposit %s, balance %s", amount, balance)
        return balance

    async def withdraw_from_pool(self, admin: str, amount: int) -> int:
        config = await self.config.require_admin(admin, "withdraw_from_pool")
        if amount <= 0:
            raise InvalidParameterError("Amount must be positive")

        balance = await self.pool.debit(amount, "Insufficient pool balance")
        await self.ctx.assets.transfer(config.payment_asset, self.ctx.contract_principal, admin, amount)
        logger.info("Pool withdrawal %s, balance %s", amount, balance)
        return balance

    async def emergency_withdraw(self, admin: str) -> int:
        """Drain the whole pool to the admin and return the drained amount."""
        config = await self.config.require_admin(admin, "emergency_withdraw")

        drained = await self.pool.drain()
        if drained > 0:
            await self.ctx.assets.transfer(config.payment_asset, self.ctx.contract_principal, admin, drained)
        logger.warning("Emergency withdrawal of %s by %s", drained, admin)
        return drained

    async def flag_user(self, admin: str, user: str, reason: str) -> FraudMetrics:
        await self.config.require_admin(admin, "flag_user")
        return await self.fraud.flag(user, reason)

    async def unflag_user(self, admin: str, user: str) -> None:
        await self.config.require_admin(admin, "unflag_user")
        await self.fraud.unflag(user)
