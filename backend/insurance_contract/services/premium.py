from insurance_contract.models.config import InsuranceConfig, SECONDS_PER_DAY, BASIS_POINTS
from insurance_contract.models.policy import CoverageType


def multiplier_for(config: InsuranceConfig, coverage_type: CoverageType) -> int:
    if coverage_type == CoverageType.NFT:
        return config.nft_multiplier
    if coverage_type == CoverageType.TOKEN:
        return config.token_multiplier
    return config.combined_multiplier


def calculate_premium(
    config: InsuranceConfig,
    coverage_type: CoverageType,
    coverage_amount: int,
    coverage_period: int,
) -> int:
    """
    premium = amount * (base_rate * multiplier / 100) * whole_days / (365 * 10000)

    Periods are truncated to whole days, every division floors, and the
    result is never below 1.
    """
    annual_rate = (config.base_premium_rate * multiplier_for(config, coverage_type)) // 100
    coverage_days = coverage_period // SECONDS_PER_DAY

    premium = (coverage_amount * annual_rate * coverage_days) // (365 * BASIS_POINTS)
    return max(premium, 1)
