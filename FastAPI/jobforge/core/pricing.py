from dataclasses import dataclass


@dataclass(frozen=True)
class PricingTier:
    days: int
    price: int  # USD
    description: str


JOB_LISTING_PRICING: tuple[PricingTier, ...] = (
    PricingTier(days=30, price=99, description="Standard listing"),
    PricingTier(days=60, price=179, description="Extended visibility"),
    PricingTier(days=90, price=249, description="Maximum exposure"),
)


def get_tier(days: int) -> PricingTier | None:
    for tier in JOB_LISTING_PRICING:
        if tier.days == days:
            return tier
    return None
