"""Price lookup."""

from watt_autoclaim.services.pricing.price_oracle import UNVERIFIED_PRICE, PriceOracle

__all__ = ["PriceOracle", "UNVERIFIED_PRICE"]
