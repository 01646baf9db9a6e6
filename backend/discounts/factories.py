from pricing.types import CouponDiscount, FixedDiscount, PercentageDiscount
from .strategies import (
    DiscountStrategy,
    PercentageDiscountStrategy,
    FixedAmountDiscountStrategy,
    CouponDiscountStrategy,
)


class DiscountStrategyFactory:
    """
    Factory for creating a discount strategy based on the discount's variant.
    """

    # Maps discount variant to a specific strategy class
    _strategies = {
        PercentageDiscount: PercentageDiscountStrategy,
        FixedDiscount: FixedAmountDiscountStrategy,
        CouponDiscount: CouponDiscountStrategy,
    }

    @staticmethod
    def get_strategy(discount) -> DiscountStrategy:
        """
        Selects and returns the appropriate strategy instance.
        """
        strategy_class = DiscountStrategyFactory._strategies.get(type(discount))

        if strategy_class:
            return strategy_class()

        raise NotImplementedError(
            f"No strategy implemented for discount '{type(discount).__name__}'"
        )
