"""
Custom exceptions for discounts and coupons.
"""


class DiscountValidationError(Exception):
    """Raised when a discount or coupon request is malformed before lookup."""

    def __init__(self, message=None):
        super().__init__(message or "Invalid discount")


class CouponError(Exception):
    """
    Base exception for coupon rule failures.

    `code` is the stable machine-readable reason exposed by the API;
    the message is suitable for showing to the cashier or customer.
    """

    code = "coupon_error"
    default_message = "This coupon cannot be applied"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CouponNotFoundError(CouponError):
    """Raised when no coupon matches the entered code."""

    code = "not_found"
    default_message = "Invalid coupon code"


class CouponInactiveError(CouponError):
    code = "inactive"
    default_message = "This coupon is no longer active"


class CouponExpiredError(CouponError):
    code = "expired"
    default_message = "This coupon has expired"


class CouponNotYetValidError(CouponError):
    code = "not_yet_valid"
    default_message = "This coupon is not yet valid"


class CouponUsageLimitReachedError(CouponError):
    code = "usage_limit_reached"
    default_message = "This coupon has reached its usage limit"


class CouponBelowMinimumError(CouponError):
    """Raised when the order subtotal is under the coupon's minimum."""

    code = "below_minimum"

    def __init__(self, min_order_amount=None, message=None):
        self.min_order_amount = min_order_amount
        if message is None and min_order_amount is not None:
            message = f"Minimum order amount of ${min_order_amount:.2f} required"
        super().__init__(message or "Order total is below the coupon minimum")
