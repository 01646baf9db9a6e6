"""
Custom exceptions for order creation.
"""


class OrderError(Exception):
    """Base exception for order errors."""
    pass


class OrderValidationError(OrderError):
    """Raised when an order payload cannot be turned into an order."""

    def __init__(self, message="Invalid order"):
        self.message = message
        super().__init__(message)
