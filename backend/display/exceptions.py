"""
Custom exceptions for the customer-facing pole display.
"""


class DisplayError(Exception):
    """Base exception for customer display errors."""
    pass


class PortUnavailableError(DisplayError):
    """Raised when the display's serial port cannot be opened."""

    def __init__(self, port=None, message=None):
        self.port = port
        if message is None:
            port_info = f" '{port}'" if port else ""
            message = f"Customer display port{port_info} is unavailable"
        super().__init__(message)


class DisplayWriteError(DisplayError):
    """Raised when writing to an open display fails."""

    def __init__(self, port=None, message=None):
        self.port = port
        if message is None:
            message = f"Failed to write to customer display '{port}'"
        super().__init__(message)
