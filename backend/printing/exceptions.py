"""
Custom exceptions for receipt printing.
"""


class PrintingError(Exception):
    """Base exception for printing errors."""
    pass


class UnknownBackendError(PrintingError):
    """Raised when a printer is configured with a backend we cannot drive."""

    def __init__(self, backend, message=None):
        self.backend = backend
        if message is None:
            message = f"Unknown printer backend '{backend}'"
        super().__init__(message)


class TransportError(PrintingError):
    """
    Raised by a transport when a document could not be delivered.

    `code` is a stable identifier reported back in PrintResult.error_code.
    """

    code = "transport_error"

    def __init__(self, message=None, code=None):
        if code is not None:
            self.code = code
        super().__init__(message or "Printer transport failed")


class ConnectionFailedError(TransportError):
    """Raised when the printer cannot be opened or reached."""

    code = "connection_failed"

    def __init__(self, target=None, message=None):
        self.target = target
        if message is None:
            target_info = f" '{target}'" if target else ""
            message = f"Failed to connect to printer{target_info}"
        super().__init__(message)


class WriteFailedError(TransportError):
    """Raised when the connection was opened but writing failed."""

    code = "write_failed"

    def __init__(self, target=None, message=None):
        self.target = target
        if message is None:
            target_info = f" '{target}'" if target else ""
            message = f"Failed to write to printer{target_info}"
        super().__init__(message)


class AssetMissingError(TransportError):
    """Raised when an image referenced by a document cannot be loaded."""

    code = "asset_missing"

    def __init__(self, ref, message=None):
        self.ref = ref
        if message is None:
            message = f"Image asset '{ref}' could not be loaded"
        super().__init__(message)
