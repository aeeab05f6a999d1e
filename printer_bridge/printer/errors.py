"""Printer error types."""
from typing import Optional


class PrinterError(Exception):
    """Base class for printer errors."""


class DiscoveryUnavailable(PrinterError):
    """The OS printer registry could not be queried."""


class DeviceOffline(PrinterError):
    """No printer is ready to accept a job."""


class TransmissionFailure(PrinterError):
    """Sending bytes to the printer failed.

    ``cause`` keeps the underlying OS or subprocess error for diagnosis.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def error_class(self) -> Optional[str]:
        return type(self.cause).__name__ if self.cause is not None else None
