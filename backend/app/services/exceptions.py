"""Domain errors raised by the services; mapped to HTTP statuses in app.main."""
from fastapi import status


class ClinicError(Exception):
    """Base class for service errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(ClinicError):
    """A durable read or write could not complete."""


class NotFound(ClinicError):
    status_code = status.HTTP_404_NOT_FOUND


class NoBackupAvailable(ClinicError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, collection: str):
        super().__init__("No backup available")
        self.collection = collection


class Unauthorized(ClinicError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class DuplicateRecord(ClinicError):
    """A caller-supplied record id already exists in the collection."""

    status_code = status.HTTP_409_CONFLICT


class InvalidSignature(ClinicError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid checksum"):
        super().__init__(message)


class PaymentsDisabled(ClinicError):
    status_code = status.HTTP_501_NOT_IMPLEMENTED

    def __init__(self, message: str = "Payment gateway is not configured"):
        super().__init__(message)
