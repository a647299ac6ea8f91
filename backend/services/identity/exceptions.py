"""Custom exceptions for the identity directory."""

from services.exceptions import DispatchError


class DuplicatePhoneError(DispatchError):
    """Raised when a phone number is already registered."""
    error_code = "duplicate_phone"
    default_message = "User with this phone number already exists."
