"""Base exception shared by every dispatch service."""


class DispatchError(Exception):
    """
    Base class for failures raised by the services layer.

    Each subclass carries a stable ``error_code`` that the HTTP layer
    returns verbatim, so clients can branch on it without parsing messages.
    """
    error_code = "dispatch_error"
    default_message = "Request could not be completed"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
