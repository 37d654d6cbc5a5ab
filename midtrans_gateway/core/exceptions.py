"""
Custom exception hierarchy for the Midtrans gateway.

All application-level exceptions inherit from AppException so they can be
caught by a single global handler.
"""


class AppException(Exception):
    """Base for all app exceptions."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationInvalid(AppException):
    """Raised when merchant id, client key or server key is missing."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=500,
            error_code="CONFIGURATION_INVALID",
            message=message,
            details=details,
        )


class OrderReferenceTooLong(AppException):
    """Raised when the encoded invoice allocations exceed the order id limit."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=400,
            error_code="ORDER_REFERENCE_TOO_LONG",
            message=message,
            details=details,
        )


class RemoteServiceError(AppException):
    """Raised when a Midtrans API call (create session, status query) fails."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=502,
            error_code="REMOTE_SERVICE_ERROR",
            message=message,
            details=details,
        )


class SignatureMismatch(AppException):
    """Raised when a notification's signature_key does not authenticate."""

    def __init__(self, message: str = "Invalid signature", details: dict | None = None):
        super().__init__(
            status_code=403,
            error_code="SIGNATURE_MISMATCH",
            message=message,
            details=details,
        )


class MalformedNotification(AppException):
    """Raised when a notification body does not have the Midtrans shape."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=400,
            error_code="MALFORMED_NOTIFICATION",
            message=message,
            details=details,
        )


class MalformedOrderReference(AppException):
    """Raised when no invoice allocation can be recovered from an order id."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=400,
            error_code="MALFORMED_ORDER_REFERENCE",
            message=message,
            details=details,
        )


class ClientNotFound(AppException):
    """Raised when the first invoice of an order reference has no owner."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=404,
            error_code="CLIENT_NOT_FOUND",
            message=message,
            details=details,
        )


class UnknownTransactionStatus(AppException):
    """Raised when Midtrans reports a status outside the mapping table."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=422,
            error_code="UNKNOWN_TRANSACTION_STATUS",
            message=message,
            details=details,
        )


class Unsupported(AppException):
    """Raised for gateway operations Midtrans Snap does not offer here."""

    def __init__(self, operation: str):
        super().__init__(
            status_code=501,
            error_code="UNSUPPORTED",
            message=f"{operation} is not supported by the Midtrans gateway",
            details={"operation": operation},
        )
