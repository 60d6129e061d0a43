# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Service-layer exceptions and the HTTP status each one maps to."""


class ServiceError(Exception):
    """Base exception for service layer errors."""

    status_code: int = 500

    def __init__(self, message: str, code: str = "SERVICE_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message=f"{field}: {message}", code="VALIDATION_ERROR")


class NotFoundError(ServiceError):
    """Unknown family, task or member id."""

    status_code = 404

    def __init__(self, entity_type: str, entity_id: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message=f"{entity_type} not found", code="NOT_FOUND")


class PersistenceError(ServiceError):
    """The document store rejected a read or write."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="PERSISTENCE_ERROR")


class NotificationError(ServiceError):
    """An SMS could not be delivered. Logged by callers, never surfaced."""

    def __init__(self, recipient: str, reason: str) -> None:
        self.recipient = recipient
        self.reason = reason
        super().__init__(message=f"SMS to {recipient} failed: {reason}", code="NOTIFICATION_ERROR")
