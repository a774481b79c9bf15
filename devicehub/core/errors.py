"""Error Hierarchy — typed, categorized exceptions for all DeviceHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) never reach the store; store errors always
      chain the underlying cause (raise ... from exc)
    - to_response() produces the REST envelope and never includes the chained cause
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DeviceHubError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: operation name and offending identifiers travel with
      the error for logs, without coupling to the logging framework
    - Store-level NotFoundError and service-level DeviceNotFoundError are distinct:
      the service normalizes the former into the latter
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Diagnostic context: which operation failed, on which identifiers."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    device_id: str | None = None
    hardware_id: str | None = None


class DeviceHubError(Exception):
    """Base exception for all DeviceHub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }

    def log_extra(self) -> dict:
        """Fields for logger.*(extra=...) — consumed by JSONFormatter."""
        return {
            "error_code": self.code,
            "operation": self.context.operation,
            "device_id": self.context.device_id,
            "hardware_id": self.context.hardware_id,
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class ValidationError(DeviceHubError):
    """Entity construction input is invalid."""
    def __init__(
        self,
        message: str,
        field: str,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class HardwareIdEmptyError(ValidationError):
    """hardware_id was empty at construction time."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "hardware id cannot be empty", "hardware_id",
            "HARDWARE_ID_EMPTY", context,
        )


# ─── Document Codec Errors ──────────────────────────────────────

class DocumentCodecError(DeviceHubError):
    """Base for metadata column translation failures."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )


class DecodeError(DocumentCodecError):
    """Stored document could not be parsed into a metadata map."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to decode metadata document: {reason}",
            "DOCUMENT_DECODE_ERROR", context,
        )


class EncodeError(DocumentCodecError):
    """Metadata map could not be serialized for storage."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to encode metadata document: {reason}",
            "DOCUMENT_ENCODE_ERROR", context,
        )


class ScanKindError(DocumentCodecError):
    """Storage engine handed back a raw value of an unsupported kind."""
    def __init__(self, kind: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported raw value kind for metadata document: {kind}",
            "DOCUMENT_SCAN_KIND_ERROR", context,
        )
        self.kind = kind


# ─── Store Errors ───────────────────────────────────────────────

class NotFoundError(DeviceHubError):
    """No row matches the lookup key."""
    def __init__(self, key: str, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"No device record with {key} '{value}'",
            "RECORD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.key = key
        self.value = value


class ConflictError(DeviceHubError):
    """hardware_id uniqueness constraint violated."""
    def __init__(self, hardware_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"A device with hardware id '{hardware_id}' already exists",
            "HARDWARE_ID_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.hardware_id = hardware_id


class StoreError(DeviceHubError):
    """Any other persistence failure (I/O, driver, serialization, deadline)."""
    def __init__(
        self,
        message: str,
        operation: str,
        category: ErrorCategory = ErrorCategory.DATABASE,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", category,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Service Errors ─────────────────────────────────────────────

class DeviceNotFoundError(DeviceHubError):
    """Requested device does not exist."""
    def __init__(self, device_ref: str, context: ErrorContext | None = None):
        super().__init__(
            f"Device '{device_ref}' not found",
            "DEVICE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.device_ref = device_ref
