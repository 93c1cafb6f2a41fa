"""Error Hierarchy — typed, categorized exceptions for all feature history failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Snapshot errors (reference resolution, invalid live value) abort the whole build:
      no partial Version is ever returned
    - to_response() produces a uniform error envelope for whatever transport the caller uses

Design Decisions:
    - Single hierarchy with FeatureHistoryError base: callers catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
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


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    feature_value_id: str | None = None
    version: int | None = None
    debug_info: dict[str, Any] | None = None


class FeatureHistoryError(Exception):
    """Base exception for all feature history errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "feature_value_id": self.context.feature_value_id,
                    "version": self.context.version,
                },
            }
        }


# ─── Snapshot Errors ────────────────────────────────────────────

class ReferenceResolutionError(FeatureHistoryError):
    """A shared strategy link has no backing definition in the store."""
    def __init__(self, missing_link_ids: list, context: ErrorContext | None = None):
        ids = ", ".join(str(i) for i in missing_link_ids)
        super().__init__(
            f"Shared strategy link(s) could not be resolved: {ids}",
            "REFERENCE_RESOLUTION_FAILED", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.missing_link_ids = list(missing_link_ids)


class InvalidLiveValueError(FeatureHistoryError):
    """Live value lacks a field required to build a legal Version."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_LIVE_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class VersionConflictError(FeatureHistoryError):
    """A Version with the same identity is already stored."""
    def __init__(self, identity: object, context: ErrorContext | None = None):
        super().__init__(
            f"Version {identity} already exists and cannot be replaced",
            "VERSION_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )
        self.identity = identity


class ResourceNotFoundError(FeatureHistoryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(FeatureHistoryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
