"""Error Hierarchy: typed, categorized exceptions for sitedispatch failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Startup errors (route registration, static root) are raised before serving
    - Request-time faults never reach the client as anything but a generic 500
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SiteDispatchError base: last-resort FastAPI handler catches all
    - Resolution misses are NOT errors: they travel as DEFER/None, never as exceptions
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    HANDLER = "handler"
    INTERNAL = "internal"


class SiteDispatchError(Exception):
    """Base exception for all sitedispatch errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity

    def to_log_extra(self) -> dict:
        """Structured fields for the observability sink (never sent to clients)."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
        }


# ─── Startup Errors ─────────────────────────────────────────────

class RouteRegistrationError(SiteDispatchError):
    """A route was registered with an invalid pattern or after freezing."""
    def __init__(self, message: str, pattern: str | None = None):
        super().__init__(
            message, "ROUTE_REGISTRATION", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL,
        )
        self.pattern = pattern


class StaticRootError(SiteDispatchError):
    """The configured static root exists but is not a directory."""
    def __init__(self, root: str):
        super().__init__(
            f"Static root '{root}' is not a directory",
            "STATIC_ROOT_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL,
        )
        self.root = root


# ─── Request-time Errors ────────────────────────────────────────

class HandlerFault(SiteDispatchError):
    """A route handler could not produce a response."""
    def __init__(self, message: str, handler_name: str | None = None):
        super().__init__(
            message, "HANDLER_FAULT", ErrorCategory.HANDLER,
            ErrorSeverity.ERROR,
        )
        self.handler_name = handler_name
