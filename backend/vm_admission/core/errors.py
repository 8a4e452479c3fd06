"""Error Hierarchy — typed, categorized rejection reasons for VirtualMachine admission.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every rejection maps to HTTP 403 (admission denied), never 5xx
    - to_status() produces the admission rejection envelope
    - Errors are values: core checks RETURN them, only callers decide to raise

Design Decisions:
    - Single hierarchy with AdmissionError base: the shell handles all rejections uniformly
    - ErrorContext as dataclass: observability fields without coupling to logging framework
    - No timestamp in ErrorContext: validating the same pair twice yields equal errors
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    IMMUTABILITY = "immutability"
    DELEGATED = "delegated"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    operation: str | None = None
    field_path: str | None = None
    debug_info: dict[str, Any] | None = None


class AdmissionError(Exception):
    """Base exception for every admission rejection."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 403,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_status(self) -> dict:
        """Convert to an admission rejection envelope."""
        return {
            "allowed": False,
            "status": {
                "code": self.http_status,
                "reason": self.code,
                "message": self.message,
                "details": {
                    "category": self.category.value,
                    "severity": self.severity.value,
                    "field_path": self.context.field_path,
                },
            },
        }


# ─── Static Invariants (create + update) ────────────────────────

class RangeViolationError(AdmissionError):
    """`use` lies outside [min, max]."""
    def __init__(self, message: str, field_path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_path = field_path
        super().__init__(
            message, "RANGE_VIOLATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.field_path = field_path


class ReservedNameError(AdmissionError):
    """Disk name is reserved or too long."""
    def __init__(self, message: str, disk_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_path = ".spec.disks[].name"
        super().__init__(
            message, "RESERVED_NAME", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.disk_name = disk_name


class ReservedPortNameError(AdmissionError):
    """Port uses the name reserved for the hypervisor control channel."""
    def __init__(self, port_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_path = ".spec.guest.ports[].name"
        super().__init__(
            f"'{port_name}' is reserved name for .spec.guest.ports[].name",
            "RESERVED_PORT_NAME", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.port_name = port_name


class ConflictingSwapConfigError(AdmissionError):
    """Both legacy `swap` and structured `swapInfo` are set."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_path = ".spec.guest.settings"
        super().__init__(
            "cannot have both 'swap' and 'swapInfo' enabled",
            "CONFLICTING_SWAP_CONFIG", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )


# ─── Transition Rules (update only) ─────────────────────────────

class ImmutableFieldChangedError(AdmissionError):
    """A protected field differs between old and new spec."""
    def __init__(self, field_path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_path = field_path
        super().__init__(
            f"{field_path} is immutable",
            "IMMUTABLE_FIELD_CHANGED", ErrorCategory.IMMUTABILITY,
            ErrorSeverity.ERROR, ctx,
        )
        self.field_path = field_path


class ImmutableSwapTransitionError(AdmissionError):
    """Swap descriptor changed between two validly-derived states."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_path = ".spec.guest.settings.{swap,swapInfo}"
        super().__init__(
            ".spec.guest.settings.{swap,swapInfo} is immutable",
            "IMMUTABLE_SWAP_TRANSITION", ErrorCategory.IMMUTABILITY,
            ErrorSeverity.ERROR, ctx,
        )


# ─── Delegated Checks ───────────────────────────────────────────

class DelegatedValidationError(AdmissionError):
    """Failure propagated from a resource-description check."""
    def __init__(
        self, message: str, prefix: str = "", context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        if prefix:
            ctx.field_path = prefix.rstrip(": ")
        super().__init__(
            f"{prefix}{message}",
            "DELEGATED_VALIDATION_FAILURE", ErrorCategory.DELEGATED,
            ErrorSeverity.ERROR, ctx,
        )
        self.cause_message = message
