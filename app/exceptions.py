from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP error response.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str = "Error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class ConflictError(AppError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    default_code = "CONFLICT"

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class MealPlanError(AppError):
    """A business rule stopped plan generation. Never retried by the caller."""

    http_status = 422
    default_code = "MEAL_PLAN_ERROR"


class InsufficientCandidatesError(MealPlanError):
    """Too few recipes match the diet and time filters to build a plan."""

    default_code = "INSUFFICIENT_CANDIDATES"

    def __init__(self, found: int, required: int, details: Optional[Mapping[str, Any]] = None):
        super().__init__(
            f"Not enough recipes match the selected diet and time (found {found}, need {required})",
            details or {"found": found, "required": required},
        )
        self.found = found
        self.required = required


class ConstraintUnsatisfiableError(MealPlanError):
    """Every sampling attempt missed the per-event calorie margin."""

    default_code = "CONSTRAINT_UNSATISFIABLE"

    def __init__(self, attempts: int, details: Optional[Mapping[str, Any]] = None):
        super().__init__(
            "meal groups don't meet calorie goals after retries",
            details or {"attempts": attempts},
        )
        self.attempts = attempts
