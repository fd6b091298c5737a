from typing import Any

from app.core.error_codes import ErrorCode


class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str, details: dict[str, Any] | None = None):
        self.status_code = status_code
        self.code = str(code)
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(ApiError):
    def __init__(self, message: str, code: str = ErrorCode.VALIDATION_ERROR):
        super().__init__(status_code=400, code=code, message=message)


class NotFoundError(ApiError):
    def __init__(self, code: str, message: str):
        super().__init__(status_code=404, code=code, message=message)


class AccessDeniedError(ApiError):
    """Raised by the day-access gate; carries the first day that blocks progress."""

    def __init__(self, blocking_day: int, requested_day: int):
        self.blocking_day = blocking_day
        super().__init__(
            status_code=403,
            code=ErrorCode.DAY_LOCKED,
            message=f"Please complete the video for day {blocking_day} before submitting day {requested_day}",
            details={"blockingDay": blocking_day},
        )


class ConflictError(ApiError):
    def __init__(self, code: str, message: str):
        super().__init__(status_code=409, code=code, message=message)


class InternalError(ApiError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(status_code=500, code=ErrorCode.INTERNAL_ERROR, message=message)
