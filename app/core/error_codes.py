class ErrorCode:
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    VIDEO_NOT_FOUND = "VIDEO_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    DAY_LOCKED = "DAY_LOCKED"
    SESSION_ALREADY_SUBMITTED = "SESSION_ALREADY_SUBMITTED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
