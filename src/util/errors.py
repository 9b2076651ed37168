from typing import Any


class ServiceError(Exception):
    """
    An expected failure that the HTTP layer can report as-is.

    The optional context holds the identifiers involved (order IDs, item IDs...) and is returned to
    API callers next to the message, so the payment processor's delivery logs show what was rejected.
    """

    error_code: int
    http_status: int
    emoji: str
    context: dict[str, Any]

    def __init__(
        self,
        message: str,
        error_code: int,
        http_status: int = 500,
        emoji: str = "⚠️",
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.http_status = http_status
        self.emoji = emoji
        self.context = context or {}

    def __str__(self) -> str:
        return self.to_log_string()

    def to_log_string(self) -> str:
        cause_str = f" # Caused by: {self.__cause__}" if self.__cause__ else ""
        return f"[{self.emoji} E{self.error_code}] {super().__str__()}{cause_str}"

    def to_api_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": str(self),
            "emoji": self.emoji,
        }
        if self.context:
            result["context"] = self.context
        return result


class ValidationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "✏️", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 422, emoji = emoji, context = context)


class NotFoundError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🔍", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 404, emoji = emoji, context = context)


class AuthorizationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🔒", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 403, emoji = emoji, context = context)


class AuthenticationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🔑", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 401, emoji = emoji, context = context)


class ExternalServiceError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🌐", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 502, emoji = emoji, context = context)


class ConfigurationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "⚙️", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 500, emoji = emoji, context = context)


class InternalError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "⚠️", context: dict[str, Any] | None = None):
        super().__init__(message, error_code, http_status = 500, emoji = emoji, context = context)
