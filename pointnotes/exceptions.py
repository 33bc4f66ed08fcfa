from typing import Any, Optional

from pointnotes_sdk.models.enums import ErrorCode


class ServiceException(Exception):
    """服务异常基类，携带错误码与 HTTP 状态码"""

    code = ErrorCode.INTERNAL
    status_code = 500

    def __init__(self, message: str, detail: Optional[Any] = None):
        self.message = message
        self.detail = detail
        super().__init__(f"{self.code.value}: {message}")


class ConfigurationError(Exception):
    """Raised at startup; never converted into a response."""


# ==================== 校验错误 (400) ====================


class ValidationException(ServiceException):
    code = ErrorCode.INVALID_PAYLOAD
    status_code = 400


class InvalidPayload(ValidationException):
    code = ErrorCode.INVALID_PAYLOAD


class InvalidPosition(ValidationException):
    code = ErrorCode.INVALID_POSITION


class TextTooLong(ValidationException):
    code = ErrorCode.TEXT_TOO_LONG


class MissingName(ValidationException):
    code = ErrorCode.MISSING_NAME


class MissingPath(ValidationException):
    code = ErrorCode.MISSING_PATH


class InvalidIdentifier(ValidationException):
    code = ErrorCode.INVALID_IDENTIFIER


# ==================== 路由 / 存储错误 ====================


class RouteNotFound(ServiceException):
    code = ErrorCode.ROUTE_NOT_FOUND
    status_code = 404


class NotFound(ServiceException):
    code = ErrorCode.NOT_FOUND
    status_code = 404


class StorageException(ServiceException):
    code = ErrorCode.INTERNAL
    status_code = 500


class Unavailable(StorageException):
    code = ErrorCode.UNAVAILABLE


class Internal(StorageException):
    code = ErrorCode.INTERNAL
