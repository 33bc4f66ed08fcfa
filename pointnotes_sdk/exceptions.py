from typing import Optional

from .models.enums import ErrorCode


class SDKException(Exception):
    def __init__(
        self, code: ErrorCode, message: str, status_code: Optional[int] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"{code.value}: {message}")


class TimeoutException(SDKException):
    pass
