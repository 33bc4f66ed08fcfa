from pydantic import BaseModel
from .enums import ErrorCode


class ErrorModel(BaseModel):
    error: str
    code: ErrorCode = ErrorCode.INTERNAL
