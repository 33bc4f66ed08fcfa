import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pointnotes_sdk.models.enums import ErrorCode
from pointnotes_sdk.models.errors import ErrorModel

from pointnotes.exceptions import ServiceException

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass
class HandlerResult:
    """处理函数的结果：状态码 + 可序列化的 body (None 表示空 body)"""

    status_code: int
    body: Optional[Any] = None


@dataclass
class RouteResponse:
    """Transport-neutral response."""

    status_code: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)


def _headers() -> Dict[str, str]:
    return {"Content-Type": "application/json", **CORS_HEADERS}


def build_response(result: HandlerResult) -> RouteResponse:
    body = "" if result.body is None else json.dumps(result.body)
    return RouteResponse(status_code=result.status_code, body=body, headers=_headers())


def build_error_response(exc: ServiceException) -> RouteResponse:
    if exc.status_code >= 500:
        return build_internal_error_response()
    error = ErrorModel(error=exc.message, code=exc.code)
    return build_response(HandlerResult(exc.status_code, error.model_dump(mode="json")))


def build_internal_error_response() -> RouteResponse:
    # never echo exception details back to the client
    error = ErrorModel(error=INTERNAL_ERROR_MESSAGE, code=ErrorCode.INTERNAL)
    return build_response(HandlerResult(500, error.model_dump(mode="json")))
