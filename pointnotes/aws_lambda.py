"""
AWS Lambda + API Gateway (HTTP API, payload v2) 适配层
"""
import base64
import binascii
import logging
from typing import Any, Dict

from pointnotes.responses import RouteResponse
from pointnotes.routers import RouteRequest, build_dispatcher

logger = logging.getLogger(__name__)


def event_to_request(event: Dict[str, Any]) -> RouteRequest:
    """
    将 API Gateway 事件转换为 RouteRequest

    routeKey ("PUT /annotations/{id}") is preferred; direct invocations fall
    back to requestContext.http.
    """
    route_key = event.get("routeKey") or ""
    http = (event.get("requestContext") or {}).get("http") or {}
    path_params = {k: v for k, v in (event.get("pathParameters") or {}).items() if v is not None}

    if " " in route_key:
        method, path = route_key.split(" ", 1)
        if method == "ANY":
            method = http.get("method") or event.get("httpMethod") or method
        for name, value in path_params.items():
            path = path.replace("{" + name + "+}", value).replace("{" + name + "}", value)
        if "{" in path:
            path = http.get("path") or event.get("rawPath") or path
    else:
        method = http.get("method") or event.get("httpMethod") or ""
        path = http.get("path") or event.get("rawPath") or event.get("path") or ""

    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            body = ""

    return RouteRequest(
        method=method.upper(),
        path=path,
        path_params=path_params,
        query_params=dict(event.get("queryStringParameters") or {}),
        body=body,
    )


def to_lambda_response(response: RouteResponse) -> Dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": dict(response.headers),
        "body": response.body,
    }


def make_handler(context):
    """Bind a Lambda handler to an already-built AppContext."""
    dispatcher = build_dispatcher(context)

    def handler(event: Dict[str, Any], lambda_context: Any = None) -> Dict[str, Any]:
        request = event_to_request(event)
        logger.debug(f"Parsed route: {request.method} {request.path} (routeKey={event.get('routeKey')})")
        return to_lambda_response(dispatcher.dispatch(request))

    return handler
