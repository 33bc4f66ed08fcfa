"""
传输无关的路由分发 (transport-independent request dispatch).

Both the Lambda handler and the FastAPI app turn their native request into a
RouteRequest and hand it to Dispatcher.dispatch, which always returns a
RouteResponse.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Tuple, Union

from pointnotes import identifiers
from pointnotes.exceptions import RouteNotFound, ServiceException
from pointnotes.responses import (
    HandlerResult,
    RouteResponse,
    build_error_response,
    build_internal_error_response,
    build_response,
)

logger = logging.getLogger(__name__)


@dataclass
class RouteRequest:
    method: str
    path: str
    path_params: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None


Handler = Callable[[RouteRequest, object], HandlerResult]


def _split(path: str) -> List[str]:
    if not path.startswith("/"):
        path = "/" + path
    return path.split("/")[1:]


@dataclass
class Route:
    method: str
    template: str
    handler: Handler
    id_label: str = "resource"

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Exact match on the template; {param} segments must be non-empty."""
        expected = _split(self.template)
        actual = _split(path)
        if len(expected) != len(actual):
            return None
        params = {}
        for pattern, segment in zip(expected, actual):
            if pattern.startswith("{") and pattern.endswith("}"):
                if not segment:
                    return None
                params[pattern[1:-1]] = segment
            elif pattern != segment:
                return None
        return params


class Router:
    """按模块收集路由定义，由 Dispatcher.include_router 注册"""

    def __init__(self):
        self.routes: List[Route] = []

    def add_route(self, method: str, template: str, handler: Handler, id_label: str = "resource"):
        self.routes.append(Route(method.upper(), template, handler, id_label))

    def _decorator(self, method: str, template: str, id_label: str):
        def wrapper(handler: Handler) -> Handler:
            self.add_route(method, template, handler, id_label)
            return handler

        return wrapper

    def get(self, template: str, id_label: str = "resource"):
        return self._decorator("GET", template, id_label)

    def post(self, template: str, id_label: str = "resource"):
        return self._decorator("POST", template, id_label)

    def put(self, template: str, id_label: str = "resource"):
        return self._decorator("PUT", template, id_label)

    def delete(self, template: str, id_label: str = "resource"):
        return self._decorator("DELETE", template, id_label)


class Dispatcher:
    def __init__(self, context):
        self.context = context
        self.routes: List[Route] = []

    def include_router(self, router: Router) -> None:
        self.routes.extend(router.routes)

    def resolve(self, method: str, path: str) -> Tuple[Route, Dict[str, str]]:
        for route in self.routes:
            if route.method != method:
                continue
            params = route.match(path)
            if params is not None:
                return route, params
        raise RouteNotFound("Not found")

    def _is_known_path(self, path: str) -> bool:
        return any(route.match(path) is not None for route in self.routes)

    def _handle(self, request: RouteRequest) -> HandlerResult:
        method = request.method.upper()

        # CORS 预检：已知路径一律放行
        if method == "OPTIONS":
            if self._is_known_path(request.path):
                return HandlerResult(204)
            raise RouteNotFound("Not found")

        route, params = self.resolve(method, request.path)
        # ids are checked before any handler can reach storage
        for value in params.values():
            identifiers.require_valid(value, route.id_label)
        request = replace(request, path_params={**request.path_params, **params})
        return route.handler(request, self.context)

    def dispatch(self, request: RouteRequest) -> RouteResponse:
        try:
            response = build_response(self._handle(request))
        except ServiceException as e:
            if e.status_code >= 500:
                logger.error(f"{request.method} {request.path} failed: {e}")
            else:
                logger.warning(f"{request.method} {request.path} rejected: {e}")
            response = build_error_response(e)
        except Exception:
            logger.exception(f"Unexpected error in {request.method} {request.path}")
            response = build_internal_error_response()

        logger.info(f"{request.method} {request.path} -> {response.status_code}")
        return response
