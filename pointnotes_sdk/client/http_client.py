import httpx
import uuid
from typing import Optional, Dict, Any

from ..version import SDK_VERSION
from ..models.errors import ErrorModel
from ..models.enums import ErrorCode
from ..exceptions import SDKException, TimeoutException


class HttpClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        extra_headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.extra_headers = extra_headers or {}
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def _headers(self, request_id: str) -> Dict[str, str]:
        h = {
            "X-PointNotes-SDK-Version": SDK_VERSION,
            "X-Request-Id": request_id,
            "User-Agent": f"pointnotes-sdk/{SDK_VERSION}",
        }
        h.update(self.extra_headers)
        return h

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        request_id = str(uuid.uuid4())
        url = f"{self.base_url}{path}"
        try:
            resp = self._client.request(
                method,
                url,
                json=payload,
                params=params,
                headers=self._headers(request_id),
                timeout=timeout or self.timeout,
            )
        except httpx.TimeoutException:
            raise TimeoutException(
                ErrorCode.TIMEOUT, f"Request timeout after {timeout or self.timeout}s"
            )
        if resp.status_code >= 400:
            # attempt parse error
            try:
                err = ErrorModel(**resp.json())
            except Exception:
                raise SDKException(
                    ErrorCode.INTERNAL,
                    f"HTTP {resp.status_code} without valid error body",
                    status_code=resp.status_code,
                )
            raise SDKException(err.code, err.error, status_code=resp.status_code)
        return resp

    def get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        return self.request("GET", path, params=params).json()

    def post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("POST", path, payload=payload).json()

    def put_json(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("PUT", path, payload=payload).json()

    def delete(self, path: str) -> None:
        self.request("DELETE", path)

    def close(self):
        self._client.close()
