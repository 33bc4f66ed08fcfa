from typing import Optional, Dict, List

import httpx

from ..exceptions import SDKException
from ..models.annotation import (
    Annotation,
    AnnotationCreateRequest,
    AnnotationUpdateRequest,
)
from ..models.point_cloud import PointCloud, PointCloudCreateRequest
from .http_client import HttpClient


class AnnotationClient:
    """
    标注服务客户端，对应服务端的 /annotations、/pointclouds 接口
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        extra_headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.http = HttpClient(
            base_url, timeout=timeout, extra_headers=extra_headers, transport=transport
        )

    # ==================== 标注 ====================

    def get_annotations(self, point_cloud_id: Optional[str] = None) -> List[Annotation]:
        params = {"pointCloudId": point_cloud_id} if point_cloud_id else None
        data = self.http.get_json("/annotations", params=params)
        return [Annotation(**item) for item in data]

    def create_annotation(self, req: AnnotationCreateRequest) -> Annotation:
        data = self.http.post_json(
            "/annotations", req.model_dump(mode="json", exclude_none=True)
        )
        return Annotation(**data)

    def update_annotation(self, annotation_id: str, text: str) -> Annotation:
        req = AnnotationUpdateRequest(text=text)
        data = self.http.put_json(
            f"/annotations/{annotation_id}", req.model_dump(mode="json")
        )
        return Annotation(**data)

    def delete_annotation(self, annotation_id: str) -> None:
        self.http.delete(f"/annotations/{annotation_id}")

    def health_check(self) -> bool:
        """Returns False instead of raising when the API is unreachable."""
        try:
            self.http.request("GET", "/health")
            return True
        except (SDKException, httpx.HTTPError):
            return False

    # ==================== 点云 ====================

    def get_point_clouds(self) -> List[PointCloud]:
        data = self.http.get_json("/pointclouds")
        return [PointCloud(**item) for item in data]

    def create_point_cloud(self, req: PointCloudCreateRequest) -> PointCloud:
        data = self.http.post_json("/pointclouds", req.model_dump(mode="json"))
        return PointCloud(**data)

    def delete_point_cloud(self, point_cloud_id: str) -> None:
        self.http.delete(f"/pointclouds/{point_cloud_id}")

    def close(self):
        self.http.close()
