from typing import Any, Dict, Optional
from pydantic import BaseModel


class Vector3(BaseModel):
    """三维坐标 (x, y, z)"""

    x: float
    y: float
    z: float


class Annotation(BaseModel):
    """
    空间标注：点云中的一个三维点 + 文本备注
    (A persisted spatial note. pointCloudId is a loose reference, never checked.)
    """

    id: str
    pointCloudId: Optional[str] = None
    position: Vector3
    text: str = ""
    # 相机位姿仅作为浏览器导航提示，服务端原样保存
    cameraPosition: Optional[Dict[str, Any]] = None
    cameraTarget: Optional[Dict[str, Any]] = None
    createdAt: str
    updatedAt: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        # updatedAt only appears once the annotation has been updated
        exclude = {"updatedAt"} if self.updatedAt is None else None
        return self.model_dump(exclude=exclude)


class AnnotationCreateRequest(BaseModel):
    """创建标注请求模型"""

    position: Vector3
    text: str = ""
    pointCloudId: Optional[str] = None
    cameraPosition: Optional[Vector3] = None
    cameraTarget: Optional[Vector3] = None


class AnnotationUpdateRequest(BaseModel):
    """更新标注请求模型（仅文本）"""

    text: str = ""
