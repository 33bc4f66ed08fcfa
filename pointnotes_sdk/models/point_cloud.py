from typing import Any, Dict
from pydantic import BaseModel


class PointCloud(BaseModel):
    """
    点云数据集登记项：名称 + 存储路径，不包含几何数据本身
    """

    id: str
    name: str
    path: str  # always ends with "/"
    createdAt: str

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump()


class PointCloudCreateRequest(BaseModel):
    """创建点云请求模型"""

    name: str
    path: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
