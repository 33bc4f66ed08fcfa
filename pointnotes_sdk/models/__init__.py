from .annotation import (
    Annotation,
    AnnotationCreateRequest,
    AnnotationUpdateRequest,
    Vector3,
)
from .enums import EntityKind, ErrorCode
from .errors import ErrorModel
from .point_cloud import HealthResponse, PointCloud, PointCloudCreateRequest

__all__ = [
    "Annotation",
    "AnnotationCreateRequest",
    "AnnotationUpdateRequest",
    "Vector3",
    "EntityKind",
    "ErrorCode",
    "ErrorModel",
    "HealthResponse",
    "PointCloud",
    "PointCloudCreateRequest",
]
