from enum import Enum


class EntityKind(str, Enum):
    """持久化实体类型"""

    ANNOTATION = "annotation"
    POINT_CLOUD = "point_cloud"


class ErrorCode(str, Enum):
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_POSITION = "INVALID_POSITION"
    TEXT_TOO_LONG = "TEXT_TOO_LONG"
    MISSING_NAME = "MISSING_NAME"
    MISSING_PATH = "MISSING_PATH"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    NOT_FOUND = "NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"
    TIMEOUT = "TIMEOUT"
