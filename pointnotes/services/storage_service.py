from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pointnotes_sdk.models.enums import EntityKind

from pointnotes.exceptions import NotFound

Record = Dict[str, Any]

ENTITY_LABELS = {
    EntityKind.ANNOTATION: "Annotation",
    EntityKind.POINT_CLOUD: "Point cloud",
}


def utc_now() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-01T08:00:00.000Z"""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def not_found(kind: EntityKind) -> NotFound:
    return NotFound(f"{ENTITY_LABELS[kind]} not found")


class StorageService(ABC):
    """
    存储后端抽象：DynamoDB 与本地 JSON 文件两种实现必须表现一致

    - list_all: full scan, optional equality filters
    - create: unconditional insert, caller assigns the id
    - update / delete: conditional on the id existing, NotFound otherwise
    """

    def __init__(self, table_names: Dict[EntityKind, str]):
        self.table_names = dict(table_names)

    def table_name(self, kind: EntityKind) -> str:
        return self.table_names[kind]

    @abstractmethod
    def list_all(
        self, kind: EntityKind, filters: Optional[Dict[str, Any]] = None
    ) -> List[Record]:
        ...

    @abstractmethod
    def create(self, kind: EntityKind, record: Record) -> Record:
        ...

    @abstractmethod
    def update(self, kind: EntityKind, record_id: str, fields: Record) -> Record:
        """Apply fields plus updatedAt atomically and return the full record."""

    @abstractmethod
    def delete(self, kind: EntityKind, record_id: str) -> None:
        ...

    def close(self) -> None:
        pass
