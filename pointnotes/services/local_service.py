import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pointnotes_sdk.models.enums import EntityKind

from pointnotes.exceptions import Unavailable
from pointnotes.services.storage_service import (
    Record,
    StorageService,
    not_found,
    utc_now,
)

logger = logging.getLogger(__name__)


class LocalStorageService(StorageService):
    """
    本地 JSON 文件存储，用于本地开发 (no DynamoDB needed).

    The whole file is read, mutated and rewritten on every write. A single
    process-wide lock serializes each read-modify-write cycle so concurrent
    requests cannot lose updates.
    """

    def __init__(self, db_path: Union[str, Path], table_names: Dict[EntityKind, str]):
        super().__init__(table_names)
        self.db_path = Path(db_path)
        self._lock = threading.Lock()
        self._initialize()

    @classmethod
    def from_settings(cls, settings) -> "LocalStorageService":
        return cls(
            settings.local_db_path,
            {
                EntityKind.ANNOTATION: settings.annotations_table,
                EntityKind.POINT_CLOUD: settings.point_clouds_table,
            },
        )

    def _initialize(self) -> None:
        """检查数据文件是否存在，如果不存在则创建"""
        with self._lock:
            data = self._read()
            missing = [name for name in self.table_names.values() if name not in data]
            if missing:
                for name in missing:
                    data[name] = []
                self._write(data)
                logger.info(f"Local store initialized at {self.db_path}")

    def _read(self) -> Dict[str, List[Record]]:
        try:
            with open(self.db_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read local store {self.db_path}: {e}")
            raise Unavailable("Storage backend unavailable") from e
        if not isinstance(data, dict):
            raise Unavailable("Storage backend unavailable")
        return data

    def _write(self, data: Dict[str, List[Record]]) -> None:
        # write to a sibling temp file, then rename over the store
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.db_path.parent, prefix=f".{self.db_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.db_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write local store {self.db_path}: {e}")
            raise Unavailable("Storage backend unavailable") from e

    def _records(self, data: Dict[str, List[Record]], kind: EntityKind) -> List[Record]:
        return data.setdefault(self.table_name(kind), [])

    @staticmethod
    def _index_of(records: List[Record], record_id: str) -> int:
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                return index
        return -1

    def list_all(
        self, kind: EntityKind, filters: Optional[Dict[str, Any]] = None
    ) -> List[Record]:
        with self._lock:
            records = self._records(self._read(), kind)
        if not filters:
            return records
        return [
            record
            for record in records
            if all(field in record and record[field] == value for field, value in filters.items())
        ]

    def create(self, kind: EntityKind, record: Record) -> Record:
        with self._lock:
            data = self._read()
            self._records(data, kind).append(record)
            self._write(data)
        return record

    def update(self, kind: EntityKind, record_id: str, fields: Record) -> Record:
        with self._lock:
            data = self._read()
            records = self._records(data, kind)
            index = self._index_of(records, record_id)
            if index == -1:
                raise not_found(kind)
            updated = {**records[index], **fields, "updatedAt": utc_now()}
            records[index] = updated
            self._write(data)
        return updated

    def delete(self, kind: EntityKind, record_id: str) -> None:
        with self._lock:
            data = self._read()
            records = self._records(data, kind)
            index = self._index_of(records, record_id)
            if index == -1:
                raise not_found(kind)
            del records[index]
            self._write(data)
