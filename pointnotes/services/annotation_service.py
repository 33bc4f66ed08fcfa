import logging
from typing import Any, Dict, List, Optional

from pointnotes_sdk.models.annotation import Annotation
from pointnotes_sdk.models.enums import EntityKind

from pointnotes import identifiers, validators
from pointnotes.services.storage_service import StorageService, utc_now

logger = logging.getLogger(__name__)


class AnnotationService:
    """标注服务类"""

    def __init__(self, storage: StorageService):
        self.storage = storage

    def list_annotations(self, point_cloud_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        获取标注列表，可按 pointCloudId 过滤
        (annotations whose pointCloudId is null never match a filter)
        """
        filters = {"pointCloudId": point_cloud_id} if point_cloud_id else None
        return self.storage.list_all(EntityKind.ANNOTATION, filters)

    def create_annotation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        fields = validators.validate_annotation_create(payload)
        annotation = Annotation(id=identifiers.generate(), createdAt=utc_now(), **fields)
        record = annotation.to_record()
        # keep the caller's numbers and camera hints exactly as sent
        record.update(fields)
        self.storage.create(EntityKind.ANNOTATION, record)
        logger.info(f"Annotation created: {record['id']}")
        return record

    def update_annotation(self, annotation_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        fields = validators.validate_annotation_update(payload)
        record = self.storage.update(EntityKind.ANNOTATION, annotation_id, fields)
        logger.info(f"Annotation updated: {annotation_id}")
        return record

    def delete_annotation(self, annotation_id: str) -> None:
        self.storage.delete(EntityKind.ANNOTATION, annotation_id)
        logger.info(f"Annotation deleted: {annotation_id}")
