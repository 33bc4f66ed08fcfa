import logging
from typing import Any, Dict, List

from pointnotes_sdk.models.enums import EntityKind
from pointnotes_sdk.models.point_cloud import PointCloud

from pointnotes import identifiers, validators
from pointnotes.services.storage_service import StorageService, utc_now

logger = logging.getLogger(__name__)


class PointCloudService:
    """点云登记服务类"""

    def __init__(self, storage: StorageService):
        self.storage = storage

    def list_point_clouds(self) -> List[Dict[str, Any]]:
        return self.storage.list_all(EntityKind.POINT_CLOUD)

    def create_point_cloud(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        fields = validators.validate_point_cloud_create(payload)
        point_cloud = PointCloud(id=identifiers.generate(), createdAt=utc_now(), **fields)
        record = point_cloud.to_record()
        self.storage.create(EntityKind.POINT_CLOUD, record)
        logger.info(f"Point cloud registered: {record['id']} ({record['path']})")
        return record

    def delete_point_cloud(self, point_cloud_id: str) -> None:
        # annotations referencing this point cloud are left untouched
        self.storage.delete(EntityKind.POINT_CLOUD, point_cloud_id)
        logger.info(f"Point cloud deleted: {point_cloud_id}")
