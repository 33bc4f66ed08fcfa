import logging
from dataclasses import dataclass, field

from pointnotes.config import Settings, StorageBackendType
from pointnotes.services.annotation_service import AnnotationService
from pointnotes.services.dynamodb_service import DynamoDBStorageService
from pointnotes.services.local_service import LocalStorageService
from pointnotes.services.point_cloud_service import PointCloudService
from pointnotes.services.storage_service import StorageService

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> StorageService:
    if settings.storage_backend == StorageBackendType.LOCAL:
        logger.info(f"Using local JSON storage at {settings.local_db_path}")
        return LocalStorageService.from_settings(settings)
    logger.info(
        f"Using DynamoDB storage (tables: {settings.annotations_table}, "
        f"{settings.point_clouds_table})"
    )
    return DynamoDBStorageService.from_settings(settings)


@dataclass
class AppContext:
    """
    进程级上下文：配置 + 存储句柄。启动时构建，随进程结束释放。
    """

    settings: Settings
    storage: StorageService
    annotations: AnnotationService = field(init=False)
    point_clouds: PointCloudService = field(init=False)

    def __post_init__(self):
        self.annotations = AnnotationService(self.storage)
        self.point_clouds = PointCloudService(self.storage)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(settings=settings, storage=create_storage(settings))

    def close(self) -> None:
        self.storage.close()
