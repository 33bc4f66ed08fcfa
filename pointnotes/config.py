"""
应用配置 - 从环境变量读取
"""
import logging
import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

from pointnotes.exceptions import ConfigurationError


class StorageBackendType(str, Enum):
    DYNAMODB = "dynamodb"
    LOCAL = "local"


class Settings(BaseModel):
    """服务配置"""

    annotations_table: str
    point_clouds_table: str
    storage_backend: StorageBackendType = StorageBackendType.DYNAMODB

    # 本地 JSON 文件存储
    local_db_path: str = "./db.json"

    # DynamoDB
    aws_region: Optional[str] = None
    dynamodb_endpoint_url: Optional[str] = None
    dynamodb_connect_timeout: float = 5.0
    dynamodb_read_timeout: float = 10.0

    log_level: str = "INFO"
    port: int = 3001

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v):
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v


REQUIRED_VARIABLES = ("ANNOTATIONS_TABLE", "POINT_CLOUDS_TABLE")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment. Missing store names are fatal:
    the service must not start without them.
    """
    env = os.environ if environ is None else environ

    for name in REQUIRED_VARIABLES:
        if not env.get(name, "").strip():
            raise ConfigurationError(f"{name} environment variable is required")

    values = {
        "annotations_table": env["ANNOTATIONS_TABLE"].strip(),
        "point_clouds_table": env["POINT_CLOUDS_TABLE"].strip(),
        "storage_backend": env.get("STORAGE_BACKEND", "dynamodb").strip().lower(),
        "local_db_path": env.get("LOCAL_DB_PATH", "./db.json"),
        "aws_region": env.get("AWS_REGION") or None,
        "dynamodb_endpoint_url": env.get("DYNAMODB_ENDPOINT_URL") or None,
        "dynamodb_connect_timeout": env.get("DYNAMODB_CONNECT_TIMEOUT", 5.0),
        "dynamodb_read_timeout": env.get("DYNAMODB_READ_TIMEOUT", 10.0),
        "log_level": env.get("LOG_LEVEL", "INFO").upper(),
        "port": env.get("PORT", 3001),
    }
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # the Lambda runtime installs its own root handler, so basicConfig is a no-op there
    logging.getLogger().setLevel(level)
