import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionError as BotoConnectionError,
    HTTPClientError,
)
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional
import json
import logging

from pointnotes_sdk.models.enums import EntityKind

from pointnotes.exceptions import Internal, Unavailable
from pointnotes.services.storage_service import (
    Record,
    StorageService,
    not_found,
    utc_now,
)

logger = logging.getLogger(__name__)

# DynamoDB 侧的瞬时故障，按不可用处理，不在请求内重试
UNAVAILABLE_ERROR_CODES = {
    "ProvisionedThroughputExceededException",
    "RequestLimitExceeded",
    "ThrottlingException",
    "ServiceUnavailable",
    "InternalServerError",
}


def to_dynamo(value: Any) -> Any:
    """DynamoDB 不接受 float，转换为 Decimal"""
    return json.loads(json.dumps(value), parse_float=Decimal)


def from_dynamo(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value % 1 == 0 else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


class DynamoDBStorageService(StorageService):
    """DynamoDB 存储服务类"""

    def __init__(self, tables: Dict[EntityKind, Any]):
        """
        Args:
            tables: EntityKind -> boto3 Table resource
        """
        super().__init__({kind: table.name for kind, table in tables.items()})
        self.tables = tables

    @classmethod
    def from_settings(cls, settings) -> "DynamoDBStorageService":
        try:
            dynamodb = boto3.resource(
                "dynamodb",
                region_name=settings.aws_region,
                endpoint_url=settings.dynamodb_endpoint_url,
                config=Config(
                    connect_timeout=settings.dynamodb_connect_timeout,
                    read_timeout=settings.dynamodb_read_timeout,
                    retries={"max_attempts": 3, "mode": "standard"},
                ),
            )
        except Exception as e:
            logger.error(f"Failed to initialize DynamoDB resource: {e}")
            raise
        return cls(
            {
                EntityKind.ANNOTATION: dynamodb.Table(settings.annotations_table),
                EntityKind.POINT_CLOUD: dynamodb.Table(settings.point_clouds_table),
            }
        )

    @contextmanager
    def _translate_errors(self, kind: EntityKind, operation: str):
        table_name = self.table_name(kind)
        try:
            yield
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code == "ConditionalCheckFailedException":
                raise not_found(kind)
            if code in UNAVAILABLE_ERROR_CODES:
                logger.error(f"DynamoDB unavailable during {operation} on {table_name}: {e}")
                raise Unavailable("Storage backend unavailable") from e
            logger.error(f"DynamoDB {operation} failed on {table_name}: {e}")
            raise Internal(f"{operation} failed") from e
        except (BotoConnectionError, HTTPClientError) as e:
            # 端点连不通或超时
            logger.error(f"Cannot reach DynamoDB during {operation} on {table_name}: {e}")
            raise Unavailable("Storage backend unavailable") from e
        except BotoCoreError as e:
            logger.error(f"DynamoDB {operation} failed on {table_name}: {e}")
            raise Internal(f"{operation} failed") from e

    def list_all(
        self, kind: EntityKind, filters: Optional[Dict[str, Any]] = None
    ) -> List[Record]:
        scan_kwargs: Dict[str, Any] = {}
        if filters:
            names, values, clauses = {}, {}, []
            for i, (field, value) in enumerate(filters.items()):
                names[f"#f{i}"] = field
                values[f":v{i}"] = to_dynamo(value)
                clauses.append(f"#f{i} = :v{i}")
            scan_kwargs["FilterExpression"] = " AND ".join(clauses)
            scan_kwargs["ExpressionAttributeNames"] = names
            scan_kwargs["ExpressionAttributeValues"] = values

        table = self.tables[kind]
        items: List[Record] = []
        with self._translate_errors(kind, "scan"):
            while True:
                response = table.scan(**scan_kwargs)
                items.extend(from_dynamo(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        return items

    def create(self, kind: EntityKind, record: Record) -> Record:
        with self._translate_errors(kind, "put_item"):
            self.tables[kind].put_item(Item=to_dynamo(record))
        return record

    def update(self, kind: EntityKind, record_id: str, fields: Record) -> Record:
        fields = {**fields, "updatedAt": utc_now()}
        names = {"#id": "id"}
        values = {}
        assignments = []
        for i, (field, value) in enumerate(fields.items()):
            names[f"#k{i}"] = field
            values[f":v{i}"] = to_dynamo(value)
            assignments.append(f"#k{i} = :v{i}")

        with self._translate_errors(kind, "update_item"):
            response = self.tables[kind].update_item(
                Key={"id": record_id},
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression="attribute_exists(#id)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        return from_dynamo(response["Attributes"])

    def delete(self, kind: EntityKind, record_id: str) -> None:
        with self._translate_errors(kind, "delete_item"):
            self.tables[kind].delete_item(
                Key={"id": record_id},
                ConditionExpression="attribute_exists(#id)",
                ExpressionAttributeNames={"#id": "id"},
            )
