import copy
import json

import pytest
from botocore.exceptions import ClientError

from pointnotes_sdk.models.enums import EntityKind

from pointnotes.config import Settings
from pointnotes.context import AppContext
from pointnotes.routers import RouteRequest, build_dispatcher
from pointnotes.services.dynamodb_service import DynamoDBStorageService
from pointnotes.services.local_service import LocalStorageService

ANNOTATIONS_TABLE = "annotations-test"
POINT_CLOUDS_TABLE = "pointclouds-test"


def _conditional_failure(operation):
    return ClientError(
        {
            "Error": {
                "Code": "ConditionalCheckFailedException",
                "Message": "The conditional request failed",
            }
        },
        operation,
    )


def _reject_floats(value):
    if isinstance(value, float):
        raise TypeError("Float types are not supported. Use Decimal types instead.")
    if isinstance(value, dict):
        for v in value.values():
            _reject_floats(v)
    if isinstance(value, list):
        for v in value:
            _reject_floats(v)


class FakeTable:
    """
    In-memory stand-in for a boto3 DynamoDB Table resource. Understands the
    expressions DynamoDBStorageService sends and enforces attribute_exists.
    """

    def __init__(self, name, page_size=2):
        self.name = name
        self.page_size = page_size
        self.items = {}
        self.calls = []

    def _filter(self, items, kwargs):
        expression = kwargs.get("FilterExpression")
        if not expression:
            return items
        names = kwargs["ExpressionAttributeNames"]
        values = kwargs["ExpressionAttributeValues"]
        for clause in expression.split(" AND "):
            name_ref, value_ref = [part.strip() for part in clause.split("=")]
            field, expected = names[name_ref], values[value_ref]
            items = [i for i in items if field in i and i[field] == expected]
        return items

    def scan(self, **kwargs):
        self.calls.append(("scan", kwargs))
        ids = list(self.items)
        start = 0
        if "ExclusiveStartKey" in kwargs:
            start = ids.index(kwargs["ExclusiveStartKey"]["id"]) + 1
        page_ids = ids[start:start + self.page_size]
        page = [copy.deepcopy(self.items[i]) for i in page_ids]
        response = {"Items": self._filter(page, kwargs)}
        if start + self.page_size < len(ids):
            response["LastEvaluatedKey"] = {"id": page_ids[-1]}
        return response

    def put_item(self, Item):
        self.calls.append(("put_item", Item))
        _reject_floats(Item)
        self.items[Item["id"]] = copy.deepcopy(Item)
        return {}

    def update_item(self, Key, UpdateExpression, ConditionExpression,
                    ExpressionAttributeNames, ExpressionAttributeValues, ReturnValues):
        self.calls.append(("update_item", Key))
        assert ConditionExpression == "attribute_exists(#id)"
        assert ExpressionAttributeNames["#id"] == "id"
        _reject_floats(ExpressionAttributeValues)
        item = self.items.get(Key["id"])
        if item is None:
            raise _conditional_failure("UpdateItem")
        assert UpdateExpression.startswith("SET ")
        for assignment in UpdateExpression[len("SET "):].split(", "):
            name_ref, value_ref = [part.strip() for part in assignment.split("=")]
            item[ExpressionAttributeNames[name_ref]] = ExpressionAttributeValues[value_ref]
        assert ReturnValues == "ALL_NEW"
        return {"Attributes": copy.deepcopy(item)}

    def delete_item(self, Key, ConditionExpression, ExpressionAttributeNames):
        self.calls.append(("delete_item", Key))
        assert ConditionExpression == "attribute_exists(#id)"
        if Key["id"] not in self.items:
            raise _conditional_failure("DeleteItem")
        del self.items[Key["id"]]
        return {}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        annotations_table=ANNOTATIONS_TABLE,
        point_clouds_table=POINT_CLOUDS_TABLE,
        storage_backend="local",
        local_db_path=str(tmp_path / "db.json"),
    )


@pytest.fixture
def fake_tables():
    return {
        EntityKind.ANNOTATION: FakeTable(ANNOTATIONS_TABLE),
        EntityKind.POINT_CLOUD: FakeTable(POINT_CLOUDS_TABLE),
    }


@pytest.fixture
def local_storage(settings):
    return LocalStorageService.from_settings(settings)


@pytest.fixture
def dynamodb_storage(fake_tables):
    return DynamoDBStorageService(fake_tables)


@pytest.fixture(params=["local", "dynamodb"])
def storage(request):
    """Both backends must pass the same contract tests."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def context(settings, storage):
    return AppContext(settings=settings, storage=storage)


class ApiCaller:
    def __init__(self, dispatcher):
        self.dispatcher = dispatcher

    def __call__(self, method, path, body=None, query=None):
        if body is not None and not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        return self.dispatcher.dispatch(
            RouteRequest(method=method, path=path, query_params=query or {}, body=body)
        )

    @staticmethod
    def json(response):
        return json.loads(response.body) if response.body else None


@pytest.fixture
def api(context):
    return ApiCaller(build_dispatcher(context))
