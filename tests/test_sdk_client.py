import uuid

import httpx
import pytest

from pointnotes_sdk import AnnotationClient, SDKException, TimeoutException
from pointnotes_sdk.models import (
    AnnotationCreateRequest,
    ErrorCode,
    PointCloudCreateRequest,
    Vector3,
)

from pointnotes.routers import RouteRequest, build_dispatcher


@pytest.fixture
def client(context):
    """SDK client wired straight into the dispatcher, no network involved."""
    dispatcher = build_dispatcher(context)
    seen_headers = []

    def handle(request: httpx.Request) -> httpx.Response:
        seen_headers.append(request.headers)
        result = dispatcher.dispatch(
            RouteRequest(
                method=request.method,
                path=request.url.path,
                query_params=dict(request.url.params),
                body=request.content or None,
            )
        )
        return httpx.Response(result.status_code, headers=result.headers, content=result.body)

    sdk = AnnotationClient("http://pointnotes.test/", transport=httpx.MockTransport(handle))
    sdk.seen_headers = seen_headers
    yield sdk
    sdk.close()


def test_annotation_round_trip(client):
    cloud = client.create_point_cloud(PointCloudCreateRequest(name="Lion", path="lion"))
    assert cloud.path == "lion/"

    created = client.create_annotation(
        AnnotationCreateRequest(
            position=Vector3(x=1, y=2, z=3),
            text="nose",
            pointCloudId=cloud.id,
            cameraPosition=Vector3(x=0, y=0, z=10),
        )
    )
    assert created.pointCloudId == cloud.id
    assert created.cameraPosition == {"x": 0.0, "y": 0.0, "z": 10.0}
    assert created.updatedAt is None

    assert [a.id for a in client.get_annotations(cloud.id)] == [created.id]
    assert client.get_annotations(str(uuid.uuid4())) == []

    updated = client.update_annotation(created.id, "tip of the nose")
    assert updated.text == "tip of the nose"
    assert updated.updatedAt is not None

    client.delete_annotation(created.id)
    assert client.get_annotations() == []
    assert [c.id for c in client.get_point_clouds()] == [cloud.id]
    client.delete_point_cloud(cloud.id)
    assert client.get_point_clouds() == []


def test_errors_are_raised_with_codes(client):
    with pytest.raises(SDKException) as excinfo:
        client.delete_annotation(str(uuid.uuid4()))
    assert excinfo.value.code == ErrorCode.NOT_FOUND
    assert excinfo.value.status_code == 404

    with pytest.raises(SDKException) as excinfo:
        client.update_annotation("not-a-uuid", "x")
    assert excinfo.value.code == ErrorCode.INVALID_IDENTIFIER

    with pytest.raises(SDKException) as excinfo:
        client.create_annotation(
            AnnotationCreateRequest(position=Vector3(x=0, y=0, z=0), text="ü" * 129)
        )
    assert excinfo.value.code == ErrorCode.TEXT_TOO_LONG


def test_health_check_and_headers(client):
    assert client.health_check() is True
    headers = client.seen_headers[-1]
    assert headers["user-agent"].startswith("pointnotes-sdk/")
    assert "x-request-id" in headers


def test_health_check_is_false_when_unreachable():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    sdk = AnnotationClient("http://down.test", transport=httpx.MockTransport(refuse))
    assert sdk.health_check() is False


def test_non_json_error_body():
    sdk = AnnotationClient(
        "http://proxy.test",
        transport=httpx.MockTransport(lambda r: httpx.Response(502, content=b"Bad Gateway")),
    )
    with pytest.raises(SDKException) as excinfo:
        sdk.get_point_clouds()
    assert excinfo.value.code == ErrorCode.INTERNAL
    assert excinfo.value.status_code == 502


def test_timeout():
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    sdk = AnnotationClient("http://slow.test", timeout=1.0, transport=httpx.MockTransport(slow))
    with pytest.raises(TimeoutException):
        sdk.get_annotations()
