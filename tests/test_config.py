import pytest

from pointnotes.config import StorageBackendType, load_settings
from pointnotes.context import create_storage
from pointnotes.exceptions import ConfigurationError
from pointnotes.services.local_service import LocalStorageService

BASE_ENV = {"ANNOTATIONS_TABLE": "annotations", "POINT_CLOUDS_TABLE": "pointclouds"}


def test_defaults():
    settings = load_settings(BASE_ENV)
    assert settings.storage_backend == StorageBackendType.DYNAMODB
    assert settings.annotations_table == "annotations"
    assert settings.point_clouds_table == "pointclouds"
    assert settings.dynamodb_endpoint_url is None
    assert settings.port == 3001
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("missing", ["ANNOTATIONS_TABLE", "POINT_CLOUDS_TABLE"])
def test_missing_table_names_are_fatal(missing):
    env = dict(BASE_ENV)
    del env[missing]
    with pytest.raises(ConfigurationError, match=missing):
        load_settings(env)


def test_blank_table_name_is_fatal():
    with pytest.raises(ConfigurationError):
        load_settings({**BASE_ENV, "ANNOTATIONS_TABLE": "   "})


@pytest.mark.parametrize("overrides", [
    {"STORAGE_BACKEND": "mongodb"},
    {"PORT": "not-a-port"},
    {"LOG_LEVEL": "chatty"},
    {"DYNAMODB_READ_TIMEOUT": "soon"},
])
def test_invalid_values_are_fatal(overrides):
    with pytest.raises(ConfigurationError):
        load_settings({**BASE_ENV, **overrides})


def test_overrides():
    settings = load_settings({
        **BASE_ENV,
        "STORAGE_BACKEND": "LOCAL",
        "LOCAL_DB_PATH": "/tmp/db.json",
        "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
        "AWS_REGION": "eu-west-1",
        "LOG_LEVEL": "debug",
        "PORT": "8080",
    })
    assert settings.storage_backend == StorageBackendType.LOCAL
    assert settings.local_db_path == "/tmp/db.json"
    assert settings.dynamodb_endpoint_url == "http://localhost:8000"
    assert settings.aws_region == "eu-west-1"
    assert settings.log_level == "DEBUG"
    assert settings.port == 8080


def test_local_backend_selection(tmp_path):
    settings = load_settings({
        **BASE_ENV, "STORAGE_BACKEND": "local", "LOCAL_DB_PATH": str(tmp_path / "db.json")
    })
    storage = create_storage(settings)
    assert isinstance(storage, LocalStorageService)
    assert storage.db_path == tmp_path / "db.json"
