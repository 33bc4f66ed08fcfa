"""
请求体校验 (payload validation shared by both storage backends).

Every function either returns normalized fields or raises a ValidationException
subclass naming the offending field. Nothing here touches storage.
"""
import json
import math
from typing import Any, Dict, Optional, Union

from pointnotes.exceptions import (
    InvalidPayload,
    InvalidPosition,
    MissingName,
    MissingPath,
    TextTooLong,
)

MAX_TEXT_BYTES = 256

# DynamoDB number range
MAX_NUMBER_DIGITS = 38
MIN_NUMBER_MAGNITUDE = 1e-130
MAX_NUMBER_MAGNITUDE = 1e126


def _reject_constant(name: str):
    raise ValueError(f"Unsupported JSON constant: {name}")


def parse_body(raw: Optional[Union[str, bytes]]) -> Dict[str, Any]:
    """Decode a raw request body into a JSON object."""
    if raw is None:
        raise InvalidPayload("Invalid JSON body")
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidPayload("Invalid JSON body")
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidPayload("Invalid JSON body")
    if not isinstance(data, dict):
        raise InvalidPayload("JSON body must be an object")
    try:
        # lone surrogates such as "\ud800" decode but have no UTF-8 encoding
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPayload("Invalid JSON body")
    return data


def utf8_length(text: str) -> int:
    return len(text.encode("utf-8"))


def _in_number_range(value: Union[int, float]) -> bool:
    if isinstance(value, int) and len(str(abs(value))) > MAX_NUMBER_DIGITS:
        return False
    try:
        magnitude = abs(float(value))
    except OverflowError:
        return False
    if not math.isfinite(magnitude):
        return False
    return magnitude == 0 or MIN_NUMBER_MAGNITUDE <= magnitude < MAX_NUMBER_MAGNITUDE


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but is not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return _in_number_range(value)


def _numbers_in_range(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return _in_number_range(value)
    if isinstance(value, dict):
        return all(_numbers_in_range(v) for v in value.values())
    if isinstance(value, list):
        return all(_numbers_in_range(v) for v in value)
    return True


def validate_text(data: Dict[str, Any]) -> str:
    text = data.get("text")
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise InvalidPayload("Text must be a string")
    if utf8_length(text) > MAX_TEXT_BYTES:
        raise TextTooLong(f"Text exceeds {MAX_TEXT_BYTES} bytes limit")
    return text


def validate_position(data: Dict[str, Any]) -> Dict[str, Any]:
    position = data.get("position")
    if not isinstance(position, dict) or not all(
        _is_number(position.get(axis)) for axis in ("x", "y", "z")
    ):
        raise InvalidPosition("Invalid position coordinates")
    return {"x": position["x"], "y": position["y"], "z": position["z"]}


def _optional_object(data: Dict[str, Any], field: str) -> Optional[Dict[str, Any]]:
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise InvalidPayload(f"{field} must be an object")
    if not _numbers_in_range(value):
        raise InvalidPayload(f"{field} contains an out-of-range number")
    return value


def _optional_reference(data: Dict[str, Any], field: str) -> Optional[str]:
    value = data.get(field)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidPayload(f"{field} must be a string")
    return value


def validate_annotation_create(data: Dict[str, Any]) -> Dict[str, Any]:
    position = validate_position(data)
    text = validate_text(data)
    return {
        "pointCloudId": _optional_reference(data, "pointCloudId"),
        "position": position,
        "text": text,
        "cameraPosition": _optional_object(data, "cameraPosition"),
        "cameraTarget": _optional_object(data, "cameraTarget"),
    }


def validate_annotation_update(data: Dict[str, Any]) -> Dict[str, Any]:
    # only text is mutable; a missing text clears the note
    return {"text": validate_text(data)}


def _required_string(data: Dict[str, Any], field: str) -> Optional[str]:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def normalize_path(path: str) -> str:
    path = path.strip()
    if not path.endswith("/"):
        path += "/"
    return path


def validate_point_cloud_create(data: Dict[str, Any]) -> Dict[str, Any]:
    name = _required_string(data, "name")
    if name is None:
        raise MissingName("Name is required")
    path = _required_string(data, "path")
    if path is None:
        raise MissingPath("Path is required")
    return {"name": name, "path": normalize_path(path)}
