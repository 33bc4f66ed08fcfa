import re
import uuid

from pointnotes.exceptions import InvalidIdentifier

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)


def generate() -> str:
    return str(uuid.uuid4())


def validate_format(value) -> bool:
    """8-4-4-4-12 hex groups, any case. Version bits are not checked."""
    return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None


def require_valid(value, label: str = "resource") -> str:
    if not validate_format(value):
        raise InvalidIdentifier(f"Invalid {label} ID format")
    return value
