"""Canonical meta keys per post type.

Meta keys are namespaced by post type (``event.eventDate``). Each key has a
declared value type, which decides the slot a value is written to.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from src.common.models import MetaInput, PostType


class MetaValueType(str, Enum):
    """Which value slot of a meta record a key uses."""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    JSON = "json"


class NewsMetaKey(str, Enum):
    CATEGORY = "news.category"  # notice, press, activity
    VIEW_COUNT = "news.viewCount"
    IMAGES = "news.images"


class EventMetaKey(str, Enum):
    EVENT_DATE = "event.eventDate"
    END_DATE = "event.endDate"
    REGISTRATION_DEADLINE = "event.registrationDeadline"
    LOCATION = "event.location"
    CATEGORY = "event.category"  # networking, seminar, workshop, cultural
    EVENT_TYPE = "event.eventType"  # offline, online, hybrid
    CAPACITY = "event.capacity"
    FEE = "event.fee"
    IS_PUBLIC = "event.isPublic"
    REQUIRES_APPROVAL = "event.requiresApproval"
    SPEAKERS = "event.speakers"
    PROGRAM = "event.program"
    IMAGES = "event.images"


class ResourceMetaKey(str, Enum):
    CATEGORY = "resource.category"  # reports, forms, presentations, guides
    FILE_URL = "resource.fileUrl"
    FILE_NAME = "resource.fileName"
    FILE_SIZE = "resource.fileSize"  # bytes
    FILE_TYPE = "resource.fileType"
    ACCESS_LEVEL = "resource.accessLevel"  # public, members, premium, private
    DOWNLOAD_COUNT = "resource.downloadCount"


POST_META_KEYS: dict[PostType, type[Enum]] = {
    PostType.NEWS: NewsMetaKey,
    PostType.EVENT: EventMetaKey,
    PostType.RESOURCE: ResourceMetaKey,
}

# Keyed by the field name after the namespace; anything missing is text.
_FIELD_TYPES: dict[str, MetaValueType] = {
    "viewCount": MetaValueType.NUMBER,
    "downloadCount": MetaValueType.NUMBER,
    "capacity": MetaValueType.NUMBER,
    "fee": MetaValueType.NUMBER,
    "fileSize": MetaValueType.NUMBER,
    "eventDate": MetaValueType.TIMESTAMP,
    "endDate": MetaValueType.TIMESTAMP,
    "registrationDeadline": MetaValueType.TIMESTAMP,
    "isPublic": MetaValueType.BOOLEAN,
    "requiresApproval": MetaValueType.BOOLEAN,
    "images": MetaValueType.JSON,
    "speakers": MetaValueType.JSON,
    "program": MetaValueType.JSON,
}

_SLOTS: dict[MetaValueType, str] = {
    MetaValueType.TEXT: "value_text",
    MetaValueType.NUMBER: "value_number",
    MetaValueType.BOOLEAN: "value_boolean",
    MetaValueType.TIMESTAMP: "value_timestamp",
    MetaValueType.JSON: "value",
}


def get_meta_value_type(key: str) -> MetaValueType:
    """Declared value type of a meta key, e.g. 'event.capacity' -> NUMBER."""
    parts = str(key.value if isinstance(key, Enum) else key).split(".")
    if len(parts) < 2:
        return MetaValueType.TEXT
    return _FIELD_TYPES.get(parts[1], MetaValueType.TEXT)


def build_meta(key: str, value: Any) -> MetaInput:
    """Build a meta upsert body with ``value`` in the slot the key declares."""
    key_str = key.value if isinstance(key, Enum) else key
    if value is None:
        return MetaInput(key=key_str)
    slot = _SLOTS[get_meta_value_type(key_str)]
    return MetaInput(key=key_str, **{slot: value})
