"""Read-side helpers projecting a post into display-ready values.

Meta records carry five nullable value slots. The effective value of a
record is the first non-null slot in the order text, number, boolean,
timestamp, generic JSON. Typed getters never coerce: a value of the wrong
runtime type is reported as None.

Translations resolve with the chain: requested locale, the post's primary
locale, then the first stored translation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, NamedTuple, Optional, Union

from src.common.models import PostMeta, PostTranslation, PostWithTranslations

from .meta_keys import EventMetaKey, MetaValueType

MetaLike = Union[PostMeta, Mapping[str, Any]]

# "+0900" -> "+09:00" after a time component
_COMPACT_OFFSET = re.compile(r"(T[\d:.]+[+-]\d{2})(\d{2})$")

# Slot attribute and the kind it resolves to, highest priority first.
_PRIORITY: tuple[tuple[str, MetaValueType], ...] = (
    ("value_text", MetaValueType.TEXT),
    ("value_number", MetaValueType.NUMBER),
    ("value_boolean", MetaValueType.BOOLEAN),
    ("value_timestamp", MetaValueType.TIMESTAMP),
    ("value", MetaValueType.JSON),
)


class MetaValue(NamedTuple):
    """Resolved value of a meta record, tagged with the slot it came from."""
    kind: MetaValueType
    value: Any


def _as_meta(item: MetaLike) -> PostMeta:
    if isinstance(item, PostMeta):
        return item
    return PostMeta.model_validate(item)


def _key_of(item: MetaLike) -> Any:
    if isinstance(item, PostMeta):
        return item.key
    return item.get("key")


def resolve_meta(meta: MetaLike) -> Optional[MetaValue]:
    """First non-null slot of a single record, or None if all are null."""
    record = _as_meta(meta)
    for attr, kind in _PRIORITY:
        value = getattr(record, attr)
        if value is not None:
            return MetaValue(kind, value)
    return None


def find_meta(meta: Iterable[MetaLike], key: str) -> Optional[PostMeta]:
    """First record with ``key``; later duplicates are ignored.

    Only the matching record is validated, so a malformed record under
    another key does not affect the lookup.
    """
    for item in meta:
        if _key_of(item) == key:
            return _as_meta(item)
    return None


def get_meta_value(meta: Iterable[MetaLike], key: str) -> Any:
    """Effective value for ``key``, or None when the key is absent or empty."""
    record = find_meta(meta, key)
    if record is None:
        return None
    resolved = resolve_meta(record)
    return resolved.value if resolved else None


def get_meta_text(meta: Iterable[MetaLike], key: str) -> Optional[str]:
    value = get_meta_value(meta, key)
    return value if isinstance(value, str) else None


def get_meta_number(meta: Iterable[MetaLike], key: str) -> Optional[float]:
    """Numeric value; booleans do not count as numbers."""
    value = get_meta_value(meta, key)
    if isinstance(value, bool):
        return None
    return value if isinstance(value, (int, float)) else None


def get_meta_boolean(meta: Iterable[MetaLike], key: str) -> Optional[bool]:
    value = get_meta_value(meta, key)
    return value if isinstance(value, bool) else None


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime string; None if it is not one.

    Accepts a ``Z`` suffix and compact offsets such as ``+0900``. Free-form
    dates ("March 15, 2026", RFC 2822) are not recognized and yield None.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _COMPACT_OFFSET.sub(r"\1:\2", text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def get_meta_timestamp(meta: Iterable[MetaLike], key: str) -> Optional[datetime]:
    """Timestamp value, accepting a datetime or a parseable string."""
    value = get_meta_value(meta, key)
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_timestamp(value)
    return None


def get_meta_array(meta: Iterable[MetaLike], key: str) -> Optional[list]:
    value = get_meta_value(meta, key)
    return value if isinstance(value, list) else None


def get_meta_object(meta: Iterable[MetaLike], key: str) -> Optional[dict]:
    value = get_meta_value(meta, key)
    return value if isinstance(value, dict) else None


# ---------------------------------------------------------------------------
# Translations
# ---------------------------------------------------------------------------

def get_translation(post: PostWithTranslations, locale: str) -> Optional[PostTranslation]:
    """Best translation for ``locale``, or None if the post has none."""
    if not post.translations:
        return None

    for translation in post.translations:
        if translation.locale == locale:
            return translation

    for translation in post.translations:
        if translation.locale == post.primary_locale:
            return translation

    return post.translations[0]


def get_translation_safe(post: PostWithTranslations, locale: str) -> PostTranslation:
    """Like get_translation, but synthesizes a slug-titled placeholder.

    The requested locale is copied onto the placeholder as given.
    """
    translation = get_translation(post, locale)
    if translation is not None:
        return translation

    return PostTranslation(
        id=f"fallback-{post.id}",
        post_id=post.id,
        locale=locale,
        title=post.slug,
        subtitle=None,
        excerpt=None,
        content=None,
        seo_title=None,
        seo_description=None,
        seo_keywords=None,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


# ---------------------------------------------------------------------------
# Event projection
# ---------------------------------------------------------------------------

@dataclass
class EventMeta:
    """Typed view over the meta records of an event post."""
    event_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    location: Optional[str] = None
    category: Optional[str] = None
    event_type: Optional[str] = None
    capacity: Optional[float] = None
    fee: Optional[float] = None
    is_public: Optional[bool] = None
    requires_approval: Optional[bool] = None
    speakers: Optional[list] = None
    program: Optional[list] = None
    images: Optional[list] = None


def get_event_meta(post: PostWithTranslations) -> EventMeta:
    """Extract all event meta fields from a post."""
    meta = post.meta or []
    return EventMeta(
        event_date=get_meta_timestamp(meta, EventMetaKey.EVENT_DATE),
        end_date=get_meta_timestamp(meta, EventMetaKey.END_DATE),
        registration_deadline=get_meta_timestamp(meta, EventMetaKey.REGISTRATION_DEADLINE),
        location=get_meta_text(meta, EventMetaKey.LOCATION),
        category=get_meta_text(meta, EventMetaKey.CATEGORY),
        event_type=get_meta_text(meta, EventMetaKey.EVENT_TYPE),
        capacity=get_meta_number(meta, EventMetaKey.CAPACITY),
        fee=get_meta_number(meta, EventMetaKey.FEE),
        is_public=get_meta_boolean(meta, EventMetaKey.IS_PUBLIC),
        requires_approval=get_meta_boolean(meta, EventMetaKey.REQUIRES_APPROVAL),
        speakers=get_meta_array(meta, EventMetaKey.SPEAKERS),
        program=get_meta_array(meta, EventMetaKey.PROGRAM),
        images=get_meta_array(meta, EventMetaKey.IMAGES),
    )
