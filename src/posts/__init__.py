# Posts: Publishing orchestration and read-side projection for unified posts
"""
Posts module for the CMS client.

Creates and updates posts as base record + translation + meta, resolves
typed meta values and locale fallbacks, and maps admin forms to payloads.
"""

from .api import PostApi
from .helpers import (
    EventMeta,
    MetaValue,
    get_event_meta,
    get_meta_array,
    get_meta_boolean,
    get_meta_number,
    get_meta_object,
    get_meta_text,
    get_meta_timestamp,
    get_meta_value,
    get_translation,
    get_translation_safe,
    resolve_meta,
)
from .mappers import (
    EventForm,
    NewsForm,
    PostPayload,
    ResourceForm,
    create_slug,
    map_event_form_to_post,
    map_news_form_to_post,
    map_post_to_event_form,
    map_post_to_news_form,
    map_post_to_resource_form,
    map_resource_form_to_post,
)
from .meta_keys import (
    POST_META_KEYS,
    EventMetaKey,
    MetaValueType,
    NewsMetaKey,
    ResourceMetaKey,
    build_meta,
    get_meta_value_type,
)

__all__ = [
    "EventForm",
    "EventMeta",
    "EventMetaKey",
    "MetaValue",
    "MetaValueType",
    "NewsForm",
    "NewsMetaKey",
    "POST_META_KEYS",
    "PostApi",
    "PostPayload",
    "ResourceForm",
    "ResourceMetaKey",
    "build_meta",
    "create_slug",
    "get_event_meta",
    "get_meta_array",
    "get_meta_boolean",
    "get_meta_number",
    "get_meta_object",
    "get_meta_text",
    "get_meta_timestamp",
    "get_meta_value",
    "get_meta_value_type",
    "get_translation",
    "get_translation_safe",
    "map_event_form_to_post",
    "map_news_form_to_post",
    "map_post_to_event_form",
    "map_post_to_news_form",
    "map_post_to_resource_form",
    "map_resource_form_to_post",
    "resolve_meta",
]
