"""Tests for meta key catalog and value-slot selection."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.common.models import PostType
from src.posts.meta_keys import (
    POST_META_KEYS,
    EventMetaKey,
    MetaValueType,
    NewsMetaKey,
    ResourceMetaKey,
    build_meta,
    get_meta_value_type,
)


class TestCatalog:
    @pytest.mark.parametrize("post_type", list(PostType))
    def test_keys_are_namespaced_by_post_type(self, post_type):
        for key in POST_META_KEYS[post_type]:
            assert key.value.startswith(f"{post_type.value}.")

    def test_enum_equals_wire_string(self):
        assert EventMetaKey.EVENT_DATE == "event.eventDate"


class TestGetMetaValueType:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("event.capacity", MetaValueType.NUMBER),
            ("resource.fileSize", MetaValueType.NUMBER),
            ("news.viewCount", MetaValueType.NUMBER),
            ("event.eventDate", MetaValueType.TIMESTAMP),
            ("event.isPublic", MetaValueType.BOOLEAN),
            ("event.speakers", MetaValueType.JSON),
            ("news.category", MetaValueType.TEXT),
            ("event.location", MetaValueType.TEXT),
        ],
    )
    def test_declared_types(self, key, expected):
        assert get_meta_value_type(key) == expected

    def test_enum_member(self):
        assert get_meta_value_type(ResourceMetaKey.DOWNLOAD_COUNT) == MetaValueType.NUMBER

    def test_unknown_key_is_text(self):
        assert get_meta_value_type("custom.anything") == MetaValueType.TEXT

    def test_key_without_namespace_is_text(self):
        assert get_meta_value_type("capacity") == MetaValueType.TEXT


class TestBuildMeta:
    def test_text_slot(self):
        meta = build_meta(NewsMetaKey.CATEGORY, "press")
        assert meta.key == "news.category"
        assert meta.value_text == "press"
        assert meta.value_number is None

    def test_number_slot(self):
        meta = build_meta(EventMetaKey.FEE, 30000)
        assert meta.value_number == 30000
        assert meta.value_text is None

    def test_timestamp_slot(self):
        when = datetime(2026, 3, 15, 10, 0, tzinfo=timezone.utc)
        meta = build_meta(EventMetaKey.EVENT_DATE, when)
        assert meta.value_timestamp == when
        assert meta.to_payload()["valueTimestamp"].startswith("2026-03-15T10:00:00")

    def test_boolean_slot(self):
        assert build_meta(EventMetaKey.REQUIRES_APPROVAL, True).value_boolean is True

    def test_json_slot(self):
        speakers = [{"name": "이순신", "title": "대표"}]
        assert build_meta(EventMetaKey.SPEAKERS, speakers).value == speakers

    def test_none_clears_every_slot(self):
        payload = build_meta(EventMetaKey.CAPACITY, None).to_payload()
        assert payload["key"] == "event.capacity"
        assert all(payload[slot] is None for slot in
                   ("valueText", "valueNumber", "valueBoolean", "valueTimestamp", "value"))

    def test_plain_string_key(self):
        assert build_meta("resource.fileUrl", "https://x/y.pdf").value_text == "https://x/y.pdf"
