"""Admin form <-> unified post mappers.

The admin screens edit news, events and resources as flat forms. These
mappers split a form into the three write payloads PostApi expects, and
project a stored post back into a form for editing.

Usage:
    payload = map_event_form_to_post(form, author_id=user.id)
    PostApi(client).create_post(*payload)
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from src.common.config import settings
from src.common.models import (
    MetaInput,
    PostInput,
    PostStatus,
    PostType,
    PostWithTranslations,
    TranslationInput,
    Visibility,
)

from .helpers import (
    get_meta_array,
    get_meta_number,
    get_meta_text,
    get_meta_timestamp,
    get_translation,
)
from .meta_keys import EventMetaKey, NewsMetaKey, ResourceMetaKey, build_meta

SLUG_MAX_LENGTH = 100

ACCESS_LEVEL_VISIBILITY: dict[str, Visibility] = {
    "public": Visibility.PUBLIC,
    "members": Visibility.MEMBERS,
    "premium": Visibility.PREMIUM,
    "private": Visibility.INTERNAL,
}


class PostPayload(NamedTuple):
    """The three write payloads of one post."""
    post: PostInput
    translation: TranslationInput
    meta: list[MetaInput]


def create_slug(title: str) -> str:
    """URL slug from a title, keeping ASCII letters, digits and Hangul.

    Example: "2026 Korea-China Forum!" -> "2026-korea-china-forum"
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9가-힣]", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug[:SLUG_MAX_LENGTH]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _default_locale(locale: Optional[str]) -> str:
    return locale or settings.locale.default_locale


# ============================================
# NEWS
# ============================================

class NewsForm(BaseModel):
    title: str
    excerpt: str = ""
    content: str = ""
    category: str
    featured_image: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    is_published: bool = False
    published_at: Optional[datetime] = None


def map_news_form_to_post(
    form: NewsForm,
    author_id: str,
    locale: Optional[str] = None,
) -> PostPayload:
    """Split a news form into post, translation and meta payloads.

    An existing ``published_at`` is kept when re-publishing; a newly
    published article is stamped with the current time.
    """
    published_at = None
    if form.is_published:
        published_at = form.published_at or _now()

    post = PostInput(
        post_type=PostType.NEWS,
        slug=create_slug(form.title),
        author_id=author_id,
        status=PostStatus.PUBLISHED if form.is_published else PostStatus.DRAFT,
        visibility=Visibility.PUBLIC,
        is_featured=False,
        tags=[form.category],
        published_at=published_at,
        cover_image=form.featured_image or None,
    )
    translation = TranslationInput(
        locale=_default_locale(locale),
        title=form.title,
        excerpt=form.excerpt,
        content=form.content,
    )
    meta = [build_meta(NewsMetaKey.CATEGORY, form.category)]
    if form.images:
        meta.append(build_meta(NewsMetaKey.IMAGES, form.images))
    return PostPayload(post, translation, meta)


def map_post_to_news_form(post: PostWithTranslations, locale: Optional[str] = None) -> NewsForm:
    translation = get_translation(post, _default_locale(locale))
    meta = post.meta
    return NewsForm(
        title=(translation.title if translation else None) or post.slug,
        excerpt=(translation.excerpt if translation else None) or "",
        content=(translation.content if translation else None) or "",
        category=get_meta_text(meta, NewsMetaKey.CATEGORY) or (post.tags[0] if post.tags else ""),
        featured_image=post.cover_image,
        images=get_meta_array(meta, NewsMetaKey.IMAGES) or [],
        is_published=post.status == PostStatus.PUBLISHED,
        published_at=post.published_at,
    )


# ============================================
# EVENTS
# ============================================

class EventForm(BaseModel):
    title: str
    description: str = ""
    content: str = ""
    event_date: datetime
    end_date: Optional[datetime] = None
    location: str
    category: str
    event_type: str = "offline"
    capacity: Optional[int] = None
    fee: int = 0
    registration_deadline: Optional[datetime] = None
    images: list[str] = Field(default_factory=list)
    is_public: bool = True


def map_event_form_to_post(
    form: EventForm,
    author_id: str,
    locale: Optional[str] = None,
) -> PostPayload:
    """Split an event form; events are published immediately."""
    post = PostInput(
        post_type=PostType.EVENT,
        slug=create_slug(form.title),
        author_id=author_id,
        status=PostStatus.PUBLISHED,
        visibility=Visibility.PUBLIC if form.is_public else Visibility.MEMBERS,
        is_featured=False,
        tags=[form.category],
        published_at=_now(),
    )
    translation = TranslationInput(
        locale=_default_locale(locale),
        title=form.title,
        excerpt=form.description,
        content=form.content,
    )

    meta = [build_meta(EventMetaKey.EVENT_DATE, form.event_date)]
    if form.end_date:
        meta.append(build_meta(EventMetaKey.END_DATE, form.end_date))
    meta.extend([
        build_meta(EventMetaKey.LOCATION, form.location),
        build_meta(EventMetaKey.CATEGORY, form.category),
        build_meta(EventMetaKey.EVENT_TYPE, form.event_type),
    ])
    if form.capacity:
        meta.append(build_meta(EventMetaKey.CAPACITY, form.capacity))
    meta.append(build_meta(EventMetaKey.FEE, form.fee))
    if form.registration_deadline:
        meta.append(build_meta(EventMetaKey.REGISTRATION_DEADLINE, form.registration_deadline))
    if form.images:
        meta.append(build_meta(EventMetaKey.IMAGES, form.images))
    return PostPayload(post, translation, meta)


def map_post_to_event_form(post: PostWithTranslations, locale: Optional[str] = None) -> EventForm:
    translation = get_translation(post, _default_locale(locale))
    meta = post.meta
    capacity = get_meta_number(meta, EventMetaKey.CAPACITY)
    fee = get_meta_number(meta, EventMetaKey.FEE)
    return EventForm(
        title=(translation.title if translation else None) or post.slug,
        description=(translation.excerpt if translation else None) or "",
        content=(translation.content if translation else None) or "",
        event_date=get_meta_timestamp(meta, EventMetaKey.EVENT_DATE) or post.published_at or _now(),
        end_date=get_meta_timestamp(meta, EventMetaKey.END_DATE),
        location=get_meta_text(meta, EventMetaKey.LOCATION) or "",
        category=get_meta_text(meta, EventMetaKey.CATEGORY) or (post.tags[0] if post.tags else ""),
        event_type=get_meta_text(meta, EventMetaKey.EVENT_TYPE) or "offline",
        capacity=int(capacity) if capacity is not None else None,
        fee=int(fee) if fee is not None else 0,
        registration_deadline=get_meta_timestamp(meta, EventMetaKey.REGISTRATION_DEADLINE),
        images=get_meta_array(meta, EventMetaKey.IMAGES) or [],
        is_public=post.visibility == Visibility.PUBLIC,
    )


# ============================================
# RESOURCES
# ============================================

class ResourceForm(BaseModel):
    title: str
    description: str = ""
    category: str
    file_url: str
    file_name: str
    file_type: str
    file_size: Optional[int] = None
    access_level: str = "public"
    is_active: bool = True


def map_resource_form_to_post(
    form: ResourceForm,
    author_id: str,
    locale: Optional[str] = None,
) -> PostPayload:
    """Split a resource form; access level maps onto post visibility."""
    post = PostInput(
        post_type=PostType.RESOURCE,
        slug=create_slug(form.title),
        author_id=author_id,
        status=PostStatus.PUBLISHED if form.is_active else PostStatus.DRAFT,
        visibility=ACCESS_LEVEL_VISIBILITY.get(form.access_level, Visibility.PUBLIC),
        is_featured=False,
        tags=[form.category],
        published_at=_now() if form.is_active else None,
    )
    translation = TranslationInput(
        locale=_default_locale(locale),
        title=form.title,
        excerpt=form.description,
        content="",
    )
    meta = [
        build_meta(ResourceMetaKey.CATEGORY, form.category),
        build_meta(ResourceMetaKey.FILE_URL, form.file_url),
        build_meta(ResourceMetaKey.FILE_NAME, form.file_name),
        build_meta(ResourceMetaKey.FILE_TYPE, form.file_type),
        build_meta(ResourceMetaKey.ACCESS_LEVEL, form.access_level),
    ]
    if form.file_size is not None:
        meta.append(build_meta(ResourceMetaKey.FILE_SIZE, form.file_size))
    return PostPayload(post, translation, meta)


def map_post_to_resource_form(post: PostWithTranslations, locale: Optional[str] = None) -> ResourceForm:
    translation = get_translation(post, _default_locale(locale))
    meta = post.meta
    file_size = get_meta_number(meta, ResourceMetaKey.FILE_SIZE)
    return ResourceForm(
        title=(translation.title if translation else None) or post.slug,
        description=(translation.excerpt if translation else None) or "",
        category=get_meta_text(meta, ResourceMetaKey.CATEGORY) or (post.tags[0] if post.tags else ""),
        file_url=get_meta_text(meta, ResourceMetaKey.FILE_URL) or "",
        file_name=get_meta_text(meta, ResourceMetaKey.FILE_NAME) or "",
        file_type=get_meta_text(meta, ResourceMetaKey.FILE_TYPE) or "",
        file_size=int(file_size) if file_size is not None else None,
        access_level=get_meta_text(meta, ResourceMetaKey.ACCESS_LEVEL) or "public",
        is_active=post.status == PostStatus.PUBLISHED,
    )
