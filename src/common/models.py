"""Shared Pydantic data models for the CMS client.

These mirror the JSON documents served by the CMS REST API. The API speaks
camelCase; models expose snake_case attributes and accept either form.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


# === Enums ===

class PostType(str, Enum):
    """Kinds of unified posts."""
    NEWS = "news"
    EVENT = "event"
    RESOURCE = "resource"


class PostStatus(str, Enum):
    """Publication status of a post."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Visibility(str, Enum):
    """Audience a post is visible to."""
    PUBLIC = "public"
    MEMBERS = "members"
    PREMIUM = "premium"
    INTERNAL = "internal"
    STAFF = "staff"


class UserType(str, Enum):
    """Account type chosen at registration."""
    STAFF = "staff"
    COMPANY = "company"


class CMSModel(BaseModel):
    """Base for all wire models: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self, exclude_unset: bool = False) -> dict:
        """Serialize for a JSON request body (camelCase, JSON-safe values)."""
        return self.model_dump(
            by_alias=True,
            mode="json",
            exclude_unset=exclude_unset,
        )


# === Users ===

class User(CMSModel):
    """Signed-in account as returned by /api/auth/me (password stripped)."""
    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    name: str = ""
    role: str = "member"
    is_active: bool = True
    permissions: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CompanyData(CMSModel):
    """Extra registration details for company accounts."""
    company_name: str
    business: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


class AuthResponse(CMSModel):
    """Body of a successful login or registration."""
    user: User
    token: str


# === Posts ===

def _null_to_default(model: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    """Replace an explicit null with the field's declared default."""
    if value is None:
        return model.model_fields[info.field_name].get_default(call_default_factory=True)
    return value


class Post(CMSModel):
    """Base post record.

    Rows migrated from the legacy tables may carry nulls in columns that
    have defaults here; those nulls read as the default.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    slug: str = ""
    post_type: Optional[PostType] = None
    author_id: Optional[str] = None
    status: Optional[PostStatus] = None
    visibility: Optional[Visibility] = None
    primary_locale: str = "ko"
    is_featured: bool = False
    tags: list[str] = Field(default_factory=list)
    cover_image: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("slug", "primary_locale", "is_featured", "tags", mode="before")
    @classmethod
    def _defaults_for_null(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_to_default(cls, value, info)


class PostTranslation(CMSModel):
    """Locale-specific text of a post."""
    id: str
    post_id: str
    locale: str
    title: str
    subtitle: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[list[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostMeta(CMSModel):
    """Typed key/value record attached to a post.

    The value slots hold the wire values untouched. Type checks and
    timestamp parsing happen in the typed getters of ``src.posts.helpers``.
    """
    id: Optional[str] = None
    post_id: Optional[str] = None
    key: str
    value_text: Any = None
    value_number: Any = None
    value_boolean: Any = None
    value_timestamp: Any = None
    value: Any = None


class PostWithTranslations(Post):
    """Post with its translations and meta records."""
    translations: list[PostTranslation] = Field(default_factory=list)
    meta: list[PostMeta] = Field(default_factory=list)

    @field_validator("translations", "meta", mode="before")
    @classmethod
    def _empty_for_null(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_to_default(cls, value, info)


class PostListResult(CMSModel):
    """Page of posts from GET /api/posts."""
    posts: list[PostWithTranslations] = Field(default_factory=list)
    total: int = 0


# === Event registrations ===

class RegistrationStatus(str, Enum):
    """Lifecycle of an event registration."""
    REGISTERED = "registered"
    APPROVED = "approved"
    CANCELLED = "cancelled"
    ATTENDED = "attended"


class EventRegistration(CMSModel):
    """Attendee record returned by the event registration endpoints."""
    model_config = ConfigDict(extra="allow")

    id: str
    event_id: Optional[str] = None
    user_id: Optional[str] = None
    attendee_name: Optional[str] = None
    attendee_email: Optional[str] = None
    attendee_phone: Optional[str] = None
    company_name: Optional[str] = None
    status: str = RegistrationStatus.REGISTERED.value
    payment_status: Optional[str] = None  # free, paid, pending
    registered_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _registered_for_null(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_to_default(cls, value, info)


# === Write payloads ===

class PostInput(CMSModel):
    """Fields accepted when creating or patching a post.

    Only fields that were explicitly set are sent on update.
    """
    post_type: Optional[PostType] = None
    slug: Optional[str] = None
    author_id: Optional[str] = None
    status: Optional[PostStatus] = None
    visibility: Optional[Visibility] = None
    primary_locale: Optional[str] = None
    is_featured: Optional[bool] = None
    tags: Optional[list[str]] = None
    cover_image: Optional[str] = None
    published_at: Optional[datetime] = None


class TranslationInput(CMSModel):
    """Translation body for the upsert endpoint (keyed by locale)."""
    locale: str
    title: str
    subtitle: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[list[str]] = None


class MetaInput(CMSModel):
    """Meta body for the upsert endpoint (keyed by key)."""
    key: str
    value_text: Optional[str] = None
    value_number: Optional[float] = None
    value_boolean: Optional[bool] = None
    value_timestamp: Optional[datetime] = None
    value: Any = None


class RegistrationInput(CMSModel):
    """Attendee details sent when registering for an event."""
    attendee_name: str
    attendee_email: str
    attendee_phone: Optional[str] = None
    company_name: Optional[str] = None
