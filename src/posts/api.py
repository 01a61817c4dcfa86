"""Post publishing against the CMS REST API.

A post is stored as three kinds of record: the base post, one translation
per locale and any number of meta records. Creating or updating a post from
an admin form therefore takes several calls, issued strictly one after the
other:

    create: POST /api/posts -> POST /api/posts/:id/translations
            -> POST /api/posts/:id/meta (once per item)
    update: PATCH /api/posts/:id (skipped for an empty patch)
            -> POST /api/posts/:id/translations (upsert by locale)
            -> POST /api/posts/:id/meta (upsert by key, once per item)
            -> GET /api/posts/:id

The sequence is not atomic. When a later call fails the earlier ones stay
committed and the error propagates; nothing is retried or rolled back.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, TypeAdapter

from src.common.http_client import ApiClient
from src.common.logging import setup_logging
from src.common.models import (
    EventRegistration,
    MetaInput,
    Post,
    PostInput,
    PostListResult,
    PostStatus,
    PostType,
    PostWithTranslations,
    RegistrationInput,
    TranslationInput,
    Visibility,
)

logger = setup_logging(module_name="posts.api")

Payload = Union[BaseModel, Mapping[str, Any]]

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20

_MAPPING_ADAPTER = TypeAdapter(dict[str, Any])
_REGISTRATIONS_ADAPTER = TypeAdapter(list[EventRegistration])


def to_body(payload: Payload, partial: bool = False) -> dict:
    """JSON body for a model or mapping.

    Models serialize by alias; with ``partial`` only explicitly set fields
    are kept, so an untouched PostInput becomes an empty patch.
    """
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, mode="json", exclude_unset=partial)
    return _MAPPING_ADAPTER.dump_python(dict(payload), mode="json")


class PostApi:
    """Create, update and read unified posts and their event registrations."""

    def __init__(self, client: ApiClient):
        self._client = client

    # --- Orchestrated writes ---

    def create_post(
        self,
        post: Union[PostInput, Mapping[str, Any]],
        translation: Union[TranslationInput, Mapping[str, Any]],
        meta: Iterable[Union[MetaInput, Mapping[str, Any]]] = (),
    ) -> Post:
        """Create a post with its translation and meta.

        Returns:
            The base record as returned by the create call; translation and
            meta are not reflected in it.
        """
        response = self._client.post("/api/posts", json=to_body(post, partial=True))
        data = response.json()
        post_id = data["id"]
        logger.info("Created post %s", post_id)

        self._client.post(f"/api/posts/{post_id}/translations", json=to_body(translation))

        count = self._write_meta(post_id, meta)
        logger.info("Post %s: translation and %d meta item(s) saved", post_id, count)
        return Post.model_validate(data)

    def update_post(
        self,
        post_id: str,
        post: Union[PostInput, Mapping[str, Any]],
        translation: Union[TranslationInput, Mapping[str, Any]],
        meta: Iterable[Union[MetaInput, Mapping[str, Any]]] = (),
    ) -> PostWithTranslations:
        """Patch a post, upsert its translation and meta, and re-read it."""
        patch = to_body(post, partial=True)
        if patch:
            self._client.patch(f"/api/posts/{post_id}", json=patch)
        else:
            logger.debug("Post %s: empty patch, skipping base update", post_id)

        self._client.post(f"/api/posts/{post_id}/translations", json=to_body(translation))

        count = self._write_meta(post_id, meta)
        logger.info("Updated post %s (%d meta item(s))", post_id, count)
        return self.get_post(post_id)

    def _write_meta(
        self,
        post_id: str,
        meta: Iterable[Union[MetaInput, Mapping[str, Any]]],
    ) -> int:
        """Send meta items one request at a time; the first failure aborts."""
        count = 0
        for item in meta:
            self._client.post(f"/api/posts/{post_id}/meta", json=to_body(item))
            count += 1
        return count

    # --- Single calls ---

    def get_post(self, post_id: str, locale: Optional[str] = None) -> PostWithTranslations:
        """Fetch a post with translations (optionally one locale) and meta."""
        params = {"locale": locale} if locale else None
        response = self._client.get(f"/api/posts/{post_id}", params=params)
        return PostWithTranslations.model_validate(response.json())

    def list_posts(
        self,
        post_type: Optional[PostType | str] = None,
        status: Optional[PostStatus | str] = None,
        visibility: Optional[Visibility | str] = None,
        tags: Optional[list[str]] = None,
        author_id: Optional[str] = None,
        locale: Optional[str] = None,
        search: Optional[str] = None,
        upcoming: bool = False,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> PostListResult:
        """List posts with server-side filters.

        Raises:
            ValueError: If limit is outside 1..100 or offset is negative.
        """
        if not 0 < limit <= MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")

        params = {
            "postType": _enum_value(post_type),
            "status": _enum_value(status),
            "visibility": _enum_value(visibility),
            "tags": ",".join(tags) if tags else None,
            "authorId": author_id,
            "locale": locale,
            "search": search,
            "upcoming": "true" if upcoming else None,
            "limit": limit,
            "offset": offset,
        }
        response = self._client.get("/api/posts", params=params)
        return PostListResult.model_validate(response.json())

    def delete_post(self, post_id: str) -> None:
        """Delete a post; translations and meta cascade server-side."""
        self._client.delete(f"/api/posts/{post_id}")
        logger.info("Deleted post %s", post_id)

    def increment_meta(self, post_id: str, key: str, amount: float = 1) -> Any:
        """Atomically bump a numeric meta value; returns the new value."""
        response = self._client.post(
            f"/api/posts/{post_id}/meta/increment",
            json={"key": str(getattr(key, "value", key)), "amount": amount},
        )
        return response.json().get("value")

    # --- Event registrations ---

    def register_for_event(
        self,
        post_id: str,
        registration: Union[RegistrationInput, Mapping[str, Any]],
    ) -> EventRegistration:
        """Register the signed-in user for an event post.

        A cancelled registration is reactivated. Registering twice, or for a
        post that is not an event, is rejected by the server with a 400
        ApiError.
        """
        response = self._client.post(f"/api/posts/{post_id}/register", json=to_body(registration))
        result = EventRegistration.model_validate(response.json())
        logger.info("Registered for event %s (%s)", post_id, result.status)
        return result

    def list_registrations(self, post_id: str) -> list[EventRegistration]:
        """All registrations of an event post (admin only)."""
        response = self._client.get(f"/api/posts/{post_id}/registrations")
        return _REGISTRATIONS_ADAPTER.validate_python(response.json())


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)
