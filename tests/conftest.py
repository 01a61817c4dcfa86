"""Shared test fixtures for the CMS client."""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.auth.token_store import TokenStore
from src.common.http_client import ApiClient


def _response(payload=None, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload if payload is not None else {}
    response.text = json.dumps(payload, ensure_ascii=False) if payload is not None else ""
    response.reason = "OK" if response.ok else "Error"
    return response


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _response


@pytest.fixture
def mock_client() -> MagicMock:
    """ApiClient double with no token set."""
    client = MagicMock(spec=ApiClient)
    client.token = None
    return client


@pytest.fixture
def token_store(tmp_path) -> TokenStore:
    """TokenStore writing to a temporary session file."""
    return TokenStore(path=tmp_path / "session.json", key="token")


@pytest.fixture
def sample_user_data() -> dict:
    """Return a /api/auth/me body for an editor."""
    return {
        "id": "user-1",
        "email": "editor@kcforum.org",
        "name": "김편집",
        "role": "editor",
        "isActive": True,
        "permissions": ["event.*", "news.*", "member.read"],
        "createdAt": "2026-01-05T09:00:00Z",
    }


@pytest.fixture
def sample_post_data() -> dict:
    """Return an event post with ko/en translations and typed meta."""
    return {
        "id": "post-1",
        "slug": "2026-korea-china-forum",
        "postType": "event",
        "authorId": "user-1",
        "status": "published",
        "visibility": "public",
        "primaryLocale": "ko",
        "isFeatured": False,
        "tags": ["seminar"],
        "publishedAt": "2026-02-01T00:00:00Z",
        "createdAt": "2026-02-01T00:00:00Z",
        "updatedAt": "2026-02-02T00:00:00Z",
        "translations": [
            {
                "id": "tr-ko",
                "postId": "post-1",
                "locale": "ko",
                "title": "2026 한중 경제 포럼",
                "excerpt": "한중 기업 교류 세미나",
            },
            {
                "id": "tr-en",
                "postId": "post-1",
                "locale": "en",
                "title": "2026 Korea-China Forum",
            },
        ],
        "meta": [
            {"id": "m1", "postId": "post-1", "key": "event.eventDate",
             "valueTimestamp": "2026-03-15T10:00:00Z"},
            {"id": "m2", "postId": "post-1", "key": "event.location", "valueText": "서울 코엑스"},
            {"id": "m3", "postId": "post-1", "key": "event.category", "valueText": "seminar"},
            {"id": "m4", "postId": "post-1", "key": "event.capacity", "valueNumber": 120},
            {"id": "m5", "postId": "post-1", "key": "event.fee", "valueNumber": 0},
            {"id": "m6", "postId": "post-1", "key": "event.isPublic", "valueBoolean": True},
            {"id": "m7", "postId": "post-1", "key": "event.images",
             "value": ["https://cdn.kcforum.org/a.jpg"]},
        ],
    }
