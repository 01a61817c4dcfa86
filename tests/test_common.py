"""Tests for shared common modules: config, logging, models, HTTP client."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from src.common.config import PROJECT_ROOT, ApiSettings, AuthSettings, Settings
from src.common.http_client import ApiClient, ApiError
from src.common.logging import setup_logging
from src.common.models import (
    AuthResponse,
    EventRegistration,
    Post,
    PostInput,
    PostStatus,
    PostType,
    PostWithTranslations,
    RegistrationStatus,
    User,
    Visibility,
)

ENV_VARS = ("CMS_BASE_URL", "CMS_REQUEST_TIMEOUT", "CMS_TOKEN_FILE", "CMS_DEFAULT_LOCALE")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults_without_file(self, clean_env, tmp_path: Path):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.api.base_url == "http://localhost:5000"
        assert settings.api.request_timeout == 30.0
        assert settings.auth.token_key == "token"
        assert settings.locale.default_locale == "ko"
        assert settings.locale.supported_locales == ["ko", "en", "zh"]

    def test_yaml_values(self, clean_env, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "api:\n  base_url: https://cms.kcforum.org\n  request_timeout: 5\n"
            "locale:\n  default_locale: en\n",
            encoding="utf-8",
        )
        settings = Settings.load(path)
        assert settings.api.base_url == "https://cms.kcforum.org"
        assert settings.api.request_timeout == 5.0
        assert settings.locale.default_locale == "en"

    def test_env_overrides_yaml(self, clean_env, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("api:\n  base_url: https://from-yaml\n", encoding="utf-8")
        clean_env.setenv("CMS_BASE_URL", "https://from-env")
        clean_env.setenv("CMS_REQUEST_TIMEOUT", "12.5")
        clean_env.setenv("CMS_DEFAULT_LOCALE", "zh")

        settings = Settings.load(path)

        assert settings.api.base_url == "https://from-env"
        assert settings.api.request_timeout == 12.5
        assert settings.locale.default_locale == "zh"

    def test_empty_yaml(self, clean_env, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert Settings.load(path).api.base_url == "http://localhost:5000"

    def test_supported_locales(self, clean_env, tmp_path: Path):
        locale = Settings.load(tmp_path / "missing.yaml").locale
        assert locale.is_supported("zh")
        assert not locale.is_supported("fr")

    def test_relative_token_path(self):
        assert AuthSettings(token_file="data/s.json").token_path == PROJECT_ROOT / "data" / "s.json"

    def test_absolute_token_path(self, tmp_path: Path):
        path = tmp_path / "s.json"
        assert AuthSettings(token_file=str(path)).token_path == path


class TestLogging:
    def test_configures_once(self):
        first = setup_logging(module_name="cms.test.once")
        second = setup_logging(module_name="cms.test.once")
        assert first is second
        assert len(first.handlers) == 1

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("CMS_LOG_LEVEL", "debug")
        logger = setup_logging(module_name="cms.test.env")
        assert logger.level == logging.DEBUG

    def test_bad_env_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("CMS_LOG_LEVEL", "chatty")
        logger = setup_logging(level=logging.WARNING, module_name="cms.test.badenv")
        assert logger.level == logging.WARNING


class TestModels:
    def test_post_from_camel_case(self):
        post = Post.model_validate({
            "id": "p1",
            "postType": "news",
            "status": "draft",
            "visibility": "members",
            "primaryLocale": "en",
            "publishedAt": "2026-01-01T00:00:00Z",
        })
        assert post.post_type == PostType.NEWS
        assert post.status == PostStatus.DRAFT
        assert post.visibility == Visibility.MEMBERS
        assert post.primary_locale == "en"
        assert post.published_at.year == 2026

    def test_post_accepts_snake_case(self):
        assert Post(id="p1", post_type="event").post_type == PostType.EVENT

    def test_unknown_fields_kept(self):
        post = Post.model_validate({"id": "p1", "viewCount": 3})
        assert post.model_extra == {"viewCount": 3}

    def test_post_with_translations_defaults(self):
        post = PostWithTranslations(id="p1")
        assert post.translations == []
        assert post.meta == []

    def test_null_columns_read_as_defaults(self):
        post = Post.model_validate({
            "id": "p1",
            "slug": None,
            "tags": None,
            "isFeatured": None,
            "primaryLocale": None,
        })
        assert post.slug == ""
        assert post.tags == []
        assert post.is_featured is False
        assert post.primary_locale == "ko"

    def test_null_translations_and_meta(self):
        post = PostWithTranslations.model_validate({"id": "p1", "translations": None, "meta": None})
        assert post.translations == []
        assert post.meta == []

    def test_registration_null_status(self):
        registration = EventRegistration.model_validate({"id": "r1", "status": None})
        assert registration.status == RegistrationStatus.REGISTERED

    def test_invalid_status_rejected(self):
        with pytest.raises(Exception):
            Post.model_validate({"id": "p1", "status": "deleted"})

    def test_to_payload_camel_case(self):
        payload = PostInput(post_type=PostType.NEWS, is_featured=True).to_payload(exclude_unset=True)
        assert payload == {"postType": "news", "isFeatured": True}

    def test_auth_response(self):
        data = AuthResponse.model_validate({
            "token": "tok",
            "user": {"id": "u1", "email": "a@b.c", "permissions": ["news.*"]},
        })
        assert isinstance(data.user, User)
        assert data.user.role == "member"
        assert data.user.permissions == ["news.*"]


class TestApiClient:
    @pytest.fixture
    def http(self) -> MagicMock:
        return MagicMock(spec=requests.Session)

    @pytest.fixture
    def client(self, http) -> ApiClient:
        return ApiClient(ApiSettings(base_url="https://cms.test/", request_timeout=7), session=http)

    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            ApiClient(ApiSettings(base_url=""))

    def test_headers_without_token(self, client):
        assert "Authorization" not in client.headers()

    def test_headers_with_token(self, client):
        client.token = "tok"
        assert client.headers()["Authorization"] == "Bearer tok"

    def test_request_builds_url_and_drops_none_params(self, client, http, make_response):
        http.request.return_value = make_response({"posts": []})

        client.get("/api/posts", params={"limit": 20, "search": None})

        http.request.assert_called_once_with(
            "GET",
            "https://cms.test/api/posts",
            json=None,
            params={"limit": 20},
            headers={"Accept": "application/json"},
            timeout=7,
        )

    def test_post_sends_json_body(self, client, http, make_response):
        http.request.return_value = make_response({"id": "p1"})
        client.token = "tok"

        response = client.post("/api/posts", json={"slug": "x"})

        kwargs = http.request.call_args.kwargs
        assert kwargs["json"] == {"slug": "x"}
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert response.json() == {"id": "p1"}

    def test_error_uses_json_message(self, client, http, make_response):
        http.request.return_value = make_response({"message": "Post not found"}, status_code=404)

        with pytest.raises(ApiError) as exc_info:
            client.get("/api/posts/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Post not found"
        assert not exc_info.value.is_unauthorized

    def test_error_falls_back_to_text(self, client, http, make_response):
        response = make_response(status_code=502)
        response.json.side_effect = ValueError("no json")
        response.text = "Bad Gateway"
        http.request.return_value = response

        with pytest.raises(ApiError) as exc_info:
            client.delete("/api/posts/p1")

        assert exc_info.value.message == "Bad Gateway"

    def test_unauthorized(self, client, http, make_response):
        http.request.return_value = make_response({"message": "Invalid token"}, status_code=401)
        with pytest.raises(ApiError) as exc_info:
            client.get("/api/auth/me")
        assert exc_info.value.is_unauthorized

    def test_api_error_is_requests_error(self):
        assert issubclass(ApiError, requests.RequestException)

    def test_transport_error_not_wrapped(self, client, http):
        http.request.side_effect = requests.Timeout("slow")
        with pytest.raises(requests.Timeout):
            client.get("/api/posts")

    def test_context_manager_closes_session(self, http):
        with ApiClient(ApiSettings(), session=http):
            pass
        http.close.assert_called_once()
