"""Authenticated HTTP client for the CMS REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .config import ApiSettings, settings

logger = logging.getLogger(__name__)


class ApiError(requests.HTTPError):
    """Non-2xx response from the CMS API.

    Transport failures (DNS, refused connection, timeout) are not wrapped:
    they reach the caller as the original ``requests`` exception.
    """

    def __init__(self, status_code: int, message: str, response: Optional[requests.Response] = None):
        super().__init__(f"{status_code}: {message}", response=response)
        self.status_code = status_code
        self.message = message

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code in (401, 403)

    @classmethod
    def from_response(cls, response: requests.Response) -> ApiError:
        """Build from a failed response, preferring the JSON ``message`` field."""
        message = ""
        try:
            body = response.json()
            if isinstance(body, dict):
                message = str(body.get("message", ""))
        except ValueError:
            pass
        if not message:
            message = response.text or response.reason or "Request failed"
        return cls(response.status_code, message, response=response)


class ApiClient:
    """Thin wrapper over requests.Session that attaches the bearer token.

    One request per call: no retries, no backoff. Timeout policy comes from
    ApiSettings.request_timeout.
    """

    def __init__(
        self,
        config: ApiSettings | None = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or settings.api
        if not self.config.base_url:
            raise ValueError("CMS_BASE_URL must be set in .env or config/settings.yaml")
        self.base_url = self.config.base_url.rstrip("/")
        self.token = token
        self._session = session or requests.Session()

    def headers(self) -> dict[str, str]:
        """Default headers, with Authorization when a token is set."""
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send a request to ``base_url + path``.

        Args:
            method: HTTP method.
            path: API path starting with "/".
            json: Optional JSON body.
            params: Optional query parameters (None values dropped).

        Returns:
            The successful requests.Response.

        Raises:
            ApiError: On any non-2xx status.
            requests.RequestException: On transport failure.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug("%s %s", method, path)
        response = self._session.request(
            method,
            url,
            json=json,
            params=params or None,
            headers=self.headers(),
            timeout=self.config.request_timeout,
        )
        if not response.ok:
            error = ApiError.from_response(response)
            logger.debug("%s %s failed: %s", method, path, error)
            raise error
        return response

    def get(self, path: str, params: dict[str, Any] | None = None) -> requests.Response:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> requests.Response:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> requests.Response:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
