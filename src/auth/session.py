"""Signed-in session: user, bearer token and derived permission set.

The session is owned by one AuthSession instance and mutated only through
its methods. Interested code registers a callback with ``subscribe`` and is
called with the session after every change.

Usage:
    session = AuthSession(ApiClient(), TokenStore())
    session.load()                       # restore from the persisted token
    session.login("admin@example.org", "secret")
    if session.has_permission("event.create"):
        ...
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

import requests

from src.common.http_client import ApiClient, ApiError
from src.common.logging import setup_logging
from src.common.models import AuthResponse, CompanyData, User, UserType

from . import permissions as perms
from .token_store import TokenStore

logger = setup_logging(module_name="auth.session")

Listener = Callable[["AuthSession"], None]


class AuthSession:
    """Holds the authenticated user and answers permission queries."""

    def __init__(self, client: ApiClient, token_store: TokenStore | None = None):
        self._client = client
        self._store = token_store or TokenStore()
        self._listeners: list[Listener] = []

        self.user: Optional[User] = None
        self.token: Optional[str] = self._store.get()
        self.permissions: frozenset[str] = frozenset()
        self.loading: bool = True
        self._client.token = self.token

    # --- Derived state ---

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == "admin"

    # --- Subscription ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- State transitions ---

    def _set_session(self, user: Optional[User], token: Optional[str], notify: bool = True) -> None:
        """Replace user, token and permissions together.

        ``load`` passes ``notify=False`` and notifies once when it finishes.
        """
        self.user = user
        self.token = token
        self.permissions = frozenset(user.permissions) if user else frozenset()
        self._client.token = token
        if token:
            self._store.set(token)
        else:
            self._store.remove()
        if notify:
            self._notify()

    def load(self) -> Optional[User]:
        """Restore the session from the persisted token via GET /api/auth/me.

        A rejected token clears the session and returns None. Transport
        failures propagate and leave the stored token in place.
        """
        try:
            if not self.token:
                return None
            try:
                response = self._client.get("/api/auth/me")
            except ApiError as exc:
                logger.warning("Stored token rejected (%s); clearing session", exc.status_code)
                self._set_session(None, None, notify=False)
                return None
            except requests.RequestException:
                logger.error("Could not reach the CMS to restore the session")
                raise

            user = User.model_validate(response.json())
            self._set_session(user, self.token, notify=False)
            logger.info("Session restored for %s", user.email)
            return user
        finally:
            self.loading = False
            self._notify()

    def _authenticate(self, path: str, payload: dict) -> User:
        response = self._client.post(path, json=payload)
        data = AuthResponse.model_validate(response.json())
        self._set_session(data.user, data.token)
        return data.user

    def login(self, email: str, password: str) -> User:
        """Sign in and persist the returned token."""
        user = self._authenticate("/api/auth/login", {"email": email, "password": password})
        logger.info("Logged in as %s", user.email)
        return user

    def register(
        self,
        name: str,
        email: str,
        password: str,
        user_type: UserType | str = UserType.STAFF,
        company: Optional[CompanyData] = None,
    ) -> User:
        """Create an account and sign in with it.

        ``company`` is only sent for company accounts.
        """
        user_type = UserType(user_type)
        payload: dict = {
            "name": name,
            "email": email,
            "password": password,
            "userType": user_type.value,
        }
        if user_type is UserType.COMPANY and company is not None:
            payload["companyData"] = company.to_payload()

        user = self._authenticate("/api/auth/register", payload)
        logger.info("Registered %s account %s", user_type.value, user.email)
        return user

    def logout(self) -> None:
        self._set_session(None, None)
        logger.info("Logged out")

    # --- Permission queries ---

    def has_permission(self, permission: str) -> bool:
        return perms.has_permission(self.permissions, permission)

    def has_any_permission(self, permissions: Iterable[str]) -> bool:
        return perms.has_any_permission(self.permissions, permissions)

    def has_all_permissions(self, permissions: Iterable[str]) -> bool:
        return perms.has_all_permissions(self.permissions, permissions)
