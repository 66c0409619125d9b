"""
HTTP client for the EduAI service.

Wraps the REST endpoints, keeps the session token in a token store and
publishes auth events (SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED, USER_UPDATED)
to subscribers, the way a hosted auth SDK does.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


AuthCallback = Callable[[AuthEvent, Optional[dict]], None]


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str, kind: str = "other"):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.kind = kind

    @property
    def is_auth_error(self) -> bool:
        return self.kind == "auth" or self.status_code == 401


class MemoryTokenStore:
    def __init__(self, token: str | None = None):
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Persists the token in a small JSON file between runs."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def get(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return None
        return data.get("access_token")

    def set(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"access_token": token}), encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class Subscription:
    def __init__(self, api: "EduAIApi", callback: AuthCallback):
        self._api = api
        self.callback = callback

    def unsubscribe(self) -> None:
        self._api._subscribers = [s for s in self._api._subscribers if s is not self]


class EduAIApi:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        http: httpx.Client | None = None,
        token_store: MemoryTokenStore | FileTokenStore | None = None,
        timeout: float = 30.0,
    ):
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token_store = token_store or MemoryTokenStore()
        self._subscribers: list[Subscription] = []
        self._user: dict | None = None

    # --- auth events ---

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscribers.append(subscription)
        return subscription

    def _emit(self, event: AuthEvent, session: dict | None) -> None:
        logger.debug(f"Auth event {event.value}")
        for subscription in list(self._subscribers):
            subscription.callback(event, session)

    def _current_session(self) -> dict | None:
        token = self.token_store.get()
        if not token or self._user is None:
            return None
        return {"access_token": token, "user": self._user}

    # --- transport ---

    def _request(
        self,
        method: str,
        path: str,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> Any:
        headers = kwargs.pop("headers", {})
        token = self.token_store.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if timeout is not None:
            kwargs["timeout"] = timeout

        response = self._http.request(method, f"{API_PREFIX}{path}", headers=headers, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            detail = body.get("detail") if isinstance(body, dict) else None
            kind = body.get("kind", "other") if isinstance(body, dict) else "other"
            if response.status_code == 401:
                kind = "auth"
            raise ApiError(response.status_code, str(detail or response.reason_phrase), kind)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- auth ---

    def sign_up(
        self,
        email: str,
        password: str,
        full_name: str | None = None,
        role: str | None = None,
    ) -> dict:
        payload: dict[str, Any] = {"email": email, "password": password}
        if full_name is not None:
            payload["full_name"] = full_name
        if role is not None:
            payload["role"] = role
        return self._request("POST", "/auth/register", json=payload)

    def sign_in(self, email: str, password: str) -> dict:
        data = self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.token_store.set(data["access_token"])
        self._user = data["user"]
        self._emit(AuthEvent.SIGNED_IN, self._current_session())
        return data

    def sign_out(self) -> None:
        try:
            if self.token_store.get():
                self._request("POST", "/auth/logout")
        except ApiError as e:
            if not e.is_auth_error:
                raise
            # already signed out server-side
            logger.info(f"Server session already gone: {e.detail}")
        finally:
            self.clear_session()
            self._emit(AuthEvent.SIGNED_OUT, None)

    def refresh_session(self) -> dict:
        data = self._request("POST", "/auth/refresh")
        self.token_store.set(data["access_token"])
        self._user = data["user"]
        self._emit(AuthEvent.TOKEN_REFRESHED, self._current_session())
        return data

    def get_session(self, timeout: float | None = None) -> dict | None:
        """Current session for the stored token, or None when there is no token."""
        if not self.token_store.get():
            return None
        data = self._request("GET", "/auth/session", timeout=timeout)
        self._user = data["user"]
        return {"access_token": self.token_store.get(), **data}

    def clear_session(self) -> None:
        self.token_store.clear()
        self._user = None

    # --- profile ---

    def get_profile(self, timeout: float | None = None) -> dict:
        return self._request("GET", "/users/me", timeout=timeout)

    def update_profile(self, full_name: str) -> dict:
        profile = self._request("PATCH", "/users/me", json={"full_name": full_name})
        self._emit(AuthEvent.USER_UPDATED, self._current_session())
        return profile

    # --- courses / assignments / content ---

    def list_courses(self) -> list[dict]:
        return self._request("GET", "/courses/")

    def create_course(self, title: str, code: str, description: str = "") -> dict:
        return self._request(
            "POST",
            "/courses/",
            json={"title": title, "code": code, "description": description},
        )

    def assign_course(self, course_id: int, lecturer_id: int) -> dict:
        return self._request(
            "POST",
            "/assignments/",
            json={"course_id": course_id, "lecturer_id": lecturer_id},
        )

    def list_assignments(self) -> list[dict]:
        return self._request("GET", "/assignments/")

    def generate_content(
        self,
        course_id: int,
        content_type: str = "lesson",
        prompt: str | None = None,
    ) -> dict:
        return self._request(
            "POST",
            "/contents/generate",
            json={"course_id": course_id, "content_type": content_type, "prompt": prompt},
        )

    def list_content(self, course_id: int | None = None) -> list[dict]:
        params = {"course_id": course_id} if course_id is not None else None
        return self._request("GET", "/contents/", params=params)

    def close(self) -> None:
        self._http.close()
