"""
Client-side session state.

Keeps `user` / `profile` in step with the auth events published by
EduAIApi:

    UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED

initialize() bootstraps from a stored token once; events that arrive while it
runs are ignored. The profile is cached for a single identity id.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

import httpx

from eduai.client.api import ApiError, AuthEvent, EduAIApi, Subscription

logger = logging.getLogger(__name__)

ChangeListener = Callable[["SessionManager"], None]


class AuthStatus(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SessionManager:
    def __init__(self, api: EduAIApi, *, profile_timeout: float | None = 10.0):
        self.api = api
        self.profile_timeout = profile_timeout

        self.user: Optional[dict] = None
        self.profile: Optional[dict] = None
        self.status = AuthStatus.UNAUTHENTICATED
        self.loading = True
        self.initialized = False

        self._initializing = False
        self._cached_profile: Optional[tuple[int, dict]] = None
        self._subscription: Optional[Subscription] = None
        self._listeners: list[ChangeListener] = []

    # --- public state ---

    @property
    def is_admin(self) -> bool:
        return bool(self.profile) and self.profile.get("role") == "admin"

    @property
    def is_lecturer(self) -> bool:
        return bool(self.profile) and self.profile.get("role") == "lecturer"

    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- bootstrap ---

    def initialize(self) -> None:
        if self._initializing:
            logger.debug("Session initialization already in progress, skipping")
            return
        if self.initialized:
            return

        self._initializing = True
        if self._subscription is None:
            self._subscription = self.api.on_auth_state_change(self._on_auth_event)

        try:
            session = self.api.get_session(timeout=self.profile_timeout)
            if session and session.get("user"):
                logger.info(f"Found existing session for {session['user'].get('email')}")
                # the bootstrap response already carries the profile
                if session.get("profile"):
                    self._cache_profile(session["user"]["id"], session["profile"])
                self._update_user(session["user"])
            else:
                logger.info("No existing session found")
        except ApiError as e:
            if e.is_auth_error:
                logger.info(f"Stored session is no longer valid: {e.detail}")
                self.api.clear_session()
            else:
                logger.error(f"Error getting initial session: {e}")
        except httpx.HTTPError as e:
            logger.error(f"Error initializing auth: {e}")
        finally:
            self.loading = False
            self.initialized = True
            self._initializing = False
            self._notify()

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    # --- auth events ---

    def _on_auth_event(self, event: AuthEvent, session: Optional[dict]) -> None:
        if self._initializing:
            logger.debug(f"Skipping {event.value} during initialization")
            return
        self.handle_event(event, session)

    def handle_event(self, event: AuthEvent, session: Optional[dict]) -> None:
        user = session.get("user") if session else None

        if event == AuthEvent.INITIAL_SESSION:
            # handled by initialize()
            return

        if event == AuthEvent.SIGNED_IN:
            if user:
                self._update_user(user)

        elif event == AuthEvent.SIGNED_OUT:
            self._update_user(None)
            self.loading = False

        elif event == AuthEvent.TOKEN_REFRESHED:
            # same user -> nothing to reload
            if user and (self.user is None or self.user.get("id") != user.get("id")):
                self._update_user(user)

        elif event == AuthEvent.USER_UPDATED:
            if user:
                self._cached_profile = None
                self._update_user(user, force=True)

        else:
            logger.debug(f"Unhandled auth event: {event}")

    # --- profile ---

    def _cache_profile(self, user_id: int, profile: dict) -> None:
        self._cached_profile = (user_id, profile)

    def fetch_profile(self, user_id: int) -> dict:
        if self._cached_profile and self._cached_profile[0] == user_id:
            return self._cached_profile[1]

        # the server creates the profile if it is missing
        profile = self.api.get_profile(timeout=self.profile_timeout)
        self._cache_profile(user_id, profile)
        return profile

    def _update_user(self, new_user: Optional[dict], *, force: bool = False) -> None:
        if new_user is None:
            if self.user is not None or self.profile is not None:
                logger.info("Clearing user and profile state")
            self.user = None
            self.profile = None
            self._cached_profile = None
            self.status = AuthStatus.UNAUTHENTICATED
            self._notify()
            return

        if not force and self.user is not None and self.user.get("id") == new_user.get("id"):
            logger.debug("Same user, skipping update")
            return

        previous_status = self.status
        self.status = AuthStatus.AUTHENTICATING
        self.loading = True
        try:
            profile = self.fetch_profile(new_user["id"])
            self.user = new_user
            self.profile = profile
            self.status = AuthStatus.AUTHENTICATED
        except (ApiError, httpx.HTTPError) as e:
            # keep whoever was signed in before
            logger.error(f"Error updating user profile: {e}")
            self.status = previous_status if self.user is not None else AuthStatus.UNAUTHENTICATED
        finally:
            self.loading = False
            self._notify()

    # --- actions ---

    def sign_in(self, email: str, password: str) -> tuple[Optional[dict], Optional[dict]]:
        data = self.api.sign_in(email, password)
        # no-op when the SIGNED_IN event already loaded this user
        if data.get("profile"):
            self._cache_profile(data["user"]["id"], data["profile"])
        self._update_user(data["user"])
        return self.user, self.profile

    def sign_up(
        self,
        email: str,
        password: str,
        full_name: str | None = None,
        role: str | None = None,
    ) -> dict:
        return self.api.sign_up(email, password, full_name=full_name, role=role)

    def sign_out(self) -> None:
        try:
            self.api.sign_out()
        finally:
            self._update_user(None)
