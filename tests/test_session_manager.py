"""
Client-side session state against the real app (TestClient as transport).
"""

import pytest

from eduai.client import (
    ApiError,
    AuthEvent,
    AuthStatus,
    EduAIApi,
    FileTokenStore,
    MemoryTokenStore,
    SessionManager,
)
from tests.utils import DEFAULT_PASSWORD, login, register


@pytest.fixture
def api(client):
    return EduAIApi(http=client)


@pytest.fixture
def manager(api):
    # TestClient has no network timeouts to apply
    m = SessionManager(api, profile_timeout=None)
    yield m
    m.close()


@pytest.fixture
def lena(client):
    return register(client, "lena@example.com", full_name="Lena Lecturer")


def _count_calls(monkeypatch, obj, name):
    calls = []
    original = getattr(obj, name)

    def wrapper(*args, **kwargs):
        calls.append((args, kwargs))
        return original(*args, **kwargs)

    monkeypatch.setattr(obj, name, wrapper)
    return calls


class TestInitialize:
    def test_without_stored_token(self, manager):
        manager.initialize()

        assert manager.initialized is True
        assert manager.loading is False
        assert manager.status == AuthStatus.UNAUTHENTICATED
        assert manager.user is None and manager.profile is None

    def test_bootstraps_from_stored_token(self, client, lena, monkeypatch):
        token = login(client, "lena@example.com")["access_token"]
        api = EduAIApi(http=client, token_store=MemoryTokenStore(token))
        profile_calls = _count_calls(monkeypatch, api, "get_profile")

        manager = SessionManager(api, profile_timeout=None)
        manager.initialize()

        assert manager.status == AuthStatus.AUTHENTICATED
        assert manager.user["id"] == lena["id"]
        assert manager.profile["full_name"] == "Lena Lecturer"
        assert manager.is_lecturer and not manager.is_admin
        # the bootstrap response already carried the profile
        assert profile_calls == []

    def test_stale_token_is_cleared(self, client, lena):
        token = login(client, "lena@example.com")["access_token"]
        client.post("/api/v1/auth/logout", headers={"Authorization": f"Bearer {token}"})

        store = MemoryTokenStore(token)
        manager = SessionManager(EduAIApi(http=client, token_store=store), profile_timeout=None)
        manager.initialize()

        assert manager.status == AuthStatus.UNAUTHENTICATED
        assert store.get() is None
        assert manager.initialized is True

    def test_runs_only_once(self, api, manager, monkeypatch):
        session_calls = _count_calls(monkeypatch, api, "get_session")

        manager.initialize()
        manager.initialize()

        assert len(session_calls) == 1

    def test_reentrant_call_is_ignored(self, api, manager, monkeypatch):
        calls = []

        def fake_get_session(timeout=None):
            calls.append(timeout)
            manager.initialize()  # second initialization while the first is in flight
            return None

        monkeypatch.setattr(api, "get_session", fake_get_session)
        manager.initialize()

        assert len(calls) == 1
        assert manager.initialized is True

    def test_events_during_initialization_are_ignored(self, api, manager, monkeypatch):
        def fake_get_session(timeout=None):
            api._emit(AuthEvent.SIGNED_IN, {"user": {"id": 999, "email": "ghost@example.com"}})
            return None

        monkeypatch.setattr(api, "get_session", fake_get_session)
        manager.initialize()

        assert manager.user is None
        assert manager.status == AuthStatus.UNAUTHENTICATED


class TestAuthEvents:
    def test_sign_in_loads_profile(self, manager, lena):
        manager.initialize()
        changes = []
        manager.add_listener(lambda m: changes.append(m.status))

        user, profile = manager.sign_in("lena@example.com", DEFAULT_PASSWORD)

        assert user["id"] == lena["id"]
        assert profile["role"] == "lecturer"
        assert manager.status == AuthStatus.AUTHENTICATED
        assert AuthStatus.AUTHENTICATED in changes

    def test_bad_credentials_raise_auth_error(self, manager, lena):
        manager.initialize()
        with pytest.raises(ApiError) as excinfo:
            manager.sign_in("lena@example.com", "not-the-password")

        assert excinfo.value.is_auth_error
        assert manager.status == AuthStatus.UNAUTHENTICATED

    def test_sign_out_clears_state_and_revokes_token(self, client, api, manager, lena):
        manager.initialize()
        manager.sign_in("lena@example.com", DEFAULT_PASSWORD)
        token = api.token_store.get()

        manager.sign_out()

        assert manager.user is None and manager.profile is None
        assert manager.status == AuthStatus.UNAUTHENTICATED
        assert api.token_store.get() is None
        response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_refresh_for_same_user_does_not_refetch(self, api, manager, lena, monkeypatch):
        manager.initialize()
        manager.sign_in("lena@example.com", DEFAULT_PASSWORD)
        profile_calls = _count_calls(monkeypatch, api, "get_profile")

        api.refresh_session()

        assert profile_calls == []
        assert manager.status == AuthStatus.AUTHENTICATED
        assert manager.user["id"] == lena["id"]

    def test_user_updated_refreshes_cached_profile(self, api, manager, lena):
        manager.initialize()
        manager.sign_in("lena@example.com", DEFAULT_PASSWORD)
        assert manager.profile["full_name"] == "Lena Lecturer"

        api.update_profile("Dr. Lena")

        assert manager.profile["full_name"] == "Dr. Lena"

    def test_profile_failure_keeps_current_user(self, api, manager, lena, monkeypatch):
        manager.initialize()
        manager.sign_in("lena@example.com", DEFAULT_PASSWORD)

        def broken_get_profile(timeout=None):
            raise ApiError(500, "database unavailable")

        monkeypatch.setattr(api, "get_profile", broken_get_profile)
        manager.handle_event(AuthEvent.USER_UPDATED, {"user": manager.user})

        assert manager.user["id"] == lena["id"]
        assert manager.profile["full_name"] == "Lena Lecturer"
        assert manager.status == AuthStatus.AUTHENTICATED
        assert manager.loading is False

    def test_sign_in_without_initialize(self, api, manager, lena, monkeypatch):
        profile_calls = _count_calls(monkeypatch, api, "get_profile")

        user, profile = manager.sign_in("lena@example.com", DEFAULT_PASSWORD)

        assert user["id"] == lena["id"]
        assert profile["full_name"] == "Lena Lecturer"
        assert manager.status == AuthStatus.AUTHENTICATED
        # the login response already carried the profile
        assert profile_calls == []

        manager.sign_out()
        assert manager.user is None
        assert manager.status == AuthStatus.UNAUTHENTICATED

    def test_unsubscribed_manager_ignores_events(self, api, manager, lena):
        manager.initialize()
        manager.close()

        api.sign_in("lena@example.com", DEFAULT_PASSWORD)

        assert manager.user is None


class TestClientCalls:
    def test_lecturer_workflow_through_client(self, client, monkeypatch):
        from eduai.services import content_service

        monkeypatch.setattr(
            content_service,
            "generate_course_content",
            lambda prompt, content_type="lesson": f"generated: {prompt}",
        )
        admin_api = EduAIApi(http=client)
        admin_api.sign_up("admin@eduai.com", DEFAULT_PASSWORD, full_name="Ada", role="admin")
        admin_api.sign_in("admin@eduai.com", DEFAULT_PASSWORD)

        lecturer_api = EduAIApi(http=client)
        lecturer_profile = lecturer_api.sign_up("lena@example.com", DEFAULT_PASSWORD)
        lecturer_api.sign_in("lena@example.com", DEFAULT_PASSWORD)

        course = admin_api.create_course("Operating Systems", "CS450")
        admin_api.assign_course(course["id"], lecturer_profile["id"])

        assert [a["course_id"] for a in lecturer_api.list_assignments()] == [course["id"]]
        content = lecturer_api.generate_content(course["id"], "assignment")
        assert content["title"] == "Assignment: Operating Systems"
        assert [c["id"] for c in lecturer_api.list_content()] == [content["id"]]

        with pytest.raises(ApiError) as excinfo:
            lecturer_api.create_course("Nope", "NO100")
        assert excinfo.value.status_code == 403
        assert not excinfo.value.is_auth_error


def test_file_token_store(tmp_path):
    store = FileTokenStore(tmp_path / "session" / "token.json")
    assert store.get() is None

    store.set("abc.def.ghi")
    assert FileTokenStore(tmp_path / "session" / "token.json").get() == "abc.def.ghi"

    store.clear()
    assert store.get() is None
