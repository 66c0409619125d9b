from eduai.client.api import (  # noqa: F401
    ApiError,
    AuthEvent,
    EduAIApi,
    FileTokenStore,
    MemoryTokenStore,
    Subscription,
)
from eduai.client.session import AuthStatus, SessionManager  # noqa: F401
