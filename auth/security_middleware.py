"""Session middleware for FastAPI - loads the session for every request."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from auth.config import AuthConfig
from auth.session import SessionManager
from auth.exceptions import SessionExpiredError


class SessionMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the session cookie into request.state.session.

    1. Extracts the session id from the configured cookie
    2. Validates it via SessionManager
    3. Sets request.state.session to the Session, or None

    Never rejects a request; gating is up to each route.
    """

    def __init__(self, app, session_manager: SessionManager, config: AuthConfig):
        super().__init__(app)
        self._session_manager = session_manager
        self._cookie_name = config.session_cookie_name

    async def dispatch(self, request: Request, call_next):
        request.state.session = None

        session_id = request.cookies.get(self._cookie_name)
        if session_id:
            try:
                request.state.session = self._session_manager.validate_session(session_id)
            except SessionExpiredError:
                pass

        return await call_next(request)
