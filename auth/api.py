"""HTTP routes for signup, login, the members page and logout."""

import asyncio
import ipaddress

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from auth import pages
from auth.config import AuthConfig
from auth.service import AuthService
from auth.types import Session
from auth.exceptions import (
    EmailAlreadyRegisteredError,
    EmailNotFoundError,
    IncorrectPasswordError,
    LoginRejectedError,
    SignupValidationError,
)


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=path, status_code=302)


def _is_authenticated(request: Request) -> bool:
    session = getattr(request.state, "session", None)
    return session is not None and session.authenticated


def create_auth_router(auth_service: AuthService, config: AuthConfig) -> APIRouter:
    """Create the members app router with injected service."""
    router = APIRouter(tags=["auth"])
    cookie_name = config.session_cookie_name

    def _start_session(session: Session) -> RedirectResponse:
        response = _redirect("/members")
        response.set_cookie(
            key=cookie_name,
            value=session.session_id,
            max_age=config.session_expiry_seconds,
            httponly=True,
            secure=config.cookie_secure,
            samesite="lax",
        )
        return response

    @router.get("/")
    async def home(request: Request) -> Response:
        """Links to signup/login, or straight to /members when logged in."""
        if _is_authenticated(request):
            return _redirect("/members")
        return HTMLResponse(pages.home_page())

    @router.get("/signup")
    async def signup_form() -> HTMLResponse:
        return HTMLResponse(pages.signup_page())

    @router.post("/signupSubmit")
    async def signup_submit(
        request: Request,
        name: str = Form(""),
        email: str = Form(""),
        password: str = Form(""),
    ) -> Response:
        try:
            session = await asyncio.to_thread(
                auth_service.signup,
                name=name,
                email=email,
                password=password,
                previous_session_id=request.cookies.get(cookie_name),
                ip_address=_get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except SignupValidationError as e:
            return HTMLResponse(pages.retry_page(e.message, "/signup"), status_code=400)
        except EmailAlreadyRegisteredError as e:
            return HTMLResponse(pages.retry_page(str(e), "/signup"), status_code=409)

        return _start_session(session)

    @router.get("/login")
    async def login_form() -> HTMLResponse:
        return HTMLResponse(pages.login_page())

    @router.post("/loginSubmit")
    async def login_submit(
        request: Request,
        email: str = Form(""),
        password: str = Form(""),
    ) -> Response:
        try:
            session = await asyncio.to_thread(
                auth_service.login,
                email=email,
                password=password,
                previous_session_id=request.cookies.get(cookie_name),
                ip_address=_get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except LoginRejectedError:
            return _redirect("/login")
        except (EmailNotFoundError, IncorrectPasswordError) as e:
            return HTMLResponse(pages.retry_page(str(e), "/login"), status_code=401)

        return _start_session(session)

    @router.get("/members")
    async def members(request: Request) -> Response:
        if not _is_authenticated(request):
            return _redirect("/")
        return HTMLResponse(
            pages.members_page(request.state.session.name, auth_service.pick_member_image())
        )

    @router.get("/logout")
    async def logout(request: Request) -> Response:
        """Destroy the session whatever its state, then go home."""
        auth_service.logout(
            request.cookies.get(cookie_name),
            ip_address=_get_client_ip(request),
        )
        response = _redirect("/")
        response.delete_cookie(key=cookie_name)
        return response

    return router
