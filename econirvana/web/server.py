"""JSON HTTP API for the EcoNirvana site.

Uses aiohttp's AppRunner/TCPSite for non-blocking start/stop. The account
routes share one ``AuthService`` (one signed-in user per deployment, the way
a browser tab holds one). Chat sessions are keyed by the ``X-Session-Id``
header so each client keeps its own history.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from aiohttp import web
from pydantic import ValidationError

from econirvana.auth.forms import validate_signup_form
from econirvana.auth.models import Credentials, SignupForm
from econirvana.auth.service import AuthService
from econirvana.chat.client import ChatBackendError
from econirvana.chat.quiz import QuizFormatError, generate_quiz
from econirvana.chat.session import ChatSession, get_chat_session
from econirvana.config import settings
from econirvana.contact import CONTACT_INFO, ContactSubmission, submit_contact
from econirvana.dashboard import build_dashboard

logger = logging.getLogger(__name__)

CHAT_ERROR_REPLY = "Sorry, I encountered an error. Please try again later."
QUIZ_ERROR_REPLY = "Sorry, the quiz could not be generated. Please try again later."
DEFAULT_SESSION_ID = "default"

AUTH_KEY = web.AppKey("auth", AuthService)
CHAT_FACTORY_KEY = web.AppKey("chat_factory", Callable[..., ChatSession | None])


class _BadRequest(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


async def _json_body(request: web.Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except Exception as exc:
        raise _BadRequest("invalid JSON") from exc
    if not isinstance(payload, dict):
        raise _BadRequest("expected a JSON object")
    return payload


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"{field}: {first['msg']}"


def _chat_for(request: web.Request, *, create: bool = True) -> ChatSession | None:
    session_id = request.headers.get("X-Session-Id", "").strip() or DEFAULT_SESSION_ID
    return request.app[CHAT_FACTORY_KEY](session_id, create=create)


@web.middleware
async def _error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Turn request-shape problems into 400s."""
    try:
        return await handler(request)
    except _BadRequest as exc:
        logger.warning("Bad request: %s %s (%s)", request.method, request.path, exc.message)
        return web.json_response({"error": exc.message}, status=400)
    except ValidationError as exc:
        return web.json_response({"error": _validation_message(exc)}, status=400)


# -- Health --------------------------------------------------------------------


async def _health(request: web.Request) -> web.Response:
    """GET /health: basic liveness check."""
    return web.json_response({"status": "ok"})


# -- Account -------------------------------------------------------------------


def _user_payload(auth: AuthService) -> dict[str, Any] | None:
    return auth.user.model_dump() if auth.user else None


async def _me(request: web.Request) -> web.Response:
    auth = request.app[AUTH_KEY]
    return web.json_response({"user": _user_payload(auth), "loading": auth.loading})


async def _login(request: web.Request) -> web.Response:
    creds = Credentials.model_validate(await _json_body(request))
    auth = request.app[AUTH_KEY]
    if not await auth.login(creds.email, creds.password):
        return web.json_response({"error": auth.error}, status=401)
    return web.json_response({"user": _user_payload(auth), "redirect": "/dashboard"})


async def _signup(request: web.Request) -> web.Response:
    form = SignupForm.model_validate(await _json_body(request))
    form_error = validate_signup_form(form)
    if form_error:
        return web.json_response({"error": form_error}, status=400)

    auth = request.app[AUTH_KEY]
    if not await auth.signup(form.name, form.email, form.password):
        return web.json_response({"error": auth.error or "Signup failed"}, status=400)
    return web.json_response({"user": _user_payload(auth), "redirect": "/dashboard"})


async def _logout(request: web.Request) -> web.Response:
    await request.app[AUTH_KEY].logout()
    return web.json_response({"ok": True, "redirect": "/"})


async def _dashboard(request: web.Request) -> web.Response:
    auth = request.app[AUTH_KEY]
    if auth.user is None:
        return web.json_response({"error": "not signed in", "redirect": "/login"}, status=401)
    return web.json_response(build_dashboard(auth.user).model_dump(mode="json"))


# -- Contact -------------------------------------------------------------------


async def _contact_info(request: web.Request) -> web.Response:
    return web.json_response(CONTACT_INFO)


async def _contact_submit(request: web.Request) -> web.Response:
    submission = ContactSubmission.model_validate(await _json_body(request))
    receipt = await submit_contact(submission)
    return web.json_response({"ok": True, **receipt.model_dump()})


# -- Chat ----------------------------------------------------------------------


async def _chat(request: web.Request) -> web.Response:
    payload = await _json_body(request)
    text = payload.get("message")
    if not isinstance(text, str):
        raise _BadRequest("message must be a string")

    chat = _chat_for(request)
    try:
        reply = await chat.send_message(text)
    except ChatBackendError:
        return web.json_response({"error": CHAT_ERROR_REPLY}, status=502)
    return web.json_response({"reply": reply, "backend": chat.replied_by})


async def _chat_reset(request: web.Request) -> web.Response:
    chat = _chat_for(request, create=False)
    cleared = chat.reset() if chat is not None else 0
    return web.json_response({"ok": True, "cleared": cleared})


async def _quiz(request: web.Request) -> web.Response:
    try:
        questions = await generate_quiz(_chat_for(request))
    except ChatBackendError:
        return web.json_response({"error": QUIZ_ERROR_REPLY}, status=502)
    except QuizFormatError as exc:
        logger.warning("Quiz reply rejected: %s", exc)
        return web.json_response({"error": QUIZ_ERROR_REPLY}, status=502)
    return web.json_response({"questions": [q.to_payload() for q in questions]})


def _create_web_app(
    auth: AuthService | None = None,
    chat_factory: Callable[..., ChatSession | None] | None = None,
) -> web.Application:
    """Build the aiohttp Application with routes."""
    app = web.Application(middlewares=[_error_middleware])
    app[AUTH_KEY] = auth or AuthService.get()
    app[CHAT_FACTORY_KEY] = chat_factory or get_chat_session

    app.router.add_get("/health", _health)
    app.router.add_get("/api/auth/me", _me)
    app.router.add_post("/api/auth/login", _login)
    app.router.add_post("/api/auth/signup", _signup)
    app.router.add_post("/api/auth/logout", _logout)
    app.router.add_get("/api/dashboard", _dashboard)
    app.router.add_get("/api/contact", _contact_info)
    app.router.add_post("/api/contact", _contact_submit)
    app.router.add_post("/api/chat", _chat)
    app.router.add_post("/api/chat/reset", _chat_reset)
    app.router.add_get("/api/quiz", _quiz)
    return app


class WebServer:
    """Manages the aiohttp server lifecycle."""

    def __init__(self, port: int | None = None, host: str | None = None) -> None:
        self.port = port or settings.web_port
        self.host = host or settings.web_host
        self._runner: web.AppRunner | None = None

    async def start(self, app: web.Application | None = None) -> None:
        """Start listening for requests."""
        self._runner = web.AppRunner(app or _create_web_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("Web server listening on %s:%d", self.host, self.port)

    async def stop(self) -> None:
        """Shut down the server gracefully."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Web server stopped")
