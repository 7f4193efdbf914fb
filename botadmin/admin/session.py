"""Session gate: single shared password, absolute session lifetime, per-request AdminContext."""

import secrets
import time
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from fastapi import Request

from botadmin.admin.toast import consume_toast
from botadmin.errors import LoginRequired
from botadmin.models import Toast
from botadmin.utils.logger import get_logger

logger = get_logger("botadmin.admin.session")

LOGGED_IN_KEY = "isLoggedIn"
LOGIN_AT_KEY = "loginAt"


@dataclass(frozen=True)
class AdminContext:
    """Read-only view of the admin session for one request."""

    session: Mapping[str, Any]
    login_at: float
    expires_at: float
    toast: Toast | None = None


class SessionGate:
    """Checks the admin password and the session lifetime. The lifetime counts from login and does not slide."""

    def __init__(
        self,
        admin_pass: str,
        max_age_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        if not admin_pass:
            raise ValueError("admin_pass must be non-empty")
        self._admin_pass = admin_pass
        self._max_age = max_age_seconds
        self._clock = clock

    @property
    def max_age_seconds(self) -> int:
        return self._max_age

    def authenticate(self, password: str | None) -> bool:
        if not password:
            return False
        return secrets.compare_digest(password.encode("utf-8"), self._admin_pass.encode("utf-8"))

    def login(self, session: MutableMapping[str, Any], password: str | None) -> bool:
        """Mark the session authenticated if password matches. Wrong password leaves the session untouched."""
        if not self.authenticate(password):
            logger.warning("auth.login_failed")
            return False
        session.clear()
        session[LOGGED_IN_KEY] = True
        session[LOGIN_AT_KEY] = self._clock()
        logger.info("auth.login_ok")
        return True

    def logout(self, session: MutableMapping[str, Any]) -> None:
        session.clear()
        logger.info("auth.logout")

    def check(self, session: MutableMapping[str, Any]) -> AdminContext:
        """Return the context for an authenticated session or raise LoginRequired."""
        if not session.get(LOGGED_IN_KEY):
            raise LoginRequired("not_logged_in")
        try:
            login_at = float(session.get(LOGIN_AT_KEY))
        except (TypeError, ValueError):
            session.clear()
            raise LoginRequired("missing_login_time") from None
        expires_at = login_at + self._max_age
        if self._clock() >= expires_at:
            session.clear()
            logger.info("auth.session_expired", login_at=login_at)
            raise LoginRequired("expired")
        return AdminContext(
            session=MappingProxyType(dict(session)),
            login_at=login_at,
            expires_at=expires_at,
        )


def get_gate(request: Request) -> SessionGate:
    return request.app.state.gate


def require_admin(request: Request) -> AdminContext:
    """Dependency for mutating routes: authenticated context, pending toast left in place."""
    return get_gate(request).check(request.session)


def admin_page(request: Request) -> AdminContext:
    """Dependency for rendered pages: authenticated context with the pending toast consumed."""
    ctx = get_gate(request).check(request.session)
    toast = consume_toast(request.session)
    return AdminContext(
        session=ctx.session,
        login_at=ctx.login_at,
        expires_at=ctx.expires_at,
        toast=toast,
    )
