# gatekeeper/core/sessions.py

import json
import logging
import secrets
from datetime import datetime, timedelta, timezone
from fastapi import Request
from itsdangerous import BadSignature, TimestampSigner
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from gatekeeper.models.session import SessionRecord


logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "gatekeeper.sid"
SESSION_EXPIRE_SECONDS = 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# -------------------------------
# Per-request session value
# -------------------------------

class Session:
    """
    Server-side session state for one browser client.

    Handlers receive it through ``get_session`` and change it through its methods;
    the middleware decides from ``is_new``/``modified``/``destroyed`` what to persist.
    """

    def __init__(self, sid: str | None = None, data: dict | None = None, expires_at: datetime | None = None):
        self.is_new = sid is None
        self.sid = sid or secrets.token_urlsafe(32)
        self.data = dict(data or {})
        self.expires_at = expires_at
        self.modified = False
        self.destroyed = False
        self.previous_sid = None

    @property
    def authenticated(self) -> bool:
        return self.data.get("authenticated") is True

    @property
    def username(self) -> str | None:
        return self.data.get("username")

    @property
    def email(self) -> str | None:
        return self.data.get("email")

    def authenticate(self, username: str, email: str, max_age: int = SESSION_EXPIRE_SECONDS):
        self.regenerate()
        self.data["authenticated"] = True
        self.data["email"] = email
        self.data["username"] = username
        self.expires_at = utcnow() + timedelta(seconds=max_age)
        self.modified = True

    def regenerate(self):
        """Moves the session to a fresh id; the old record is dropped on save."""
        if not self.is_new and self.previous_sid is None:
            self.previous_sid = self.sid
        self.sid = secrets.token_urlsafe(32)
        self.is_new = True

    def is_empty(self) -> bool:
        return not self.data

    def remaining_seconds(self) -> int:
        if self.expires_at is None:
            return SESSION_EXPIRE_SECONDS
        return max(int((self.expires_at - utcnow()).total_seconds()), 0)


# -------------------------------
# Session Store
# -------------------------------

class SessionStore:
    """
    Persists sessions in the ``sessions`` table.
    The browser only ever holds the signed session id.
    """

    def __init__(self, session_factory, secret: str, max_age: int = SESSION_EXPIRE_SECONDS):
        self.session_factory = session_factory
        self.max_age = max_age
        self.signer = TimestampSigner(secret)

    def sign(self, sid: str) -> str:
        return self.signer.sign(sid).decode("utf-8")

    def unsign(self, value: str) -> str | None:
        try:
            return self.signer.unsign(value, max_age=self.max_age).decode("utf-8")
        except BadSignature:
            return None

    def load(self, cookie_value: str | None) -> Session:
        if not cookie_value:
            return Session()

        sid = self.unsign(cookie_value)
        if sid is None:
            logger.info("Ignoring session cookie with a bad signature")
            return Session()

        with self.session_factory() as db:
            record = db.get(SessionRecord, sid)
            if record is None:
                return Session()

            expires_at = as_utc(record.expires_at)
            if expires_at <= utcnow():
                db.delete(record)
                db.commit()
                return Session()

            return Session(sid=record.sid, data=json.loads(record.data), expires_at=expires_at)

    def save(self, session: Session):
        if session.expires_at is None:
            session.expires_at = utcnow() + timedelta(seconds=self.max_age)

        with self.session_factory() as db:
            if session.previous_sid:
                db.query(SessionRecord).filter(SessionRecord.sid == session.previous_sid).delete()
            db.merge(SessionRecord(
                sid=session.sid,
                data=json.dumps(session.data),
                expires_at=session.expires_at
            ))
            db.commit()

    def destroy(self, session: Session):
        with self.session_factory() as db:
            db.query(SessionRecord).filter(SessionRecord.sid == session.sid).delete()
            db.commit()
        session.data.clear()
        session.destroyed = True

    def purge_expired(self) -> int:
        with self.session_factory() as db:
            count = db.query(SessionRecord).filter(SessionRecord.expires_at <= utcnow()).delete()
            db.commit()
        return count


# -------------------------------
# Middleware & Dependency
# -------------------------------

class SessionMiddleware(BaseHTTPMiddleware):
    """
    Loads the session before the handler runs and persists it afterwards.
    Sessions that never received data are not stored and get no cookie.
    """

    def __init__(self, app, store: SessionStore, cookie_name: str = SESSION_COOKIE_NAME, https_only: bool = False):
        super().__init__(app)
        self.store = store
        self.cookie_name = cookie_name
        self.https_only = https_only

    async def dispatch(self, request, call_next):
        session = await run_in_threadpool(self.store.load, request.cookies.get(self.cookie_name))
        request.state.session = session

        response = await call_next(request)

        if session.destroyed:
            response.delete_cookie(self.cookie_name, path="/")
        elif not session.is_empty() and (session.is_new or session.modified):
            await run_in_threadpool(self.store.save, session)
            response.set_cookie(
                self.cookie_name,
                self.store.sign(session.sid),
                max_age=session.remaining_seconds(),
                path="/",
                httponly=True,
                secure=self.https_only,
                samesite="lax",
            )
        return response


def get_session(request: Request) -> Session:
    return request.state.session
