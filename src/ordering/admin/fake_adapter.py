"""Fake admin auth adapter — a single configured account with in-memory sessions.

Sessions expire after ``session_ttl`` seconds. At most ``max_sessions`` are
kept; signing in beyond that drops the oldest.
"""

import hmac
import time
from uuid import uuid4

from ordering.admin.port import AdminAuthPort

SESSION_TTL_SECONDS = 12 * 60 * 60
MAX_SESSIONS = 20


class FakeAdminAuth(AdminAuthPort):
    def __init__(
        self,
        email: str,
        password: str,
        session_ttl: float = SESSION_TTL_SECONDS,
        max_sessions: int = MAX_SESSIONS,
        clock=time.monotonic,
    ):
        self.email = email
        self.password = password
        self.session_ttl = session_ttl
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: dict[str, float] = {}  # token -> expiry, oldest first

    def _prune(self) -> None:
        now = self._clock()
        for token in [token for token, expires_at in self._sessions.items() if expires_at <= now]:
            del self._sessions[token]

    def sign_in(self, email: str, password: str) -> str | None:
        email_ok = hmac.compare_digest((email or "").strip().lower().encode(), self.email.lower().encode())
        password_ok = hmac.compare_digest((password or "").encode(), self.password.encode())
        if not (email_ok and password_ok):
            return None

        self._prune()
        while len(self._sessions) >= self.max_sessions:
            del self._sessions[next(iter(self._sessions))]

        token = uuid4().hex
        self._sessions[token] = self._clock() + self.session_ttl
        return token

    def sign_out(self, token: str) -> None:
        self._sessions.pop(token, None)

    def is_admin(self, token: str | None) -> bool:
        if not token:
            return False
        expires_at = self._sessions.get(token)
        if expires_at is None:
            return False
        if expires_at <= self._clock():
            del self._sessions[token]
            return False
        return True

    @property
    def session_count(self) -> int:
        self._prune()
        return len(self._sessions)
