"""
Identity carried in the session cookie.

The session (a signed cookie, see SESSION_ENGINE) holds ``{"id", "username",
"role"}`` under SESSION_USER_KEY. Route gating reads it without touching the
database.
"""
from dataclasses import dataclass
from typing import Optional

SESSION_USER_KEY = 'user'


@dataclass(frozen=True)
class SessionUser:
    id: int
    username: str
    role: str


def store_session_user(request, user) -> None:
    request.session[SESSION_USER_KEY] = user.session_payload()


def get_current_user(request) -> Optional[SessionUser]:
    """The logged-in identity from the session, or None when absent or malformed."""
    data = request.session.get(SESSION_USER_KEY)
    if not isinstance(data, dict):
        return None
    try:
        return SessionUser(id=data['id'], username=data['username'], role=data['role'])
    except KeyError:
        return None
