"""URL paths of the padel directory backend.

Fixed paths are module constants; paths that embed an id are small
functions so that callers cannot forget to quote the id.
"""

from __future__ import annotations

from urllib.parse import quote

USERS = "/api/users"
USER_SEARCH = "/api/users/search"
USER_STATS = "/api/users/stats"

AUTH_REGISTER = "/api/auth/register"
AUTH_LOGIN = "/api/auth/login"
AUTH_LOGOUT = "/api/auth/logout"
AUTH_REFRESH = "/api/auth/refresh"
AUTH_RESET_PASSWORD = "/api/auth/reset-password"

UPLOAD_AVATAR = "/api/upload/avatar"
UPLOAD_DOCUMENT = "/api/upload/document"

HEALTH = "/api/health"


def user_by_id(user_id: str) -> str:
    return f"{USERS}/{quote(str(user_id), safe='')}"


def user_profile(user_id: str) -> str:
    return f"{user_by_id(user_id)}/profile"


def user_avatar(user_id: str) -> str:
    return f"{user_by_id(user_id)}/avatar"
