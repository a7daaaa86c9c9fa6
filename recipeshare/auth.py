from __future__ import annotations

from typing import Optional, Protocol

from flask import Request

USER_HEADER = "X-User-Id"


class Authenticator(Protocol):
    """Resolves the identity of the user behind a request."""

    def current_user(self, request: Request) -> Optional[str]:
        """Return the requester's identifier or ``None`` when anonymous."""


class HeaderAuthenticator:
    """Trusts the user identifier supplied by the front end in a header."""

    def __init__(self, header: str = USER_HEADER) -> None:
        self.header = header

    def current_user(self, request: Request) -> Optional[str]:
        user_id = request.headers.get(self.header, "").strip()
        return user_id or None


__all__ = ["Authenticator", "HeaderAuthenticator", "USER_HEADER"]
