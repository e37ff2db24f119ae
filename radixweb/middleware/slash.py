"""Adding and removing the trailing slash of a request path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SlashResult:
    """Outcome of a trailing-slash rewrite.

    ``path`` is the path the request carries afterwards. ``request_uri`` is set
    when the request was rewritten in place; ``location`` and ``status`` are set
    when the client should be redirected instead.
    """

    path: str
    request_uri: Optional[str] = None
    location: Optional[str] = None
    status: Optional[int] = None

    @property
    def redirect(self) -> bool:
        return self.location is not None

    @property
    def changed(self) -> bool:
        return self.request_uri is not None or self.location is not None


def sanitize_uri(uri: str) -> str:
    """Collapse leading slashes/backslashes so the URI cannot be absolute."""
    if len(uri) > 1 and uri[0] in "\\/" and uri[1] in "\\/":
        uri = "/" + uri.lstrip("/\\")
    return uri


def _rewrite(original: str, new_path: str, query: str, redirect_code: Optional[int]) -> SlashResult:
    uri = f"{new_path}?{query}" if query else new_path
    if redirect_code:
        return SlashResult(path=original, location=sanitize_uri(uri), status=redirect_code)
    return SlashResult(path=new_path, request_uri=uri)


def add_trailing_slash(path: str, query: str = "", redirect_code: Optional[int] = None) -> SlashResult:
    """Append a slash to ``path`` if missing, forwarding or redirecting."""
    if path.endswith("/"):
        return SlashResult(path=path)
    return _rewrite(path, path + "/", query, redirect_code)


def remove_trailing_slash(path: str, query: str = "", redirect_code: Optional[int] = None) -> SlashResult:
    """Strip a trailing slash from ``path`` (never from ``/``)."""
    if len(path) <= 1 or not path.endswith("/"):
        return SlashResult(path=path)
    return _rewrite(path, path[:-1], query, redirect_code)