"""Remove the ``X-Powered-By`` response header in production.

Two shapes are covered: a mutable header mapping owned by the caller, and
WSGI ``(name, value)`` header lists, the latter via ``PoweredByFilter``::

    app = PoweredByFilter(app)
"""

from __future__ import annotations

__all__ = [
    'POWERED_BY_HEADER',
    'PoweredByFilter',
    'remove_powered_by',
    'strip_powered_by',
]

from collections.abc import Callable, Iterable, MutableMapping
from typing import Any, TypeAlias

from error_visibility.runtime import current_settings

POWERED_BY_HEADER = 'X-Powered-By'

Headers: TypeAlias = list[tuple[str, str]]
StartResponse: TypeAlias = Callable[..., Any]
WSGIApp: TypeAlias = Callable[[dict[str, Any], StartResponse], Iterable[bytes]]


def _is_powered_by(name: str) -> bool:
    return name.lower() == POWERED_BY_HEADER.lower()


def remove_powered_by(headers: MutableMapping[str, str]) -> None:
    """Delete ``X-Powered-By`` (any casing) from a header mapping. No-op if absent."""
    for name in [name for name in headers if _is_powered_by(name)]:
        del headers[name]


def strip_powered_by(headers: Iterable[tuple[str, str]]) -> Headers:
    """Return a WSGI header list without ``X-Powered-By``."""
    return [(name, value) for name, value in headers if not _is_powered_by(name)]


class PoweredByFilter:
    """WSGI middleware dropping ``X-Powered-By`` while not in debug mode.

    Before ``configure`` has run the process counts as production.
    """

    def __init__(self, app: WSGIApp) -> None:
        self._app = app

    def __call__(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        settings = current_settings()
        if settings is not None and settings.debug:
            return self._app(environ, start_response)

        def filtered_start_response(status: str, headers: Headers, exc_info: Any = None) -> Any:
            if exc_info is None:
                return start_response(status, strip_powered_by(headers))
            return start_response(status, strip_powered_by(headers), exc_info)

        return self._app(environ, filtered_start_response)
