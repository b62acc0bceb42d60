"""Convert runtime errors (warnings) into ``ConvertedError`` exceptions.

Python reports non-fatal runtime conditions as warnings: the interpreter
prints them and carries on. Once ``install_error_hook()`` runs, every warning
instead raises a ``ConvertedError`` at the point it was issued, so ordinary
``try``/``except`` decides what happens next::

    install_error_hook()

    try:
        legacy_api()  # issues DeprecationWarning
    except ConvertedError as e:
        print(e.severity, e.filename, e.lineno)

A call site that expects noise can opt out with the suppression marker. The
warning is dropped without a trace and execution continues::

    with suppressed:
        legacy_api()

    @suppressed
    def probe() -> None:
        legacy_api()

The marker lives in a ``ContextVar``, so it is scoped to the current thread
or asyncio task and nests freely.
"""

from __future__ import annotations

__all__ = [
    'Suppression',
    'converting_warnings',
    'install_error_hook',
    'is_suppressed',
    'suppressed',
]

import contextvars
import functools
import inspect
import warnings
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self, TextIO, TypeVar, cast

from error_visibility.errors import ConvertedError
from error_visibility.severity import severity_for

_F = TypeVar('_F', bound=Callable[..., object])

_suppression_depth: contextvars.ContextVar[int] = contextvars.ContextVar('error_visibility_suppression', default=0)


def is_suppressed() -> bool:
    """Whether the current context is inside a ``suppressed`` block."""
    return _suppression_depth.get() > 0


class Suppression:
    """Marker that disables error-to-exception conversion for a block or call.

    Supports two usage forms:

    - **Context manager**: ``with suppressed:`` or ``async with suppressed:``
    - **Decorator**: ``@suppressed`` on sync or async functions (auto-detected)

    Re-entrant: the same instance may be entered again while active.
    """

    # -- Decorator protocol --

    def __call__(self, func: _F) -> _F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                async with self:
                    return await func(*args, **kwargs)

            return cast(_F, async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with self:
                return func(*args, **kwargs)

        return cast(_F, sync_wrapper)

    # -- Sync context manager --

    def __enter__(self) -> Self:
        _suppression_depth.set(_suppression_depth.get() + 1)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        _suppression_depth.set(_suppression_depth.get() - 1)

    # -- Async context manager --

    async def __aenter__(self) -> Self:
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


suppressed = Suppression()


def _convert_warning(
    message: Warning | str,
    category: type[Warning],
    filename: str,
    lineno: int,
    file: TextIO | None = None,
    line: str | None = None,
) -> None:
    """``warnings.showwarning`` replacement: raise instead of printing."""
    if is_suppressed():
        return
    raise ConvertedError(str(message), severity_for(category), filename, lineno, category=category)


def converting_warnings() -> bool:
    """Whether ``install_error_hook`` currently owns ``warnings.showwarning``."""
    return warnings.showwarning is _convert_warning


def install_error_hook() -> None:
    """Route every warning through ``_convert_warning``.

    The ``always`` filter bypasses the once-per-location registry and the
    default ``ignore`` entries (``DeprecationWarning`` outside ``__main__``,
    ``ResourceWarning``), so each occurrence reaches the hook.
    """
    warnings.simplefilter('always')
    warnings.showwarning = _convert_warning
