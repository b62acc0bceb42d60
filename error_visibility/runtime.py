"""Interpreter switches controlling how much diagnostic detail is emitted.

``apply_visibility(debug)`` sets four independent switches to the same value:

    display_startup_errors  crash tracebacks via ``faulthandler``
    display_errors          default console display of warnings
    reporting_level         severity mask; also the package logger threshold
    report_memleaks         allocation tracing via ``tracemalloc``

With ``display_errors`` off, warnings that reach the default display are
dropped instead of printed to stderr. Once the conversion hook is installed
it owns ``warnings.showwarning`` and the display switch leaves it alone.

These are best-effort settings. A switch the host cannot honour (for example
``faulthandler`` when stderr has no file descriptor) is skipped and logged.
"""

from __future__ import annotations

__all__ = [
    'apply_visibility',
    'current_settings',
    'disable_error_display',
    'error_reporting',
]

import faulthandler
import logging
import sys
import tracemalloc
import warnings
from collections.abc import Callable
from typing import Any, TextIO

from error_visibility.interception import converting_warnings, is_suppressed
from error_visibility.schemas import RuntimeSettings
from error_visibility.severity import REPORT_ALL, REPORT_NONE

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER = logging.getLogger('error_visibility')
_SILENT = logging.CRITICAL + 1

_settings: RuntimeSettings | None = None
_tracing_started = False
_displaced_showwarning: Callable[..., Any] | None = None


def current_settings() -> RuntimeSettings | None:
    """Settings from the last ``apply_visibility`` call, or None before any."""
    return _settings


def error_reporting() -> int:
    """Effective reporting mask: 0 under ``suppressed`` or before configuration."""
    if _settings is None or is_suppressed():
        return REPORT_NONE
    return _settings.reporting_level


def apply_visibility(debug: bool) -> RuntimeSettings:
    global _settings

    debug = bool(debug)
    settings = RuntimeSettings(
        debug=debug,
        display_startup_errors=debug,
        display_errors=debug,
        reporting_level=REPORT_ALL if debug else REPORT_NONE,
        report_memleaks=debug,
    )
    _set_startup_display(settings.display_startup_errors)
    _set_error_display(settings.display_errors)
    _PACKAGE_LOGGER.setLevel(logging.DEBUG if settings.reporting_level else _SILENT)
    _set_leak_reporting(settings.report_memleaks)
    _settings = settings
    logger.debug('Applied error visibility: %s', settings)
    return settings


def disable_error_display() -> None:
    """Turn default error display off, leaving the other switches as they are."""
    global _settings
    if _settings is not None:
        _settings = _settings.model_copy(update={'display_errors': False})
        _set_error_display(False)


def _hide_warning(
    message: Warning | str,
    category: type[Warning],
    filename: str,
    lineno: int,
    file: TextIO | None = None,
    line: str | None = None,
) -> None:
    """``warnings.showwarning`` replacement while error display is off."""


def _set_error_display(enabled: bool) -> None:
    global _displaced_showwarning
    if enabled:
        if warnings.showwarning is _hide_warning and _displaced_showwarning is not None:
            warnings.showwarning = _displaced_showwarning
        _displaced_showwarning = None
    elif warnings.showwarning is not _hide_warning and not converting_warnings():
        _displaced_showwarning = warnings.showwarning
        warnings.showwarning = _hide_warning


def _set_startup_display(enabled: bool) -> None:
    if not enabled:
        faulthandler.disable()
        return
    try:
        faulthandler.enable(file=sys.stderr, all_threads=True)
    except (AttributeError, ValueError, OSError, RuntimeError) as exc:
        # stderr replaced by an object without a usable fileno()
        logger.debug('faulthandler unavailable: %r', exc)


def _set_leak_reporting(enabled: bool) -> None:
    global _tracing_started
    if enabled:
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            _tracing_started = True
    elif _tracing_started:
        tracemalloc.stop()
        _tracing_started = False
