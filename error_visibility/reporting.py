"""Reporters for uncaught exceptions and for errors that bypass normal handling.

Two process-level hooks, each installed visible (debug) or hidden
(production):

    Uncaught exceptions (``sys.excepthook``):
        Visible: print the exception and its stack, innermost frame first.
        Frames belonging to this package and to the stdlib machinery that
        dispatches warnings and runs scripts (``warnings``, ``runpy``) are left
        out, so the stack starts and ends in application code.
        Hidden: print nothing, not even for ``KeyboardInterrupt``. Either
        way the interpreter then exits with a non-zero status.

    Undeliverable errors (``sys.unraisablehook``, ``threading.excepthook``):
        Exceptions raised in finalizers, in ``__del__`` or in worker threads
        never reach surrounding ``except`` clauses. They are recorded as the
        last error and, when visible, printed by an ``atexit`` hook during
        the last moments of the process.

Output formats::

    ValueError [0]: bad input
      Parser->parse
        at /app/parser.py:42
      <module>
        at main.py:7

    Fatal Error: ValueError: boom
      at /app/worker.py:13

The interpreter may still end the process before any of this runs (a
segfault, ``os._exit``). ``faulthandler``, switched on by the runtime
settings, covers the crash case on stderr; nothing covers ``os._exit``.
"""

from __future__ import annotations

__all__ = [
    'clear_last_error',
    'exception_code',
    'extract_frames',
    'format_error',
    'format_stack_trace',
    'install_exception_hook',
    'install_fatal_hook',
    'last_error',
    'record_error',
    'report_last_error',
]

import atexit
import logging
import os
import sys
import threading
import traceback
from types import FrameType, TracebackType

from error_visibility.errors import ConvertedError
from error_visibility.runtime import disable_error_display
from error_visibility.schemas import LastError, StackFrame
from error_visibility.severity import Severity, title_label

logger = logging.getLogger(__name__)

_last_error: LastError | None = None

_PACKAGE_DIR = os.path.dirname(__file__) + os.sep
_DISPATCH_MODULES = frozenset({'runpy', 'warnings', '_py_warnings'})


# -- Formatting --


def format_error(severity: int, message: str, filename: str | None = None, lineno: int | None = None) -> str:
    """``<Title Label>: <message>`` then ``  at <file>:<line>``, ``?`` for missing parts."""
    file_part = filename if filename else '?'
    line_part = lineno if lineno is not None else '?'
    return f'{title_label(severity)}: {message}\n  at {file_part}:{line_part}\n'


def exception_code(exc: BaseException) -> int:
    """Numeric code printed in brackets: ``exc.code``, else ``errno``, else 0."""
    code = getattr(exc, 'code', None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    if isinstance(exc, OSError) and isinstance(exc.errno, int):
        return exc.errno
    return 0


def _owner_of(frame: FrameType) -> tuple[str, str]:
    """Owning class and call marker: ``->`` with ``self``, ``::`` otherwise."""
    owner, _, _ = frame.f_code.co_qualname.rpartition('.')
    if not owner or owner.endswith('<locals>'):
        return '', ''
    return owner, '->' if 'self' in frame.f_locals else '::'


def _is_dispatch_frame(frame: FrameType) -> bool:
    if frame.f_globals.get('__name__') in _DISPATCH_MODULES:
        return True
    return frame.f_code.co_filename.startswith(_PACKAGE_DIR)


def extract_frames(tb: TracebackType | None) -> list[StackFrame]:
    """Build printable frames from a traceback, innermost first.

    Frames of this package and of ``warnings``/``runpy`` are skipped.
    """
    frames = []
    for frame, lineno in traceback.walk_tb(tb):
        if _is_dispatch_frame(frame):
            continue
        owner, marker = _owner_of(frame)
        code = frame.f_code
        frames.append(
            StackFrame(
                owner=owner,
                call_marker=marker,
                routine=code.co_name or '?',
                filename=code.co_filename or '',
                lineno=lineno,
            )
        )
    frames.reverse()
    return frames


def format_stack_trace(exc: BaseException, tb: TracebackType | None = None) -> str:
    """Render an exception header followed by its frames.

    A ``ConvertedError`` is headed by its severity block (``Warning: ...`` /
    ``  at file:line``) rather than its type name.
    """
    if isinstance(exc, ConvertedError):
        lines = [format_error(exc.severity, exc.message, exc.filename, exc.lineno)]
    else:
        lines = [f'{type(exc).__name__} [{exception_code(exc)}]: {exc}\n']
    for frame in extract_frames(tb if tb is not None else exc.__traceback__):
        lines.append(f'  {frame.call}\n')
        if frame.filename != '':
            line_part = frame.lineno if frame.lineno is not None else ''
            lines.append(f'    at {frame.filename}:{line_part}\n')
    return ''.join(lines)


# -- Uncaught exceptions --


def _print_stack_trace(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_tb: TracebackType | None,
) -> None:
    if not issubclass(exc_type, Exception):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    try:
        sys.stdout.write(format_stack_trace(exc_value, exc_tb))
        sys.stdout.flush()
    except Exception:
        try:  # noqa: SIM105
            traceback.print_exception(exc_type, exc_value, exc_tb, file=sys.stderr)
        except Exception:
            pass  # stdout and stderr both unusable; the exit status still reports the failure


def _exit_silently(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_tb: TracebackType | None,
) -> None:
    """Print nothing for any uncaught exception."""


def install_exception_hook(visible: bool) -> None:
    """Set ``sys.excepthook`` to the printing or the silent reporter.

    In visible mode system exceptions (``KeyboardInterrupt``) are left to the
    interpreter's default hook. The silent reporter swallows them too.
    """
    sys.excepthook = _print_stack_trace if visible else _exit_silently


# -- Undeliverable ("fatal") errors --


def last_error() -> LastError | None:
    return _last_error


def clear_last_error() -> None:
    global _last_error
    _last_error = None


def record_error(severity: int, message: str, filename: str | None = None, lineno: int | None = None) -> LastError:
    """Store an error for the shutdown reporter. The newest record wins."""
    global _last_error
    _last_error = LastError(
        severity=int(severity),
        message=str(message),
        filename=str(filename) if filename is not None else None,
        lineno=int(lineno) if lineno is not None else None,
    )
    logger.debug('Recorded last error: %s', _last_error)
    return _last_error


def _record_exception(exc_type: type[BaseException], exc_value: BaseException | None, tb: TracebackType | None) -> None:
    if isinstance(exc_value, ConvertedError):
        record_error(exc_value.severity, exc_value.message, exc_value.filename, exc_value.lineno)
        return
    message = f'{exc_type.__name__}: {exc_value}' if exc_value is not None else exc_type.__name__
    entries = traceback.extract_tb(tb) if tb is not None else []
    if entries:
        record_error(Severity.ERROR, message, entries[-1].filename, entries[-1].lineno)
    else:
        record_error(Severity.ERROR, message)


def _record_unraisable(unraisable: sys.UnraisableHookArgs) -> None:
    _record_exception(unraisable.exc_type, unraisable.exc_value, unraisable.exc_traceback)


def _record_thread_exception(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return  # threading's default hook ignores SystemExit too
    _record_exception(args.exc_type, args.exc_value, args.exc_traceback)


def report_last_error() -> None:
    """Shutdown reporter: print the last recorded error, if any, to stdout."""
    error = _last_error
    if error is None:
        return
    sys.stdout.write(format_error(error.severity, error.message, error.filename, error.lineno))
    sys.stdout.flush()


def install_fatal_hook(visible: bool) -> None:
    """Silence default error display and, when visible, register the shutdown reporter.

    Default display is turned off in both modes: the recorders replace the
    interpreter's own unraisable and thread hooks, so the only output is the
    formatted report (or nothing). Re-installing replaces the previous
    registration.
    """
    disable_error_display()
    sys.unraisablehook = _record_unraisable
    threading.excepthook = _record_thread_exception
    atexit.unregister(report_last_error)
    if visible:
        atexit.register(report_last_error)
