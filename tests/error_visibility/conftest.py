"""Restore interpreter-wide hooks around every test.

``configure`` mutates process-global state (``sys.excepthook``, warnings
filters, ``atexit``). Tests re-invoke it freely; this fixture puts the
interpreter back the way pytest left it.
"""

from __future__ import annotations

import atexit
import faulthandler
import logging
import os
import sys
import threading
import tracemalloc
import warnings
from collections.abc import Generator
from pathlib import Path

import pytest

from error_visibility import reporting, runtime
from error_visibility.bootstrap import DEBUG_ENV_VAR

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def restore_interpreter_hooks(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    excepthook = sys.excepthook
    unraisablehook = sys.unraisablehook
    thread_excepthook = threading.excepthook
    faulthandler_enabled = faulthandler.is_enabled()
    was_tracing = tracemalloc.is_tracing()
    package_logger = logging.getLogger('error_visibility')
    logger_level = package_logger.level

    monkeypatch.setattr(runtime, '_settings', None)
    monkeypatch.setattr(runtime, '_tracing_started', False)
    monkeypatch.setattr(runtime, '_displaced_showwarning', None)
    monkeypatch.setattr(reporting, '_last_error', None)

    with warnings.catch_warnings():
        yield

    atexit.unregister(reporting.report_last_error)
    sys.excepthook = excepthook
    sys.unraisablehook = unraisablehook
    threading.excepthook = thread_excepthook
    package_logger.setLevel(logger_level)
    if faulthandler_enabled:
        faulthandler.enable(file=sys.__stderr__, all_threads=True)
    else:
        faulthandler.disable()
    if tracemalloc.is_tracing() and not was_tracing:
        tracemalloc.stop()


@pytest.fixture
def child_env() -> dict[str, str]:
    """Environment for a child interpreter that imports this checkout.

    The repo root goes first on PYTHONPATH so ``error_visibility`` resolves
    without an install, and the mode variable is cleared.
    """
    env = {k: v for k, v in os.environ.items() if k != DEBUG_ENV_VAR}
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get('PYTHONPATH', '')]))
    return env
