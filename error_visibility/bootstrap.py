"""Single entry point that puts the process into debug or production mode.

Call it as the first statement of program startup, before any other
initialization that might itself fail::

    from error_visibility import configure

    configure(debug=False)

Debug mode prints converted errors, uncaught exceptions and undeliverable
errors to stdout. Production mode prints none of them and strips the
``X-Powered-By`` header. In both modes warnings become ``ConvertedError``
and an uncaught exception exits with status 1.
"""

from __future__ import annotations

__all__ = [
    'DEBUG_ENV_VAR',
    'configure',
    'debug_from_env',
]

import logging
import os
from collections.abc import Mapping, MutableMapping

import pydantic

from error_visibility.interception import install_error_hook
from error_visibility.reporting import install_exception_hook, install_fatal_hook
from error_visibility.runtime import apply_visibility
from error_visibility.web import remove_powered_by

logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = 'ERROR_VISIBILITY_DEBUG'

_bool_adapter = pydantic.TypeAdapter(bool)


def configure(debug: bool, *, response_headers: MutableMapping[str, str] | None = None) -> None:
    """Install all error hooks for the given mode.

    Re-invoking replaces the previous configuration; the same argument twice
    leaves the same hook state as once.

    Args:
        debug: Print diagnostics (True) or stay silent (False).
        response_headers: Outgoing response headers, when running inside a
            web response. ``X-Powered-By`` is removed from them in
            production mode.
    """
    debug = bool(debug)
    apply_visibility(debug)
    install_exception_hook(debug)
    install_error_hook()
    install_fatal_hook(debug)
    if not debug and response_headers is not None:
        remove_powered_by(response_headers)
    logger.debug('Configured error hooks (debug=%s)', debug)


def debug_from_env(environ: Mapping[str, str] | None = None) -> bool:
    """Read the mode from ``ERROR_VISIBILITY_DEBUG``; unset means production.

    Raises:
        pydantic.ValidationError: The value is not a recognised boolean
            (``1``/``0``, ``true``/``false``, ``yes``/``no``, ``on``/``off``).
    """
    if environ is None:
        environ = os.environ
    raw = environ.get(DEBUG_ENV_VAR, '').strip()
    if not raw:
        return False
    return _bool_adapter.validate_python(raw)
