"""Process-wide error, exception and fatal-error reporting in debug or production mode."""

from __future__ import annotations

from error_visibility.bootstrap import configure, debug_from_env
from error_visibility.errors import ConvertedError
from error_visibility.interception import Suppression, is_suppressed, suppressed
from error_visibility.reporting import clear_last_error, format_stack_trace, last_error, record_error
from error_visibility.runtime import current_settings, error_reporting
from error_visibility.severity import Severity, label_for, title_label, trigger_error
from error_visibility.web import PoweredByFilter, remove_powered_by

__all__ = [
    'ConvertedError',
    'PoweredByFilter',
    'Severity',
    'Suppression',
    'clear_last_error',
    'configure',
    'current_settings',
    'debug_from_env',
    'error_reporting',
    'format_stack_trace',
    'is_suppressed',
    'label_for',
    'last_error',
    'record_error',
    'remove_powered_by',
    'suppressed',
    'title_label',
    'trigger_error',
]
