"""Severity codes, their labels, and the warning categories that map onto them.

Runtime errors arrive through Python's warnings machinery, so every warning
category is classified into one of the standard severity codes::

    RuntimeWarning          -> Severity.WARNING       ('warning')
    DeprecationWarning      -> Severity.DEPRECATED    ('deprecation notice')
    UserNotice              -> Severity.USER_NOTICE   ('user-generated notice')

Label lookups never fail. An unknown code yields ``None`` from ``label_for``
and the ``Unknown Error`` placeholder from ``title_label``.
"""

from __future__ import annotations

__all__ = [
    'REPORT_ALL',
    'REPORT_NONE',
    'USER_SEVERITIES',
    'Severity',
    'UserDeprecationWarning',
    'UserError',
    'UserNotice',
    'label_for',
    'severity_for',
    'title_label',
    'trigger_error',
]

import enum
import warnings
from collections.abc import Mapping, Set


class Severity(enum.IntEnum):
    ERROR = 1
    WARNING = 2
    PARSE = 4
    NOTICE = 8
    CORE_ERROR = 16
    CORE_WARNING = 32
    COMPILE_ERROR = 64
    COMPILE_WARNING = 128
    USER_ERROR = 256
    USER_WARNING = 512
    USER_NOTICE = 1024
    RECOVERABLE_ERROR = 4096
    DEPRECATED = 8192
    USER_DEPRECATED = 16384


# Reporting masks: every severity bit, or none at all.
REPORT_ALL = 32767
REPORT_NONE = 0

UNKNOWN_LABEL = 'unknown error'

_LABELS: Mapping[int, str] = {
    Severity.ERROR: 'fatal error',
    Severity.WARNING: 'warning',
    Severity.PARSE: 'parsing error',
    Severity.NOTICE: 'notice',
    Severity.CORE_ERROR: 'startup error',
    Severity.CORE_WARNING: 'startup warning',
    Severity.COMPILE_ERROR: 'compilation error',
    Severity.COMPILE_WARNING: 'compilation warning',
    Severity.USER_ERROR: 'user-generated error',
    Severity.USER_WARNING: 'user-generated warning',
    Severity.USER_NOTICE: 'user-generated notice',
    Severity.RECOVERABLE_ERROR: 'error',
    Severity.DEPRECATED: 'deprecation notice',
    Severity.USER_DEPRECATED: 'user-generated deprecation notice',
}


def label_for(code: int) -> str | None:
    """Return the lowercase label for a severity code, or None if unknown."""
    return _LABELS.get(code)


def title_label(code: int) -> str:
    """Capitalize each word of the label: ``user-generated warning`` -> ``User-generated Warning``."""
    label = label_for(code) or UNKNOWN_LABEL
    return ' '.join(word[:1].upper() + word[1:] for word in label.split(' '))


# -- Warning categories --


class UserError(UserWarning):
    """User-generated error raised via ``trigger_error``."""


class UserNotice(UserWarning):
    """User-generated notice raised via ``trigger_error``."""


class UserDeprecationWarning(DeprecationWarning):
    """User-generated deprecation notice raised via ``trigger_error``."""


_CATEGORY_SEVERITIES: Mapping[type[Warning], Severity] = {
    UserError: Severity.USER_ERROR,
    UserNotice: Severity.USER_NOTICE,
    UserDeprecationWarning: Severity.USER_DEPRECATED,
    UserWarning: Severity.USER_WARNING,
    DeprecationWarning: Severity.DEPRECATED,
    PendingDeprecationWarning: Severity.DEPRECATED,
    FutureWarning: Severity.DEPRECATED,
    SyntaxWarning: Severity.COMPILE_WARNING,
    ImportWarning: Severity.CORE_WARNING,
    ResourceWarning: Severity.NOTICE,
    BytesWarning: Severity.NOTICE,
    EncodingWarning: Severity.NOTICE,
    RuntimeWarning: Severity.WARNING,
    Warning: Severity.WARNING,
}

_USER_CATEGORIES: Mapping[Severity, type[Warning]] = {
    Severity.USER_ERROR: UserError,
    Severity.USER_WARNING: UserWarning,
    Severity.USER_NOTICE: UserNotice,
    Severity.USER_DEPRECATED: UserDeprecationWarning,
}

USER_SEVERITIES: Set[Severity] = frozenset(_USER_CATEGORIES)


def severity_for(category: type[Warning]) -> Severity:
    """Classify a warning category by its most specific known base class."""
    for base in category.__mro__:
        if base in _CATEGORY_SEVERITIES:
            return _CATEGORY_SEVERITIES[base]
    return Severity.WARNING


def trigger_error(message: str, severity: int = Severity.USER_NOTICE) -> None:
    """Raise a user-generated runtime error at the caller's location.

    Goes through the warnings machinery, so the installed error hook converts
    it like any other runtime error (or ignores it under ``suppressed``).

    Raises:
        ValueError: ``severity`` is not one of the ``USER_*`` codes.
    """
    if severity not in USER_SEVERITIES:
        raise ValueError(f'severity must be one of the USER_* codes, got {severity!r}')
    warnings.warn(message, _USER_CATEGORIES[Severity(severity)], stacklevel=2)
