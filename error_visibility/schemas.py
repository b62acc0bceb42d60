"""Pydantic records for runtime settings, recorded errors and trace frames."""

from __future__ import annotations

__all__ = [
    'LastError',
    'RuntimeSettings',
    'StackFrame',
    'StrictModel',
]

import pydantic


class StrictModel(pydantic.BaseModel):
    """Base model with strict validation."""

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


class RuntimeSettings(StrictModel):
    """Interpreter-level switches set by ``apply_visibility``.

    All four switches follow the ``debug`` flag when first applied.
    ``display_errors`` is later forced off by the fatal-error hook so that
    only formatted reports reach the console.
    """

    debug: bool
    display_startup_errors: bool
    display_errors: bool
    reporting_level: int
    report_memleaks: bool


class LastError(StrictModel):
    """An error that could not be delivered as ordinary control flow.

    Inspected once, during interpreter shutdown.
    """

    severity: int
    message: str
    filename: str | None = None
    lineno: int | None = None


class StackFrame(StrictModel):
    """One traceback entry as printed by the uncaught-exception reporter.

    Missing fields print as empty strings, except ``routine`` which prints
    as ``?``. A frame without a file gets no ``at`` line.
    """

    owner: str = ''
    call_marker: str = ''
    routine: str = '?'
    filename: str = ''
    lineno: int | None = None

    @property
    def call(self) -> str:
        return f'{self.owner}{self.call_marker}{self.routine}'
