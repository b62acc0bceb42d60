"""The uniform exception produced from intercepted runtime errors."""

from __future__ import annotations

__all__ = ['ConvertedError']

from error_visibility.severity import label_for


class ConvertedError(Exception):
    """A runtime error (warning) re-raised as an exception.

    Carries the message, severity code and source location of the warning
    that produced it. ``code`` is always 0; the classification lives in
    ``severity``.
    """

    def __init__(
        self,
        message: str,
        severity: int,
        filename: str | None = None,
        lineno: int | None = None,
        *,
        category: type[Warning] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.filename = filename
        self.lineno = lineno
        self.category = category
        self.code = 0

    @property
    def label(self) -> str | None:
        return label_for(self.severity)

    def __str__(self) -> str:
        return self.message
