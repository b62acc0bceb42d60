"""Tests for the severity table, label formatting and warning classification."""

from __future__ import annotations

import warnings

import pytest

from error_visibility.severity import (
    Severity,
    UserDeprecationWarning,
    UserError,
    UserNotice,
    label_for,
    severity_for,
    title_label,
    trigger_error,
)


class TestLabelFor:
    """Every standard code has a fixed label; everything else yields None."""

    @pytest.mark.parametrize(
        'code, label',
        [
            (Severity.ERROR, 'fatal error'),
            (Severity.WARNING, 'warning'),
            (Severity.PARSE, 'parsing error'),
            (Severity.NOTICE, 'notice'),
            (Severity.CORE_ERROR, 'startup error'),
            (Severity.CORE_WARNING, 'startup warning'),
            (Severity.COMPILE_ERROR, 'compilation error'),
            (Severity.COMPILE_WARNING, 'compilation warning'),
            (Severity.USER_ERROR, 'user-generated error'),
            (Severity.USER_WARNING, 'user-generated warning'),
            (Severity.USER_NOTICE, 'user-generated notice'),
            (Severity.RECOVERABLE_ERROR, 'error'),
            (Severity.DEPRECATED, 'deprecation notice'),
            (Severity.USER_DEPRECATED, 'user-generated deprecation notice'),
        ],
    )
    def test_known_code(self, code: Severity, label: str) -> None:
        assert label_for(code) == label
        assert label_for(int(code)) == label

    @pytest.mark.parametrize('code', [0, 3, 2048, 32767, -1, 1 << 20])
    def test_unknown_code_is_none(self, code: int) -> None:
        assert label_for(code) is None

    def test_table_covers_every_member(self) -> None:
        assert all(label_for(member) is not None for member in Severity)


class TestTitleLabel:
    @pytest.mark.parametrize(
        'code, expected',
        [
            (Severity.WARNING, 'Warning'),
            (Severity.ERROR, 'Fatal Error'),
            (Severity.USER_WARNING, 'User-generated Warning'),
            (Severity.USER_DEPRECATED, 'User-generated Deprecation Notice'),
            (Severity.RECOVERABLE_ERROR, 'Error'),
        ],
    )
    def test_capitalizes_each_word(self, code: Severity, expected: str) -> None:
        assert title_label(code) == expected

    def test_unknown_code_uses_placeholder(self) -> None:
        assert title_label(2048) == 'Unknown Error'


class CustomRuntimeWarning(RuntimeWarning):
    pass


class LibraryDeprecation(DeprecationWarning):
    pass


class TestSeverityFor:
    """Warning categories map to the most specific known severity."""

    @pytest.mark.parametrize(
        'category, severity',
        [
            (RuntimeWarning, Severity.WARNING),
            (Warning, Severity.WARNING),
            (UserWarning, Severity.USER_WARNING),
            (UserError, Severity.USER_ERROR),
            (UserNotice, Severity.USER_NOTICE),
            (UserDeprecationWarning, Severity.USER_DEPRECATED),
            (DeprecationWarning, Severity.DEPRECATED),
            (PendingDeprecationWarning, Severity.DEPRECATED),
            (FutureWarning, Severity.DEPRECATED),
            (SyntaxWarning, Severity.COMPILE_WARNING),
            (ImportWarning, Severity.CORE_WARNING),
            (ResourceWarning, Severity.NOTICE),
            (BytesWarning, Severity.NOTICE),
        ],
    )
    def test_builtin_categories(self, category: type[Warning], severity: Severity) -> None:
        assert severity_for(category) is severity

    def test_subclass_inherits_base_severity(self) -> None:
        assert severity_for(CustomRuntimeWarning) is Severity.WARNING
        assert severity_for(LibraryDeprecation) is Severity.DEPRECATED


class TestTriggerError:
    def test_warns_at_caller_location(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            trigger_error('disk almost full', Severity.USER_WARNING)

        assert len(caught) == 1
        assert caught[0].category is UserWarning
        assert str(caught[0].message) == 'disk almost full'
        assert caught[0].filename == __file__

    def test_default_is_user_notice(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            trigger_error('cache miss')

        assert caught[0].category is UserNotice

    @pytest.mark.parametrize('severity', [Severity.WARNING, Severity.ERROR, 2048, 0])
    def test_rejects_non_user_severity(self, severity: int) -> None:
        with pytest.raises(ValueError, match='USER_'):
            trigger_error('nope', severity)
