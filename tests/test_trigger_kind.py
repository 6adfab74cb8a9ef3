"""Tests for trigger source parsing."""

from __future__ import annotations

import pytest

from app.migration.triggers import TriggerKind


def test_parse_known_sources() -> None:
    assert TriggerKind.parse('UserMigration_Authentication') is TriggerKind.AUTHENTICATION
    assert TriggerKind.parse('UserMigration_ForgotPassword') is TriggerKind.FORGOT_PASSWORD


@pytest.mark.parametrize('source', ['SomethingElse', 'PreSignUp_SignUp', '', None])
def test_parse_other_sources(source) -> None:
    assert TriggerKind.parse(source) is None
