"""
Tests for the current-editor lookups
"""
from legacy_audit.core.logon import Logon


def test_no_editor_by_default():
    assert Logon.current_member() is None
    assert Logon.current_quintess_user() is None


def test_set_current_and_clear():
    Logon.set_current(member_uid=11)

    assert Logon.current_member() == 11
    assert Logon.current_quintess_user() is None

    Logon.clear()
    assert Logon.current_member() is None


def test_acting_as_restores_outer_editor():
    Logon.set_current(quintess_user_uid=7)

    with Logon.acting_as(member_uid=11):
        assert Logon.current_member() == 11
        assert Logon.current_quintess_user() is None

    assert Logon.current_member() is None
    assert Logon.current_quintess_user() == 7
