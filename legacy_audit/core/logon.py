"""
Current-actor lookups used to stamp editor columns on audit rows.

The authentication layer owns this state; the audit model only reads it.
Values are held in context variables so each request or worker task sees
its own actor.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional, Protocol


_current_member: ContextVar[Optional[int]] = ContextVar("current_member", default=None)
_current_quintess_user: ContextVar[Optional[int]] = ContextVar("current_quintess_user", default=None)


class EditorSource(Protocol):
    """Anything that can report who is making the current change"""

    def current_member(self) -> Optional[int]:
        ...

    def current_quintess_user(self) -> Optional[int]:
        ...


class Logon:
    """Default editor source backed by context variables"""

    @staticmethod
    def current_member() -> Optional[int]:
        return _current_member.get()

    @staticmethod
    def current_quintess_user() -> Optional[int]:
        return _current_quintess_user.get()

    @staticmethod
    def set_current(member_uid: Optional[int] = None, quintess_user_uid: Optional[int] = None) -> None:
        """Set the acting member and/or back-office user for the current context"""
        _current_member.set(member_uid)
        _current_quintess_user.set(quintess_user_uid)

    @staticmethod
    def clear() -> None:
        _current_member.set(None)
        _current_quintess_user.set(None)

    @staticmethod
    @contextmanager
    def acting_as(member_uid: Optional[int] = None, quintess_user_uid: Optional[int] = None) -> Iterator[None]:
        """
        Temporarily act as the given editor

        Usage:
            with Logon.acting_as(quintess_user_uid=7):
                record_audit(db, "Invoice", 42, "update")
        """
        member_token = _current_member.set(member_uid)
        user_token = _current_quintess_user.set(quintess_user_uid)
        try:
            yield
        finally:
            _current_member.reset(member_token)
            _current_quintess_user.reset(user_token)
