"""
Audit model mapped onto the legacy ``Audit`` table.

Each row records one create/update/destroy event against an auditable
entity. The legacy table differs from what a generic auditing layer
expects:

* table ``Audit`` with primary key ``audit_uid``
* ``change_history`` holds the serialized changes (read and written
  through ``audited_changes``)
* there is no user column; editors are stored in ``member_editor_uid``
  or ``quintess_editor_uid``
* ``audit_type_ucode`` repeats the action as an upper-case legacy code
"""
from typing import Optional

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import Query, Session, object_session, relationship

from legacy_audit.core.constants import (
    ACTION_CREATE,
    ACTION_UPDATE,
    ACTION_DESTROY,
    DEFAULT_AUDIT_VERSION,
    LEGACY_AUDIT_TYPE_CODES,
)
from legacy_audit.core.logon import EditorSource
from legacy_audit.db.base import Base
from legacy_audit.db.types import SerializedHistory


class IncompleteAuditKey(ValueError):
    """Raised when an audit lacks the auditable key or version needed for a history lookup"""


class AuditQuery(Query):
    """Chainable filters over audit rows"""

    def descending(self) -> "AuditQuery":
        return self.order_by(None).order_by(Audit.version.desc(), Audit.audit_uid.desc())

    def creates(self) -> "AuditQuery":
        return self.filter(Audit.action == ACTION_CREATE)

    def updates(self) -> "AuditQuery":
        return self.filter(Audit.action == ACTION_UPDATE)

    def destroys(self) -> "AuditQuery":
        return self.filter(Audit.action == ACTION_DESTROY)

    def up_until(self, date_or_time) -> "AuditQuery":
        return self.filter(Audit.created_at <= date_or_time)

    def from_version(self, version: int) -> "AuditQuery":
        return self.filter(Audit.version >= version)

    def to_version(self, version: int) -> "AuditQuery":
        return self.filter(Audit.version <= version)

    def auditable_finder(self, auditable_id: int, auditable_type: str) -> "AuditQuery":
        return self.filter(
            Audit.auditable_id == auditable_id,
            Audit.auditable_type == auditable_type,
        )


class Audit(Base):
    __tablename__ = "Audit"

    audit_uid = Column(Integer, primary_key=True)
    auditable_id = Column(Integer, nullable=True, index=True)
    auditable_type = Column(String, nullable=True, index=True)
    action = Column(String, nullable=True)
    change_history = Column(SerializedHistory, nullable=True)
    version = Column(Integer, default=DEFAULT_AUDIT_VERSION, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True)
    audit_type_ucode = Column(String, nullable=True)

    membership_uid = Column(Integer, ForeignKey("Membership.membership_uid"), nullable=True)
    quintess_editor_uid = Column(Integer, ForeignKey("QuintessUser.quintess_user_uid"), nullable=True)
    member_editor_uid = Column(Integer, ForeignKey("Member.member_uid"), nullable=True)
    membership_contract_uid = Column(
        Integer, ForeignKey("MembershipContract.membership_contract_uid"), nullable=True
    )

    # Relationships
    membership = relationship("Membership")
    quintess_user = relationship("QuintessUser")
    member = relationship("Member")
    membership_contract = relationship("MembershipContract")

    # Accepted from callers but not persisted; the legacy table has no such columns
    associated_id = None
    associated_type = None
    user_id = None
    comment = None
    remote_address = None
    request_uuid = None

    @classmethod
    def query(cls, db: Session) -> AuditQuery:
        """Audit rows in version order"""
        return AuditQuery(cls, session=db).order_by(cls.version, cls.audit_uid)

    def ancestors(self, db: Optional[Session] = None) -> AuditQuery:
        """Audits of the same auditable up to and including this version"""
        if self.auditable_id is None or self.auditable_type is None or self.version is None:
            raise IncompleteAuditKey("ancestors requires auditable_id, auditable_type and version")
        db = db or object_session(self)
        if db is None:
            raise IncompleteAuditKey("ancestors requires a session; the audit is detached")
        return Audit.query(db).auditable_finder(self.auditable_id, self.auditable_type).to_version(self.version)

    @property
    def user(self):
        return None

    @user.setter
    def user(self, user_name):
        pass

    @property
    def audited_changes(self):
        # Changes are not tracked in place; assign a new value to update the row
        return self.change_history

    @audited_changes.setter
    def audited_changes(self, changes):
        self.change_history = changes

    def set_version_number(self) -> None:
        # Sequential numbering (max + 1 per auditable) is opt-in, see assign_sequential_version
        self.version = DEFAULT_AUDIT_VERSION

    def assign_sequential_version(self, db: Session) -> None:
        with db.no_autoflush:
            current = db.query(func.max(Audit.version)).filter(
                Audit.auditable_id == self.auditable_id,
                Audit.auditable_type == self.auditable_type,
            ).scalar()
        self.version = (current or 0) + 1

    def fill_legacy_columns(self) -> bool:
        """Copy the action into audit_type_ucode; returns False when the action is not a legacy code"""
        code = (self.action or "nothing").upper()
        if code not in LEGACY_AUDIT_TYPE_CODES:
            return False
        self.audit_type_ucode = code
        return True

    def fill_quintess_columns(self, editor_source: EditorSource) -> None:
        self.member_editor_uid = editor_source.current_member()
        self.quintess_editor_uid = editor_source.current_quintess_user()

    def __repr__(self) -> str:
        return (
            f"<Audit {self.audit_uid} {self.auditable_type}#{self.auditable_id} "
            f"{self.action} v{self.version}>"
        )
