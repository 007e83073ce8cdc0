"""
Audit context: the shared switches and caches the audit model consults.

One ``AuditContext`` is built from settings at import time and used by any
session that does not carry its own under ``session.info["audit_context"]``.
Tests and bulk jobs can pass a dedicated context instead of flipping the
shared one.
"""
import enum
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legacy_audit.core.config import Settings, settings
from legacy_audit.core.constants import MEMBER_UID_KEY, MEMBERSHIP_UID_KEY
from legacy_audit.core.logon import EditorSource, Logon
from legacy_audit.models.audit import Audit
from legacy_audit.models.member import MemberMembership

logger = logging.getLogger(__name__)

SESSION_INFO_KEY = "audit_context"


class ConsistencyResult(str, enum.Enum):
    NOT_APPLICABLE = "not_applicable"
    CONSISTENT = "consistent"
    MISMATCH = "mismatch"
    LOOKUP_FAILED = "lookup_failed"


class AuditContext:
    """Disabled flag, audited type-name cache, foreign-key bag and editor source"""

    def __init__(
        self,
        disabled: bool = False,
        sequential_versions: bool = False,
        editor_source: EditorSource = Logon,
    ):
        self.disabled = disabled
        self.sequential_versions = sequential_versions
        self.editor_source = editor_source
        self.suppressed_count = 0
        self._audited_classes: Optional[List[str]] = None
        self._foreign_keys: Dict[str, Any] = {}

    @classmethod
    def from_settings(cls, config: Settings) -> "AuditContext":
        return cls(
            disabled=config.AUDIT_DISABLED,
            sequential_versions=config.AUDIT_SEQUENTIAL_VERSIONS,
        )

    @contextmanager
    def suppressed(self) -> Iterator["AuditContext"]:
        """
        Suppress audit writes for the duration of the block

        Usage:
            with audit_context.suppressed():
                import_members(db, rows)
        """
        previous = self.disabled
        self.disabled = True
        try:
            yield self
        finally:
            self.disabled = previous

    def audited_classes(self, db: Session) -> List[str]:
        """Distinct auditable type names, loaded once and then only appended to"""
        if self._audited_classes is None:
            rows = (
                db.query(Audit.auditable_type)
                .filter(Audit.auditable_type.isnot(None))
                .distinct()
                .order_by(Audit.auditable_type.asc())
                .all()
            )
            self._audited_classes = [row[0] for row in rows]
            logger.debug("Loaded %d audited classes", len(self._audited_classes))
        return list(self._audited_classes)

    def add_audited_class(self, db: Session, class_name: str) -> bool:
        """Register a type name; returns False when it was already known"""
        self.audited_classes(db)
        if class_name in self._audited_classes:
            return False
        self._audited_classes.append(class_name)
        return True

    def these_uids(self, key_uid_hash: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Replace the foreign-key bag"""
        self._foreign_keys = dict(key_uid_hash or {})
        return dict(self._foreign_keys)

    def uids_columns(self, db: Session) -> Dict[str, Any]:
        """Current foreign-key bag, after checking the member/membership pairing"""
        self.check_member_membership(db)
        return dict(self._foreign_keys)

    def check_member_membership(self, db: Session) -> ConsistencyResult:
        member_uid = self._foreign_keys.get(MEMBER_UID_KEY)
        membership_uid = self._foreign_keys.get(MEMBERSHIP_UID_KEY)
        if member_uid is None or membership_uid is None:
            return ConsistencyResult.NOT_APPLICABLE

        try:
            pairing = (
                db.query(MemberMembership)
                .filter(
                    MemberMembership.member_uid == member_uid,
                    MemberMembership.membership_uid == membership_uid,
                )
                .first()
            )
        except SQLAlchemyError as e:
            logger.warning("Member/membership lookup failed for foreign keys %s: %s", self._foreign_keys, e)
            return ConsistencyResult.LOOKUP_FAILED

        if pairing is None:
            logger.warning("Member/membership mismatch in foreign keys %s", self._foreign_keys)
            return ConsistencyResult.MISMATCH
        return ConsistencyResult.CONSISTENT


audit_context = AuditContext.from_settings(settings)


def get_audit_context(db: Session) -> AuditContext:
    """Context attached to the session, or the shared default"""
    return db.info.get(SESSION_INFO_KEY) or audit_context
