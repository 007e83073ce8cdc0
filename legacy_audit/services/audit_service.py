"""
Audit recording and lookup service
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from legacy_audit.core.constants import (
    ACTION_CREATE,
    ACTION_UPDATE,
    ACTION_DESTROY,
    AUDIT_ACTIONS,
    MEMBERSHIP_UID_KEY,
    MEMBERSHIP_CONTRACT_UID_KEY,
)
from legacy_audit.models.audit import Audit, AuditQuery
from legacy_audit.services.audit_context import get_audit_context
from legacy_audit.services.audit_hooks import HookOutcome

logger = logging.getLogger(__name__)


class InvalidAuditFilter(Exception):
    """Raised for filter combinations the audit listing cannot answer"""


@dataclass
class AuditWriteResult:
    """Outcome of a write; audit is None when the write was suppressed"""
    outcome: HookOutcome
    audit: Optional[Audit] = None

    @property
    def saved(self) -> bool:
        return self.outcome == HookOutcome.SAVED


def record_audit(
    db: Session,
    auditable_type: str,
    auditable_id: int,
    action: str,
    changes: Optional[Any] = None,
    membership_uid: Optional[int] = None,
    membership_contract_uid: Optional[int] = None,
    created_at: Optional[datetime] = None,
    comment: Optional[str] = None,
) -> AuditWriteResult:
    """
    Create an audit row for a change to an auditable entity

    Membership columns not passed explicitly are taken from the audit
    context's foreign-key bag. Editor columns, the legacy type code and the
    version are filled by the pre-save hooks.

    Args:
        db: Database session
        auditable_type: Type name of the audited entity (e.g. "Invoice")
        auditable_id: Identifier of the audited entity
        action: "create", "update" or "destroy"
        changes: Change history to serialize (optional)
        membership_uid: Membership the change belongs to (optional)
        membership_contract_uid: Membership contract the change belongs to (optional)
        created_at: Override for the event time (optional)
        comment: Accepted for compatibility; the legacy table does not store it

    Returns:
        AuditWriteResult; outcome is SUPPRESSED when auditing is disabled
    """
    context = get_audit_context(db)
    foreign_keys = context.uids_columns(db)

    audit = Audit(
        auditable_type=auditable_type,
        auditable_id=auditable_id,
        action=action,
        audited_changes=changes,
        membership_uid=membership_uid if membership_uid is not None else foreign_keys.get(MEMBERSHIP_UID_KEY),
        membership_contract_uid=(
            membership_contract_uid
            if membership_contract_uid is not None
            else foreign_keys.get(MEMBERSHIP_CONTRACT_UID_KEY)
        ),
        created_at=created_at,
        comment=comment,
    )
    db.add(audit)
    db.commit()

    if not inspect(audit).has_identity:
        logger.info("Audit suppressed: %s %s#%s", action, auditable_type, auditable_id)
        return AuditWriteResult(outcome=HookOutcome.SUPPRESSED)

    db.refresh(audit)
    context.add_audited_class(db, auditable_type)
    return AuditWriteResult(outcome=HookOutcome.SAVED, audit=audit)


def get_audit(db: Session, audit_uid: int) -> Optional[Audit]:
    return db.query(Audit).filter(Audit.audit_uid == audit_uid).first()


def list_audits(
    db: Session,
    action: Optional[str] = None,
    auditable_id: Optional[int] = None,
    auditable_type: Optional[str] = None,
    up_until: Optional[datetime] = None,
    from_version: Optional[int] = None,
    to_version: Optional[int] = None,
    descending: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> List[Audit]:
    """
    List audits using the model's filters

    Raises:
        InvalidAuditFilter: If action is unknown or only half of the auditable key is given
    """
    if action is not None and action not in AUDIT_ACTIONS:
        raise InvalidAuditFilter(f"action must be one of {sorted(AUDIT_ACTIONS)}")
    if (auditable_id is None) != (auditable_type is None):
        raise InvalidAuditFilter("auditable_id and auditable_type must be given together")

    query: AuditQuery = Audit.query(db)

    if action == ACTION_CREATE:
        query = query.creates()
    elif action == ACTION_UPDATE:
        query = query.updates()
    elif action == ACTION_DESTROY:
        query = query.destroys()

    if auditable_id is not None:
        query = query.auditable_finder(auditable_id, auditable_type)

    if up_until is not None:
        query = query.up_until(up_until)
    if from_version is not None:
        query = query.from_version(from_version)
    if to_version is not None:
        query = query.to_version(to_version)
    if descending:
        query = query.descending()

    return query.offset(skip).limit(limit).all()


def get_ancestors(db: Session, audit_uid: int) -> Optional[List[Audit]]:
    """
    Full history of the audit's entity up to and including it; None if the audit does not exist

    Raises:
        IncompleteAuditKey: If the stored audit lacks its auditable key or version
    """
    audit = get_audit(db, audit_uid)
    if audit is None:
        return None
    return audit.ancestors(db).all()
