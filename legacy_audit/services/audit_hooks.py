"""
Pre-save hooks for audit rows, run from a SQLAlchemy before_flush listener.

For every pending or modified Audit the hooks run in order:

1. cancel the write when the audit context is disabled
2. copy the action into the legacy audit_type_ucode column
3. stamp the editor columns from the context's editor source

New rows additionally get their version number and created_at.
"""
import enum
import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from legacy_audit.models.audit import Audit
from legacy_audit.services.audit_context import AuditContext, get_audit_context
from legacy_audit.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


class HookOutcome(str, enum.Enum):
    SAVED = "saved"
    SUPPRESSED = "suppressed"


def run_before_save(db: Session, audit: Audit, context: AuditContext, is_new: bool) -> HookOutcome:
    """
    Apply the pre-save hooks to one audit row

    Args:
        db: Session the audit is being flushed in
        audit: Audit row about to be written
        context: Audit context deciding suppression and editors
        is_new: True for inserts, False for updates of an existing row

    Returns:
        SUPPRESSED when the row was taken out of the flush, SAVED otherwise
    """
    if context.disabled:
        if is_new:
            db.expunge(audit)
        else:
            db.expire(audit)
        context.suppressed_count += 1
        logger.debug("Audit write suppressed for %s#%s", audit.auditable_type, audit.auditable_id)
        return HookOutcome.SUPPRESSED

    if not audit.fill_legacy_columns():
        logger.debug("Action %r has no legacy audit type code", audit.action)

    audit.fill_quintess_columns(context.editor_source)

    if is_new:
        if context.sequential_versions:
            audit.assign_sequential_version(db)
        else:
            audit.set_version_number()
        if audit.created_at is None:
            audit.created_at = now_utc()

    return HookOutcome.SAVED


def _before_flush(db: Session, _flush_context: Any, _instances: Any) -> None:
    context = get_audit_context(db)

    for obj in list(db.new):
        if isinstance(obj, Audit):
            run_before_save(db, obj, context, is_new=True)

    for obj in list(db.dirty):
        if isinstance(obj, Audit) and db.is_modified(obj):
            run_before_save(db, obj, context, is_new=False)


def setup_audit_listeners() -> None:
    """Register the before_flush listener on all sessions (idempotent)"""
    if not event.contains(Session, "before_flush", _before_flush):
        event.listen(Session, "before_flush", _before_flush)
