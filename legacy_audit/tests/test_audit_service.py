"""
Tests for audit listing filters in the service layer
"""
import pytest
from sqlalchemy.orm import Session

from legacy_audit.services.audit_service import InvalidAuditFilter, list_audits


def test_list_audits_rejects_unknown_action(db: Session):
    with pytest.raises(InvalidAuditFilter, match="action"):
        list_audits(db, action="archive")


def test_list_audits_rejects_half_auditable_key(db: Session):
    with pytest.raises(InvalidAuditFilter, match="together"):
        list_audits(db, auditable_type="Invoice")


def test_list_audits_by_action(db: Session, invoice_history):
    assert [a.action for a in list_audits(db, action="destroy")] == ["destroy"]
    assert len(list_audits(db, action="update", auditable_id=42, auditable_type="Invoice")) == 2
