"""
Tests for the Audit model's legacy field mapping
"""
import pytest
from sqlalchemy import text
from sqlalchemy.orm import Session

from legacy_audit.models.audit import Audit


@pytest.mark.parametrize("action,code", [
    ("create", "CREATE"),
    ("update", "UPDATE"),
    ("destroy", "DESTROY"),
])
def test_legacy_code_is_upper_cased_action(db: Session, action, code):
    audit = Audit(auditable_type="Invoice", auditable_id=1, action=action)
    db.add(audit)
    db.commit()
    db.refresh(audit)

    assert audit.audit_type_ucode == code


def test_unknown_action_leaves_legacy_code_untouched(db: Session):
    audit = Audit(auditable_type="Invoice", auditable_id=1, action="touch", audit_type_ucode="UPDATE")
    db.add(audit)
    db.commit()
    db.refresh(audit)

    assert audit.audit_type_ucode == "UPDATE"


def test_missing_action_leaves_legacy_code_empty(db: Session):
    audit = Audit(auditable_type="Invoice", auditable_id=1)
    db.add(audit)
    db.commit()
    db.refresh(audit)

    assert audit.audit_type_ucode is None


def test_fill_legacy_columns_reports_whether_code_was_assigned():
    assert Audit(action="Update").fill_legacy_columns() is True
    assert Audit(action="archive").fill_legacy_columns() is False


def test_new_audits_always_get_version_zero(db: Session):
    for action in ("create", "update", "update"):
        db.add(Audit(auditable_type="Invoice", auditable_id=42, action=action, version=5))
        db.commit()

    versions = [a.version for a in db.query(Audit).all()]
    assert versions == [0, 0, 0]


def test_audited_changes_are_stored_in_change_history(db: Session):
    audit = Audit(auditable_type="Invoice", auditable_id=1, action="update")
    audit.audited_changes = {"total": [100, 120], "status": ["open", "paid"]}
    db.add(audit)
    db.commit()
    db.expire_all()

    stored = db.query(Audit).one()
    assert stored.change_history == {"total": [100, 120], "status": ["open", "paid"]}
    assert stored.audited_changes == stored.change_history

    raw = db.execute(text('SELECT change_history FROM "Audit"')).scalar()
    assert isinstance(raw, str)
    assert '"total"' in raw


def test_user_is_always_absent():
    audit = Audit(auditable_type="Invoice", auditable_id=1, action="create")
    audit.user = "someone@example.com"

    assert audit.user is None


def test_generic_attributes_are_accepted_but_not_persisted(db: Session):
    audit = Audit(
        auditable_type="Invoice",
        auditable_id=1,
        action="create",
        comment="imported",
        request_uuid="abc-123",
        remote_address="10.0.0.1",
    )
    assert audit.comment == "imported"

    db.add(audit)
    db.commit()

    columns = {c.name for c in Audit.__table__.columns}
    assert "comment" not in columns
    assert "request_uuid" not in columns
    assert "user_id" not in columns


def test_legacy_table_and_primary_key_names():
    assert Audit.__tablename__ == "Audit"
    assert [c.name for c in Audit.__table__.primary_key.columns] == ["audit_uid"]


def _insert_legacy_row(db: Session, audit_uid: int, change_history: str) -> None:
    db.execute(
        text(
            'INSERT INTO "Audit" (audit_uid, auditable_id, auditable_type, action, change_history, version, audit_type_ucode) '
            "VALUES (:uid, 42, 'Invoice', 'update', :history, 0, 'UPDATE')"
        ),
        {"uid": audit_uid, "history": change_history},
    )
    db.commit()


def test_yaml_change_history_from_legacy_rows_is_readable(db: Session):
    _insert_legacy_row(db, 500, "---\ntotal:\n- 100\n- 120\n")

    audits = Audit.query(db).auditable_finder(42, "Invoice").all()

    assert len(audits) == 1
    assert audits[0].audited_changes == {"total": [100, 120]}


def test_unparseable_change_history_is_kept_as_text(db: Session):
    raw = "--- !ruby/hash:ActiveSupport::HashWithIndifferentAccess\ntotal:\n- 100\n- 120\n"
    _insert_legacy_row(db, 501, raw)

    audit = db.query(Audit).filter(Audit.audit_uid == 501).one()

    assert audit.change_history == raw


def test_replacing_audited_changes_is_saved(db: Session):
    audit = Audit(auditable_type="Invoice", auditable_id=1, action="update", audited_changes={"total": [1, 2]})
    db.add(audit)
    db.commit()

    audit.audited_changes = {**audit.audited_changes, "status": ["open", "paid"]}
    db.commit()
    db.expire_all()

    assert db.query(Audit).one().audited_changes == {"total": [1, 2], "status": ["open", "paid"]}
