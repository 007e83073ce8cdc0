"""
Audit trail endpoints (read-only)
"""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from legacy_audit.core.deps import get_db
from legacy_audit.schemas.audit import AuditOut
from legacy_audit.models.audit import IncompleteAuditKey
from legacy_audit.services.audit_context import get_audit_context
from legacy_audit.services.audit_service import InvalidAuditFilter, get_ancestors, get_audit, list_audits

router = APIRouter()


@router.get("", response_model=List[AuditOut])
async def list_audits_endpoint(
    action: Optional[str] = Query(None, description="create, update or destroy"),
    auditable_id: Optional[int] = Query(None),
    auditable_type: Optional[str] = Query(None),
    up_until: Optional[datetime] = Query(None, description="Only audits created at or before this time"),
    from_version: Optional[int] = Query(None, ge=0),
    to_version: Optional[int] = Query(None, ge=0),
    descending: bool = Query(False),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """List audits, ascending by version unless descending is set"""
    try:
        return list_audits(
            db,
            action=action,
            auditable_id=auditable_id,
            auditable_type=auditable_type,
            up_until=up_until,
            from_version=from_version,
            to_version=to_version,
            descending=descending,
            skip=skip,
            limit=limit,
        )
    except InvalidAuditFilter as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/types", response_model=List[str])
async def list_audited_types_endpoint(db: Session = Depends(get_db)):
    """Type names of all audited entities seen so far"""
    return get_audit_context(db).audited_classes(db)


@router.get("/{audit_uid}", response_model=AuditOut)
async def get_audit_endpoint(audit_uid: int, db: Session = Depends(get_db)):
    """Get an audit by uid"""
    audit = get_audit(db, audit_uid)
    if not audit:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Audit with uid {audit_uid} not found"
        )
    return audit


@router.get("/{audit_uid}/ancestors", response_model=List[AuditOut])
async def get_ancestors_endpoint(audit_uid: int, db: Session = Depends(get_db)):
    """History of the audited entity up to and including this audit"""
    try:
        ancestors = get_ancestors(db, audit_uid)
    except IncompleteAuditKey as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if ancestors is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Audit with uid {audit_uid} not found"
        )
    return ancestors
