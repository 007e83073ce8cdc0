"""
Audit schemas
"""
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class AuditOut(BaseModel):
    """Schema for audit output"""
    audit_uid: int
    auditable_id: Optional[int] = None
    auditable_type: Optional[str] = None
    action: Optional[str] = None
    audited_changes: Optional[Any] = None
    version: Optional[int] = None
    created_at: Optional[datetime] = None
    audit_type_ucode: Optional[str] = None
    membership_uid: Optional[int] = None
    quintess_editor_uid: Optional[int] = None
    member_editor_uid: Optional[int] = None
    membership_contract_uid: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
