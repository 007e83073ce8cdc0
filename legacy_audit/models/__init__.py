"""
Database models
"""
from legacy_audit.models.member import Member, MemberMembership
from legacy_audit.models.membership import Membership, MembershipContract
from legacy_audit.models.quintess_user import QuintessUser
from legacy_audit.models.audit import Audit, AuditQuery

__all__ = [
    "Member",
    "MemberMembership",
    "Membership",
    "MembershipContract",
    "QuintessUser",
    "Audit",
    "AuditQuery",
]
