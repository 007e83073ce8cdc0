"""
Member models (legacy tables)
"""
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from legacy_audit.db.base import Base


class Member(Base):
    __tablename__ = "Member"

    member_uid = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)

    # Relationships
    member_memberships = relationship("MemberMembership", back_populates="member")


class MemberMembership(Base):
    __tablename__ = "MemberMembership"

    member_membership_uid = Column(Integer, primary_key=True)
    member_uid = Column(Integer, ForeignKey("Member.member_uid"), nullable=False)
    membership_uid = Column(Integer, ForeignKey("Membership.membership_uid"), nullable=False)

    __table_args__ = (
        UniqueConstraint('member_uid', 'membership_uid', name='uq_member_membership'),
    )

    # Relationships
    member = relationship("Member", back_populates="member_memberships")
    membership = relationship("Membership", back_populates="member_memberships")
