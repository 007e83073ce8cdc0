"""
Membership and membership contract models (legacy tables)
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from legacy_audit.db.base import Base


class Membership(Base):
    __tablename__ = "Membership"

    membership_uid = Column(Integer, primary_key=True)
    membership_number = Column(String, nullable=True)

    # Relationships
    member_memberships = relationship("MemberMembership", back_populates="membership")
    contracts = relationship("MembershipContract", back_populates="membership")


class MembershipContract(Base):
    __tablename__ = "MembershipContract"

    membership_contract_uid = Column(Integer, primary_key=True)
    membership_uid = Column(Integer, ForeignKey("Membership.membership_uid"), nullable=True)
    contract_number = Column(String, nullable=True)

    # Relationships
    membership = relationship("Membership", back_populates="contracts")
