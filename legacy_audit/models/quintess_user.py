"""
Back-office user model (legacy table)
"""
from sqlalchemy import Column, Integer, String, Boolean
from legacy_audit.db.base import Base


class QuintessUser(Base):
    __tablename__ = "QuintessUser"

    quintess_user_uid = Column(Integer, primary_key=True)
    login = Column(String, unique=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
