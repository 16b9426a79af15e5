# ============================================================================
# FILE: vault/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String
from vault.db.base import Base

class UserRecord(Base):
    """User account row"""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}
    
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    full_name = Column(String, nullable=True)
    avatar_color = Column(String, nullable=True)
