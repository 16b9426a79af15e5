# ============================================================================
# FILE: vault/db/models/category.py
# ============================================================================
from sqlalchemy import Column, Integer, String, ForeignKey
from vault.db.base import Base

class CategoryRecord(Base):
    """User-owned tag for grouping tracks"""
    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    color = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
