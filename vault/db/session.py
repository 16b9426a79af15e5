# ============================================================================
# FILE: vault/db/session.py
# Builds the process-wide storage selected by STORAGE_BACKEND
# ============================================================================
from sqlalchemy import create_engine
from vault.config import settings
from vault.db.storage import BaseStorage
from vault.db.memory import MemoryStorage
from vault.db.sql_storage import SqlStorage
import logging

logger = logging.getLogger(__name__)

def build_storage() -> BaseStorage:
    """Create the storage backend named in settings"""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        logger.info("Using in-memory storage")
        return MemoryStorage()
    if backend == "sql":
        connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
        engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
        logger.info("Using SQL storage")
        return SqlStorage(engine)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")

# Singleton instance
storage = build_storage()

def get_storage() -> BaseStorage:
    """FastAPI dependency returning the shared storage"""
    return storage
