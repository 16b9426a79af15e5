# ============================================================================
# FILE: vault/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""
    
    # App settings
    APP_NAME: str = "Audio Vault"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Storage: "memory" keeps everything in process, "sql" uses DATABASE_URL
    STORAGE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./vault.db"
    
    # Audio uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 50 * 1024 * 1024  # 50MB
    ALLOWED_AUDIO_TYPES: List[str] = [
        "audio/mpeg",
        "audio/wav",
        "audio/ogg",
        "audio/mp4",
        "audio/webm",
    ]
    
    # Session stand-in: every request acts as this user
    DEMO_USER_ID: int = 1
    SEED_DEMO_DATA: bool = True
    
    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
