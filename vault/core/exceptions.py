# ============================================================================
# FILE: vault/core/exceptions.py
# ============================================================================

class VaultError(Exception):
    """Base class for errors raised by the vault services"""

class NotFoundError(VaultError):
    """A referenced record does not exist"""

class DuplicateUsernameError(VaultError):
    """Another user already has this username"""
    
    def __init__(self, username: str):
        super().__init__(f"Username already registered: {username}")
        self.username = username

class UploadRejectedError(VaultError):
    """
    Uploaded audio was refused (unsupported media type or too large)
    status_code is the HTTP status the API answers with
    """
    
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code
