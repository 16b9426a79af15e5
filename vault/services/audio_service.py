# ============================================================================
# FILE: vault/services/audio_service.py
# Stores uploaded recordings on disk and locates them for playback
# ============================================================================
from fastapi import UploadFile
from typing import Optional
from vault.config import settings
from vault.core.exceptions import UploadRejectedError
import logging
import os
import uuid

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB

# Media type -> extension used for stored files
AUDIO_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "audio/ogg": ".ogg",
    "audio/mp4": ".m4a",
    "audio/webm": ".webm",
}

class AudioService:
    """Filesystem handling for track audio"""
    
    def _normalize_media_type(self, content_type: Optional[str]) -> str:
        # "audio/webm;codecs=opus" -> "audio/webm"
        if not content_type:
            return ""
        return content_type.split(";", 1)[0].strip().lower()
    
    def _infer_mime_type(self, ext: Optional[str]) -> str:
        if not ext:
            return "application/octet-stream"
        e = ext.lower().lstrip(".")
        if e in ["m4a", "mp4"]:
            return "audio/mp4"
        if e in ["webm", "weba"]:
            return "audio/webm"
        if e == "mp3":
            return "audio/mpeg"
        if e in ["ogg", "oga", "opus"]:
            return "audio/ogg"
        if e == "wav":
            return "audio/wav"
        return f"audio/{e}"
    
    def check_media_type(self, content_type: Optional[str]) -> str:
        """
        Validate the declared media type of an upload
        
        Returns:
            The normalized media type
        
        Raises:
            UploadRejectedError: type is not in ALLOWED_AUDIO_TYPES
        """
        media_type = self._normalize_media_type(content_type)
        if media_type not in settings.ALLOWED_AUDIO_TYPES:
            logger.warning(f"Rejected upload with media type {content_type!r}")
            raise UploadRejectedError("Invalid file type. Only audio files are allowed.", status_code=400)
        return media_type
    
    async def save_upload(self, upload: UploadFile) -> str:
        """
        Write an uploaded recording under UPLOAD_DIR in chunks
        
        The size limit is enforced while writing; a rejected upload leaves
        no file behind.
        
        Returns:
            Absolute path of the stored file
        """
        media_type = self.check_media_type(upload.content_type)
        ext = AUDIO_EXTENSIONS.get(media_type, "")
        
        upload_dir = os.path.abspath(settings.UPLOAD_DIR)
        os.makedirs(upload_dir, exist_ok=True)
        file_path = os.path.join(upload_dir, f"{uuid.uuid4().hex}{ext}")
        
        written = 0
        try:
            with open(file_path, "wb") as f:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > settings.MAX_UPLOAD_SIZE:
                        raise UploadRejectedError(
                            f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE} bytes.",
                            status_code=413
                        )
                    f.write(chunk)
        except Exception:
            if os.path.exists(file_path):
                self.delete_file(file_path)
            raise
        
        logger.info(f"Stored upload {upload.filename!r} ({written} bytes) -> {file_path}")
        return file_path
    
    def media_type_for(self, file_path: str) -> str:
        """Media type to serve a stored file with"""
        return self._infer_mime_type(os.path.splitext(file_path)[1])
    
    def file_exists(self, file_path: str) -> bool:
        return os.path.isfile(file_path)
    
    def delete_file(self, file_path: str) -> bool:
        """Remove a stored file; failures are logged, never raised"""
        try:
            os.remove(file_path)
            logger.info(f"Deleted audio file: {file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to delete track file {file_path}: {e}")
            return False

# Singleton instance
audio_service = AudioService()
