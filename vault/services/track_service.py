# ============================================================================
# FILE: vault/services/track_service.py
# ============================================================================
from fastapi import UploadFile
from vault.db.storage import BaseStorage
from vault.schemas.track import Track, TrackCreate
from vault.services.audio_service import audio_service
import logging

logger = logging.getLogger(__name__)

class TrackService:
    """Service layer tying track records to their audio files"""
    
    async def upload_track(self, store: BaseStorage, user_id: int, track_data: TrackCreate, upload: UploadFile) -> Track:
        """
        Store the audio file, then create the track pointing at it
        Raises UploadRejectedError before anything is created if the file is refused
        """
        file_path = await audio_service.save_upload(upload)
        try:
            track = store.create_track(user_id, track_data, file_path)
        except Exception as e:
            logger.error(f"Error creating track for {file_path}: {e}")
            audio_service.delete_file(file_path)
            raise
        logger.info(f"Track created: {track.id} for user {user_id}")
        return track
    
    def delete_track(self, store: BaseStorage, track: Track) -> bool:
        """Delete the record (and its playlist links), then try to remove its file"""
        if not store.delete_track(track.id):
            return False
        audio_service.delete_file(track.file_path)
        logger.info(f"Track deleted: {track.id}")
        return True

# Create singleton instance
track_service = TrackService()
