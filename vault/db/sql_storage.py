# ============================================================================
# FILE: vault/db/sql_storage.py
# SQLAlchemy-backed implementation of the storage contract
# ============================================================================
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from vault.core.exceptions import DuplicateUsernameError
from vault.db.base import Base
from vault.db.storage import BaseStorage, OrderedTrack
from vault.db.models.user import UserRecord
from vault.db.models.category import CategoryRecord
from vault.db.models.playlist import PlaylistRecord, PlaylistTrackRecord
from vault.db.models.track import TrackRecord
from vault.schemas.user import User, UserCreate
from vault.schemas.category import Category, CategoryCreate
from vault.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack
from vault.schemas.track import Track, TrackCreate
import logging

logger = logging.getLogger(__name__)

class SqlStorage(BaseStorage):
    """Storage on a relational database, one session per operation"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def _session(self):
        db: Session = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            db.close()

    def _update(self, model, schema, record_id: int, updates: Dict[str, Any]):
        with self._session() as db:
            record = db.get(model, record_id)
            if not record:
                return None
            for field, value in updates.items():
                if field in ("id", "created_at"):
                    continue
                setattr(record, field, value)
            db.flush()
            return schema.model_validate(record)

    def _delete_links(self, db: Session, column, value: int) -> None:
        stale = db.query(PlaylistTrackRecord).filter(column == value).all()
        for link in stale:
            db.delete(link)

    # User methods
    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            record = db.get(UserRecord, user_id)
            return User.model_validate(record) if record else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            record = db.query(UserRecord).filter(UserRecord.username == username).first()
            return User.model_validate(record) if record else None

    def create_user(self, user_data: UserCreate) -> User:
        if self.get_user_by_username(user_data.username):
            raise DuplicateUsernameError(user_data.username)
        with self._session() as db:
            record = UserRecord(**user_data.model_dump())
            db.add(record)
            db.flush()
            logger.info(f"User created: {record.username}")
            return User.model_validate(record)

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
        username = updates.get("username")
        if username is not None:
            existing = self.get_user_by_username(username)
            if existing and existing.id != user_id:
                raise DuplicateUsernameError(username)
        return self._update(UserRecord, User, user_id, updates)

    # Category methods
    def get_categories(self, user_id: int) -> List[Category]:
        with self._session() as db:
            records = db.query(CategoryRecord).filter(CategoryRecord.user_id == user_id).all()
            return [Category.model_validate(r) for r in records]

    def get_category(self, category_id: int) -> Optional[Category]:
        with self._session() as db:
            record = db.get(CategoryRecord, category_id)
            return Category.model_validate(record) if record else None

    def create_category(self, user_id: int, category_data: CategoryCreate) -> Category:
        with self._session() as db:
            record = CategoryRecord(user_id=user_id, **category_data.model_dump())
            db.add(record)
            db.flush()
            return Category.model_validate(record)

    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Optional[Category]:
        return self._update(CategoryRecord, Category, category_id, updates)

    def delete_category(self, category_id: int) -> bool:
        with self._session() as db:
            record = db.get(CategoryRecord, category_id)
            if not record:
                return False
            db.delete(record)
            return True

    # Playlist methods
    def get_playlists(self, user_id: int) -> List[Playlist]:
        with self._session() as db:
            records = db.query(PlaylistRecord).filter(PlaylistRecord.user_id == user_id).all()
            return [Playlist.model_validate(r) for r in records]

    def get_playlist(self, playlist_id: int) -> Optional[Playlist]:
        with self._session() as db:
            record = db.get(PlaylistRecord, playlist_id)
            return Playlist.model_validate(record) if record else None

    def create_playlist(self, user_id: int, playlist_data: PlaylistCreate) -> Playlist:
        with self._session() as db:
            record = PlaylistRecord(user_id=user_id, **playlist_data.model_dump())
            db.add(record)
            db.flush()
            return Playlist.model_validate(record)

    def update_playlist(self, playlist_id: int, updates: Dict[str, Any]) -> Optional[Playlist]:
        return self._update(PlaylistRecord, Playlist, playlist_id, updates)

    def delete_playlist(self, playlist_id: int) -> bool:
        with self._session() as db:
            self._delete_links(db, PlaylistTrackRecord.playlist_id, playlist_id)
            record = db.get(PlaylistRecord, playlist_id)
            if not record:
                return False
            db.delete(record)
            return True

    # Track methods
    def get_tracks(self, user_id: int) -> List[Track]:
        with self._session() as db:
            records = db.query(TrackRecord).filter(TrackRecord.user_id == user_id).all()
            return [Track.model_validate(r) for r in records]

    def get_track(self, track_id: int) -> Optional[Track]:
        with self._session() as db:
            record = db.get(TrackRecord, track_id)
            return Track.model_validate(record) if record else None

    def get_tracks_by_category(self, category_id: int) -> List[Track]:
        with self._session() as db:
            records = db.query(TrackRecord).filter(TrackRecord.category_id == category_id).all()
            return [Track.model_validate(r) for r in records]

    def create_track(self, user_id: int, track_data: TrackCreate, file_path: str) -> Track:
        with self._session() as db:
            record = TrackRecord(
                user_id=user_id,
                file_path=file_path,
                created_at=datetime.utcnow(),
                **track_data.model_dump()
            )
            db.add(record)
            db.flush()
            return Track.model_validate(record)

    def update_track(self, track_id: int, updates: Dict[str, Any]) -> Optional[Track]:
        return self._update(TrackRecord, Track, track_id, updates)

    def delete_track(self, track_id: int) -> bool:
        with self._session() as db:
            self._delete_links(db, PlaylistTrackRecord.track_id, track_id)
            record = db.get(TrackRecord, track_id)
            if not record:
                return False
            db.delete(record)
            return True

    # Playlist track methods
    def get_playlist_tracks(self, playlist_id: int) -> List[OrderedTrack]:
        with self._session() as db:
            rows = (
                db.query(PlaylistTrackRecord, TrackRecord)
                .join(TrackRecord, TrackRecord.id == PlaylistTrackRecord.track_id)
                .filter(PlaylistTrackRecord.playlist_id == playlist_id)
                .order_by(PlaylistTrackRecord.position, PlaylistTrackRecord.id)
                .all()
            )
            return [
                OrderedTrack(track=Track.model_validate(track), position=link.position)
                for link, track in rows
            ]

    def _find_link(self, db: Session, playlist_id: int, track_id: int) -> Optional[PlaylistTrackRecord]:
        return db.query(PlaylistTrackRecord).filter(
            PlaylistTrackRecord.playlist_id == playlist_id,
            PlaylistTrackRecord.track_id == track_id
        ).first()

    def get_playlist_track(self, playlist_id: int, track_id: int) -> Optional[PlaylistTrack]:
        with self._session() as db:
            link = self._find_link(db, playlist_id, track_id)
            return PlaylistTrack.model_validate(link) if link else None

    def add_playlist_track(self, playlist_id: int, track_id: int, position: int) -> PlaylistTrack:
        with self._session() as db:
            existing = self._find_link(db, playlist_id, track_id)
            if existing:
                return PlaylistTrack.model_validate(existing)
            link = PlaylistTrackRecord(playlist_id=playlist_id, track_id=track_id, position=position)
            db.add(link)
            db.flush()
            return PlaylistTrack.model_validate(link)

    def remove_playlist_track(self, playlist_id: int, track_id: int) -> bool:
        with self._session() as db:
            link = self._find_link(db, playlist_id, track_id)
            if not link:
                return False
            db.delete(link)
            return True

    def update_track_position(self, playlist_id: int, track_id: int, position: int) -> bool:
        with self._session() as db:
            link = self._find_link(db, playlist_id, track_id)
            if not link:
                return False
            link.position = position
            return True
