# ============================================================================
# FILE: vault/db/seed.py
# ============================================================================
from vault.db.storage import BaseStorage
from vault.schemas.user import UserCreate
from vault.schemas.category import CategoryCreate
from vault.schemas.playlist import PlaylistCreate
import logging

logger = logging.getLogger(__name__)

DEMO_USER = UserCreate(
    username="user",
    password="password",
    email="demo@audiovault.app",
    phone="+1 (555) 123-4567",
    full_name="Demo User",
    avatar_color="#1DB954",
)

DEMO_CATEGORIES = [
    CategoryCreate(name="Interviews", icon="ri-mic-fill", color="#1DB954"),
    CategoryCreate(name="Melodies", icon="ri-file-music-fill", color="#2D46B9"),
    CategoryCreate(name="Samples", icon="ri-sound-module-fill", color="#F230AA"),
    CategoryCreate(name="Podcasts", icon="ri-vidicon-fill", color="#FFC107"),
]

DEMO_PLAYLISTS = [
    PlaylistCreate(name="Morning Reflections", icon="ri-mic-fill", color="#2D46B9"),
    PlaylistCreate(name="Work Notes", icon="ri-album-fill", color="#F230AA"),
    PlaylistCreate(name="Song Ideas", icon="ri-music-fill", color="#1DB954"),
]

def seed_demo_data(store: BaseStorage) -> bool:
    """
    Create the demo user with its default categories and playlists
    Does nothing if the demo user already exists

    Returns:
        True if data was created
    """
    if store.get_user_by_username(DEMO_USER.username):
        return False

    user = store.create_user(DEMO_USER)
    for category in DEMO_CATEGORIES:
        store.create_category(user.id, category)
    for playlist in DEMO_PLAYLISTS:
        store.create_playlist(user.id, playlist)

    logger.info(f"Seeded demo data for user {user.id}")
    return True
