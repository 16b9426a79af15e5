from vault.core.exceptions import DuplicateUsernameError
from vault.db.seed import seed_demo_data
from vault.schemas.category import CategoryCreate
from vault.schemas.playlist import PlaylistCreate
from vault.schemas.track import TrackCreate
from vault.schemas.user import UserCreate

import pytest


def _users(store):
    u1 = store.create_user(UserCreate(username="u1", password="pw1"))
    u2 = store.create_user(UserCreate(username="u2", password="pw2"))
    return u1, u2


def _category(store, user, name="Samples"):
    return store.create_category(user.id, CategoryCreate(name=name, icon="ri-sound-module-fill", color="#F230AA"))


def _playlist(store, user, name="Work Notes"):
    return store.create_playlist(user.id, PlaylistCreate(name=name, icon="ri-album-fill", color="#F230AA"))


def _track(store, user, name="Memo", duration=10, category_id=None):
    return store.create_track(
        user.id,
        TrackCreate(name=name, duration=duration, category_id=category_id),
        f"/tmp/vault/{name}.webm",
    )


def test_ids_are_increasing_and_lists_are_owner_scoped(any_store):
    u1, u2 = _users(any_store)

    categories = [_category(any_store, u1, f"c{i}") for i in range(3)]
    playlists = [_playlist(any_store, u1, f"p{i}") for i in range(3)]
    tracks = [_track(any_store, u1, f"t{i}") for i in range(3)]

    for created in (categories, playlists, tracks):
        ids = [item.id for item in created]
        assert ids == sorted(set(ids))

    assert {c.id for c in any_store.get_categories(u1.id)} == {c.id for c in categories}
    assert {p.id for p in any_store.get_playlists(u1.id)} == {p.id for p in playlists}
    assert {t.id for t in any_store.get_tracks(u1.id)} == {t.id for t in tracks}

    assert any_store.get_categories(u2.id) == []
    assert any_store.get_playlists(u2.id) == []
    assert any_store.get_tracks(u2.id) == []


def test_ids_are_not_reused_after_delete(any_store):
    u1, _ = _users(any_store)
    first = _playlist(any_store, u1)
    assert any_store.delete_playlist(first.id) is True

    second = _playlist(any_store, u1)
    assert second.id > first.id


def test_missing_ids_report_absence(any_store):
    assert any_store.get_user(404) is None
    assert any_store.get_category(404) is None
    assert any_store.get_playlist(404) is None
    assert any_store.get_track(404) is None

    assert any_store.update_user(404, {"phone": "1"}) is None
    assert any_store.update_category(404, {"name": "x"}) is None
    assert any_store.update_playlist(404, {"name": "x"}) is None
    assert any_store.update_track(404, {"name": "x"}) is None

    assert any_store.delete_category(404) is False
    assert any_store.delete_playlist(404) is False
    assert any_store.delete_track(404) is False


def test_update_merges_only_given_fields(any_store):
    u1, _ = _users(any_store)
    playlist = _playlist(any_store, u1)

    updated = any_store.update_playlist(playlist.id, {"name": "Renamed"})

    assert updated.name == "Renamed"
    assert updated.color == playlist.color
    assert updated.icon == playlist.icon
    assert updated.user_id == u1.id
    assert any_store.get_playlist(playlist.id).name == "Renamed"


def test_track_created_at_is_stamped_and_fixed(any_store):
    u1, _ = _users(any_store)
    track = _track(any_store, u1)
    assert track.created_at is not None

    updated = any_store.update_track(track.id, {"name": "Renamed", "created_at": None})

    assert updated.name == "Renamed"
    assert updated.created_at == track.created_at


def test_usernames_are_unique(any_store):
    u1, u2 = _users(any_store)

    with pytest.raises(DuplicateUsernameError):
        any_store.create_user(UserCreate(username="u1", password="other"))
    with pytest.raises(DuplicateUsernameError):
        any_store.update_user(u2.id, {"username": "u1"})

    # Keeping your own name is not a collision
    assert any_store.update_user(u1.id, {"username": "u1", "phone": "555"}).phone == "555"
    assert any_store.get_user_by_username("u2").id == u2.id


def test_deleting_playlist_removes_its_links(any_store):
    u1, _ = _users(any_store)
    playlist = _playlist(any_store, u1)
    other = _playlist(any_store, u1, "Other")
    track = _track(any_store, u1)
    any_store.add_playlist_track(playlist.id, track.id, 0)
    any_store.add_playlist_track(other.id, track.id, 0)

    assert any_store.delete_playlist(playlist.id) is True

    assert any_store.get_playlist_tracks(playlist.id) == []
    assert any_store.get_playlist_track(playlist.id, track.id) is None
    assert len(any_store.get_playlist_tracks(other.id)) == 1
    assert any_store.get_track(track.id) is not None


def test_deleting_track_removes_it_from_every_playlist(any_store):
    u1, _ = _users(any_store)
    p1 = _playlist(any_store, u1, "One")
    p2 = _playlist(any_store, u1, "Two")
    doomed = _track(any_store, u1, "doomed")
    kept = _track(any_store, u1, "kept")
    for playlist in (p1, p2):
        any_store.add_playlist_track(playlist.id, doomed.id, 0)
        any_store.add_playlist_track(playlist.id, kept.id, 1)

    assert any_store.delete_track(doomed.id) is True

    for playlist in (p1, p2):
        entries = any_store.get_playlist_tracks(playlist.id)
        assert [e.track.id for e in entries] == [kept.id]


def test_deleting_category_keeps_tracks(any_store):
    u1, _ = _users(any_store)
    category = _category(any_store, u1)
    track = _track(any_store, u1, category_id=category.id)

    assert any_store.delete_category(category.id) is True

    assert any_store.get_track(track.id).category_id == category.id


def test_tracks_by_category(any_store):
    u1, _ = _users(any_store)
    melodies = _category(any_store, u1, "Melodies")
    podcasts = _category(any_store, u1, "Podcasts")
    hum = _track(any_store, u1, "hum", category_id=melodies.id)
    _track(any_store, u1, "episode", category_id=podcasts.id)
    _track(any_store, u1, "loose")

    assert [t.id for t in any_store.get_tracks_by_category(melodies.id)] == [hum.id]


def test_add_playlist_track_keeps_existing_link(any_store):
    u1, _ = _users(any_store)
    playlist = _playlist(any_store, u1)
    track = _track(any_store, u1)

    first = any_store.add_playlist_track(playlist.id, track.id, 3)
    again = any_store.add_playlist_track(playlist.id, track.id, 9)

    assert again.id == first.id
    assert again.position == 3
    assert len(any_store.get_playlist_tracks(playlist.id)) == 1


def test_seed_demo_data_runs_once(any_store):
    assert seed_demo_data(any_store) is True
    assert seed_demo_data(any_store) is False

    user = any_store.get_user_by_username("user")
    assert user.full_name == "Demo User"
    assert [c.name for c in sorted(any_store.get_categories(user.id), key=lambda c: c.id)] == [
        "Interviews", "Melodies", "Samples", "Podcasts",
    ]
    assert len(any_store.get_playlists(user.id)) == 3
