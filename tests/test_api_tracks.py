import logging

import pytest

from vault.config import settings
from vault.schemas.track import TrackCreate

AUDIO = b"\x1aE\xdf\xa3" + b"\x00" * 64


def _upload(client, content_type="audio/webm", payload=AUDIO, **fields):
    data = {"name": "Voice memo", "duration": "42"}
    data.update(fields)
    return client.post(
        "/api/tracks/upload",
        data=data,
        files={"audio": ("memo.webm", payload, content_type)},
    )


def test_upload_stores_file_and_creates_track(client, store, owner, upload_dir, make_category):
    category = make_category(owner)

    resp = _upload(client, categoryId=str(category.id))
    assert resp.status_code == 201

    track = resp.json()
    assert track["name"] == "Voice memo"
    assert track["duration"] == 42
    assert track["categoryId"] == category.id
    assert track["userId"] == owner.id

    stored = store.get_track(track["id"])
    assert stored.file_path.startswith(str(upload_dir))
    assert stored.file_path.endswith(".webm")
    with open(stored.file_path, "rb") as f:
        assert f.read() == AUDIO


def test_upload_accepts_codec_parameters(client):
    resp = _upload(client, content_type="audio/webm;codecs=opus")
    assert resp.status_code == 201
    assert resp.json()["categoryId"] is None


def test_upload_rejects_non_audio(client, store, upload_dir):
    resp = _upload(client, content_type="text/plain", payload=b"hello")

    assert resp.status_code == 400
    assert store.tracks == {}
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


def test_upload_rejects_oversized_file(client, store, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 16)

    resp = _upload(client, payload=b"\x00" * 17)

    assert resp.status_code == 413
    assert store.tracks == {}
    assert list(upload_dir.iterdir()) == []


@pytest.mark.parametrize("fields", [{"duration": "-1"}, {"duration": "long"}, {"name": ""}])
def test_upload_validates_metadata(client, store, fields):
    assert _upload(client, **fields).status_code == 400
    assert store.tracks == {}


def test_upload_requires_audio_part(client):
    resp = client.post("/api/tracks/upload", data={"name": "x", "duration": "1"})
    assert resp.status_code == 400


def test_list_tracks_by_category(client, owner, stranger, make_category, make_track):
    melodies = make_category(owner, "Melodies")
    theirs = make_category(stranger, "Theirs")
    hum = make_track(owner, name="hum", category_id=melodies.id)
    make_track(owner, name="loose")

    assert len(client.get("/api/tracks").json()) == 2
    assert [t["id"] for t in client.get(f"/api/tracks?categoryId={melodies.id}").json()] == [hum.id]
    assert client.get(f"/api/tracks?categoryId={theirs.id}").status_code == 403
    assert client.get("/api/tracks?categoryId=999").status_code == 404


def test_get_and_update_track(client, owner, make_track):
    track = make_track(owner)

    assert client.get(f"/api/tracks/{track.id}").json()["name"] == "Memo"

    resp = client.patch(f"/api/tracks/{track.id}", json={"name": "Renamed", "categoryId": None})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["duration"] == track.duration

    assert client.patch(f"/api/tracks/{track.id}", json={"duration": -5}).status_code == 400


def test_stream_audio(client, owner, make_track):
    track = make_track(owner, payload=AUDIO)

    resp = client.get(f"/api/tracks/{track.id}/audio")

    assert resp.status_code == 200
    assert resp.content == AUDIO
    assert resp.headers["content-type"].startswith("audio/webm")


def test_stream_audio_errors(client, store, owner, stranger, make_track):
    theirs = make_track(stranger, name="theirs")
    orphan = store.create_track(owner.id, TrackCreate(name="orphan", duration=1), "/nonexistent/orphan.webm")

    assert client.get("/api/tracks/999/audio").status_code == 404
    assert client.get(f"/api/tracks/{theirs.id}/audio").status_code == 403
    assert client.get(f"/api/tracks/{orphan.id}/audio").status_code == 404


def test_delete_track_removes_file_and_links(client, store, owner, make_playlist, make_track):
    playlist = make_playlist(owner)
    track = make_track(owner)
    client.post(f"/api/playlists/{playlist.id}/tracks", json={"trackId": track.id})

    assert client.delete(f"/api/tracks/{track.id}").status_code == 204

    assert store.get_track(track.id) is None
    assert store.get_playlist_tracks(playlist.id) == []
    with pytest.raises(FileNotFoundError):
        open(track.file_path, "rb")


def test_delete_track_survives_missing_file(client, store, owner, caplog):
    track = store.create_track(owner.id, TrackCreate(name="ghost", duration=1), "/nonexistent/ghost.webm")

    with caplog.at_level(logging.ERROR):
        assert client.delete(f"/api/tracks/{track.id}").status_code == 204

    assert store.get_track(track.id) is None
    assert "Failed to delete track file" in caplog.text


def test_cannot_touch_someone_elses_track(client, store, stranger, make_track):
    theirs = make_track(stranger, name="theirs")

    assert client.get(f"/api/tracks/{theirs.id}").status_code == 403
    assert client.patch(f"/api/tracks/{theirs.id}", json={"name": "Mine now"}).status_code == 403
    assert client.delete(f"/api/tracks/{theirs.id}").status_code == 403
    assert store.get_track(theirs.id).name == "theirs"


def test_upload_removes_file_when_track_creation_fails(lenient_client, store, upload_dir, monkeypatch):
    def _broken_create_track(*_a, **_k):
        raise RuntimeError("tracks table is gone")
    monkeypatch.setattr(store, "create_track", _broken_create_track)

    resp = _upload(lenient_client)

    assert resp.status_code == 500
    assert store.tracks == {}
    assert list(upload_dir.iterdir()) == []


def test_upload_write_failure_does_not_report_cleanup(lenient_client, store, upload_dir, monkeypatch, caplog):
    from vault.services import audio_service as audio_module

    def _denied(*_a, **_k):
        raise PermissionError("read-only upload dir")
    monkeypatch.setattr(audio_module, "open", _denied, raising=False)

    with caplog.at_level(logging.ERROR):
        resp = _upload(lenient_client)

    assert resp.status_code == 500
    assert store.tracks == {}
    assert "Failed to delete track file" not in caplog.text


def test_category_zero_means_no_category(client, owner, make_track):
    make_track(owner, name="one")
    make_track(owner, name="two")

    listed = client.get("/api/tracks?categoryId=0")
    assert listed.status_code == 200
    assert len(listed.json()) == 2

    uploaded = _upload(client, categoryId="0")
    assert uploaded.status_code == 201
    assert uploaded.json()["categoryId"] is None
