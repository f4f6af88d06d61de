from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from moodtune.db.models.history import History
from moodtune.services import playlist_service as playlist_module
from moodtune.services.recommendation_service import distinct_moods, recommendation_service

T0 = datetime(2024, 5, 1, 12, 0, 0)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_playlists_are_listed_per_user(client, add_user, add_playlist):
    owner = add_user("owner@b.com")
    other = add_user("other@b.com")
    first = add_playlist(owner, "Morning")
    second = add_playlist(owner, "Gym")
    add_playlist(other, "Not mine")

    response = client.get("/api/playlists", params={"userId": owner.id})

    assert response.status_code == 200
    assert response.json() == [
        {"id": first.id, "name": "Morning"},
        {"id": second.id, "name": "Gym"},
    ]


def test_playlists_require_user_id(client):
    response = client.get("/api/playlists")

    assert response.status_code == 422
    assert response.json()["error"] == "Invalid request"


def test_playlist_database_error_maps_to_500(client, monkeypatch):
    def _boom(db, user_id):
        raise SQLAlchemyError("connection reset")

    monkeypatch.setattr(playlist_module.playlist_service, "get_user_playlists", _boom)

    response = client.get("/api/playlists", params={"userId": 1})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to load playlists"}


def test_play_is_appended_to_history(client, db, add_user, add_song):
    user = add_user()
    song = add_song(user, mood="happy")

    for _ in range(2):
        response = client.post("/api/song/play", json={"userId": user.id, "songId": song.id})
        assert response.status_code == 200
        assert response.json() == {"success": True}

    plays = db.query(History).filter(History.user_id == user.id).all()
    assert len(plays) == 2
    assert all(play.song_id == song.id and play.played_at is not None for play in plays)


def test_play_unknown_song_is_not_found(client, add_user):
    user = add_user()

    response = client.post("/api/song/play", json={"userId": user.id, "songId": 404})

    assert response.status_code == 404
    assert response.json() == {"error": "Song not found"}


def test_play_unknown_user_is_not_found(client, add_user, add_song):
    song = add_song(add_user())

    response = client.post("/api/song/play", json={"userId": 999, "songId": song.id})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_distinct_moods_collapses_duplicates_in_order():
    assert distinct_moods(["happy", "sad", "happy"]) == ["happy", "sad"]
    assert distinct_moods(["", "calm", ""]) == ["calm"]


def test_recommendations_filter_on_distinct_recent_moods(client, add_user, add_song, add_play, monkeypatch):
    user = add_user()
    happy = add_song(user, mood="happy", title="Happy")
    sad = add_song(user, mood="sad", title="Sad")
    add_play(user, happy, T0)
    add_play(user, sad, T0 + timedelta(minutes=1))
    add_play(user, happy, T0 + timedelta(minutes=2))

    captured = {}
    original = recommendation_service.songs_for_moods

    def _spy(db, moods, limit=10):
        captured["moods"] = moods
        return original(db, moods, limit)

    monkeypatch.setattr(recommendation_service, "songs_for_moods", _spy)

    response = client.get("/api/user/recommendations", params={"userId": user.id})

    assert response.status_code == 200
    assert set(captured["moods"]) == {"happy", "sad"}
    assert len(captured["moods"]) == 2
    assert {song["title"] for song in response.json()} == {"Happy", "Sad"}


def test_recommendations_only_look_at_latest_plays(client, add_user, add_song, add_play):
    user = add_user()
    old = add_song(user, mood="angry", title="Old")
    recent = add_song(user, mood="calm", title="Recent")
    add_song(user, mood="calm", title="Also calm")
    add_play(user, old, T0)
    for minutes in (1, 2, 3):
        add_play(user, recent, T0 + timedelta(minutes=minutes))

    response = client.get("/api/user/recommendations", params={"userId": user.id})

    songs = response.json()
    assert {song["mood"] for song in songs} == {"calm"}
    assert {song["title"] for song in songs} == {"Recent", "Also calm"}


def test_recommendations_are_capped(client, add_user, add_song, add_play, settings):
    user = add_user()
    songs = [add_song(user, mood="chill", title=f"Chill {i}") for i in range(15)]
    add_play(user, songs[0], T0)

    response = client.get("/api/user/recommendations", params={"userId": user.id})

    assert len(response.json()) == settings.RECOMMENDATION_LIMIT


def test_recommendations_without_history_are_empty(client, add_user, add_song):
    user = add_user()
    add_song(user, mood="happy")

    response = client.get("/api/user/recommendations", params={"userId": user.id})

    assert response.status_code == 200
    assert response.json() == []
