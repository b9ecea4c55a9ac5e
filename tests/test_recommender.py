"""End-to-end tests for the recommendation engine with a fake catalog."""

import pytest

from moodmatch_recs.candidates import SeedTrack
from moodmatch_recs.fallback import generate_mock_recommendations
from moodmatch_recs.features import MoodSettings
from moodmatch_recs.recommender import RecommendationEngine, generate_songs

from conftest import FakeCatalog, make_artist, make_track


def engine_for(catalog):
    factory_calls = []

    def factory(token):
        factory_calls.append(token)
        return catalog

    engine = RecommendationEngine(client_factory=factory)
    engine.factory_calls = factory_calls
    return engine


def test_live_ranking(catalog, seed_track, techno_mood):
    result = engine_for(catalog).recommend(seed_track, techno_mood, "token")

    assert not result.is_fallback
    # Unresolved s3 inherits the seed's techno genres and ties with the top tracks
    assert [r.id for r in result.recommendations] == ["t1", "t2", "t3", "s3", "s2", "s1", "s4"]


def test_live_recommendation_shape(catalog, seed_track, techno_mood):
    result = engine_for(catalog).recommend(seed_track, techno_mood, "token")
    top, metal = result.recommendations[0], result.recommendations[4]

    assert top.to_dict() == {
        "id": "t1",
        "title": "Track t1",
        "artist": "Artist a0",
        "album": "Album t1",
        "duration": "3:20",
        "imageUrl": "https://img/t1.jpg",
        "reason": (
            "100% energy match, 100% danceability match, 100% mood match "
            "(estimated from genres similar to Seed Artist)"
        ),
    }
    assert metal.reason.startswith("95% energy match, 60% danceability match, 80% mood match")


def test_multiple_artists_are_comma_joined(techno_mood, seed_track):
    track = make_track("t1", "a0", extra_artists=[{"id": "f1", "name": "Feat One"}])
    catalog = FakeCatalog(artists={"a0": make_artist("a0", ["techno"])}, top_tracks={"a0": [track]})
    (rec,) = engine_for(catalog).recommend(seed_track, techno_mood, "token").recommendations
    assert rec.artist == "Artist a0, Feat One"


def test_output_is_bounded_unique_and_excludes_seed(seed_track, techno_mood):
    catalog = FakeCatalog(
        artists={"a0": make_artist("a0", ["rock", "pop"])},
        top_tracks={"a0": [seed_track] + [make_track(f"top{i}", "a0") for i in range(10)]},
        searches={
            "rock": [make_track(f"r{i}", f"ra{i}") for i in range(20)],
            "pop": [make_track(f"r{i}", f"ra{i}") for i in range(20)] + [seed_track],
        },
    )
    ids = [r.id for r in engine_for(catalog).recommend(seed_track, techno_mood, "token").recommendations]

    assert len(ids) == 10
    assert len(set(ids)) == 10
    assert "seed" not in ids


def test_identical_requests_give_identical_output(catalog, seed_track, techno_mood):
    engine = engine_for(catalog)
    first = engine.recommend(seed_track, techno_mood, "token")
    second = engine.recommend(seed_track, techno_mood, "token")
    assert first.to_dict() == second.to_dict()


def test_no_token_serves_placeholders(catalog, seed_track):
    mood = MoodSettings(0.7, 0.5, 0.3)
    engine = engine_for(catalog)
    result = engine.recommend(seed_track, mood, None)

    assert result.is_fallback
    assert [r.to_dict() for r in result.recommendations] == [
        r.to_dict() for r in generate_mock_recommendations(mood)
    ]
    assert engine.factory_calls == []


def test_seed_without_artist_id_serves_placeholders(catalog, techno_mood):
    seed = {"id": "seed", "name": "Seed Song", "artists": [{"name": "Nameless"}]}
    engine = engine_for(catalog)
    result = engine.recommend(seed, techno_mood, "token")

    assert result.is_fallback
    assert len(result.recommendations) == 10
    assert engine.factory_calls == []
    assert catalog.calls == []


@pytest.mark.parametrize("failing", ["artist", "top_tracks"])
def test_retrieval_failure_serves_placeholders(catalog, seed_track, techno_mood, failing):
    catalog.fail.add(failing)
    result = engine_for(catalog).recommend(seed_track, techno_mood, "token")
    assert result.is_fallback
    assert result.recommendations[0].id == "mock-1"


def test_unexpected_error_serves_placeholders(seed_track, techno_mood):
    class Broken:
        def get_artist(self, artist_id):
            raise RuntimeError("boom")

        def get_artist_top_tracks(self, artist_id):
            return []

    result = RecommendationEngine(client_factory=lambda t: Broken()).recommend(seed_track, techno_mood, "token")
    assert result.is_fallback


def test_empty_pool_serves_placeholders(seed_track, techno_mood):
    catalog = FakeCatalog(artists={"a0": make_artist("a0", [])}, top_tracks={"a0": []})
    result = engine_for(catalog).recommend(seed_track, techno_mood, "token")
    assert result.is_fallback


def test_partial_failures_still_rank(catalog, seed_track, techno_mood):
    catalog.fail.update({"search:techno", "artists"})
    result = engine_for(catalog).recommend(seed_track, techno_mood, "token")

    assert not result.is_fallback
    # Every artist unresolved: all inherit the seed genres and tie at 0
    assert [r.id for r in result.recommendations] == ["t1", "t2", "t3", "s3", "s1", "s4"]


def test_accepts_seed_track_and_mood_dict(catalog, seed_track):
    result = engine_for(catalog).recommend(
        SeedTrack.from_spotify(seed_track),
        {"energy": 0.9, "danceability": 0.8, "valence": 0.6},
        "token",
    )
    assert result.seed_track_id == "seed"
    assert result.seed_track_name == "Seed Song"


def test_generate_songs_without_token():
    recs = generate_songs({"id": "x", "name": "X"}, {"energy": 0.5, "danceability": 0.5, "valence": 0.5})
    assert [r.id for r in recs] == [f"mock-{i}" for i in range(1, 11)]


def test_output_json(catalog, seed_track, techno_mood):
    import json

    payload = json.loads(engine_for(catalog).recommend(seed_track, techno_mood, "token").to_json())
    assert payload["is_fallback"] is False
    assert payload["mood"] == {"energy": 0.9, "danceability": 0.8, "valence": 0.6}
    assert len(payload["recommendations"]) == 7
