"""Shared fixtures: an in-memory catalog standing in for SpotifyClient."""

from typing import Dict, Iterable, List, Optional

import pytest

from moodmatch_recs.features import MoodSettings
from moodmatch_recs.spotify_client import CatalogError


def make_track(
    track_id: str,
    artist_id: Optional[str],
    artist_name: Optional[str] = None,
    name: Optional[str] = None,
    duration_ms: Optional[int] = 200000,
    extra_artists: Iterable[Dict] = (),
) -> Dict:
    """Spotify-shaped track object."""
    artists = [{"id": artist_id, "name": artist_name or f"Artist {artist_id}"}]
    artists.extend(extra_artists)
    return {
        "id": track_id,
        "name": name or f"Track {track_id}",
        "artists": artists,
        "album": {"name": f"Album {track_id}", "images": [{"url": f"https://img/{track_id}.jpg"}]},
        "duration_ms": duration_ms,
    }


def make_artist(artist_id: str, genres: Optional[List[str]]) -> Dict:
    artist = {"id": artist_id, "name": f"Artist {artist_id}"}
    if genres is not None:
        artist["genres"] = genres
    return artist


class FakeCatalog:
    """
    Deterministic catalog. ``fail`` names operations that raise CatalogError:
    "artist", "top_tracks", "artists" or "search:<query>".
    """

    def __init__(
        self,
        artists: Optional[Dict[str, Dict]] = None,
        top_tracks: Optional[Dict[str, List[Dict]]] = None,
        searches: Optional[Dict[str, List[Dict]]] = None,
        fail: Iterable[str] = (),
    ):
        self.artists = artists or {}
        self.top_tracks = top_tracks or {}
        self.searches = searches or {}
        self.fail = set(fail)
        self.calls = []

    def get_artist(self, artist_id):
        self.calls.append(("artist", artist_id))
        if "artist" in self.fail or artist_id not in self.artists:
            raise CatalogError(f"artist lookup failed (404): {artist_id}")
        return self.artists[artist_id]

    def get_artist_top_tracks(self, artist_id):
        self.calls.append(("top_tracks", artist_id))
        if "top_tracks" in self.fail:
            raise CatalogError("top tracks lookup failed (429): rate limited")
        return list(self.top_tracks.get(artist_id, []))

    def search_tracks(self, query, limit=20):
        self.calls.append(("search", query, limit))
        if f"search:{query}" in self.fail:
            raise CatalogError(f"search for {query!r} failed (500)")
        return list(self.searches.get(query, []))[:limit]

    def get_artists(self, artist_ids):
        self.calls.append(("artists", tuple(artist_ids)))
        if "artists" in self.fail:
            raise CatalogError("artist batch lookup failed (502)")
        return [self.artists[a] for a in artist_ids if a in self.artists]

    def calls_named(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def techno_mood():
    return MoodSettings(energy=0.9, danceability=0.8, valence=0.6)


@pytest.fixture
def seed_track():
    return make_track("seed", "a0", artist_name="Seed Artist", name="Seed Song")


@pytest.fixture
def catalog(seed_track):
    """
    Seed artist a0 (techno, house) with three top tracks and two genre
    searches. a3 is never resolvable, so s3 inherits the seed genres.
    """
    return FakeCatalog(
        artists={
            "a0": make_artist("a0", ["techno", "house"]),
            "a1": make_artist("a1", ["acoustic"]),
            "a2": make_artist("a2", ["metal"]),
            "a4": make_artist("a4", ["classical"]),
        },
        top_tracks={
            "a0": [make_track("t1", "a0"), make_track("t2", "a0"), seed_track, make_track("t3", "a0")],
        },
        searches={
            "techno": [seed_track, make_track("s1", "a1"), make_track("t1", "a0"), make_track("s2", "a2")],
            "house": [make_track("s3", "a3"), make_track("s1", "a1"), make_track("s4", "a4")],
        },
    )
