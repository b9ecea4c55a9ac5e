"""
Candidate Collection Module
===========================

Builds the candidate pool for a seed track from two sources:
1. Top tracks of the seed's primary artist
2. Keyword searches on the seed artist's first genres

Candidates are deduplicated against a seen-set that starts with the seed
track itself, so the seed is never recommended back. The primary artists of
all candidates are then resolved in batches to get their genres.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .spotify_client import SpotifyClient, CatalogError
from .utils import chunked
from .config import (
    DEFAULT_COLLECTOR_CONFIG,
    CollectorConfig,
)

logger = logging.getLogger(__name__)


@dataclass
class ArtistRef:
    """Artist as listed on a track."""
    id: Optional[str]
    name: str

    @classmethod
    def from_spotify(cls, artist: Dict) -> "ArtistRef":
        return cls(id=artist.get("id"), name=artist.get("name") or "")


@dataclass
class SeedTrack:
    """The track recommendations are generated for."""
    id: Optional[str]
    name: str
    artists: List[ArtistRef] = field(default_factory=list)
    album_name: Optional[str] = None

    @classmethod
    def from_spotify(cls, track: Dict) -> "SeedTrack":
        """Build a seed from a Spotify track object (``title`` accepted for name)."""
        return cls(
            id=track.get("id"),
            name=track.get("name") or track.get("title") or "",
            artists=[ArtistRef.from_spotify(a) for a in track.get("artists") or [] if a],
            album_name=(track.get("album") or {}).get("name"),
        )

    @property
    def primary_artist_id(self) -> Optional[str]:
        return self.artists[0].id if self.artists else None

    @property
    def primary_artist_name(self) -> str:
        return self.artists[0].name if self.artists else ""

    @property
    def display_name(self) -> str:
        return self.name or "your selected track"


@dataclass
class CandidateTrack:
    """A track considered for recommendation."""
    id: str
    name: str
    artists: List[ArtistRef] = field(default_factory=list)
    album_name: str = ""
    duration_ms: Optional[int] = None
    image_url: str = ""

    @classmethod
    def from_spotify(cls, track: Dict) -> "CandidateTrack":
        album = track.get("album") or {}
        images = album.get("images") or []
        image_url = (images[0] or {}).get("url") if images else None
        return cls(
            id=track["id"],
            name=track.get("name") or "",
            artists=[ArtistRef.from_spotify(a) for a in track.get("artists") or [] if a],
            album_name=album.get("name") or "",
            duration_ms=track.get("duration_ms"),
            image_url=image_url or "",
        )

    @property
    def primary_artist_id(self) -> Optional[str]:
        return self.artists[0].id if self.artists else None

    @property
    def artist_names(self) -> List[str]:
        return [a.name for a in self.artists]


@dataclass
class ArtistRecord:
    """Resolved artist with its genre tags (None when the catalog omitted them)."""
    id: str
    genres: Optional[List[str]] = None

    @classmethod
    def from_spotify(cls, artist: Dict) -> "ArtistRecord":
        genres = artist.get("genres")
        return cls(id=artist["id"], genres=list(genres) if genres is not None else None)


@dataclass
class CandidatePool:
    """Everything the ranker needs for one request."""
    seed_genres: List[str]
    candidates: List[CandidateTrack]
    artists: Dict[str, ArtistRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.candidates)

    def genres_for(self, candidate: CandidateTrack) -> List[str]:
        """
        Genres used to estimate a candidate's features.

        Falls back to the seed artist's genres when the candidate's primary
        artist could not be resolved.
        """
        record = self.artists.get(candidate.primary_artist_id) if candidate.primary_artist_id else None
        if record is None or record.genres is None:
            return self.seed_genres
        return record.genres


class CandidateCollector:
    """
    Collects candidate tracks for a seed track.

    Strategy:
        1. Fetch the seed artist and its top tracks (concurrently)
        2. Add unseen top tracks
        3. Search the first seed genres and add unseen hits, up to the pool cap
        4. Resolve candidate primary artists in batches
    """

    def __init__(
        self,
        spotify_client: SpotifyClient,
        config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG
    ):
        """
        Initialize candidate collector.

        Args:
            spotify_client: Spotify API client for the current request
            config: Candidate collection configuration
        """
        self.spotify = spotify_client
        self.config = config

    def collect(self, seed: SeedTrack) -> CandidatePool:
        """
        Collect and resolve candidates for a seed track.

        Args:
            seed: Seed track with a primary artist ID

        Returns:
            CandidatePool (empty candidates list when nothing was found)

        Raises:
            CatalogError: If the seed artist or its top tracks cannot be fetched
        """
        seed_artist_id = seed.primary_artist_id
        if not seed_artist_id:
            raise ValueError("seed track has no primary artist ID")

        seed_artist, top_tracks = self._fetch_seed_artist(seed_artist_id)
        seed_genres = list(seed_artist.get("genres") or [])

        candidates: List[CandidateTrack] = []
        seen: Set[str] = {seed.id} if seed.id else set()

        logger.info("  → Adding seed artist top tracks...")
        self._add_unseen(top_tracks, candidates, seen)

        logger.info("  → Searching by genre...")
        self._search_by_genres(seed_genres, candidates, seen)

        logger.info("  → Found %d unique candidates", len(candidates))

        pool = CandidatePool(seed_genres=seed_genres, candidates=candidates)
        if candidates:
            pool.artists = self._resolve_artists(candidates)
        return pool

    def _fetch_seed_artist(self, artist_id: str):
        """Fetch seed artist and its top tracks; waits for both, first failure wins."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            artist_future = executor.submit(self.spotify.get_artist, artist_id)
            top_tracks_future = executor.submit(self.spotify.get_artist_top_tracks, artist_id)
            return artist_future.result(), top_tracks_future.result()

    def _add_unseen(
        self,
        tracks: List[Dict],
        candidates: List[CandidateTrack],
        seen: Set[str],
        limit: Optional[int] = None
    ) -> None:
        """Append tracks whose ID has not been seen yet, stopping at ``limit``."""
        for track in tracks:
            if limit is not None and len(candidates) >= limit:
                break
            track_id = (track or {}).get("id")
            if not track_id or track_id in seen:
                continue
            seen.add(track_id)
            candidates.append(CandidateTrack.from_spotify(track))

    def _search_by_genres(
        self,
        seed_genres: List[str],
        candidates: List[CandidateTrack],
        seen: Set[str]
    ) -> None:
        """Run sequential keyword searches on the first seed genres."""
        for genre in seed_genres[:self.config.max_genre_searches]:
            if len(candidates) >= self.config.max_candidates:
                break
            try:
                found = self.spotify.search_tracks(genre, limit=self.config.search_limit)
            except CatalogError as e:
                logger.warning("Error searching by genre %r: %s", genre, e)
                continue
            self._add_unseen(found, candidates, seen, limit=self.config.max_candidates)

    def _resolve_artists(self, candidates: List[CandidateTrack]) -> Dict[str, ArtistRecord]:
        """
        Resolve primary artists of all candidates.

        Args:
            candidates: Candidate tracks

        Returns:
            Dictionary of artist_id -> ArtistRecord (failed batches are missing)
        """
        # Ordered and distinct
        artist_ids = list(dict.fromkeys(
            c.primary_artist_id for c in candidates if c.primary_artist_id
        ))

        artists: Dict[str, ArtistRecord] = {}
        for batch in chunked(artist_ids, self.config.artist_batch_size):
            try:
                result = self.spotify.get_artists(batch)
            except CatalogError as e:
                logger.warning("Error fetching artist batch of %d: %s", len(batch), e)
                continue
            for artist in result:
                if artist.get("id"):
                    record = ArtistRecord.from_spotify(artist)
                    artists[record.id] = record

        logger.info("  → Resolved %d of %d candidate artists", len(artists), len(artist_ids))
        return artists
