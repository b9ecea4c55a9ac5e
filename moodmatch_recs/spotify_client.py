"""
Spotify API Client Wrapper
==========================

Thin wrapper around Spotipy for a user access token. Covers the read-only
catalog lookups the recommender needs:
- Artist lookup (single and batched)
- Artist top tracks
- Keyword track search
- Track lookup (for resolving a seed track)

Every failed call is raised as CatalogError so callers can decide whether
a failure is fatal or can be skipped.
"""

from typing import Dict, List, Optional

import requests
import spotipy
from spotipy.exceptions import SpotifyException

from .config import SPOTIFY_MARKET


class CatalogError(Exception):
    """A catalog lookup failed (network, auth, rate limit, bad response)."""


class SpotifyClient:
    """
    Wrapper around Spotipy authenticated with a bearer token.

    Attributes:
        sp: Spotipy client instance
        market: Market country code for market-scoped lookups
    """

    # Spotify API limit: 50 artists per request
    MAX_ARTISTS_PER_REQUEST = 50

    def __init__(self, access_token: str, market: str = SPOTIFY_MARKET):
        """
        Initialize Spotify client with a user access token.

        Args:
            access_token: OAuth bearer token
            market: Market country code
        """
        self.market = market
        # No retries: a failed request is reported straight away
        self.sp = spotipy.Spotify(auth=access_token, retries=0, status_retries=0)

    def _call(self, description: str, method, *args, **kwargs):
        """Invoke a Spotipy method, normalizing failures to CatalogError."""
        try:
            return method(*args, **kwargs)
        except SpotifyException as e:
            raise CatalogError(f"{description} failed ({e.http_status}): {e.msg}") from e
        except requests.RequestException as e:
            raise CatalogError(f"{description} failed: {e}") from e

    # =========================================================================
    # TRACK OPERATIONS
    # =========================================================================

    def get_track(self, track_id: str) -> Dict:
        """
        Fetch a single track.

        Args:
            track_id: Spotify track ID

        Returns:
            Track dictionary
        """
        return self._call("track lookup", self.sp.track, track_id, market=self.market)

    # =========================================================================
    # ARTIST OPERATIONS
    # =========================================================================

    def get_artist(self, artist_id: str) -> Dict:
        """
        Fetch artist metadata (including genres).

        Args:
            artist_id: Spotify artist ID

        Returns:
            Artist dictionary
        """
        return self._call("artist lookup", self.sp.artist, artist_id)

    def get_artists(self, artist_ids: List[str]) -> List[Dict]:
        """
        Fetch one batch of artists.

        Args:
            artist_ids: At most 50 Spotify artist IDs

        Returns:
            List of artist dictionaries (unknown IDs are dropped)
        """
        if not artist_ids:
            return []
        if len(artist_ids) > self.MAX_ARTISTS_PER_REQUEST:
            raise ValueError(
                f"at most {self.MAX_ARTISTS_PER_REQUEST} artists per request, got {len(artist_ids)}"
            )

        result = self._call("artist batch lookup", self.sp.artists, artist_ids)
        return [a for a in (result or {}).get("artists", []) if a]

    def get_artist_top_tracks(self, artist_id: str) -> List[Dict]:
        """
        Fetch top tracks for an artist in the client's market.

        Args:
            artist_id: Spotify artist ID

        Returns:
            List of top track dictionaries
        """
        result = self._call(
            "top tracks lookup",
            self.sp.artist_top_tracks,
            artist_id,
            country=self.market,
        )
        return [t for t in (result or {}).get("tracks", []) if t]

    # =========================================================================
    # SEARCH OPERATIONS
    # =========================================================================

    def search_tracks(self, query: str, limit: int = 20) -> List[Dict]:
        """
        Keyword track search.

        Args:
            query: Search query
            limit: Maximum tracks to return (Spotify caps this at 50)

        Returns:
            List of track dictionaries
        """
        result = self._call(
            f"search for {query!r}",
            self.sp.search,
            q=query,
            type="track",
            limit=min(limit, 50),
            market=self.market,
        )
        items: Optional[List[Dict]] = ((result or {}).get("tracks") or {}).get("items")
        return [t for t in items or [] if t]
