"""
Configuration and constants for MoodMatch Recs recommendation system.
"""
import os
from dataclasses import dataclass
from typing import Dict, Tuple

# =============================================================================
# SPOTIFY API CONFIGURATION
# =============================================================================
SPOTIFY_CLIENT_ID = os.environ.get("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.environ.get("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI = os.environ.get("SPOTIFY_REDIRECT_URI", "http://localhost:8888/callback")
SPOTIFY_ACCESS_TOKEN = os.environ.get("SPOTIFY_ACCESS_TOKEN", "")

# Market used for top-tracks and search lookups
SPOTIFY_MARKET = os.environ.get("SPOTIFY_MARKET", "US")

# =============================================================================
# MOOD DIMENSIONS
# =============================================================================
MOOD_DIMENSIONS = ("energy", "danceability", "valence")

# =============================================================================
# GENRE PRESETS (genre keywords -> typical energy/danceability/valence)
# =============================================================================
@dataclass(frozen=True)
class GenrePreset:
    """Canonical feature triple for a family of genre keywords."""
    keywords: Tuple[str, ...]
    energy: float
    danceability: float
    valence: float

    def matches(self, genre: str) -> bool:
        """True if any keyword is a substring of the (lowercased) genre."""
        return any(keyword in genre for keyword in self.keywords)


# Order matters: the first preset with a keyword hit wins.
GENRE_PRESETS: Tuple[GenrePreset, ...] = (
    GenrePreset(("edm", "electro", "house", "techno", "trance", "dubstep"), 0.9, 0.8, 0.6),
    GenrePreset(("dance pop", "pop", "k-pop", "electropop"), 0.8, 0.85, 0.8),
    GenrePreset(("hip hop", "rap", "trap"), 0.8, 0.9, 0.6),
    GenrePreset(("r&b", "soul"), 0.6, 0.7, 0.7),
    GenrePreset(("indie", "alt", "alternative"), 0.55, 0.6, 0.6),
    GenrePreset(("rock", "hard rock", "punk"), 0.8, 0.55, 0.55),
    GenrePreset(("metal",), 0.95, 0.4, 0.4),
    GenrePreset(("lo-fi", "chill", "ambient", "downtempo"), 0.3, 0.4, 0.6),
    GenrePreset(("acoustic", "folk", "singer-songwriter"), 0.4, 0.45, 0.7),
    GenrePreset(("classical", "soundtrack", "score"), 0.35, 0.25, 0.6),
)

# Used when no genre is known or none matches a preset
DEFAULT_FEATURES: Dict[str, float] = {
    "energy": 0.6,
    "danceability": 0.6,
    "valence": 0.6,
}

# =============================================================================
# CANDIDATE COLLECTION CONFIGURATION
# =============================================================================
@dataclass
class CollectorConfig:
    """Configuration for candidate track collection."""
    # Number of seed artist genres used as search keywords
    max_genre_searches: int = 2

    # Results requested per genre search
    search_limit: int = 20

    # Candidate pool size at which genre searches stop adding tracks
    max_candidates: int = 40

    # Spotify API limit: 50 artists per request
    artist_batch_size: int = 50

DEFAULT_COLLECTOR_CONFIG = CollectorConfig()

# =============================================================================
# OUTPUT CONFIGURATION
# =============================================================================
NUM_RECOMMENDATIONS = 10
