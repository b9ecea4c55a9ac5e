"""
Main Recommendation Engine
==========================

Orchestrates the complete recommendation pipeline:
1. Check token and seed identity
2. Collect candidate tracks (top tracks + genre search)
3. Resolve candidate artist genres
4. Estimate features, score and rank against the target mood
5. Format the top matches with explanations

Whenever live data is unavailable (no token, no seed artist, no candidates
or any error along the way) the placeholder list is returned instead, so a
caller always receives a well-formed list.
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from .spotify_client import SpotifyClient
from .candidates import CandidateCollector, SeedTrack
from .scoring import MoodRanker
from .explainer import Recommendation, RecommendationFormatter
from .fallback import generate_mock_recommendations
from .features import FeatureEstimator, MoodSettings
from .config import (
    NUM_RECOMMENDATIONS,
    DEFAULT_COLLECTOR_CONFIG,
    CollectorConfig,
)

logger = logging.getLogger(__name__)

SeedInput = Union[SeedTrack, Dict]
MoodInput = Union[MoodSettings, Dict[str, float]]


@dataclass
class RecommendationOutput:
    """Complete recommendation output."""
    seed_track_id: Optional[str]
    seed_track_name: str
    mood: MoodSettings
    recommendations: List[Recommendation]

    # True when the placeholder list was served
    is_fallback: bool = False

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "seed_track_id": self.seed_track_id,
            "seed_track_name": self.seed_track_name,
            "mood": self.mood.to_dict(),
            "is_fallback": self.is_fallback,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


class RecommendationEngine:
    """
    Main recommendation engine orchestrating the complete pipeline.

    Usage:
        engine = RecommendationEngine()
        result = engine.recommend(seed_track, {"energy": 0.8, "danceability": 0.7, "valence": 0.6}, token)
        print(result.to_json())
    """

    def __init__(
        self,
        client_factory: Callable[[str], SpotifyClient] = SpotifyClient,
        collector_config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
        estimator: Optional[FeatureEstimator] = None,
        n_recommendations: int = NUM_RECOMMENDATIONS
    ):
        """
        Initialize recommendation engine.

        Args:
            client_factory: Builds a catalog client from an access token
            collector_config: Candidate collection configuration
            estimator: Genre-based feature estimator
            n_recommendations: Maximum number of recommendations
        """
        self.client_factory = client_factory
        self.collector_config = collector_config
        self.ranker = MoodRanker(estimator or FeatureEstimator(), limit=n_recommendations)

    def recommend(
        self,
        seed: SeedInput,
        mood: MoodInput,
        token: Optional[str] = None
    ) -> RecommendationOutput:
        """
        Generate recommendations for a seed track. Never raises.

        Args:
            seed: Seed track (SeedTrack or Spotify track dictionary)
            mood: Target mood settings (MoodSettings or dictionary)
            token: Spotify access token; placeholders are served without one

        Returns:
            RecommendationOutput with at most ``n_recommendations`` entries
        """
        if isinstance(seed, dict):
            seed = SeedTrack.from_spotify(seed)
        if isinstance(mood, dict):
            mood = MoodSettings.from_dict(mood)

        if not token:
            return self._fallback(seed, mood)

        logger.info("🎵 Generating songs for: %s", seed.display_name)
        logger.info("   Target mood: %s", mood.to_dict())

        if not seed.primary_artist_id:
            logger.warning("No artist ID on seed track, using placeholder songs")
            return self._fallback(seed, mood)

        try:
            recommendations = self._recommend_live(seed, mood, token)
        except Exception:
            logger.exception("Spotify API error, falling back to placeholder songs")
            return self._fallback(seed, mood)

        if not recommendations:
            logger.warning("No candidate tracks, using placeholder songs")
            return self._fallback(seed, mood)

        logger.info("✅ Generated %d recommendations", len(recommendations))
        return RecommendationOutput(
            seed_track_id=seed.id,
            seed_track_name=seed.display_name,
            mood=mood,
            recommendations=recommendations,
        )

    def _recommend_live(
        self,
        seed: SeedTrack,
        mood: MoodSettings,
        token: str
    ) -> List[Recommendation]:
        """Run the live pipeline; an empty list means no candidates were found."""
        collector = CandidateCollector(self.client_factory(token), self.collector_config)

        logger.info("🔍 Collecting candidate tracks...")
        pool = collector.collect(seed)
        if not pool.candidates:
            return []

        logger.info("📊 Scoring %d candidates...", len(pool))
        ranked = self.ranker.rank(pool, mood)

        formatter = RecommendationFormatter(seed.primary_artist_name)
        return formatter.format_all(ranked, mood)

    def _fallback(self, seed: SeedTrack, mood: MoodSettings) -> RecommendationOutput:
        return RecommendationOutput(
            seed_track_id=seed.id,
            seed_track_name=seed.display_name,
            mood=mood,
            recommendations=generate_mock_recommendations(mood, seed.display_name),
            is_fallback=True,
        )


def generate_songs(
    seed: SeedInput,
    mood: MoodInput,
    token: Optional[str] = None
) -> List[Recommendation]:
    """
    Convenience function for quick recommendations.

    Args:
        seed: Seed track (SeedTrack or Spotify track dictionary)
        mood: Target mood settings
        token: Spotify access token (optional)

    Returns:
        List of at most 10 recommendations
    """
    engine = RecommendationEngine()
    return engine.recommend(seed, mood, token).recommendations
