"""
Explanation Generator Module
============================

Turns ranked candidates into display-ready recommendations with a short,
human-readable reason built from per-dimension match percentages.

Match percentage for a dimension:

    round((1 - |feature - target|) * 100)

Values are not clamped, so targets outside [0, 1] can produce figures
above 100 or below 0.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .features import FeatureVector, MoodSettings
from .scoring import ScoredCandidate
from .utils import format_duration, round_half_up


@dataclass
class Recommendation:
    """Single track recommendation as shown to the user."""
    id: str
    title: str
    artist: str
    album: str
    duration: str
    image_url: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "duration": self.duration,
            "imageUrl": self.image_url,
            "reason": self.reason,
        }


def match_percentages(features: FeatureVector, mood: MoodSettings) -> Tuple[int, int, int]:
    """Energy, danceability and valence match percentages."""
    return (
        round_half_up((1 - abs(features.energy - mood.energy)) * 100),
        round_half_up((1 - abs(features.danceability - mood.danceability)) * 100),
        round_half_up((1 - abs(features.valence - mood.valence)) * 100),
    )


def describe_matches(energy: int, danceability: int, valence: int) -> str:
    """Reason sentence shared by live and placeholder recommendations."""
    return (
        f"{energy}% energy match, {danceability}% danceability match, "
        f"{valence}% mood match"
    )


class RecommendationFormatter:
    """Formats scored candidates for display."""

    def __init__(self, seed_artist_name: str = ""):
        """
        Args:
            seed_artist_name: Name quoted in every reason string
        """
        self.seed_artist_name = seed_artist_name

    def explain(self, scored: ScoredCandidate, mood: MoodSettings) -> str:
        energy, dance, valence = match_percentages(scored.features, mood)
        return (
            f"{describe_matches(energy, dance, valence)} "
            f"(estimated from genres similar to {self.seed_artist_name})"
        )

    def format(self, scored: ScoredCandidate, mood: MoodSettings) -> Recommendation:
        track = scored.track
        return Recommendation(
            id=track.id,
            title=track.name,
            artist=", ".join(track.artist_names),
            album=track.album_name,
            duration=format_duration(track.duration_ms),
            image_url=track.image_url,
            reason=self.explain(scored, mood),
        )

    def format_all(self, ranked: List[ScoredCandidate], mood: MoodSettings) -> List[Recommendation]:
        return [self.format(s, mood) for s in ranked]

