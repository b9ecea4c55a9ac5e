"""
Placeholder Recommendations
===========================

Fixed list of ten placeholder tracks served when live recommendations are
unavailable (no token, seed without an artist ID, no candidates, or an
unexpected error).

Each entry's match percentages are ``round(target * multiplier)`` with a
hardcoded per-entry multiplier. Multipliers above 100 are kept as-is, so a
high target can display more than 100% (e.g. "Violet Echoes" at 110%
energy). This is a known display quirk and is intentionally not clamped.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .explainer import Recommendation, describe_matches
from .features import MoodSettings
from .utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaceholderTrack:
    id: str
    title: str
    artist: str
    album: str
    duration: str
    image_url: str
    # Percent multipliers for (energy, danceability, valence)
    multipliers: Tuple[int, int, int]


_UNSPLASH = "https://images.unsplash.com/photo-{}?w=400&h=400&fit=crop"

PLACEHOLDER_TRACKS: Tuple[PlaceholderTrack, ...] = (
    PlaceholderTrack("mock-1", "Midnight Dreams", "Luna Wave", "Nocturnal", "3:42",
                     _UNSPLASH.format("1470225620780-dba8ba36b745"), (100, 100, 100)),
    PlaceholderTrack("mock-2", "Electric Horizon", "Neon Coast", "Skywave", "4:05",
                     _UNSPLASH.format("1526170375885-4d8ecf77b99f"), (95, 90, 90)),
    PlaceholderTrack("mock-3", "Violet Echoes", "Astral Bloom", "Reflections", "2:58",
                     _UNSPLASH.format("1507875703980-84f7b92febe1"), (110, 95, 85)),
    PlaceholderTrack("mock-4", "Chrome Streetlights", "Echo District", "Afterglow", "3:21",
                     _UNSPLASH.format("1507874457470-272b3c8d8ee2"), (88, 92, 92)),
    PlaceholderTrack("mock-5", "Crystal Pulse", "Nova Circuit", "Lumina", "3:55",
                     _UNSPLASH.format("1535223289827-42f1e9919769"), (102, 98, 98)),
    PlaceholderTrack("mock-6", "Silver Haze", "Moon District", "Nebula Streets", "4:11",
                     _UNSPLASH.format("1526170375885-4d8ecf77b99f"), (93, 87, 87)),
    PlaceholderTrack("mock-7", "Neon Waves", "Digital Sunset", "Cyber Dreams", "3:33",
                     _UNSPLASH.format("1493225457124-a3eb161ffa5f"), (91, 89, 94)),
    PlaceholderTrack("mock-8", "Starlight Echo", "Cosmic Drift", "Interstellar", "4:20",
                     _UNSPLASH.format("1514525253161-7a46d19cd819"), (97, 85, 88)),
    PlaceholderTrack("mock-9", "Urban Pulse", "City Lights", "Metropolitan", "3:15",
                     _UNSPLASH.format("1511379938547-c1f69419868d"), (94, 96, 91)),
    PlaceholderTrack("mock-10", "Velvet Night", "Smooth Operator", "After Hours", "3:48",
                     _UNSPLASH.format("1415201364774-f6f0bb35f28f"), (86, 83, 89)),
)


def generate_mock_recommendations(
    mood: MoodSettings,
    seed_name: Optional[str] = None
) -> List[Recommendation]:
    """
    Build the placeholder recommendation list.

    Args:
        mood: Target mood settings
        seed_name: Seed track name (only logged)

    Returns:
        Ten placeholder recommendations, always in the same order
    """
    logger.info("Serving placeholder recommendations for %s", seed_name or "your selected track")

    recommendations = []
    for track in PLACEHOLDER_TRACKS:
        energy_mult, dance_mult, valence_mult = track.multipliers
        reason = describe_matches(
            round_half_up(mood.energy * energy_mult),
            round_half_up(mood.danceability * dance_mult),
            round_half_up(mood.valence * valence_mult),
        )
        recommendations.append(Recommendation(
            id=track.id,
            title=track.title,
            artist=track.artist,
            album=track.album,
            duration=track.duration,
            image_url=track.image_url,
            reason=reason,
        ))
    return recommendations
