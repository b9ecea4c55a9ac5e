"""
Mood Scoring Engine
===================

Scores candidate tracks by how far their estimated features sit from the
target mood, then ranks them.

Mathematical Formulation:
-------------------------

    S_mood = |e_c - e_t| + |d_c - d_t| + |v_c - v_t|

i.e. the L1 (city block) distance in (energy, danceability, valence) space.
Lower is better; 0 only for an exact match. Each term lies in [0, 1] for
inputs in [0, 1], so S_mood lies in [0, 3].
"""

import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import List, Optional

from scipy.spatial.distance import cityblock

from .candidates import CandidatePool, CandidateTrack
from .features import FeatureEstimator, FeatureVector, MoodSettings
from .config import NUM_RECOMMENDATIONS

logger = logging.getLogger(__name__)


def mood_score(features: FeatureVector, mood: MoodSettings) -> float:
    """
    L1 distance between estimated features and the target mood.

    Args:
        features: Estimated feature vector
        mood: Target mood settings

    Returns:
        Sum of per-dimension absolute differences
    """
    return float(cityblock(features.to_array(), mood.to_array()))


@dataclass
class ScoredCandidate:
    """Candidate with its estimated features and mood score."""
    track: CandidateTrack
    features: FeatureVector
    mood_score: float


class MoodRanker:
    """
    Ranks a candidate pool against a target mood.

    Every candidate is scored from its primary artist's genres (or the seed
    artist's genres when unresolved). The sort is stable, so equal scores
    keep collection order: top tracks first, then search hits.
    """

    def __init__(
        self,
        estimator: Optional[FeatureEstimator] = None,
        limit: int = NUM_RECOMMENDATIONS
    ):
        self.estimator = estimator or FeatureEstimator()
        self.limit = limit

    def score(self, pool: CandidatePool, mood: MoodSettings) -> List[ScoredCandidate]:
        """Score every candidate, in collection order."""
        scored = []
        for track in pool.candidates:
            features = self.estimator.estimate(pool.genres_for(track))
            scored.append(ScoredCandidate(
                track=track,
                features=features,
                mood_score=mood_score(features, mood),
            ))
        return scored

    def rank(self, pool: CandidatePool, mood: MoodSettings) -> List[ScoredCandidate]:
        """
        Score, sort ascending by mood score and truncate.

        Args:
            pool: Collected candidate pool
            mood: Target mood settings

        Returns:
            At most ``limit`` scored candidates, best match first
        """
        ranked = sorted(self.score(pool, mood), key=attrgetter("mood_score"))

        logger.debug(
            "Top mood matches (estimated): %s",
            [
                {"title": s.track.name, "score": f"{s.mood_score:.3f}", "features": s.features.to_dict()}
                for s in ranked[:3]
            ],
        )

        return ranked[:self.limit]
