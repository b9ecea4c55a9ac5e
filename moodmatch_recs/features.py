"""
Feature Estimation Module
=========================

The catalog no longer serves per-track audio features, so energy,
danceability and valence are approximated from the primary artist's genre
tags using a static table of genre presets.

Estimation rule:
    For each genre, the first preset (in table order) with a keyword that
    is a substring of the lowercased genre is credited once. The estimate
    is the mean of all credited presets, or DEFAULT_FEATURES when no genre
    matched.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

import numpy as np

from .config import DEFAULT_FEATURES, GENRE_PRESETS, MOOD_DIMENSIONS, GenrePreset


@dataclass(frozen=True)
class MoodSettings:
    """Target point in mood space, each dimension conventionally in [0, 1]."""
    energy: float
    danceability: float
    valence: float

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "MoodSettings":
        return cls(
            energy=float(data["energy"]),
            danceability=float(data["danceability"]),
            valence=float(data["valence"]),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "energy": self.energy,
            "danceability": self.danceability,
            "valence": self.valence,
        }

    def to_array(self) -> np.ndarray:
        return np.array([self.energy, self.danceability, self.valence], dtype=float)


@dataclass(frozen=True)
class FeatureVector:
    """Estimated energy / danceability / valence for a track."""
    energy: float
    danceability: float
    valence: float

    @classmethod
    def from_array(cls, values: np.ndarray) -> "FeatureVector":
        return cls(*(float(v) for v in values))

    def to_dict(self) -> Dict[str, float]:
        return {
            "energy": self.energy,
            "danceability": self.danceability,
            "valence": self.valence,
        }

    def to_array(self) -> np.ndarray:
        return np.array([self.energy, self.danceability, self.valence], dtype=float)


DEFAULT_FEATURE_VECTOR = FeatureVector(**{dim: DEFAULT_FEATURES[dim] for dim in MOOD_DIMENSIONS})


class FeatureEstimator:
    """
    Estimates a FeatureVector from free-text genre strings.

    The estimator is pure: identical genre lists (in the same order) always
    yield the same vector.
    """

    def __init__(
        self,
        presets: Sequence[GenrePreset] = GENRE_PRESETS,
        default: FeatureVector = DEFAULT_FEATURE_VECTOR,
    ):
        """
        Initialize feature estimator.

        Args:
            presets: Ordered preset table (first match wins)
            default: Vector returned when no genre matches
        """
        self.presets = tuple(presets)
        self.default = default

    def match_preset(self, genre: str) -> Optional[GenrePreset]:
        """
        Find the preset credited for a single genre.

        Args:
            genre: Genre string (any case)

        Returns:
            First matching preset in table order, or None
        """
        genre = genre.lower()
        for preset in self.presets:
            if preset.matches(genre):
                return preset
        return None

    def estimate(self, genres: Optional[Iterable[str]]) -> FeatureVector:
        """
        Estimate features from a list of genres.

        Args:
            genres: Genre strings, possibly empty or None

        Returns:
            Mean of matched preset triples, or the default vector
        """
        matched = []
        for genre in genres or []:
            if not genre:
                continue
            preset = self.match_preset(genre)
            if preset is not None:
                matched.append((preset.energy, preset.danceability, preset.valence))

        if not matched:
            return self.default

        return FeatureVector.from_array(np.mean(np.array(matched, dtype=float), axis=0))
