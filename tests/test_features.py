"""Tests for genre-based feature estimation."""

from itertools import combinations

import pytest

from moodmatch_recs.config import GENRE_PRESETS
from moodmatch_recs.features import (
    DEFAULT_FEATURE_VECTOR,
    FeatureEstimator,
    FeatureVector,
    MoodSettings,
)


@pytest.fixture
def estimator():
    return FeatureEstimator()


def test_single_exact_preset(estimator):
    assert estimator.estimate(["techno"]) == FeatureVector(0.9, 0.8, 0.6)


@pytest.mark.parametrize("genres", [[], None])
def test_no_genres_gives_default(estimator, genres):
    assert estimator.estimate(genres) == FeatureVector(0.6, 0.6, 0.6)


def test_mixed_genres_are_averaged(estimator):
    result = estimator.estimate(["techno", "acoustic"])
    assert result.energy == pytest.approx(0.65)
    assert result.danceability == pytest.approx(0.625)
    assert result.valence == pytest.approx(0.65)


def test_unmatched_genres_are_ignored_in_mean(estimator):
    result = estimator.estimate(["polka", "metal", "zydeco"])
    assert result == FeatureVector(0.95, 0.4, 0.4)


def test_nothing_matches_gives_default(estimator):
    assert estimator.estimate(["polka", "zydeco"]) is DEFAULT_FEATURE_VECTOR


def test_matching_is_case_insensitive(estimator):
    assert estimator.estimate(["Deep TECHNO"]) == FeatureVector(0.9, 0.8, 0.6)


@pytest.mark.parametrize("genre, expected_keyword", [
    ("indie rock", "indie"),     # indie preset precedes rock
    ("pop punk", "pop"),         # pop preset precedes rock/punk
    ("trap metal", "trap"),      # hip hop preset precedes metal
    ("electro house", "edm"),    # both keywords in the first preset
    ("alternative metal", "alt"),
])
def test_first_preset_in_table_order_wins(estimator, genre, expected_keyword):
    preset = estimator.match_preset(genre)
    assert expected_keyword in preset.keywords


def test_each_genre_credits_one_preset(estimator):
    # "electropop" hits the edm preset first ("electro"), not the pop one
    assert estimator.estimate(["electropop"]) == FeatureVector(0.9, 0.8, 0.6)


def test_same_input_order_is_deterministic(estimator):
    genres = ["soul", "rock", "lo-fi beats", "bedroom pop"]
    assert estimator.estimate(genres) == estimator.estimate(list(genres))


def test_estimates_stay_in_unit_range_for_every_preset_combination(estimator):
    representatives = [preset.keywords[0] for preset in GENRE_PRESETS]
    for size in range(1, len(representatives) + 1):
        for combo in combinations(representatives, size):
            result = estimator.estimate(list(combo))
            for value in (result.energy, result.danceability, result.valence):
                assert 0.0 <= value <= 1.0


def test_custom_preset_table():
    from moodmatch_recs.config import GenrePreset

    estimator = FeatureEstimator(presets=[GenrePreset(("polka",), 0.7, 0.9, 0.95)])
    assert estimator.estimate(["polka"]) == FeatureVector(0.7, 0.9, 0.95)
    assert estimator.estimate(["techno"]) == DEFAULT_FEATURE_VECTOR


def test_mood_settings_round_trip_from_dict():
    mood = MoodSettings.from_dict({"energy": "0.3", "danceability": 0.4, "valence": 1})
    assert mood == MoodSettings(0.3, 0.4, 1.0)
    assert mood.to_dict() == {"energy": 0.3, "danceability": 0.4, "valence": 1.0}
