"""
MoodMatch Recs - Mood-targeted Track Recommendations
=====================================================

Recommends tracks that match a target mood (energy, danceability, valence)
for a single seed track. Audio features are estimated from artist genre
tags, since the catalog API no longer exposes them.

Modules:
    - config: Configuration, constants and the genre preset table
    - spotify_client: Spotify API wrapper (bearer-token)
    - auth: Authorization-code to access-token exchange
    - features: Mood / feature types and genre-based feature estimation
    - candidates: Candidate track collection
    - scoring: Mood scoring and ranking
    - explainer: Recommendation formatting and match explanations
    - fallback: Placeholder recommendations
    - recommender: Main recommendation orchestrator
    - cli: Command-line interface
"""

__version__ = "1.0.0"
__author__ = "MoodMatch Team"
