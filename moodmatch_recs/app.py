"""
MoodMatch Recs - Streamlit Web App
==================================

Web interface for mood-targeted recommendations.

Run with:
    streamlit run moodmatch_recs/app.py
"""

import os
import sys

import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from moodmatch_recs.cli import resolve_seed
from moodmatch_recs.config import SPOTIFY_ACCESS_TOKEN, SPOTIFY_MARKET
from moodmatch_recs.features import MoodSettings
from moodmatch_recs.recommender import RecommendationEngine, RecommendationOutput
from moodmatch_recs.spotify_client import SpotifyClient


# =============================================================================
# PAGE CONFIG
# =============================================================================
st.set_page_config(
    page_title="MoodMatch Recs",
    page_icon="🎵",
    layout="wide",
    initial_sidebar_state="expanded"
)

# =============================================================================
# CUSTOM CSS
# =============================================================================
st.markdown("""
<style>
    .main-header {
        font-size: 3rem;
        font-weight: bold;
        background: linear-gradient(90deg, #1DB954, #1ed760);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        text-align: center;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        text-align: center;
        color: #888;
        margin-bottom: 2rem;
    }
    .track-card {
        background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%);
        border-radius: 12px;
        padding: 1.2rem;
        margin-bottom: 1rem;
        border-left: 4px solid #1DB954;
    }
    .track-name {
        font-size: 1.1rem;
        font-weight: 600;
        color: #fff;
    }
    .artist-name {
        font-size: 0.9rem;
        color: #b3b3b3;
    }
    .explanation {
        font-size: 0.85rem;
        color: #a0a0a0;
        margin-top: 0.5rem;
        font-style: italic;
    }
</style>
""", unsafe_allow_html=True)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================
def get_token() -> str:
    """Access token from the sidebar, falling back to the environment."""
    return st.session_state.get("spotify_access_token", "") or SPOTIFY_ACCESS_TOKEN


def render_track_card(rec: dict, index: int):
    """Render a single recommendation as a card."""
    with st.container():
        col1, col2 = st.columns([1, 5])

        with col1:
            if rec["imageUrl"]:
                st.image(rec["imageUrl"], width=96)

        with col2:
            st.markdown(f"""
            <div class="track-card">
                <div class="track-name">{index}. {rec['title']} · {rec['duration']}</div>
                <div class="artist-name">{rec['artist']} · {rec['album']}</div>
                <div class="explanation">💡 {rec['reason']}</div>
            </div>
            """, unsafe_allow_html=True)


def render_recommendations(output: RecommendationOutput):
    """Render the full recommendation output."""
    st.markdown("---")

    if output.is_fallback:
        st.info("Live recommendations were unavailable, showing placeholder tracks.")

    st.subheader(f"🎶 Matches for {output.seed_track_name}")
    for i, rec in enumerate(output.recommendations, 1):
        render_track_card(rec.to_dict(), i)

    st.markdown("---")
    st.download_button(
        label="📄 Download JSON",
        data=output.to_json(),
        file_name=f"moodmatch_recs_{output.seed_track_id or 'seed'}.json",
        mime="application/json"
    )


# =============================================================================
# MAIN APP
# =============================================================================
def main():
    """Main Streamlit app."""
    st.markdown('<h1 class="main-header">🎵 MoodMatch Recs</h1>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">Tracks that match the mood you want</p>', unsafe_allow_html=True)

    with st.sidebar:
        st.header("⚙️ Settings")

        with st.expander("🔑 Spotify Access Token", expanded=not get_token()):
            token_input = st.text_input(
                "Access token",
                value=st.session_state.get("spotify_access_token", ""),
                type="password"
            )
            if st.button("Save Token"):
                st.session_state["spotify_access_token"] = token_input.strip()
                st.success("✅ Token saved!")

        market = st.text_input("Market", value=SPOTIFY_MARKET, max_chars=2)

        st.markdown("---")
        st.subheader("🎛️ Target Mood")
        energy = st.slider("Energy", 0.0, 1.0, 0.5, 0.05)
        danceability = st.slider("Danceability", 0.0, 1.0, 0.5, 0.05)
        valence = st.slider("Valence (positivity)", 0.0, 1.0, 0.5, 0.05)

        with st.expander("ℹ️ About"):
            st.markdown("""
            **How it works:**
            1. 🎤 Looks up the seed track's artist and its top tracks
            2. 🔍 Searches tracks in the artist's main genres
            3. 📈 Estimates each track's mood from its artist's genres
            4. 🎯 Returns the tracks closest to your target mood
            """)

    if not get_token():
        st.warning("⚠️ No access token set: placeholder tracks will be shown.")

    st.markdown("### 🎧 Pick a Seed Track")
    seed_input = st.text_input(
        "Track URL or ID",
        placeholder="https://open.spotify.com/track/xxxxx or spotify:track:xxxxx",
    )

    if st.button("🚀 Generate Recommendations", type="primary", use_container_width=True):
        if not seed_input:
            st.error("Please enter a track URL")
            return

        token = get_token()
        mood = MoodSettings(energy=energy, danceability=danceability, valence=valence)

        with st.spinner("Finding tracks that match your mood..."):
            seed = resolve_seed(seed_input, token, market)
            engine = RecommendationEngine(client_factory=lambda t: SpotifyClient(t, market=market))
            result = engine.recommend(seed, mood, token)

        st.session_state["last_result"] = result
        render_recommendations(result)

    elif "last_result" in st.session_state:
        render_recommendations(st.session_state["last_result"])


if __name__ == "__main__":
    main()
