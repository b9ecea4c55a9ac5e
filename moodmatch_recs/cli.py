"""
Command-Line Interface for MoodMatch Recs
=========================================

Usage:
    python -m moodmatch_recs.cli <seed_track> [options]

Options:
    --energy, --danceability, --valence   Target mood (0-1, default: 0.5)
    --token         Spotify access token (default: $SPOTIFY_ACCESS_TOKEN)
    --code          Authorization code to exchange for a token
    --market        Market country code (default: $SPOTIFY_MARKET or US)
    --output, -o    Output file path (default: stdout)
    --format        Output format: json or simple (default: json)
    --verbose, -v   Verbose output with progress details
    --help, -h      Show this help message

Examples:
    python -m moodmatch_recs.cli https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC --energy 0.8
    python -m moodmatch_recs.cli spotify:track:4uLU6hMCjMI75M1A2tKUQC --valence 0.2 --format simple
    python -m moodmatch_recs.cli <track_id> --code <authorization_code> -o recommendations.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from moodmatch_recs.auth import TokenExchangeError, exchange_code_for_token
from moodmatch_recs.candidates import SeedTrack
from moodmatch_recs.config import SPOTIFY_ACCESS_TOKEN, SPOTIFY_MARKET
from moodmatch_recs.features import MoodSettings
from moodmatch_recs.recommender import RecommendationEngine, RecommendationOutput
from moodmatch_recs.spotify_client import CatalogError, SpotifyClient
from moodmatch_recs.utils import normalize_track_id

logger = logging.getLogger("moodmatch_recs")


def unit_interval(value: str) -> float:
    """argparse type for a float in [0, 1]."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"{number} is outside [0, 1]")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='moodmatch_recs',
        description='🎵 MoodMatch Recs - Tracks that match your mood',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s https://open.spotify.com/track/xxxxx --energy 0.8
  %(prog)s spotify:track:xxxxx --valence 0.2 --format simple

Environment Variables:
  SPOTIFY_ACCESS_TOKEN   Access token used when --token is not given
  SPOTIFY_CLIENT_ID      Client ID (for --code)
  SPOTIFY_CLIENT_SECRET  Client secret (for --code)
  SPOTIFY_REDIRECT_URI   Redirect URI (for --code)
        """
    )

    parser.add_argument(
        'seed',
        type=str,
        help='Seed track URL, URI, or ID'
    )

    for dimension in ('energy', 'danceability', 'valence'):
        parser.add_argument(
            f'--{dimension}',
            type=unit_interval,
            default=0.5,
            help=f'Target {dimension} between 0 and 1 (default: 0.5)'
        )

    auth = parser.add_mutually_exclusive_group()
    auth.add_argument(
        '--token',
        type=str,
        default=SPOTIFY_ACCESS_TOKEN or None,
        help='Spotify access token (without one, placeholder tracks are returned)'
    )
    auth.add_argument(
        '--code',
        type=str,
        default=None,
        help='Authorization code to exchange for an access token'
    )

    parser.add_argument(
        '--market',
        type=str,
        default=SPOTIFY_MARKET,
        help=f'Market country code (default: {SPOTIFY_MARKET})'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output file path (default: print to stdout)'
    )

    parser.add_argument(
        '--format',
        type=str,
        choices=['json', 'simple'],
        default='json',
        help='Output format (default: json)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    return parser


def format_output(result: RecommendationOutput, fmt: str) -> str:
    """Format recommendation output based on requested format."""
    if fmt == 'simple':
        lines = [
            f"🎵 Recommendations for: {result.seed_track_name}",
            f"   Target mood: energy {result.mood.energy:.2f}, "
            f"danceability {result.mood.danceability:.2f}, valence {result.mood.valence:.2f}",
        ]
        if result.is_fallback:
            lines.append("   (placeholder tracks - live recommendations unavailable)")
        lines.extend([
            "",
            "Top {0} Recommendations:".format(len(result.recommendations)),
            "-" * 50,
        ])
        for i, rec in enumerate(result.recommendations, 1):
            lines.append(f"{i:2}. {rec.title} ({rec.duration})")
            lines.append(f"    Artist: {rec.artist}")
            lines.append(f"    Album:  {rec.album}")
            lines.append(f"    Why:    {rec.reason}")
            lines.append(f"    ID:     {rec.id}")
            lines.append("")
        return '\n'.join(lines)

    return result.to_json(indent=2)


def resolve_seed(seed_input: str, token: Optional[str], market: str) -> SeedTrack:
    """
    Resolve the seed track from the catalog.

    Without a token, or when the lookup fails, a seed carrying only the ID is
    returned; the engine then serves placeholder tracks.
    """
    track_id = normalize_track_id(seed_input)
    if not token:
        return SeedTrack(id=track_id, name=track_id)

    try:
        track = SpotifyClient(token, market=market).get_track(track_id)
    except CatalogError as e:
        logger.warning("Could not resolve seed track %s: %s", track_id, e)
        return SeedTrack(id=track_id, name=track_id)

    return SeedTrack.from_spotify(track)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    token = args.token
    if args.code:
        try:
            token = exchange_code_for_token(args.code)["access_token"]
        except TokenExchangeError as e:
            print(f"❌ Error: {e}", file=sys.stderr)
            return 1

    mood = MoodSettings(
        energy=args.energy,
        danceability=args.danceability,
        valence=args.valence,
    )
    seed = resolve_seed(args.seed, token, args.market)

    engine = RecommendationEngine(
        client_factory=lambda t: SpotifyClient(t, market=args.market),
    )
    result = engine.recommend(seed, mood, token)

    output = format_output(result, args.format)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"✅ Recommendations saved to: {args.output}")
    else:
        print(output)

    return 0


if __name__ == '__main__':
    sys.exit(main())
