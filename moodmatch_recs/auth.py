"""
Authorization Code Exchange
===========================

Exchanges a Spotify authorization code (from the OAuth redirect) for an
access token. The recommender itself only ever sees the resulting token.
"""

import logging
from typing import Dict, Optional

import requests
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from .config import (
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
)

logger = logging.getLogger(__name__)


class TokenExchangeError(Exception):
    """The identity provider rejected or failed the code exchange."""


def exchange_code_for_token(
    code: str,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    redirect_uri: Optional[str] = None,
) -> Dict:
    """
    Exchange an authorization code for token information.

    Args:
        code: Authorization code from the redirect callback
        client_id: Spotify client ID (defaults to environment)
        client_secret: Spotify client secret (defaults to environment)
        redirect_uri: Redirect URI registered for the app (defaults to environment)

    Returns:
        Token info dictionary containing at least ``access_token``

    Raises:
        TokenExchangeError: If the exchange fails
    """
    if not code:
        raise TokenExchangeError("authorization code is required")

    try:
        oauth = SpotifyOAuth(
            client_id=client_id or SPOTIFY_CLIENT_ID,
            client_secret=client_secret or SPOTIFY_CLIENT_SECRET,
            redirect_uri=redirect_uri or SPOTIFY_REDIRECT_URI,
            open_browser=False,
            cache_handler=MemoryCacheHandler(),
        )
        token_info = oauth.get_access_token(code, as_dict=True, check_cache=False)
    except (SpotifyOauthError, requests.RequestException) as e:
        logger.error("Token exchange error: %s", e)
        raise TokenExchangeError("Failed to exchange code for token") from e

    if not token_info or not token_info.get("access_token"):
        raise TokenExchangeError("Token response did not include an access token")

    return token_info
