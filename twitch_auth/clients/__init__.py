from twitch_auth.clients.base import BaseOAuth2Client
from twitch_auth.clients.twitch import TwitchOAuthClient

__all__ = ["BaseOAuth2Client", "TwitchOAuthClient"]
