from twitch_auth.strategy.base import BaseStrategy, Connection
from twitch_auth.strategy.twitch import TwitchStrategy

__all__ = ["BaseStrategy", "Connection", "TwitchStrategy"]
