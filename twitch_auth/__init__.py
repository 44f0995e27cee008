"""Twitch OAuth2 authorization-code strategy."""

__version__ = "0.1.0"
