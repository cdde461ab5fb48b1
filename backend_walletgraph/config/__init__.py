"""
Configuration management for the wallet graph backend.

Loads settings from environment variables and an optional .env file.
"""

from backend_walletgraph.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
