"""
Configuration management module for vidshare.

Handles application settings, environment variables, database engine
configuration and logging setup.
"""

from __future__ import annotations

__all__: list[str] = []
