"""
CLI interface module for vidshare.

Provides Typer-based command-line interface for running the API server,
managing the database schema and provisioning users.
"""

from __future__ import annotations

__all__: list[str] = []
