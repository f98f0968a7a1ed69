"""
vidshare - Video-sharing backend.

Comments, likes, playlists, subscriptions, tweets and video publishing
served over HTTP, built around a relational feed aggregator that composes
filter, join and paginate stages over the social graph.
"""

from __future__ import annotations

__version__ = "0.4.0"
__author__ = "vidshare"
__email__ = "noreply@vidshare.dev"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
