"""Organization contributor leaderboard rendered as an SVG badge."""

__version__ = "0.1.0"
