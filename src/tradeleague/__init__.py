"""Trade League: fantasy stock trading positions, valuation and leaderboard."""

__version__ = "0.1.0"
