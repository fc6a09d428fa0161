"""Coins, global fee checks and interchain-account authentication for a hub chain."""

__version__ = "0.1.0"