"""Core engine package for the Crazy Eights game."""

__all__ = [
    "cards",
    "deck",
    "state",
    "rules",
    "game",
    "scheduler",
    "service",
    "config",
]
