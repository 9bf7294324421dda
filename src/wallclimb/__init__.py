"""WALLCLIMB - a reflex climbing game."""

__version__ = "0.1.0"
