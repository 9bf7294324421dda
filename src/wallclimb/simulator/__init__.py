"""Pygame host for WALLCLIMB."""
