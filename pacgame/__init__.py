"""A terminal Pac-Man game with ghosts, a bonus fruit, recorded steps and silent replay checking."""

__version__ = "0.1.0"