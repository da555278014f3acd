"""Game Score: live scoring, league tables and knockout brackets."""

__version__ = "0.1.0"
