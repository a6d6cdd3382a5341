"""Neuro Narrative — a Dungeon Master and a cognitive AI character sharing one world."""

__version__ = "0.1.0"
