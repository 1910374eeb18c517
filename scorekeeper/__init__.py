"""Scorekeeper: live scorekeeping backend for team and individual competitions."""

__version__ = "1.0.0"
