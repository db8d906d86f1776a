"""
Claude Token Tracker.

Reads the usage logs written by the Claude coding assistant and turns them
into per-day, per-model and per-project statistics.
"""

__version__ = "0.1.0"
