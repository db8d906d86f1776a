"""
Command-line interface for Claude Token Tracker.
"""
