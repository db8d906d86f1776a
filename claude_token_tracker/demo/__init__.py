"""
Demo data for Claude Token Tracker.
"""
