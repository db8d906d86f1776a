"""
Configuration loading for Claude Token Tracker.
"""
