"""
Storage layer for Claude Token Tracker.

Read-only access to the assistant's on-disk usage logs.
"""
