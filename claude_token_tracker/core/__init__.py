"""
Core modules for Claude Token Tracker.

This package contains the pure functionality: token counters, path
encoding, aggregation, pricing and derived metrics.
"""
