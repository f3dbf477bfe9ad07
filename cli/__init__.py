"""
CLI entry points for the signal engine.

Provides command-line interfaces for:
- Signal evaluation on a price file and time range
"""
