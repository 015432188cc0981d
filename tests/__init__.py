"""
Test suite for fast_utc

Contains:
- tests/unit/          : Unit tests for individual modules
"""
