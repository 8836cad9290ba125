"""
Tests for the kill count and pet drop tracker.

This package contains tests for:
- Chat line extraction and mode resolution
- Line de-duplication and line sources
- Session state and the record store merge policy
- The poll loop, exports and the command line interface
"""
