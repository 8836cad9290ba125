"""
KillTracker - boss kill count and pet drop tracker

Reads game chat output, picks out kill count and golden beam pet drop
messages, and keeps a durable per-boss record of kills and pets.
"""

__version__ = "0.1.0"
__author__ = "KillTracker Team"
