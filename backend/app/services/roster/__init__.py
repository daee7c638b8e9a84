# backend/app/services/roster/__init__.py
"""Roster ingestion: text parsing and sample class lists."""

from .roster_parser import TextRosterParser
from .demo_data import DEMO_GROUP_A, DEMO_GROUP_B

__all__ = ["TextRosterParser", "DEMO_GROUP_A", "DEMO_GROUP_B"]
