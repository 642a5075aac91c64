"""
Availability Poll API

This module provides a modular API structure for the availability poll.

Structure:
    api/
    ├── __init__.py              # This file
    ├── meetings/                # Meetings domain
    │   └── __init__.py          # Re-exports from meeting_api
    ├── shared/                  # Shared utilities
    │   ├── __init__.py          # Re-exports from security and validators
    │   └── validators.py        # Poll-specific validators
    ├── meeting_api.py           # Whitelisted endpoints
    └── security.py              # Rate limiting, honeypot, text cleaning

Usage:
    frappe.call("availability_poll.api.meetings.get_results", ...)
"""

from . import meetings
from . import shared

__all__ = [
    "meetings",
    "shared",
]
