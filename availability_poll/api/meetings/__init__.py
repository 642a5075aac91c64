"""
Meetings API Domain

Handles meeting creation, participant availability and results.
"""

# Re-export endpoints from meeting_api for new-style imports
from availability_poll.api.meeting_api import (
    # Meetings
    create_meeting,
    get_meeting,
    # Availability
    save_availability,
    # Results
    get_results,
    # Display
    get_timezones,
)

__all__ = [
    "create_meeting",
    "get_meeting",
    "save_availability",
    "get_results",
    "get_timezones",
]
