"""
Shared utilities for Availability Poll API.

Re-exports security helpers (rate limiting, honeypot, text cleaning) and
poll-specific validators.
"""

from availability_poll.api.security import (
    # Rate limiting
    check_rate_limit,
    get_client_ip,
    # Security
    check_honeypot,
    # Text cleaning
    clean_text,
)

from .validators import (
    parse_list_param,
    validate_date_string,
    validate_meeting_name,
    validate_participant_name,
    validate_time_string,
    validate_timezone,
)

__all__ = [
    "check_rate_limit",
    "get_client_ip",
    "check_honeypot",
    "clean_text",
    "parse_list_param",
    "validate_date_string",
    "validate_meeting_name",
    "validate_participant_name",
    "validate_time_string",
    "validate_timezone",
]
