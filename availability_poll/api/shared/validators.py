"""
Poll-specific Validators

Request-level checks for availability poll inputs. Parsing is delegated to
the scheduling engine so the API and the engine accept exactly the same
values; each validator returns the cleaned value or raises
frappe.ValidationError.
"""

import re
import frappe
from frappe import _

from availability_poll.availability_poll.scheduling.exceptions import InvalidParticipant, InvalidSlot
from availability_poll.availability_poll.scheduling.service import clean_participant_name
from availability_poll.availability_poll.scheduling.slots import to_date, to_time
from availability_poll.availability_poll.scheduling.timezones import is_valid_timezone

# Group Meeting names: "GM-00001", or whatever Desk renamed them to
_MEETING_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 ._\-]{0,139}$")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def validate_date_string(date_str: str, field_name: str = "date") -> str:
    """
    Validate a calendar date (YYYY-MM-DD). Impossible dates such as
    2025-02-30 fail with the same message the engine gives.

    Returns:
        str: ISO date
    """
    if not date_str:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    try:
        return to_date(str(date_str)).isoformat()
    except InvalidSlot as e:
        frappe.throw(_(str(e)), frappe.ValidationError)


def validate_time_string(time_str: str, field_name: str = "time") -> str:
    """
    Validate a time of day (HH:MM, optional :SS).

    Returns:
        str: "HH:MM"
    """
    if not time_str:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    try:
        return to_time(str(time_str)).strftime("%H:%M")
    except InvalidSlot as e:
        frappe.throw(_(str(e)), frappe.ValidationError)


def validate_timezone(tz_name: str, field_name: str = "timezone") -> str:
    """
    Validate an IANA timezone id. Empty values are allowed (returns None).
    """
    if not tz_name:
        return None

    tz_name = str(tz_name).strip()

    if not is_valid_timezone(tz_name):
        frappe.throw(_(f"Unknown {field_name} '{tz_name}'"), frappe.ValidationError)

    return tz_name


def validate_meeting_name(name: str, field_name: str = "meeting") -> str:
    """Group Meeting name from a shared link: letters, digits, space, '.', '_', '-'."""
    if not name:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    name = str(name).strip()

    if not _MEETING_NAME.match(name):
        frappe.throw(_(f"Invalid {field_name}"), frappe.ValidationError)

    return name


def validate_participant_name(name: str, required: bool = True) -> str:
    """
    Validate the name a participant types in.

    Names are identities ("Ana" and "ana" are different people), so they are
    never altered beyond trimming: control characters or an over-long name
    are rejected instead of being silently fixed.
    """
    if not name or not str(name).strip():
        if required:
            frappe.throw(_("Participant name is required"), frappe.ValidationError)
        return None

    name = str(name)
    if _CONTROL_CHARS.search(name):
        frappe.throw(_("Participant name contains invalid characters"), frappe.ValidationError)

    try:
        return clean_participant_name(name)
    except InvalidParticipant as e:
        frappe.throw(_(str(e)), frappe.ValidationError)


def parse_list_param(value, field_name: str = "value") -> list:
    """
    Accept a list or a JSON array string (form-encoded requests).
    """
    if value is None or value == "":
        return []

    if isinstance(value, str):
        try:
            value = frappe.parse_json(value)
        except ValueError:
            frappe.throw(_(f"{field_name} must be a JSON array"), frappe.ValidationError)

    if not isinstance(value, (list, tuple)):
        frappe.throw(_(f"{field_name} must be a list"), frappe.ValidationError)

    return list(value)
