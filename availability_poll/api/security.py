"""
Security Utilities for Public APIs

Participants identify themselves by name only, so guest endpoints rely on:
- Rate limiting per IP, optionally scoped to one meeting
- A honeypot field on write endpoints
- Text cleaning for titles, descriptions and display options
"""

import re
import frappe
from frappe import _
from frappe.utils import cint


RATE_LIMIT_PREFIX = "rate_limit:availability_poll"

# Control characters except tab and newline
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')


# ===================
# Rate Limiting
# ===================

def rate_limit_key(action: str, ip: str, scope: str = None) -> str:
    """
    Cache key for a rate-limited action.

    With scope (a meeting name) each meeting gets its own budget, so one
    busy poll does not lock the same IP out of the others.
    """
    if scope:
        return f"{RATE_LIMIT_PREFIX}:{action}:{scope}:{ip}"
    return f"{RATE_LIMIT_PREFIX}:{action}:{ip}"


def check_rate_limit(action: str, limit: int = 10, seconds: int = 60, scope: str = None) -> None:
    """
    Check rate limit for an action by IP address.

    Uses Frappe's cache (Redis) to count requests in a fixed window.

    Args:
        action: Endpoint being limited ("save_availability", ...)
        limit: Maximum number of requests in the window
        seconds: Window length in seconds
        scope: Optional meeting name to count per meeting

    Raises:
        frappe.TooManyRequestsError: If the limit is exceeded
    """
    ip = get_client_ip()
    cache_key = rate_limit_key(action, ip, scope)

    current = cint(frappe.cache.get_value(cache_key))

    if current >= limit:
        frappe.logger("availability_poll").warning(
            f"Rate limit {action} ({limit}/{seconds}s) alcanzado por {ip}"
            + (f" en {scope}" if scope else "")
        )
        frappe.throw(
            _("Too many requests. Please wait a moment and try again."),
            frappe.TooManyRequestsError
        )

    frappe.cache.set_value(cache_key, current + 1, expires_in_sec=seconds)


def get_client_ip() -> str:
    """
    IP of the current request.

    Frappe resolves X-Forwarded-For into request_ip; outside a request
    (tests, background jobs) there is none.
    """
    return getattr(frappe.local, "request_ip", None) or "unknown"


# ===================
# Honeypot Validation
# ===================

def check_honeypot(honeypot_value: str = None, action: str = None) -> None:
    """
    Reject submissions that filled the hidden honeypot field.

    Raises:
        frappe.ValidationError: generic message, detection is not revealed
    """
    if not honeypot_value:
        return

    frappe.log_error(
        title=_("Bot Detected (Honeypot)"),
        message=f"Action: {action or '-'}, IP: {get_client_ip()}, Value: {str(honeypot_value)[:100]}"
    )
    frappe.throw(_("Invalid request"), frappe.ValidationError)


# ===================
# Text Cleaning
# ===================

def clean_text(
    value: str,
    field_name: str = "value",
    max_length: int = 500,
    multiline: bool = False
) -> str:
    """
    Clean free text coming from the poll forms.

    Control characters are dropped (newlines kept only when multiline).
    Text over max_length is rejected rather than cut, so a title is never
    stored different from what the organizer typed.

    Returns:
        str: cleaned text, or None for empty input

    Raises:
        frappe.ValidationError: If the text is too long
    """
    if value is None:
        return None

    value = _CONTROL_CHARS.sub('', str(value))
    if not multiline:
        value = re.sub(r'[\t\r\n]+', ' ', value)
    value = value.strip()

    if not value:
        return None

    if len(value) > max_length:
        frappe.throw(
            _(f"{field_name} must be at most {max_length} characters"), frappe.ValidationError
        )

    return value
