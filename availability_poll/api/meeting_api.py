"""
Meeting API Endpoints

Whitelisted functions for the availability poll frontend.
All public endpoints allow guest access (participants identify themselves
by name, without credentials) with security protections:
- Rate limiting by IP address
- Honeypot validation for bot detection on writes
- Input sanitization
"""

import frappe
from frappe import _
from frappe.utils import cint
from typing import Any, Dict, List, Optional

# Import scheduling services
from availability_poll.availability_poll.scheduling import service
from availability_poll.availability_poll.scheduling.exceptions import MeetingNotFound, SchedulingError
from availability_poll.availability_poll.scheduling.timezones import COMMON_TIMEZONES, is_valid_timezone

# Import storage
from availability_poll.availability_poll.storage.base import StoreError
from availability_poll.availability_poll.storage.factory import get_store

# Import security utilities
from availability_poll.api.shared import (
    check_honeypot,
    check_rate_limit,
    clean_text,
    parse_list_param,
    validate_date_string,
    validate_meeting_name,
    validate_participant_name,
    validate_time_string,
    validate_timezone,
)


def _display_timezone(display_timezone: Optional[str]) -> Optional[str]:
	"""
	Timezone de display pedida por el cliente.

	Si no existe se sigue con la de la reunión (offset 0): solo afecta
	las etiquetas, no vale la pena fallar el request.
	"""
	display_timezone = clean_text(display_timezone, "display_timezone", max_length=64)
	if display_timezone and not is_valid_timezone(display_timezone):
		frappe.logger("availability_poll").warning(
			f"Display timezone desconocida '{display_timezone}', usando la de la reunión"
		)
	return display_timezone


def _throw_for(error: SchedulingError) -> None:
	"""Traduce errores del motor a errores de Frappe."""
	if isinstance(error, MeetingNotFound):
		frappe.throw(_(f"Meeting '{error.meeting_id}' does not exist"), frappe.DoesNotExistError)
	frappe.throw(_(str(error)), frappe.ValidationError)


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_timezones() -> List[Dict[str, str]]:
	"""
	Lista de timezones comunes para el selector de display.

	Returns:
		list[dict]: [{"value": "America/Bogota", "label": "Bogotá / Lima (UTC-5)"}, ...]
	"""
	return COMMON_TIMEZONES


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_meeting(
	meeting: str,
	participant_name: Optional[str] = None,
	display_timezone: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Obtiene la reunión y el grid de edición para un participante.

	Rate limited: 30 requests per minute per IP.

	Args:
		meeting: nombre del Group Meeting
		participant_name: nombre con el que se identifica quien edita (opcional)
		display_timezone: timezone IANA para las etiquetas (opcional)

	Returns:
		dict: {
			"meeting": {...},
			"participant_name": "Ana",
			"selected": ["2026-01-15 09:00", ...],
			"respondents": ["Ana", "Luis"],
			"grid": {...}
		}

	Example:
		```javascript
		frappe.call({
			method: "availability_poll.api.meetings.get_meeting",
			args: {
				meeting: "GM-00001",
				participant_name: "Ana",
				display_timezone: "Europe/Madrid"
			},
			callback: function(r) {
				renderGrid(r.message.grid, new Set(r.message.selected));
			}
		});
		```
	"""
	check_rate_limit("get_meeting", limit=30, seconds=60)

	meeting = validate_meeting_name(meeting)
	participant_name = validate_participant_name(participant_name, required=False)
	display_timezone = _display_timezone(display_timezone)

	try:
		return service.get_meeting_grid(
			get_store(),
			meeting,
			participant_name=participant_name,
			display_timezone=display_timezone
		)
	except SchedulingError as e:
		_throw_for(e)
	except StoreError as e:
		frappe.log_error(f"Error in get_meeting: {str(e)}", "Availability Poll API")
		frappe.throw(_("Could not load the meeting availability"))


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_results(
	meeting: str,
	display_timezone: Optional[str] = None,
	highlight: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Obtiene el heatmap de resultados de una reunión.

	Rate limited: 30 requests per minute per IP.

	Args:
		meeting: nombre del Group Meeting
		display_timezone: timezone IANA para las etiquetas (opcional)
		highlight: nombre de un participante para resaltar sus slots (opcional)

	Returns:
		dict: {
			"meeting": {...},
			"total": 3,
			"respondents": ["Ana", "Luis", "Sofía"],
			"best_slots": ["2026-01-15 10:00"],
			"best_slot_labels": [{...}],
			"highlight": None,
			"grid": {...}
		}
	"""
	check_rate_limit("get_results", limit=30, seconds=60)

	meeting = validate_meeting_name(meeting)
	highlight = validate_participant_name(highlight, required=False)
	display_timezone = _display_timezone(display_timezone)

	try:
		return service.get_meeting_results(
			get_store(),
			meeting,
			display_timezone=display_timezone,
			highlight_participant=highlight
		)
	except SchedulingError as e:
		_throw_for(e)
	except StoreError as e:
		frappe.log_error(f"Error in get_results: {str(e)}", "Availability Poll API")
		frappe.throw(_("Could not load the meeting results"))


@frappe.whitelist(allow_guest=True, methods=['POST'])
def save_availability(
	meeting: str,
	participant_name: str,
	slots: Any = None,
	honeypot: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Guarda (reemplaza) la disponibilidad de un participante.

	Rate limited: 10 requests per minute per IP and meeting (write operation).
	Protected by honeypot field.

	Args:
		meeting: nombre del Group Meeting
		participant_name: nombre del participante (único por reunión, case-sensitive)
		slots: lista de slot keys "YYYY-MM-DD HH:MM" (lista o JSON)
		honeypot: campo honeypot para detección de bots (debe estar vacío)

	Returns:
		dict: {"meeting": "GM-00001", "participant_name": "Ana", "slots": [...]}

	Example:
		```javascript
		frappe.call({
			method: "availability_poll.api.meetings.save_availability",
			args: {
				meeting: "GM-00001",
				participant_name: "Ana",
				slots: JSON.stringify([...selected])
			}
		});
		```
	"""
	check_honeypot(honeypot, "save_availability")
	meeting = validate_meeting_name(meeting)
	check_rate_limit("save_availability", limit=10, seconds=60, scope=meeting)

	participant_name = validate_participant_name(participant_name)
	slot_keys = parse_list_param(slots, "slots")

	try:
		return service.save_participant_availability(
			get_store(),
			meeting,
			participant_name,
			slot_keys
		)
	except SchedulingError as e:
		_throw_for(e)


@frappe.whitelist(allow_guest=True, methods=['POST'])
def create_meeting(
	title: str,
	dates: Any,
	start_time: str,
	end_time: str,
	description: Optional[str] = None,
	meeting_url: Optional[str] = None,
	timezone: Optional[str] = None,
	slot_duration_minutes: Optional[int] = None,
	honeypot: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Crea una reunión nueva.

	Rate limited: 5 requests per minute per IP (write operation).
	Protected by honeypot field.

	Args:
		title: título de la reunión
		dates: fechas candidatas "YYYY-MM-DD" (lista o JSON)
		start_time: hora de inicio diaria (HH:MM)
		end_time: hora de fin diaria (HH:MM), mayor que start_time
		description: descripción (opcional)
		meeting_url: link de la videollamada (opcional)
		timezone: timezone IANA de la reunión (default: UTC)
		slot_duration_minutes: duración de cada slot (default: 30)
		honeypot: campo honeypot para detección de bots (debe estar vacío)

	Returns:
		dict: reunión creada, con "name"
	"""
	check_honeypot(honeypot, "create_meeting")
	check_rate_limit("create_meeting", limit=5, seconds=60)

	data = {
		"title": clean_text(title, "title", max_length=140),
		"description": clean_text(description, "description", max_length=1000, multiline=True),
		"meeting_url": clean_text(meeting_url, "meeting_url", max_length=500),
		"dates": [validate_date_string(value, "dates") for value in parse_list_param(dates, "dates")],
		"start_time": validate_time_string(start_time, "start_time"),
		"end_time": validate_time_string(end_time, "end_time"),
		"timezone": validate_timezone(timezone, "timezone"),
		"slot_duration_minutes": cint(slot_duration_minutes) or None,
	}

	try:
		return service.create_meeting(get_store(), data)
	except SchedulingError as e:
		_throw_for(e)
