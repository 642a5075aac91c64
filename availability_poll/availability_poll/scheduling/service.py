"""
Meeting Availability Service

Page-level flows on top of an AvailabilityStore:
- Creating a meeting
- Loading the editing grid for a participant
- Saving a participant's availability (wholesale replace)
- Loading the results heatmap
"""

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from .exceptions import InvalidMeeting, InvalidParticipant, MeetingNotFound, OutOfUniverseSlot
from .formatting import display_label
from .grid import build_grid
from .heatmap import aggregate, best_slots, find_record, respondents
from .slots import (
	DEFAULT_GRANULARITY_MINUTES,
	check_meeting_range,
	meeting_granularity,
	normalize_dates,
	parse_slots,
	serialize_slots,
	slot_universe,
	to_time,
)
from .timezones import offset_minutes, resolve_timezone

MAX_PARTICIPANT_NAME_LENGTH = 140


def clean_participant_name(participant_name: Optional[str]) -> str:
	"""
	Normaliza el nombre con el que alguien se identifica.

	Se recortan espacios; mayúsculas/minúsculas se respetan.

	Raises:
		InvalidParticipant: si queda vacío o es demasiado largo
	"""
	name = (participant_name or "").strip()

	if not name:
		raise InvalidParticipant("Participant name is required")
	if len(name) > MAX_PARTICIPANT_NAME_LENGTH:
		raise InvalidParticipant(
			f"Participant name must be at most {MAX_PARTICIPANT_NAME_LENGTH} characters"
		)

	return name


def load_meeting(store: Any, meeting_id: str) -> Dict[str, Any]:
	meeting = store.get_meeting(meeting_id)
	if not meeting:
		raise MeetingNotFound(meeting_id)
	return meeting


def create_meeting(store: Any, data: Dict[str, Any]) -> Dict[str, Any]:
	"""
	Valida y guarda una reunión nueva.

	Args:
		store: AvailabilityStore
		data: {
			"title": str,
			"description": str | None,
			"meeting_url": str | None,
			"dates": ["2025-01-15", ...],
			"start_time": "09:00",
			"end_time": "17:00",
			"timezone": "America/Bogota",
			"slot_duration_minutes": 30
		}

	Returns:
		dict: reunión guardada (con "name")

	Raises:
		InvalidMeeting: sin título o sin fechas
		InvalidRange: start_time >= end_time, duración de slot no positiva o
			franja más corta que un slot
		UnresolvableTimezone: timezone de la reunión desconocida
	"""
	title = (data.get("title") or "").strip()
	if not title:
		raise InvalidMeeting("Meeting title is required")

	dates = normalize_dates(data.get("dates"))
	if not dates:
		raise InvalidMeeting("Select at least one date")

	start = to_time(data.get("start_time"))
	end = to_time(data.get("end_time"))
	granularity = int(data.get("slot_duration_minutes") or DEFAULT_GRANULARITY_MINUTES)
	check_meeting_range(start, end, granularity)

	# Aquí la timezone no es cosmética: define cómo se leen todas las horas
	timezone = (data.get("timezone") or "UTC").strip()
	resolve_timezone(timezone)

	return store.create_meeting({
		"title": title,
		"description": (data.get("description") or "").strip() or None,
		"meeting_url": (data.get("meeting_url") or "").strip() or None,
		"dates": [day.isoformat() for day in dates],
		"start_time": start.strftime("%H:%M"),
		"end_time": end.strftime("%H:%M"),
		"timezone": timezone,
		"slot_duration_minutes": granularity,
	})


def get_meeting_grid(
	store: Any,
	meeting_id: str,
	participant_name: Optional[str] = None,
	display_timezone: Optional[str] = None,
	at_instant: Optional[datetime] = None
) -> Dict[str, Any]:
	"""
	Datos de la vista de edición.

	Si participant_name ya respondió, su selección guardada viene marcada en
	el grid; si no, empieza vacía.

	Returns:
		dict: {
			"meeting": dict,
			"participant_name": str | None,
			"selected": ["2025-01-15 09:00", ...],
			"respondents": [str, ...],
			"grid": dict (ver grid.build_grid)
		}
	"""
	meeting = load_meeting(store, meeting_id)
	rows = store.get_availability(meeting_id)
	universe = set(slot_universe(meeting))

	name = clean_participant_name(participant_name) if participant_name else None

	selected = set()
	if name:
		record = find_record(rows, name)
		if record:
			# Slots viejos fuera del rango actual no se muestran
			selected = set(record.slots) & universe

	return {
		"meeting": meeting,
		"participant_name": name,
		"selected": serialize_slots(selected),
		"respondents": respondents(rows),
		"grid": build_grid(meeting, display_timezone, selected=selected, at_instant=at_instant),
	}


def save_participant_availability(
	store: Any,
	meeting_id: str,
	participant_name: str,
	slots: Iterable[Any]
) -> Dict[str, Any]:
	"""
	Guarda la disponibilidad de un participante, reemplazando la anterior.

	Raises:
		MeetingNotFound: si la reunión no existe
		InvalidParticipant: nombre vacío
		InvalidSlot: slot key mal formado
		OutOfUniverseSlot: slots fuera de las fechas/horario de la reunión
	"""
	meeting = load_meeting(store, meeting_id)
	name = clean_participant_name(participant_name)

	selection = parse_slots(slots)
	outside = selection - set(slot_universe(meeting))
	if outside:
		raise OutOfUniverseSlot(outside)

	return store.save_availability(meeting_id, name, serialize_slots(selection))


def get_meeting_results(
	store: Any,
	meeting_id: str,
	display_timezone: Optional[str] = None,
	highlight_participant: Optional[str] = None,
	at_instant: Optional[datetime] = None
) -> Dict[str, Any]:
	"""
	Datos de la vista de resultados (heatmap).

	Args:
		highlight_participant: nombre cuyo set se resalta en el grid

	Returns:
		dict: {
			"meeting": dict,
			"total": int,
			"respondents": [str, ...],
			"best_slots": ["2025-01-15 09:00", ...],
			"best_slot_labels": [dict, ...],
			"highlight": str | None,
			"grid": dict (ver grid.build_grid)
		}
	"""
	meeting = load_meeting(store, meeting_id)
	rows = store.get_availability(meeting_id)

	universe = slot_universe(meeting)
	heatmap = aggregate(universe, rows)
	total = len(rows)
	best = best_slots(heatmap, total)
	names = respondents(rows)

	highlight = None
	if highlight_participant:
		record = find_record(rows, highlight_participant)
		highlight = set(record.slots) if record else set()

	meeting_tz = meeting.get("timezone") or "UTC"
	offset = offset_minutes(meeting_tz, display_timezone or meeting_tz, at_instant)
	granularity = meeting_granularity(meeting)

	return {
		"meeting": meeting,
		"total": total,
		"respondents": names,
		"best_slots": serialize_slots(best),
		"best_slot_labels": [
			display_label(slot, offset, granularity).as_dict() for slot in sorted(best)
		],
		"highlight": highlight_participant or None,
		"grid": build_grid(
			meeting,
			display_timezone,
			heatmap=heatmap,
			all_participants=names,
			highlight=highlight,
			at_instant=at_instant
		),
	}
