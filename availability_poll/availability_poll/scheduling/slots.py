"""
Slot Generation Service

Generates the discrete time slots a meeting spans. A slot is one
fixed-granularity interval on one date, expressed as wall-clock time in
the meeting's authoring timezone.

Slot keys ("2025-01-15 09:00") are the canonical identifiers used for
storage and aggregation; display shifts never touch them.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, List, NamedTuple, Set, Union

from .exceptions import InvalidRange, InvalidSlot

DEFAULT_GRANULARITY_MINUTES = 30
MINUTES_IN_A_DAY = 1440

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

TimeLike = Union[time, timedelta, str]
DateLike = Union[date, str]


class Slot(NamedTuple):
	"""
	Slot canónico: (fecha, hora de inicio) en la timezone de la reunión.

	Es un valor inmutable; dos slots con la misma fecha y hora son el mismo
	slot. El orden de la tupla da el orden total fecha -> hora.
	"""

	day: date
	start: time

	@property
	def key(self) -> str:
		"""Serialización estable: 'YYYY-MM-DD HH:MM'."""
		return f"{self.day.isoformat()} {self.start.strftime('%H:%M')}"

	@property
	def minute_of_day(self) -> int:
		return self.start.hour * 60 + self.start.minute

	def __str__(self) -> str:
		return self.key


def to_time(time_value: TimeLike) -> time:
	"""
	Convierte diferentes formatos de tiempo a datetime.time.

	Args:
		time_value: puede ser time, timedelta (desde medianoche), o string
			"HH:MM" / "HH:MM:SS"

	Returns:
		datetime.time sin segundos ni timezone

	Raises:
		InvalidSlot: si el valor no se puede interpretar
	"""
	if isinstance(time_value, datetime):
		time_value = time_value.time()

	if isinstance(time_value, time):
		return time(time_value.hour, time_value.minute)
	elif isinstance(time_value, timedelta):
		# timedelta representa tiempo desde medianoche (así llegan los Time de Frappe)
		if time_value < timedelta(0) or time_value >= timedelta(days=1):
			raise InvalidSlot(f"Time out of range: {time_value}")
		t = (datetime.min + time_value).time()
		return time(t.hour, t.minute)
	elif isinstance(time_value, str):
		match = _TIME_PATTERN.match(time_value.strip())
		if not match:
			raise InvalidSlot(f"Invalid time '{time_value}'. Use HH:MM")
		hour, minute = int(match.group(1)), int(match.group(2))
		if hour > 23 or minute > 59:
			raise InvalidSlot(f"Invalid time '{time_value}'. Use HH:MM")
		return time(hour, minute)
	else:
		raise InvalidSlot(f"Cannot convert {type(time_value)} to time")


def to_date(date_value: DateLike) -> date:
	"""Convierte date / datetime / 'YYYY-MM-DD' a datetime.date."""
	if isinstance(date_value, datetime):
		return date_value.date()
	if isinstance(date_value, date):
		return date_value
	if isinstance(date_value, str):
		try:
			return datetime.strptime(date_value.strip(), "%Y-%m-%d").date()
		except ValueError:
			raise InvalidSlot(f"Invalid date '{date_value}'. Use YYYY-MM-DD")
	raise InvalidSlot(f"Cannot convert {type(date_value)} to date")


def minutes_to_time(minutes: int) -> time:
	"""Minutos desde medianoche (módulo 24h) -> datetime.time."""
	minutes = minutes % MINUTES_IN_A_DAY
	return time(minutes // 60, minutes % 60)


def parse_slot(slot_key: Union[str, Slot]) -> Slot:
	"""
	Lee un slot key 'YYYY-MM-DD HH:MM' (acepta ':SS' al final).

	Raises:
		InvalidSlot: si el formato no es válido
	"""
	if isinstance(slot_key, Slot):
		return slot_key
	if not isinstance(slot_key, str):
		raise InvalidSlot(f"Invalid slot {slot_key!r}")

	parts = slot_key.strip().split()
	if len(parts) != 2:
		raise InvalidSlot(f"Invalid slot '{slot_key}'. Use 'YYYY-MM-DD HH:MM'")

	return Slot(to_date(parts[0]), to_time(parts[1]))


def parse_slots(slot_keys: Iterable[Union[str, Slot]]) -> Set[Slot]:
	return {parse_slot(key) for key in slot_keys or []}


def serialize_slots(slots: Iterable[Slot]) -> List[str]:
	"""Slots -> lista ordenada de keys, lista para persistir."""
	return [slot.key for slot in sorted(set(slots))]


def normalize_dates(dates: Iterable[DateLike]) -> List[date]:
	"""Deduplica y ordena las fechas candidatas."""
	return sorted({to_date(value) for value in dates or []})


def enumerate_slots(
	dates: Iterable[DateLike],
	start_time: TimeLike,
	end_time: TimeLike,
	granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES
) -> List[Slot]:
	"""
	Genera los slots discretos de una reunión.

	Args:
		dates: fechas candidatas, en el orden en que se agrupan en la salida
		start_time: hora de inicio (inclusive)
		end_time: hora de fin (exclusiva)
		granularity_minutes: duración de cada slot

	Returns:
		list[Slot]: [
			Slot(date(2025, 1, 15), time(9, 0)),
			Slot(date(2025, 1, 15), time(9, 30)),
			...
		]

	Raises:
		InvalidRange: si start_time >= end_time o la granularidad no es positiva

	Algoritmo:
		1. Para cada fecha, empezar en start_time
		2. Emitir un slot y avanzar granularity_minutes
		3. Parar cuando el slot se pasaría de end_time: el intervalo es
		   semiabierto y el último slot parcial se omite
	"""
	if isinstance(granularity_minutes, bool) or not isinstance(granularity_minutes, int) \
			or granularity_minutes <= 0:
		raise InvalidRange(f"Granularity must be a positive number of minutes, got {granularity_minutes!r}")

	start = to_time(start_time)
	end = to_time(end_time)

	if start >= end:
		raise InvalidRange(
			f"Start time ({start.strftime('%H:%M')}) must be before end time ({end.strftime('%H:%M')})"
		)

	start_minute = start.hour * 60 + start.minute
	end_minute = end.hour * 60 + end.minute

	slots = []
	for date_value in dates:
		day = to_date(date_value)

		current_minute = start_minute
		# Un slot que se pasa de end_time no se genera (sin slots parciales)
		while current_minute + granularity_minutes <= end_minute:
			slots.append(Slot(day, minutes_to_time(current_minute)))
			current_minute += granularity_minutes

	return slots


def check_meeting_range(
	start_time: TimeLike,
	end_time: TimeLike,
	granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES
) -> None:
	"""
	Valida la franja diaria de una reunión al crearla.

	Además de lo que exige enumerate_slots, la franja tiene que alcanzar para
	al menos un slot: una reunión sin slots no se puede responder.

	Raises:
		InvalidRange: granularidad no positiva, start >= end, o
			end - start < granularity
	"""
	if isinstance(granularity_minutes, bool) or not isinstance(granularity_minutes, int) \
			or granularity_minutes <= 0:
		raise InvalidRange("Slot duration must be a positive number of minutes")

	start = to_time(start_time)
	end = to_time(end_time)

	if start >= end:
		raise InvalidRange("End time must be after start time")

	span = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
	if span < granularity_minutes:
		raise InvalidRange(
			f"The time range ({span} min) is shorter than one {granularity_minutes}-minute slot"
		)


def get_field(record: Any, field: str, default: Any = None) -> Any:
	if isinstance(record, dict):
		return record.get(field, default)
	return getattr(record, field, default)


def meeting_granularity(meeting: Any) -> int:
	"""slot_duration_minutes de la reunión, 30 por defecto."""
	return int(get_field(meeting, "slot_duration_minutes") or DEFAULT_GRANULARITY_MINUTES)


def slot_universe(meeting: Any) -> List[Slot]:
	"""
	Universo de slots de una reunión (dict o doc).

	Usa dates, start_time, end_time y slot_duration_minutes. Las fechas se
	deduplican y ordenan antes de enumerar.
	"""
	return enumerate_slots(
		normalize_dates(get_field(meeting, "dates") or []),
		get_field(meeting, "start_time"),
		get_field(meeting, "end_time"),
		meeting_granularity(meeting)
	)


def universe_times(universe: Iterable[Slot]) -> List[time]:
	"""Horas distintas del universo (las filas del grid), en orden."""
	return sorted({slot.start for slot in universe})


def universe_dates(universe: Iterable[Slot]) -> List[date]:
	return sorted({slot.day for slot in universe})
