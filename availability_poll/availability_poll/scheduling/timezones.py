"""
Timezone Offset Service

Computes the minute delta between a meeting's authoring timezone and the
viewer's display timezone, and applies it to wall-clock times.

Only presentation is affected: canonical slot keys always stay in the
authoring timezone.
"""

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Tuple, Union

import pytz

from .exceptions import UnresolvableTimezone
from .slots import minutes_to_time, to_time


COMMON_TIMEZONES: List[Dict[str, str]] = [
	{"value": "Pacific/Honolulu", "label": "Hawaii (UTC-10)"},
	{"value": "America/Anchorage", "label": "Alaska (UTC-9)"},
	{"value": "America/Los_Angeles", "label": "Pacific Time - US & Canada (UTC-8/-7)"},
	{"value": "America/Denver", "label": "Mountain Time - US & Canada (UTC-7/-6)"},
	{"value": "America/Chicago", "label": "Central Time - US & Canada (UTC-6/-5)"},
	{"value": "America/New_York", "label": "Eastern Time - US & Canada (UTC-5/-4)"},
	{"value": "America/Halifax", "label": "Atlantic Time - Canada (UTC-4/-3)"},
	{"value": "America/Bogota", "label": "Bogotá / Lima (UTC-5)"},
	{"value": "America/Sao_Paulo", "label": "São Paulo (UTC-3)"},
	{"value": "Atlantic/Azores", "label": "Azores (UTC-1)"},
	{"value": "UTC", "label": "UTC (UTC+0)"},
	{"value": "Europe/London", "label": "London (UTC+0/+1)"},
	{"value": "Europe/Paris", "label": "Paris / Berlin / Rome (UTC+1/+2)"},
	{"value": "Europe/Helsinki", "label": "Helsinki / Athens (UTC+2/+3)"},
	{"value": "Europe/Moscow", "label": "Moscow (UTC+3)"},
	{"value": "Asia/Dubai", "label": "Dubai (UTC+4)"},
	{"value": "Asia/Karachi", "label": "Karachi / Islamabad (UTC+5)"},
	{"value": "Asia/Kolkata", "label": "India - Mumbai / Delhi (UTC+5:30)"},
	{"value": "Asia/Dhaka", "label": "Dhaka (UTC+6)"},
	{"value": "Asia/Bangkok", "label": "Bangkok / Jakarta (UTC+7)"},
	{"value": "Asia/Singapore", "label": "Singapore / Beijing (UTC+8)"},
	{"value": "Asia/Tokyo", "label": "Tokyo / Seoul (UTC+9)"},
	{"value": "Australia/Sydney", "label": "Sydney / Melbourne (UTC+10/+11)"},
	{"value": "Pacific/Auckland", "label": "Auckland (UTC+12/+13)"},
]


def resolve_timezone(tz_name: Optional[str]) -> pytz.BaseTzInfo:
	"""
	Obtiene el tzinfo de pytz para un id IANA.

	Un nombre vacío se interpreta como UTC.

	Raises:
		UnresolvableTimezone: si pytz no conoce la timezone
	"""
	if not tz_name:
		return pytz.UTC

	if not isinstance(tz_name, str):
		raise UnresolvableTimezone(str(tz_name))

	try:
		return pytz.timezone(tz_name.strip())
	except pytz.UnknownTimeZoneError:
		raise UnresolvableTimezone(tz_name)


def is_valid_timezone(tz_name: Optional[str]) -> bool:
	try:
		resolve_timezone(tz_name)
	except UnresolvableTimezone:
		return False
	return True


def _as_utc(at_instant: Optional[datetime]) -> datetime:
	"""Instante aware en UTC; None = ahora, naive se toma como UTC."""
	if at_instant is None:
		return datetime.now(pytz.UTC)
	if at_instant.tzinfo is None:
		return pytz.UTC.localize(at_instant)
	return at_instant.astimezone(pytz.UTC)


def utc_offset_minutes(tz_name: Optional[str], at_instant: Optional[datetime] = None) -> int:
	"""
	Offset UTC de una timezone en un instante, en minutos.

	UTC+2 -> 120, UTC-5 -> -300.

	Raises:
		UnresolvableTimezone: si la timezone no existe
	"""
	tz = resolve_timezone(tz_name)
	offset = _as_utc(at_instant).astimezone(tz).utcoffset()
	return int(offset.total_seconds() // 60)


def offset_minutes(
	from_tz: Optional[str],
	to_tz: Optional[str],
	at_instant: Optional[datetime] = None
) -> int:
	"""
	Minutos a sumar a una hora en from_tz para mostrarla en to_tz.

	Args:
		from_tz: timezone de la reunión (authoring)
		to_tz: timezone elegida por quien mira (display)
		at_instant: instante de referencia (default: ahora)

	Returns:
		int: UTCOffset(to_tz) - UTCOffset(from_tz). 0 si son iguales o si
		alguna no se puede resolver (solo afecta la presentación).
	"""
	if from_tz == to_tz:
		return 0

	instant = _as_utc(at_instant)
	try:
		return utc_offset_minutes(to_tz, instant) - utc_offset_minutes(from_tz, instant)
	except UnresolvableTimezone:
		return 0


def apply_offset(time_of_day: Union[time, str], minutes: int) -> time:
	"""
	Suma minutos a una hora del día, envolviendo en 24h.

	La fecha no cambia: 23:30 + 60 -> 00:30.
	"""
	t = to_time(time_of_day)
	return minutes_to_time(t.hour * 60 + t.minute + minutes)


def shift_wall_clock(day: date, time_of_day: time, minutes: int) -> Tuple[date, time]:
	"""
	Desplaza (fecha, hora) en minutos, moviendo la fecha si cruza medianoche.
	"""
	shifted = datetime.combine(day, time_of_day) + timedelta(minutes=minutes)
	return shifted.date(), shifted.time()
