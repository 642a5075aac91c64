"""
Slot Label Formatting

Pure label helpers for the grid: 12-hour times, date headers and
"start – end" ranges, optionally shifted to a display timezone.

Labels are derived values. DisplaySlotLabel keeps a reference to its
canonical Slot but is never equal to one, so a shifted label cannot be
used as a storage or aggregation key by mistake.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Union

from .slots import DEFAULT_GRANULARITY_MINUTES, Slot, minutes_to_time, to_time
from .timezones import apply_offset, shift_wall_clock

# Fixed English abbreviations; strftime depends on the process locale
WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

RANGE_SEPARATOR = " – "


def format_time_of_day(time_of_day: Union[time, str]) -> str:
	"""
	Hora en formato 12h: time(9, 0) -> "9:00 AM", time(0, 30) -> "12:30 AM".
	"""
	t = to_time(time_of_day)
	period = "AM" if t.hour < 12 else "PM"
	display_hour = 12 if t.hour % 12 == 0 else t.hour % 12
	return f"{display_hour}:{t.minute:02d} {period}"


def format_date_parts(day: Union[date, Slot]) -> Dict[str, str]:
	"""
	Partes de la fecha para el header de columna.

	date(2025, 1, 15) -> {"weekday": "Wed", "month": "Jan", "day": "15"}
	"""
	if isinstance(day, Slot):
		day = day.day
	return {
		"weekday": WEEKDAY_ABBR[day.weekday()],
		"month": MONTH_ABBR[day.month - 1],
		"day": str(day.day),
	}


def format_slot_date(slot: Slot) -> Dict[str, str]:
	return format_date_parts(slot.day)


def format_slot_time(slot: Slot, offset_minutes: int = 0) -> str:
	"""Hora de inicio del slot, con el offset de display aplicado."""
	if not offset_minutes:
		return format_time_of_day(slot.start)
	return format_time_of_day(apply_offset(slot.start, offset_minutes))


def format_slot_range(
	slot: Slot,
	offset_minutes: int = 0,
	granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES
) -> str:
	"""
	Rango del slot: "2025-01-15 09:30" -> "9:30 AM – 10:00 AM".

	Con offset -180 el mismo slot queda "6:30 AM – 7:00 AM".
	"""
	start_minute = slot.minute_of_day + offset_minutes
	start = minutes_to_time(start_minute)
	end = minutes_to_time(start_minute + granularity_minutes)
	return f"{format_time_of_day(start)}{RANGE_SEPARATOR}{format_time_of_day(end)}"


@dataclass(frozen=True)
class DisplaySlotLabel:
	"""
	Etiqueta de un slot en la timezone de display.

	display_date avanza o retrocede cuando el offset cruza medianoche, así
	un slot de las 23:30 no aparece bajo el día equivocado.
	"""

	slot: Slot
	offset_minutes: int
	display_date: date
	start: time
	end: time

	@property
	def start_label(self) -> str:
		return format_time_of_day(self.start)

	@property
	def end_label(self) -> str:
		return format_time_of_day(self.end)

	@property
	def range_label(self) -> str:
		return f"{self.start_label}{RANGE_SEPARATOR}{self.end_label}"

	@property
	def crosses_day(self) -> bool:
		return self.display_date != self.slot.day

	def as_dict(self) -> Dict[str, Any]:
		return {
			"slot": self.slot.key,
			"date": self.display_date.isoformat(),
			"start": self.start.strftime("%H:%M"),
			"end": self.end.strftime("%H:%M"),
			"label": self.range_label,
			**format_date_parts(self.display_date),
		}


def display_label(
	slot: Slot,
	offset_minutes: int = 0,
	granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES
) -> DisplaySlotLabel:
	"""Construye la etiqueta desplazada de un slot canónico."""
	display_date, start = shift_wall_clock(slot.day, slot.start, offset_minutes)
	end = (datetime.combine(display_date, start) + timedelta(minutes=granularity_minutes)).time()
	return DisplaySlotLabel(
		slot=slot,
		offset_minutes=offset_minutes,
		display_date=display_date,
		start=start,
		end=end,
	)
