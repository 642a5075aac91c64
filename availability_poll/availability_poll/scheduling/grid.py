"""
Availability Grid Layout

Builds the render-ready grid the frontend draws, considering:
- Whole Monday to Sunday weeks around the meeting dates
- Display timezone (labels only, slot keys stay canonical)
- Editing mode (selected cells) or heatmap mode (counts and colours)
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Set

from .formatting import display_label, format_date_parts, format_time_of_day
from .heatmap import HeatmapEntry, heatmap_color, missing_participants
from .slots import Slot, get_field, meeting_granularity, parse_slots, slot_universe, to_time, universe_dates, universe_times
from .timezones import apply_offset, is_valid_timezone, offset_minutes


def week_columns(meeting_dates: Iterable[date]) -> List[date]:
	"""
	Expande las fechas de la reunión a semanas completas lunes-domingo.

	Ejemplo: [mié 15, vie 17] -> lun 13 ... dom 19
	"""
	meeting_dates = sorted(set(meeting_dates))
	if not meeting_dates:
		return []

	week_start = meeting_dates[0] - timedelta(days=meeting_dates[0].weekday())
	week_end = meeting_dates[-1] + timedelta(days=6 - meeting_dates[-1].weekday())

	columns = []
	current = week_start
	while current <= week_end:
		columns.append(current)
		current += timedelta(days=1)
	return columns


def build_grid(
	meeting: Any,
	display_timezone: Optional[str] = None,
	selected: Optional[Iterable[Any]] = None,
	heatmap: Optional[Dict[Slot, HeatmapEntry]] = None,
	all_participants: Optional[List[str]] = None,
	highlight: Optional[Set[Slot]] = None,
	at_instant: Optional[datetime] = None
) -> Dict[str, Any]:
	"""
	Genera el grid de disponibilidad de una reunión.

	Args:
		meeting: dict o doc con dates, start_time, end_time, timezone
		display_timezone: timezone de quien mira (None = la de la reunión)
		selected: slots (o keys) seleccionados en modo edición
		heatmap: resultado de aggregate() para modo resultados
		all_participants: nombres de quienes respondieron (tooltip)
		highlight: slots de un participante a resaltar en resultados
		at_instant: instante para calcular el offset (default: ahora)

	Returns:
		dict: {
			"mode": "edit" | "heatmap",
			"read_only": bool,
			"offset_minutes": int,
			"columns": [{"date": "2025-01-13", "weekday": "Mon", "month": "Jan",
						 "day": "13", "active": False}, ...],
			"rows": [{"time": "09:00", "label": "9:00 AM", "cells": [...]}, ...],
			"end_label": "5:00 PM"
		}
	"""
	universe = slot_universe(meeting)
	granularity = meeting_granularity(meeting)
	universe_set = set(universe)

	meeting_tz = get_field(meeting, "timezone") or "UTC"
	display_tz = display_timezone or meeting_tz
	if not is_valid_timezone(display_tz):
		# Offset 0: las etiquetas quedan en la timezone de la reunión
		display_tz = meeting_tz
	offset = offset_minutes(meeting_tz, display_tz, at_instant)

	is_heatmap = heatmap is not None
	selected_set = parse_slots(selected) if selected else set()
	all_participants = all_participants or []

	active_dates = set(universe_dates(universe))
	columns = week_columns(active_dates)

	rows = []
	for time_of_day in universe_times(universe):
		cells = []
		for day in columns:
			slot = Slot(day, time_of_day)
			if slot not in universe_set:
				cells.append({"slot": None, "active": False})
				continue

			cell = {
				"slot": slot.key,
				"active": True,
				"label": display_label(slot, offset, granularity).range_label,
			}

			if is_heatmap:
				entry = heatmap.get(slot) or HeatmapEntry(count=0, total=0)
				cell.update(entry.as_dict())
				cell["color"] = heatmap_color(entry.count, entry.total)
				cell["missing"] = missing_participants(entry, all_participants)
				if highlight is not None:
					cell["highlighted"] = slot in highlight
			else:
				cell["selected"] = slot in selected_set

			cells.append(cell)

		rows.append({
			"time": time_of_day.strftime("%H:%M"),
			"label": format_time_of_day(apply_offset(time_of_day, offset)),
			"cells": cells,
		})

	end_time = get_field(meeting, "end_time")
	end_label = format_time_of_day(apply_offset(to_time(end_time), offset)) if rows else None

	return {
		"mode": "heatmap" if is_heatmap else "edit",
		"read_only": is_heatmap,
		"meeting_timezone": meeting_tz,
		"display_timezone": display_tz,
		"offset_minutes": offset,
		"granularity_minutes": granularity,
		"columns": [
			{"date": day.isoformat(), "active": day in active_dates, **format_date_parts(day)}
			for day in columns
		],
		"rows": rows,
		"end_label": end_label,
	}
