"""
In-Memory Availability Store

Dict-backed store for tests and local scripts.
"""

import copy
from typing import Any, Dict, List, Optional

from .base import AvailabilityStore


class InMemoryStore(AvailabilityStore):
	"""Store en memoria; conserva el orden de respuesta por reunión."""

	def __init__(self):
		self._meetings: Dict[str, Dict[str, Any]] = {}
		self._availability: Dict[str, Dict[str, Dict[str, Any]]] = {}
		self._counter = 0

	def get_meeting(self, meeting_id: str) -> Optional[Dict[str, Any]]:
		meeting = self._meetings.get(meeting_id)
		return copy.deepcopy(meeting) if meeting else None

	def create_meeting(self, data: Dict[str, Any]) -> Dict[str, Any]:
		self._counter += 1
		name = data.get("name") or f"GM-{self._counter:05d}"

		meeting = copy.deepcopy(data)
		meeting["name"] = name
		self._meetings[name] = meeting
		self._availability[name] = {}

		return copy.deepcopy(meeting)

	def get_availability(self, meeting_id: str) -> List[Dict[str, Any]]:
		rows = self._availability.get(meeting_id, {})
		return [copy.deepcopy(row) for row in rows.values()]

	def save_availability(
		self,
		meeting_id: str,
		participant_name: str,
		slot_keys: List[str]
	) -> Dict[str, Any]:
		rows = self._availability.setdefault(meeting_id, {})

		# Reemplazo completo; si ya existía conserva su posición
		row = {
			"meeting": meeting_id,
			"participant_name": participant_name,
			"slots": list(slot_keys),
		}
		rows[participant_name] = row

		return copy.deepcopy(row)
