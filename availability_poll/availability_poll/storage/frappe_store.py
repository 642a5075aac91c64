"""
Frappe Availability Store

Store backed by the app doctypes:
- Group Meeting (dates in the Meeting Date child table)
- Participant Availability (slot keys as a JSON list)
"""

import frappe
from frappe.utils import getdate
from typing import Any, Dict, List, Optional

from availability_poll.availability_poll.scheduling.slots import to_time
from .base import AvailabilityStore, StoreError


MEETING_DOCTYPE = "Group Meeting"
AVAILABILITY_DOCTYPE = "Participant Availability"


class FrappeStore(AvailabilityStore):
	"""Store sobre doctypes de Frappe."""

	def get_meeting(self, meeting_id: str) -> Optional[Dict[str, Any]]:
		if not frappe.db.exists(MEETING_DOCTYPE, meeting_id):
			return None

		doc = frappe.get_doc(MEETING_DOCTYPE, meeting_id)
		return _meeting_to_dict(doc)

	def create_meeting(self, data: Dict[str, Any]) -> Dict[str, Any]:
		doc = frappe.get_doc({
			"doctype": MEETING_DOCTYPE,
			"title": data.get("title"),
			"description": data.get("description"),
			"meeting_url": data.get("meeting_url"),
			"start_time": data.get("start_time"),
			"end_time": data.get("end_time"),
			"timezone": data.get("timezone"),
			"slot_duration_minutes": data.get("slot_duration_minutes"),
			"meeting_dates": [
				{"meeting_date": getdate(value)} for value in data.get("dates") or []
			],
		})
		doc.insert(ignore_permissions=True)

		frappe.logger("availability_poll").info(
			f"Group Meeting creado: {doc.name} ({len(doc.meeting_dates)} fechas)"
		)

		return _meeting_to_dict(doc)

	def get_availability(self, meeting_id: str) -> List[Dict[str, Any]]:
		rows = frappe.get_all(
			AVAILABILITY_DOCTYPE,
			filters={"meeting": meeting_id},
			fields=["name", "participant_name", "slots"],
			order_by="creation asc"
		)

		return [
			{
				"participant_name": row.participant_name,
				"slots": _load_slots(row.slots, row.name),
			}
			for row in rows
		]

	def save_availability(
		self,
		meeting_id: str,
		participant_name: str,
		slot_keys: List[str]
	) -> Dict[str, Any]:
		existing = self.find_availability_name(meeting_id, participant_name)

		if existing:
			doc = frappe.get_doc(AVAILABILITY_DOCTYPE, existing)
			doc.slots = frappe.as_json(list(slot_keys))
			doc.save(ignore_permissions=True)
		else:
			doc = frappe.get_doc({
				"doctype": AVAILABILITY_DOCTYPE,
				"meeting": meeting_id,
				"participant_name": participant_name,
				"slots": frappe.as_json(list(slot_keys)),
			})
			doc.insert(ignore_permissions=True)

		frappe.logger("availability_poll").info(
			f"Disponibilidad guardada: {meeting_id} / {participant_name} ({len(slot_keys)} slots)"
		)

		return {
			"meeting": meeting_id,
			"participant_name": doc.participant_name,
			"slots": list(slot_keys),
		}

	def find_availability_name(self, meeting_id: str, participant_name: str) -> Optional[str]:
		"""
		Busca la fila del participante por nombre EXACTO.

		La collation de la base puede ignorar mayúsculas, así que se filtra
		de nuevo en Python: "Ana" y "ana" son participantes distintos.
		"""
		candidates = frappe.get_all(
			AVAILABILITY_DOCTYPE,
			filters={"meeting": meeting_id, "participant_name": participant_name},
			fields=["name", "participant_name"]
		)

		for row in candidates:
			if row.participant_name == participant_name:
				return row.name

		return None


def _meeting_to_dict(doc: Any) -> Dict[str, Any]:
	tz_name = doc.timezone or "UTC"
	if tz_name == "system timezone":
		tz_name = frappe.utils.get_system_timezone()

	return {
		"name": doc.name,
		"title": doc.title,
		"description": doc.description,
		"meeting_url": doc.meeting_url,
		"dates": [getdate(row.meeting_date).isoformat() for row in doc.meeting_dates],
		"start_time": to_time(doc.start_time).strftime("%H:%M"),
		"end_time": to_time(doc.end_time).strftime("%H:%M"),
		"timezone": tz_name,
		"slot_duration_minutes": doc.slot_duration_minutes,
	}


def _load_slots(raw: Optional[str], row_name: str) -> List[str]:
	if not raw:
		return []

	try:
		slots = frappe.parse_json(raw)
	except ValueError as e:
		raise StoreError(f"{AVAILABILITY_DOCTYPE} {row_name}: slots no es JSON válido") from e

	if not isinstance(slots, list):
		raise StoreError(f"{AVAILABILITY_DOCTYPE} {row_name}: slots debe ser una lista")

	return slots
