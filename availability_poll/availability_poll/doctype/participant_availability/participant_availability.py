# Copyright (c) 2026, Availability Poll contributors
# For license information, please see license.txt

"""
Participant Availability DocType

Slots marcados por un participante en una reunión. Uno por
(reunión, nombre); guardar reemplaza el set completo.
"""

import frappe
from frappe import _
from frappe.model.document import Document

from availability_poll.availability_poll.scheduling.exceptions import InvalidSlot
from availability_poll.availability_poll.scheduling.slots import parse_slots, serialize_slots, slot_universe
from availability_poll.availability_poll.storage.frappe_store import MEETING_DOCTYPE, FrappeStore


class ParticipantAvailability(Document):
	"""
	Participant Availability with validation.

	Validations:
	- meeting and participant_name required
	- participant_name unique per meeting (exact, case-sensitive)
	- slots is a JSON list of valid slot keys inside the meeting range
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_required_fields()
		self._validate_unique_participant()
		self._validate_slots()

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.meeting:
			frappe.throw(_("Meeting is required"))

		self.participant_name = (self.participant_name or "").strip()
		if not self.participant_name:
			frappe.throw(_("Participant Name is required"))

	def _validate_unique_participant(self) -> None:
		"""
		Un solo registro por participante y reunión.

		FrappeStore ya hace upsert; esto cubre altas desde Desk.
		"""
		existing = FrappeStore().find_availability_name(self.meeting, self.participant_name)
		if existing and existing != self.name:
			frappe.throw(
				_(f"{self.participant_name} already responded to this meeting ({existing})"),
				frappe.DuplicateEntryError
			)

	def _validate_slots(self) -> None:
		"""
		Valida y normaliza los slots (orden, sin duplicados).
		"""
		try:
			raw = frappe.parse_json(self.slots) if self.slots else []
		except ValueError:
			frappe.throw(_("Slots must be a JSON list"))

		if not isinstance(raw, list):
			frappe.throw(_("Slots must be a JSON list"))

		try:
			selection = parse_slots(raw)
		except InvalidSlot as e:
			frappe.throw(_(str(e)))

		meeting = FrappeStore().get_meeting(self.meeting)
		if not meeting:
			frappe.throw(_(f"{MEETING_DOCTYPE} '{self.meeting}' does not exist"))

		outside = selection - set(slot_universe(meeting))
		if outside:
			keys = ", ".join(slot.key for slot in sorted(outside))
			frappe.throw(_(f"Slots outside the meeting range: {keys}"))

		self.slots = frappe.as_json(serialize_slots(selection))
