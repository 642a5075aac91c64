# Copyright (c) 2026, Availability Poll contributors
# For license information, please see license.txt

"""
Group Meeting DocType

Reunión a coordinar: fechas candidatas y franja horaria diaria,
interpretadas en la timezone de la reunión.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import cint, getdate

from availability_poll.availability_poll.scheduling.exceptions import InvalidRange, InvalidSlot
from availability_poll.availability_poll.scheduling.slots import DEFAULT_GRANULARITY_MINUTES, check_meeting_range, to_time
from availability_poll.availability_poll.scheduling.timezones import is_valid_timezone


class GroupMeeting(Document):
	"""
	Group Meeting with validation.

	Validations:
	- title required
	- At least one date, no duplicates (sorted on save)
	- start_time < end_time
	- timezone must be a known IANA id
	- slot_duration_minutes > 0
	- The daily range fits at least one slot
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_title()
		self._validate_dates()
		self._validate_times()
		self._validate_timezone()
		self._validate_slot_duration()
		self._validate_slot_range()

	def _validate_title(self) -> None:
		"""Valida que title esté presente."""
		if not (self.title or "").strip():
			frappe.throw(_("Title is required"))
		self.title = self.title.strip()

	def _validate_dates(self) -> None:
		"""
		Valida que haya al menos una fecha y elimina duplicados.
		Las filas quedan ordenadas por fecha.
		"""
		if not self.meeting_dates:
			frappe.throw(_("Select at least one date"))

		unique_dates = sorted({getdate(row.meeting_date) for row in self.meeting_dates if row.meeting_date})
		if not unique_dates:
			frappe.throw(_("Select at least one date"))

		current_dates = [getdate(row.meeting_date) if row.meeting_date else None for row in self.meeting_dates]
		if unique_dates != current_dates:
			self.set("meeting_dates", [])
			for day in unique_dates:
				self.append("meeting_dates", {"meeting_date": day})

	def _validate_times(self) -> None:
		"""Valida que start_time < end_time."""
		if not self.start_time or not self.end_time:
			frappe.throw(_("Start Time and End Time are required"))

		try:
			start = to_time(self.start_time)
			end = to_time(self.end_time)
		except InvalidSlot as e:
			frappe.throw(_(str(e)))

		if start >= end:
			frappe.throw(
				_(f"Start Time ({start.strftime('%H:%M')}) must be before End Time ({end.strftime('%H:%M')})")
			)

	def _validate_timezone(self) -> None:
		"""Valida la timezone; vacía = UTC, "system timezone" = la del sitio."""
		if not self.timezone:
			self.timezone = "UTC"

		if self.timezone != "system timezone" and not is_valid_timezone(self.timezone):
			frappe.throw(_(f"Unknown timezone '{self.timezone}'"))

	def _validate_slot_duration(self) -> None:
		self.slot_duration_minutes = cint(self.slot_duration_minutes) or DEFAULT_GRANULARITY_MINUTES

		if self.slot_duration_minutes <= 0:
			frappe.throw(_("Slot Duration must be greater than 0"))

	def _validate_slot_range(self) -> None:
		"""Valida que la franja diaria alcance para al menos un slot."""
		try:
			check_meeting_range(self.start_time, self.end_time, self.slot_duration_minutes)
		except (InvalidRange, InvalidSlot) as e:
			frappe.throw(_(str(e)))

	def on_trash(self) -> None:
		"""Elimina las respuestas de la reunión."""
		frappe.db.delete("Participant Availability", {"meeting": self.name})
