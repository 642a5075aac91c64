"""
Scheduling Errors

Exceptions raised by the scheduling services. The Frappe layer translates
them into frappe.ValidationError / frappe.DoesNotExistError for the client.
"""


class SchedulingError(Exception):
	"""Base para errores del motor de disponibilidad."""
	pass


class InvalidRange(SchedulingError, ValueError):
	"""start_time >= end_time, o granularidad no positiva."""
	pass


class InvalidSlot(SchedulingError, ValueError):
	"""Slot key, fecha u hora con formato inválido."""
	pass


class UnresolvableTimezone(SchedulingError):
	"""Timezone IANA desconocida."""

	def __init__(self, timezone: str):
		super().__init__(f"Unknown timezone: {timezone}")
		self.timezone = timezone


class OutOfUniverseSlot(SchedulingError):
	"""Slot que no pertenece al universo de la reunión."""

	def __init__(self, slots):
		self.slots = sorted(slots)
		keys = ", ".join(slot.key for slot in self.slots)
		super().__init__(f"Slots outside the meeting range: {keys}")


class InvalidParticipant(SchedulingError, ValueError):
	"""Nombre de participante vacío o inválido."""
	pass


class MeetingNotFound(SchedulingError):
	"""La reunión solicitada no existe en el store."""

	def __init__(self, meeting_id: str):
		super().__init__(f"Meeting '{meeting_id}' not found")
		self.meeting_id = meeting_id


class InvalidMeeting(SchedulingError, ValueError):
	"""Datos de reunión incompletos (título, fechas)."""
	pass
