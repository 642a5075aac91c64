"""
Base Availability Store

Defines the interface every store must implement. The scheduling services
only talk to this interface; they never write to a database themselves.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class AvailabilityStore(ABC):
	"""
	Interfaz base para la persistencia de reuniones y disponibilidad.

	Reuniones (dict):
		{
			"name": "GM-00001",
			"title": str,
			"description": str | None,
			"meeting_url": str | None,
			"dates": ["2025-01-15", ...],
			"start_time": "09:00",
			"end_time": "17:00",
			"timezone": "America/Bogota",
			"slot_duration_minutes": 30
		}

	Disponibilidad (dict), en orden de respuesta:
		{"participant_name": str, "slots": ["2025-01-15 09:00", ...]}
	"""

	@abstractmethod
	def get_meeting(self, meeting_id: str) -> Optional[Dict[str, Any]]:
		"""
		Obtiene una reunión.

		Returns:
			dict o None si no existe
		"""
		pass

	@abstractmethod
	def create_meeting(self, data: Dict[str, Any]) -> Dict[str, Any]:
		"""
		Crea una reunión ya validada.

		Returns:
			dict: la reunión guardada, con su "name"
		"""
		pass

	@abstractmethod
	def get_availability(self, meeting_id: str) -> List[Dict[str, Any]]:
		"""Filas de disponibilidad de la reunión, en orden de respuesta."""
		pass

	@abstractmethod
	def save_availability(
		self,
		meeting_id: str,
		participant_name: str,
		slot_keys: List[str]
	) -> Dict[str, Any]:
		"""
		Upsert por (reunión, nombre exacto): reemplaza todo el set de slots.

		Returns:
			dict: la fila guardada
		"""
		pass


class StoreError(Exception):
	"""Excepción para errores de persistencia."""
	pass
