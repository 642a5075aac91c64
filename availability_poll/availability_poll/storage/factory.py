"""
Availability Store Factory

Factory pattern to get the correct store based on backend.
"""

from .base import AvailabilityStore


def get_store(backend: str = "frappe") -> AvailabilityStore:
	"""
	Factory para obtener el store correcto según backend.

	Args:
		backend: "frappe" o "memory"

	Returns:
		AvailabilityStore: instancia del store

	Raises:
		ValueError: si backend no es soportado
	"""
	if backend == "frappe":
		from .frappe_store import FrappeStore
		return FrappeStore()
	elif backend == "memory":
		from .memory import InMemoryStore
		return InMemoryStore()
	else:
		raise ValueError(f"Unsupported backend: {backend}")
