"""
Availability Heatmap Service

Aggregates per-participant slot sets into per-slot counts, considering:
- The meeting's slot universe (slots outside it are ignored)
- Response order (participants listed in the order records arrive)
- Full overlap detection (every respondent available)

The heatmap is recomputed from scratch on every call; there is no
incremental state to keep in sync.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from .exceptions import InvalidSlot
from .slots import Slot, parse_slot

FULL_OVERLAP_COLOR = "#4A9060"
PARTIAL_RGB = (161, 74, 47)
MIN_OPACITY = 0.18
OPACITY_RANGE = 0.70


class AvailabilityRecord(NamedTuple):
	"""Disponibilidad guardada de un participante (una por reunión)."""

	participant_name: str
	slots: FrozenSet[Slot]


@dataclass(frozen=True)
class HeatmapEntry:
	"""Agregado de un slot: cuántos pueden, de cuántos respondieron, y quiénes."""

	count: int
	total: int
	participants: Tuple[str, ...] = ()

	@property
	def ratio(self) -> float:
		if self.total == 0:
			return 0.0
		return self.count / self.total

	@property
	def is_full(self) -> bool:
		return self.total > 0 and self.count == self.total

	def as_dict(self) -> Dict[str, Any]:
		return {
			"count": self.count,
			"total": self.total,
			"participants": list(self.participants),
		}


def to_record(row: Any, strict: bool = False) -> AvailabilityRecord:
	"""
	Convierte una fila del store (dict o doc) en AvailabilityRecord.

	Args:
		row: {"participant_name": str, "slots": [slot keys | Slot]}
		strict: si es False, los slot keys mal formados se descartan (datos
			viejos); si es True, se propaga InvalidSlot

	Returns:
		AvailabilityRecord
	"""
	if isinstance(row, AvailabilityRecord):
		return row

	if isinstance(row, dict):
		name = row.get("participant_name")
		raw_slots = row.get("slots")
	else:
		name = getattr(row, "participant_name", None)
		raw_slots = getattr(row, "slots", None)

	slots = set()
	for value in raw_slots or []:
		try:
			slots.add(parse_slot(value))
		except InvalidSlot:
			if strict:
				raise

	return AvailabilityRecord(participant_name=name or "", slots=frozenset(slots))


def aggregate(universe: Sequence[Slot], records: Iterable[Any]) -> Dict[Slot, HeatmapEntry]:
	"""
	Calcula el heatmap de disponibilidad.

	Args:
		universe: slots de la reunión, en orden
		records: disponibilidad de cada participante (AvailabilityRecord o dict)

	Returns:
		dict: {Slot: HeatmapEntry(count, total, participants)}, en el orden
		del universo. total = cantidad de records, igual para todos los slots.

	Algoritmo:
		1. Inicializar cada slot del universo en count 0
		2. Para cada record (en orden), para cada slot del universo que el
		   record contenga: sumar 1 y agregar el nombre
		3. Slots del record fuera del universo se ignoran
	"""
	records = [to_record(row) for row in records]
	total = len(records)

	names: Dict[Slot, List[str]] = {slot: [] for slot in universe}

	for record in records:
		for slot, available in names.items():
			if slot in record.slots:
				available.append(record.participant_name)

	return {
		slot: HeatmapEntry(count=len(available), total=total, participants=tuple(available))
		for slot, available in names.items()
	}


def best_slots(heatmap: Dict[Slot, HeatmapEntry], total: int) -> Set[Slot]:
	"""
	Slots donde todos los que respondieron están disponibles.

	Sin respuestas (total = 0) no hay ningún slot "de todos".
	"""
	if total == 0:
		return set()
	return {slot for slot, entry in heatmap.items() if entry.count == total}


def heatmap_opacity(count: int, total: int) -> Optional[float]:
	"""
	Opacidad para un slot parcial: menos disponibles -> más oscuro.

	None si nadie puede (sin relleno) o si pueden todos (color fijo).
	"""
	if total == 0 or count == 0 or count >= total:
		return None
	ratio = count / total
	return MIN_OPACITY + (1 - ratio) * OPACITY_RANGE


def heatmap_color(count: int, total: int) -> Optional[str]:
	"""
	Color de la celda según count/total.

	Returns:
		None si count o total es 0, FULL_OVERLAP_COLOR si están todos,
		"rgba(161, 74, 47, 0.53)" en otro caso.
	"""
	if total == 0 or count == 0:
		return None
	if count == total:
		return FULL_OVERLAP_COLOR

	opacity = heatmap_opacity(count, total)
	red, green, blue = PARTIAL_RGB
	return f"rgba({red}, {green}, {blue}, {opacity:.2f})"


def respondents(records: Iterable[Any]) -> List[str]:
	"""Nombres de quienes respondieron, en orden de respuesta."""
	return [to_record(row).participant_name for row in records]


def missing_participants(entry: HeatmapEntry, all_participants: Iterable[str]) -> List[str]:
	"""Quiénes NO pueden en un slot (tooltip de resultados)."""
	available = set(entry.participants)
	return [name for name in all_participants if name not in available]


def find_record(records: Iterable[Any], participant_name: str) -> Optional[AvailabilityRecord]:
	"""Record de un participante por nombre exacto (case-sensitive)."""
	for row in records:
		record = to_record(row)
		if record.participant_name == participant_name:
			return record
	return None
