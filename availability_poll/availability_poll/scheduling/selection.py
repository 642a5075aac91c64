"""
Drag Selection State Machine

Tracks one participant's add/remove drag over the availability grid.

States:
- Idle
- Dragging(mode), mode is ADD or REMOVE, decided once by the first cell

The machine only keeps the gesture state. The selection set belongs to the
caller: every event receives the current selection and returns a new set,
the caller's set is never mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Hashable, Iterable, Optional, Set, Union


class DragMode(Enum):
	ADD = "add"
	REMOVE = "remove"


class EventKind(Enum):
	PRESS = "press"
	ENTER = "enter"
	RELEASE = "release"
	CANCEL = "cancel"


@dataclass(frozen=True)
class Idle:
	"""Sin gesto activo."""


@dataclass(frozen=True)
class Dragging:
	"""Gesto activo; mode se fija al presionar y no cambia hasta soltar."""

	mode: DragMode


IDLE = Idle()

GestureState = Union[Idle, Dragging]
SelectionListener = Callable[[Set[Hashable]], None]


class SelectionMachine:
	"""
	Máquina de estados de selección por arrastre.

	Uso:
		machine = SelectionMachine(on_change=save_locally)
		selected = machine.on_press_start(slot, selected)
		selected = machine.on_enter_cell(other_slot, selected)
		selected = machine.on_release(selected)

	Con read_only=True ningún evento cambia el estado ni la selección
	(vistas de resultados / heatmap).
	"""

	def __init__(self, read_only: bool = False, on_change: Optional[SelectionListener] = None):
		self.read_only = read_only
		self.state: GestureState = IDLE
		self._on_change = on_change

	@property
	def is_dragging(self) -> bool:
		return isinstance(self.state, Dragging)

	@property
	def mode(self) -> Optional[DragMode]:
		return self.state.mode if isinstance(self.state, Dragging) else None

	def on_press_start(self, slot: Optional[Hashable], selection: Iterable[Hashable]) -> Set[Hashable]:
		"""
		Inicio del gesto sobre una celda.

		REMOVE si la celda ya estaba seleccionada, ADD si no. Un press sin
		celda (touch fuera del grid) o en modo read_only no inicia gesto.
		"""
		current = set(selection)

		if self.read_only or slot is None:
			self.state = IDLE
			return current

		mode = DragMode.REMOVE if slot in current else DragMode.ADD
		self.state = Dragging(mode)
		return self._apply(slot, current)

	def on_enter_cell(self, slot: Optional[Hashable], selection: Iterable[Hashable]) -> Set[Hashable]:
		"""Entrada a otra celda: aplica el modo del gesto (idempotente)."""
		current = set(selection)

		if self.read_only or slot is None or not self.is_dragging:
			return current

		return self._apply(slot, current)

	def on_release(self, selection: Iterable[Hashable]) -> Set[Hashable]:
		"""Pointer-up en cualquier lugar (también fuera del grid): vuelve a Idle."""
		return self._finish(selection)

	def on_cancel(self, selection: Iterable[Hashable]) -> Set[Hashable]:
		"""Pointer sale de la superficie o termina el touch: vuelve a Idle."""
		return self._finish(selection)

	def feed(
		self,
		event: EventKind,
		slot: Optional[Hashable],
		selection: Iterable[Hashable]
	) -> Set[Hashable]:
		"""Despacha un evento (kind, celda) al handler correspondiente."""
		if event is EventKind.PRESS:
			return self.on_press_start(slot, selection)
		elif event is EventKind.ENTER:
			return self.on_enter_cell(slot, selection)
		elif event is EventKind.RELEASE:
			return self.on_release(selection)
		elif event is EventKind.CANCEL:
			return self.on_cancel(selection)
		else:
			raise ValueError(f"Unsupported event: {event}")

	def _apply(self, slot: Hashable, current: Set[Hashable]) -> Set[Hashable]:
		next_selection = set(current)
		if self.state.mode is DragMode.ADD:
			next_selection.add(slot)
		else:
			next_selection.discard(slot)

		if self._on_change is not None:
			self._on_change(next_selection)

		return next_selection

	def _finish(self, selection: Iterable[Hashable]) -> Set[Hashable]:
		"""Dragging -> Idle; el set final se notifica una vez por gesto."""
		was_dragging = self.is_dragging
		self.state = IDLE
		final = set(selection)

		if was_dragging and self._on_change is not None:
			self._on_change(final)

		return final
