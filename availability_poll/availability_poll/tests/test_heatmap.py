"""
Tests for scheduling/heatmap.py

Tests aggregation of participant availability into per-slot counts.
"""

import unittest

from availability_poll.availability_poll.scheduling.exceptions import InvalidSlot
from availability_poll.availability_poll.scheduling.heatmap import (
	FULL_OVERLAP_COLOR,
	MIN_OPACITY,
	OPACITY_RANGE,
	aggregate,
	best_slots,
	find_record,
	heatmap_color,
	heatmap_opacity,
	missing_participants,
	respondents,
	to_record,
)
from availability_poll.availability_poll.scheduling.slots import enumerate_slots, parse_slot


class TestHeatmap(unittest.TestCase):
	"""Tests for heatmap aggregation."""

	def setUp(self):
		"""Set up a one-hour universe on one date."""
		self.universe = enumerate_slots(["2025-01-15"], "09:00", "10:00", 30)
		self.s1 = parse_slot("2025-01-15 09:00")
		self.s2 = parse_slot("2025-01-15 09:30")

	def test_aggregate_two_participants(self):
		"""Test counts, participant lists and best slots."""
		records = [
			{"participant_name": "A", "slots": ["2025-01-15 09:00", "2025-01-15 09:30"]},
			{"participant_name": "B", "slots": ["2025-01-15 09:30"]},
		]

		heatmap = aggregate(self.universe, records)

		self.assertEqual(heatmap[self.s1].count, 1)
		self.assertEqual(heatmap[self.s1].participants, ("A",))
		self.assertEqual(heatmap[self.s2].count, 2)
		self.assertEqual(heatmap[self.s2].participants, ("A", "B"))
		self.assertEqual(heatmap[self.s1].total, 2)
		self.assertEqual(best_slots(heatmap, 2), {self.s2})

	def test_aggregate_no_records(self):
		"""Test that no responses means zero counts and no best slots."""
		heatmap = aggregate(self.universe, [])

		self.assertEqual(list(heatmap), self.universe)
		for entry in heatmap.values():
			self.assertEqual((entry.count, entry.total, entry.participants), (0, 0, ()))
		self.assertEqual(best_slots(heatmap, 0), set())

	def test_aggregate_ignores_out_of_universe(self):
		"""Test that slots outside the universe are not counted."""
		records = [
			{"participant_name": "A", "slots": ["2025-01-15 09:00", "2025-01-16 09:00", "2025-01-15 18:00"]},
		]

		heatmap = aggregate(self.universe, records)

		self.assertEqual(set(heatmap), set(self.universe))
		self.assertEqual(heatmap[self.s1].count, 1)
		self.assertEqual(heatmap[self.s2].count, 0)

	def test_count_bounded_by_total(self):
		"""Test 0 <= count <= total and count == len(participants)."""
		records = [
			{"participant_name": "A", "slots": ["2025-01-15 09:00"]},
			{"participant_name": "B", "slots": []},
			{"participant_name": "C", "slots": ["2025-01-15 09:00", "2025-01-15 09:30"]},
		]

		for entry in aggregate(self.universe, records).values():
			self.assertTrue(0 <= entry.count <= entry.total == 3)
			self.assertEqual(entry.count, len(entry.participants))

	def test_participant_order_follows_records(self):
		"""Test that names are listed in response order."""
		records = [
			{"participant_name": "Zoe", "slots": ["2025-01-15 09:00"]},
			{"participant_name": "Ana", "slots": ["2025-01-15 09:00"]},
		]

		heatmap = aggregate(self.universe, records)

		self.assertEqual(heatmap[self.s1].participants, ("Zoe", "Ana"))
		self.assertEqual(respondents(records), ["Zoe", "Ana"])

	def test_to_record_lenient_and_strict(self):
		"""Test malformed keys are dropped unless strict."""
		row = {"participant_name": "A", "slots": ["2025-01-15 09:00", "garbage"]}

		self.assertEqual(to_record(row).slots, frozenset({self.s1}))
		with self.assertRaises(InvalidSlot):
			to_record(row, strict=True)

	def test_heatmap_color(self):
		"""Test cell colours."""
		self.assertIsNone(heatmap_color(0, 3))
		self.assertIsNone(heatmap_color(0, 0))
		self.assertEqual(heatmap_color(3, 3), FULL_OVERLAP_COLOR)
		self.assertEqual(heatmap_color(1, 2), "rgba(161, 74, 47, 0.53)")
		self.assertEqual(heatmap_color(2, 3), "rgba(161, 74, 47, 0.41)")

	def test_heatmap_opacity_range(self):
		"""Test that fewer available means darker, within bounds."""
		total = 10
		opacities = [heatmap_opacity(count, total) for count in range(1, total)]

		self.assertEqual(opacities, sorted(opacities, reverse=True))
		for opacity in opacities:
			self.assertGreaterEqual(opacity, MIN_OPACITY)
			self.assertLessEqual(opacity, MIN_OPACITY + OPACITY_RANGE)
		self.assertIsNone(heatmap_opacity(total, total))

	def test_missing_participants(self):
		"""Test who cannot attend a slot."""
		records = [
			{"participant_name": "A", "slots": ["2025-01-15 09:00"]},
			{"participant_name": "B", "slots": []},
			{"participant_name": "C", "slots": ["2025-01-15 09:00"]},
		]

		heatmap = aggregate(self.universe, records)

		self.assertEqual(missing_participants(heatmap[self.s1], ["A", "B", "C"]), ["B"])
		self.assertEqual(missing_participants(heatmap[self.s2], ["A", "B", "C"]), ["A", "B", "C"])

	def test_find_record_is_case_sensitive(self):
		"""Test exact-name lookup."""
		records = [{"participant_name": "Ana", "slots": ["2025-01-15 09:00"]}]

		self.assertIsNotNone(find_record(records, "Ana"))
		self.assertIsNone(find_record(records, "ana"))


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
