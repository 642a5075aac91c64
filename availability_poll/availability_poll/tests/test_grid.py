"""
Tests for scheduling/grid.py

Tests the render-ready grid: week columns, display offsets and cell modes.
"""

import unittest
from datetime import date, datetime

from availability_poll.availability_poll.scheduling.grid import build_grid, week_columns
from availability_poll.availability_poll.scheduling.heatmap import FULL_OVERLAP_COLOR, aggregate
from availability_poll.availability_poll.scheduling.slots import parse_slot, slot_universe

WINTER = datetime(2025, 1, 15, 12, 0)


class TestGrid(unittest.TestCase):
	"""Tests for grid layout."""

	def setUp(self):
		"""Set up a Wed + Fri meeting, 09:00-10:00 UTC."""
		self.meeting = {
			"name": "GM-00001",
			"dates": ["2025-01-15", "2025-01-17"],
			"start_time": "09:00",
			"end_time": "10:00",
			"timezone": "UTC",
			"slot_duration_minutes": 30,
		}

	def test_week_columns(self):
		"""Test Monday to Sunday expansion."""
		columns = week_columns([date(2025, 1, 15), date(2025, 1, 17)])

		self.assertEqual(columns[0], date(2025, 1, 13))
		self.assertEqual(columns[-1], date(2025, 1, 19))
		self.assertEqual(len(columns), 7)

	def test_week_columns_two_weeks(self):
		"""Test dates in consecutive weeks."""
		columns = week_columns([date(2025, 1, 19), date(2025, 1, 20)])

		self.assertEqual(len(columns), 14)
		self.assertEqual(columns[0], date(2025, 1, 13))
		self.assertEqual(columns[-1], date(2025, 1, 26))

	def test_week_columns_empty(self):
		"""Test no dates."""
		self.assertEqual(week_columns([]), [])

	def test_edit_grid_layout(self):
		"""Test columns, rows and selected flags in edit mode."""
		grid = build_grid(self.meeting, selected=["2025-01-17 09:30"], at_instant=WINTER)

		self.assertEqual(grid["mode"], "edit")
		self.assertFalse(grid["read_only"])
		self.assertEqual(grid["offset_minutes"], 0)
		self.assertEqual(
			[column["date"] for column in grid["columns"] if column["active"]],
			["2025-01-15", "2025-01-17"]
		)
		self.assertEqual(grid["columns"][0]["weekday"], "Mon")
		self.assertEqual([row["time"] for row in grid["rows"]], ["09:00", "09:30"])
		self.assertEqual([row["label"] for row in grid["rows"]], ["9:00 AM", "9:30 AM"])
		self.assertEqual(grid["end_label"], "10:00 AM")

		second_row = grid["rows"][1]["cells"]
		self.assertEqual(second_row[0], {"slot": None, "active": False})
		self.assertEqual(second_row[2]["slot"], "2025-01-15 09:30")
		self.assertFalse(second_row[2]["selected"])
		self.assertTrue(second_row[4]["selected"])
		self.assertEqual(second_row[4]["label"], "9:30 AM – 10:00 AM")

	def test_display_timezone_shifts_labels_only(self):
		"""Test that a display timezone changes labels but not slot keys."""
		grid = build_grid(self.meeting, "Asia/Kolkata", at_instant=WINTER)

		self.assertEqual(grid["offset_minutes"], 330)
		self.assertEqual([row["label"] for row in grid["rows"]], ["2:30 PM", "3:00 PM"])
		self.assertEqual(grid["end_label"], "3:30 PM")

		cell = grid["rows"][0]["cells"][2]
		self.assertEqual(cell["slot"], "2025-01-15 09:00")
		self.assertEqual(cell["label"], "2:30 PM – 3:00 PM")

	def test_unknown_display_timezone(self):
		"""Test that an unresolvable display timezone falls back to offset 0."""
		grid = build_grid(self.meeting, "Nowhere/Special", at_instant=WINTER)

		self.assertEqual(grid["offset_minutes"], 0)
		self.assertEqual(grid["display_timezone"], "UTC")
		self.assertEqual(grid["rows"][0]["label"], "9:00 AM")

	def test_heatmap_grid(self):
		"""Test counts, colours and highlight in results mode."""
		records = [
			{"participant_name": "A", "slots": ["2025-01-15 09:00", "2025-01-15 09:30"]},
			{"participant_name": "B", "slots": ["2025-01-15 09:30"]},
		]
		heatmap = aggregate(slot_universe(self.meeting), records)

		grid = build_grid(
			self.meeting,
			heatmap=heatmap,
			all_participants=["A", "B"],
			highlight={parse_slot("2025-01-15 09:00")},
			at_instant=WINTER
		)

		self.assertEqual(grid["mode"], "heatmap")
		self.assertTrue(grid["read_only"])

		first = grid["rows"][0]["cells"][2]
		self.assertEqual(first["count"], 1)
		self.assertEqual(first["total"], 2)
		self.assertEqual(first["participants"], ["A"])
		self.assertEqual(first["missing"], ["B"])
		self.assertEqual(first["color"], "rgba(161, 74, 47, 0.53)")
		self.assertTrue(first["highlighted"])

		second = grid["rows"][1]["cells"][2]
		self.assertEqual(second["color"], FULL_OVERLAP_COLOR)
		self.assertFalse(second["highlighted"])

		friday = grid["rows"][0]["cells"][4]
		self.assertEqual(friday["count"], 0)
		self.assertIsNone(friday["color"])

	def test_no_rows_when_range_shorter_than_slot(self):
		"""Test an empty universe."""
		self.meeting["end_time"] = "09:15"

		grid = build_grid(self.meeting, at_instant=WINTER)

		self.assertEqual(grid["rows"], [])
		self.assertIsNone(grid["end_label"])


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
