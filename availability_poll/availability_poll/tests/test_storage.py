"""
Tests for storage/

Tests the store factory and the in-memory store.
"""

import unittest

from availability_poll.availability_poll.storage.base import AvailabilityStore
from availability_poll.availability_poll.storage.factory import get_store
from availability_poll.availability_poll.storage.memory import InMemoryStore


class TestStorage(unittest.TestCase):
	"""Tests for availability stores."""

	def setUp(self):
		self.store = get_store("memory")
		self.meeting = self.store.create_meeting({"title": "Sync", "dates": ["2025-01-15"]})

	def test_factory(self):
		"""Test backend selection."""
		self.assertIsInstance(self.store, InMemoryStore)
		self.assertIsInstance(self.store, AvailabilityStore)

		with self.assertRaises(ValueError):
			get_store("redis")

	def test_meeting_names(self):
		"""Test generated names and lookups."""
		second = self.store.create_meeting({"title": "Other"})

		self.assertEqual(self.meeting["name"], "GM-00001")
		self.assertEqual(second["name"], "GM-00002")
		self.assertIsNone(self.store.get_meeting("GM-99999"))

	def test_upsert_keeps_response_order(self):
		"""Test that replacing a row keeps its position."""
		name = self.meeting["name"]
		self.store.save_availability(name, "A", ["2025-01-15 09:00"])
		self.store.save_availability(name, "B", [])
		self.store.save_availability(name, "A", [])

		rows = self.store.get_availability(name)

		self.assertEqual([row["participant_name"] for row in rows], ["A", "B"])
		self.assertEqual(rows[0]["slots"], [])

	def test_returned_copies_are_isolated(self):
		"""Test that mutating returned data does not touch the store."""
		name = self.meeting["name"]
		self.store.save_availability(name, "A", ["2025-01-15 09:00"])

		self.store.get_availability(name)[0]["slots"].append("2025-01-15 09:30")
		self.store.get_meeting(name)["dates"].append("2025-01-16")

		self.assertEqual(self.store.get_availability(name)[0]["slots"], ["2025-01-15 09:00"])
		self.assertEqual(self.store.get_meeting(name)["dates"], ["2025-01-15"])

	def test_unknown_meeting_has_no_availability(self):
		"""Test availability for a missing meeting."""
		self.assertEqual(self.store.get_availability("GM-99999"), [])


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
