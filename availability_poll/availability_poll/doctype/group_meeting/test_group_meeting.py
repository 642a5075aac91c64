# Copyright (c) 2026, Availability Poll contributors
# See license.txt

"""
Tests for Group Meeting DocType

Tests validation (dates, times, timezone, slot range) and hooks.
Runs against a site: bench --site <site> run-tests --app availability_poll
"""

import unittest

try:
	import frappe
except ImportError:
	raise unittest.SkipTest("frappe is not installed")

if not getattr(frappe.local, "site", None):
	raise unittest.SkipTest("requires a Frappe site")

from frappe.tests.utils import FrappeTestCase
from frappe.utils import getdate


def make_meeting(dates=("2025-01-15",), **fields):
	"""Build an unsaved Group Meeting, 09:00-10:00 UTC by default."""
	values = {
		"doctype": "Group Meeting",
		"title": "Test Meeting",
		"start_time": "09:00",
		"end_time": "10:00",
		"timezone": "UTC",
		"slot_duration_minutes": 30,
		"meeting_dates": [{"meeting_date": value} for value in dates],
	}
	values.update(fields)
	return frappe.get_doc(values)


class TestGroupMeeting(FrappeTestCase):
	"""Tests for Group Meeting DocType."""

	def test_dates_deduplicated_and_sorted(self):
		"""Test that duplicate dates collapse and rows end up sorted."""
		meeting = make_meeting(["2025-01-17", "2025-01-15", "2025-01-17"])
		meeting.insert(ignore_permissions=True)

		self.assertEqual(
			[getdate(row.meeting_date) for row in meeting.meeting_dates],
			[getdate("2025-01-15"), getdate("2025-01-17")]
		)

	def test_unique_dates_out_of_order_are_sorted(self):
		"""Test that unique dates in the wrong order are still sorted."""
		meeting = make_meeting(["2025-01-20", "2025-01-16", "2025-01-18"])
		meeting.insert(ignore_permissions=True)

		self.assertEqual(
			[getdate(row.meeting_date) for row in meeting.meeting_dates],
			[getdate("2025-01-16"), getdate("2025-01-18"), getdate("2025-01-20")]
		)

	def test_defaults(self):
		"""Test that timezone defaults to UTC and slot duration to 30."""
		meeting = make_meeting(timezone=None, slot_duration_minutes=None)
		meeting.insert(ignore_permissions=True)

		self.assertEqual(meeting.timezone, "UTC")
		self.assertEqual(meeting.slot_duration_minutes, 30)

	def test_unknown_timezone(self):
		"""Test that an unknown timezone is rejected."""
		with self.assertRaises(frappe.ValidationError):
			make_meeting(timezone="Mars/Olympus_Mons").insert(ignore_permissions=True)

	def test_system_timezone_allowed(self):
		"""Test the site timezone sentinel."""
		meeting = make_meeting(timezone="system timezone")
		meeting.insert(ignore_permissions=True)

		self.assertEqual(meeting.timezone, "system timezone")

	def test_start_before_end(self):
		"""Test that start_time must be before end_time."""
		with self.assertRaises(frappe.ValidationError):
			make_meeting(start_time="10:00", end_time="10:00").insert(ignore_permissions=True)

	def test_range_shorter_than_slot(self):
		"""Test that a range with room for no slot is rejected."""
		with self.assertRaises(frappe.ValidationError):
			make_meeting(end_time="09:20").insert(ignore_permissions=True)

	def test_requires_dates(self):
		"""Test that at least one date is required."""
		with self.assertRaises(frappe.ValidationError):
			make_meeting(dates=()).insert(ignore_permissions=True)

	def test_on_trash_deletes_responses(self):
		"""Test that deleting a meeting deletes its Participant Availability rows."""
		meeting = make_meeting()
		meeting.insert(ignore_permissions=True)
		frappe.get_doc({
			"doctype": "Participant Availability",
			"meeting": meeting.name,
			"participant_name": "Ana",
			"slots": frappe.as_json(["2025-01-15 09:00"]),
		}).insert(ignore_permissions=True)

		meeting.delete(ignore_permissions=True)

		self.assertFalse(frappe.db.exists("Participant Availability", {"meeting": meeting.name}))

	def tearDown(self):
		"""Clean up after tests."""
		frappe.db.rollback()
