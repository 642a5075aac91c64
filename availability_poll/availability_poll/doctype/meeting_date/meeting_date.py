# Copyright (c) 2026, Availability Poll contributors
# For license information, please see license.txt

from frappe.model.document import Document


class MeetingDate(Document):
	pass
