"""
Storage Module

Provides the persistence boundary used by the scheduling services:
- Base store interface (base.py)
- Factory for getting the configured store (factory.py)
- In-memory implementation (memory.py)
- Frappe doctype implementation (frappe_store.py)
"""
