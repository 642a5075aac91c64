"""
Scheduling Services Module

This module provides the core logic behind the availability poll:
- Slot enumeration and slot keys (slots.py)
- Display timezone offsets (timezones.py)
- Slot labels for the UI (formatting.py)
- Availability heatmap aggregation (heatmap.py)
- Drag selection gestures (selection.py)
- Grid layout for the frontend (grid.py)
- Page-level flows over a store (service.py)
"""
