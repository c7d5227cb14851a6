"""
Dispatch wizard service.

Builds multi-step work orders and price quotes for a rental and logistics
business: step-sequenced data capture, recurring service scheduling,
inventory and crew availability checks, and ordered multi-entity commits.
"""

__version__ = "0.1.0"
