"""Simple Event Bus / Observer implementation for plan changes.

Event names:
  plan.changed -> payload {"action": str, "plan": Plan, ...action details}
  plan.assignment_rejected -> payload {"activity_id": str, "kid_id": str, "reason": str}
  plan.replaced -> payload {"plan": Plan}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

PLAN_CHANGED = "plan.changed"
PLAN_ASSIGNMENT_REJECTED = "plan.assignment_rejected"
PLAN_REPLACED = "plan.replaced"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception as e:
				logger.error("Error delivering %s to %s: %s", event_name, cb, e)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def log_listener(event_name: str, payload: Any):
	"""Debug listener: logs every event it receives."""
	logger.debug("[EVENT] %s: %s", event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'log_listener',
	'PLAN_CHANGED', 'PLAN_ASSIGNMENT_REJECTED', 'PLAN_REPLACED'
]
