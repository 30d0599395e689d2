"""In-process event bus for Nachbestellung workflow notifications.

Event names:
  nachbestellung.created -> payload {"nachbestellung": Nachbestellung, "background_tasks": BackgroundTasks or None}
  nachbestellung.status_changed -> payload {"nachbestellung": Nachbestellung, "status": str}

Subscribers are callables receiving (event_name, payload). Delivery is
synchronous, in subscription order.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

NACHBESTELLUNG_CREATED = "nachbestellung.created"
NACHBESTELLUNG_STATUS_CHANGED = "nachbestellung.status_changed"

Subscriber = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Subscriber) -> Subscriber:
		"""Register callback once per event name and return it."""
		callbacks = self._subscribers[event_name]
		if callback not in callbacks:
			callbacks.append(callback)
		return callback

	def unsubscribe(self, event_name: str, callback: Subscriber) -> bool:
		callbacks = self._subscribers.get(event_name, [])
		if callback in callbacks:
			callbacks.remove(callback)
			return True
		return False

	def subscriber_count(self, event_name: str) -> int:
		return len(self._subscribers.get(event_name, []))

	def publish(self, event_name: str, payload: Any = None) -> int:
		"""Deliver to every subscriber; returns how many handled it without raising."""
		delivered = 0
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# a failing subscriber must not break the publishing request
				logger.exception("Subscriber %r failed on %s", cb, event_name)
				continue
			delivered += 1
		return delivered


GLOBAL_EVENT_BUS = EventBus()


def publish_event(event_name: str, payload: Any = None) -> int:
	return GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish_event',
	'NACHBESTELLUNG_CREATED', 'NACHBESTELLUNG_STATUS_CHANGED'
]
