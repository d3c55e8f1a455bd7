"""Publish/subscribe bus for recommendation console events.

Event names:
  recommendations.state_changed -> payload {"reason": str, "date": str, "dirty": bool}
  recommendations.saved -> payload {"date": str, "mode": "create" | "update"}
  recommendations.error -> payload {"command": str, "message": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

RECOMMENDATIONS_STATE_CHANGED = "recommendations.state_changed"
RECOMMENDATIONS_SAVED = "recommendations.saved"
RECOMMENDATIONS_ERROR = "recommendations.error"

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Listener):
		if callback in self._subscribers.get(event_name, []):
			self._subscribers[event_name].remove(callback)

	def subscribers(self, event_name: str) -> List[Listener]:
		return list(self._subscribers.get(event_name, []))

	def publish(self, event_name: str, payload: Any = None):
		# a broken listener must not break the command that published
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = [
	"EventBus", "Listener",
	"RECOMMENDATIONS_STATE_CHANGED", "RECOMMENDATIONS_SAVED", "RECOMMENDATIONS_ERROR",
]
