"""Web-facing observer for recommendation console events.

Subscribes to an EventBus for state changes, saves and recovered errors and
keeps a bounded in-memory buffer that the console API serves to polling
clients. Each app owns its own log (`app.state.event_log`).

  * Every stored event gets an auto-increment integer id so a client can ask
    for events newer than the last id it saw (since=<id>).
  * A Lock guards the buffer; uvicorn may run sync endpoints in a thread pool.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    EventBus,
    RECOMMENDATIONS_ERROR, RECOMMENDATIONS_SAVED, RECOMMENDATIONS_STATE_CHANGED,
)

MAX_EVENTS = 300
WATCHED = (RECOMMENDATIONS_STATE_CHANGED, RECOMMENDATIONS_SAVED, RECOMMENDATIONS_ERROR)


class EventLog:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self.max_events = max_events

    def record(self, event_name: str, payload: Any) -> None:
        evt = {
            'id': 0,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in ('reason', 'date', 'dirty', 'mode', 'command', 'message'):
                if k in payload:
                    evt[k] = payload[k]
        with self._lock:
            evt['id'] = self._next_id
            self._next_id += 1
            self._events.append(evt)
            if len(self._events) > self.max_events:
                del self._events[: len(self._events) - self.max_events]

    def since(self, since: Optional[int] = None) -> Dict[str, Any]:
        """Events newer than `since` (exclusive), or the whole buffer.

        next_cursor is the largest id seen, for the client's next poll.
        """
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}

    def attach(self, bus: EventBus) -> None:
        """Subscribe to every watched event; safe to call more than once."""
        for name in WATCHED:
            bus.subscribe(name, self.record)


__all__ = ['EventLog', 'MAX_EVENTS']
