"""Events and a messenger that dispatches them to listeners."""

from __future__ import annotations

import copy
from collections import defaultdict, deque
from typing import Callable

Listener = Callable[["Event"], None]


class Event:
    """Base class of all events; an event's type is its class."""

    @property
    def event_type(self) -> type[Event]:
        return type(self)


class EventMessenger:
    """Calls the listeners registered for an event's type when it is triggered.

    Events may also be queued; queued events are triggered in order by
    ``trigger_queued_events``, and anything queued while that runs waits for
    the next call.
    """

    def __init__(self) -> None:
        self._listeners: defaultdict[type[Event], list[Listener]] = defaultdict(list)
        self._queue: deque[Event] = deque()

    def add_listener(self, event_type: type[Event], listener: Listener) -> None:
        """Register a listener; a duplicate registration is ignored."""
        listeners = self._listeners[event_type]
        if listener not in listeners:
            listeners.append(listener)

    def remove_listener(self, event_type: type[Event], listener: Listener) -> None:
        """Unregister a listener; nothing happens if it is not registered."""
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def queue_event(self, event: Event) -> None:
        """Store a copy of the event to be triggered later."""
        self._queue.append(copy.copy(event))

    def trigger_event(self, event: Event) -> None:
        """Call every listener registered for the event's type right away."""
        for listener in list(self._listeners.get(event.event_type, ())):
            listener(event)

    def trigger_queued_events(self) -> None:
        """Trigger all events queued so far, in the order they were queued."""
        batch, self._queue = self._queue, deque()
        for event in batch:
            self.trigger_event(event)