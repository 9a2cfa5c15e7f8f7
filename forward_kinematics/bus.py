from __future__ import annotations

from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List, Tuple


Callback = Callable[[Any], None]


class MessageBus:
    """Single-threaded publish/subscribe dispatcher.

    Messages are delivered in publication order. A callback always runs to
    completion before the next message is dispatched: publishing from inside
    a callback enqueues the message, and it is delivered once the current
    callback returns.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callback]] = defaultdict(list)
        self._queue: Deque[Tuple[str, Any]] = deque()
        self._dispatching = False
        self.published_count = 0

    def subscribe(self, topic: str, callback: Callback) -> None:
        self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Callback) -> None:
        self._subscribers[topic].remove(callback)

    def publish(self, topic: str, message: Any) -> None:
        self._queue.append((topic, message))
        self.published_count += 1
        if not self._dispatching:
            self.spin()

    def spin(self) -> None:
        """Deliver queued messages until the queue is empty.

        If a callback raises, the messages still queued by that dispatch are
        dropped and the exception propagates to the publisher.
        """
        self._dispatching = True
        try:
            while self._queue:
                topic, message = self._queue.popleft()
                for callback in list(self._subscribers.get(topic, ())):
                    callback(message)
        finally:
            self._queue.clear()
            self._dispatching = False

    def pending(self) -> int:
        return len(self._queue)
