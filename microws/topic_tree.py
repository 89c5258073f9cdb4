"""Publish/subscribe topic registry with batched message delivery."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

MAX_MESSAGES_PER_SUBSCRIBER = 32
MAX_OUTGOING_MESSAGES = 0xFFFF


class TopicTreeError(RuntimeError):
    """Raised when a subscriber changes its topics while they are iterated."""


class IteratorFlags(IntFlag):
    """Position of a message within one subscriber's drain."""

    NONE = 0
    LAST = 1
    FIRST = 2


@dataclass
class TopicTreeMessage:
    """A message queued when publishing."""

    message: bytes
    op_code: int
    compress: bool


@dataclass
class TopicTreeBigMessage:
    """A large message delivered straight to subscribers, unbuffered."""

    message: bytes
    op_code: int
    compress: bool


class Topic:
    """A named topic and the subscribers it holds, in subscription order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: dict[Subscriber, None] = {}

    def add(self, subscriber: Subscriber) -> None:
        self._subscribers[subscriber] = None

    def discard(self, subscriber: Subscriber) -> None:
        self._subscribers.pop(subscriber, None)

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers

    def __iter__(self) -> Iterator[Subscriber]:
        return iter(self._subscribers)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"Topic({self.name!r}, subscribers={len(self)})"


class Subscriber:
    """One party that can subscribe to topics."""

    def __init__(self, user: Any = None) -> None:
        self.topics: set[Topic] = set()
        self.user = user
        self._message_indices: list[int] = []

    def needs_drainage(self) -> bool:
        """True if published messages are waiting for this subscriber."""
        return bool(self._message_indices)


DrainCallback = Callable[[Subscriber, Any, IteratorFlags], bool]


class TopicTree(Generic[T]):
    """Topics, their subscribers and the messages not yet delivered.

    The callback receives (subscriber, message, flags) and returns True to
    stop that subscriber's drain short. It must not publish, subscribe or
    unsubscribe.
    """

    def __init__(self, callback: DrainCallback) -> None:
        self._callback = callback
        self._topics: dict[str, Topic] = {}
        # Insertion ordered; the most recently added is drained first.
        self._drainable: dict[Subscriber, None] = {}
        self._outgoing: list[T] = []
        self.iterating_subscriber: Subscriber | None = None

    def _check_iterating_subscriber(self, subscriber: Subscriber) -> None:
        if self.iterating_subscriber is subscriber:
            raise TopicTreeError(
                "a subscriber must not subscribe or unsubscribe while iterating its topics"
            )

    def _drain_impl(self, subscriber: Subscriber) -> None:
        # Reset first so that a send from inside the callback sees nothing to drain.
        indices = subscriber._message_indices
        subscriber._message_indices = []
        last = len(indices) - 1
        for position, index in enumerate(indices):
            flags = IteratorFlags.NONE
            if position == last:
                flags |= IteratorFlags.LAST
            if position == 0:
                flags |= IteratorFlags.FIRST
            if self._callback(subscriber, self._outgoing[index], flags):
                break

    def lookup_topic(self, topic: str) -> Topic | None:
        """Return the named topic, or None if nobody subscribes to it."""
        return self._topics.get(topic)

    def subscribe(self, subscriber: Subscriber, topic: str) -> Topic | None:
        """Subscribe to a topic; returns None if already subscribed."""
        self._check_iterating_subscriber(subscriber)
        topic_obj = self._topics.get(topic)
        if topic_obj is None:
            topic_obj = Topic(topic)
            self._topics[topic] = topic_obj
        if topic_obj in subscriber.topics:
            return None
        subscriber.topics.add(topic_obj)
        topic_obj.add(subscriber)
        return topic_obj

    def unsubscribe(self, subscriber: Subscriber, topic: str) -> tuple[bool, bool, int]:
        """Unsubscribe from a topic.

        Returns (ok, last, new_count): whether it was subscribed, whether it
        now holds no topics, and how many subscribers the topic has left.
        """
        self._check_iterating_subscriber(subscriber)
        topic_obj = self._topics.get(topic)
        if topic_obj is None or topic_obj not in subscriber.topics:
            return False, False, -1
        subscriber.topics.discard(topic_obj)
        topic_obj.discard(subscriber)
        new_count = len(topic_obj)
        if not new_count:
            del self._topics[topic]
        return True, not subscriber.topics, new_count

    def create_subscriber(self) -> Subscriber:
        """Create a subscriber bound to no topics; set its user attribute freely."""
        return Subscriber()

    def free_subscriber(self, subscriber: Subscriber | None) -> None:
        """Remove a subscriber from all its topics and from pending drains."""
        if subscriber is None:
            return
        for topic_obj in subscriber.topics:
            if len(topic_obj) == 1:
                self._topics.pop(topic_obj.name, None)
            topic_obj.discard(subscriber)
        subscriber.topics.clear()
        if subscriber.needs_drainage():
            self._drainable.pop(subscriber, None)
            subscriber._message_indices = []

    def drain(self, subscriber: Subscriber) -> None:
        """Deliver every message pending for one subscriber."""
        if subscriber.needs_drainage():
            self._drainable.pop(subscriber, None)
            self._drain_impl(subscriber)
            if not self._drainable:
                self._outgoing.clear()

    def drain_all(self) -> None:
        """Deliver every pending message to every subscriber."""
        if self._drainable:
            for subscriber in reversed(list(self._drainable)):
                self._drain_impl(subscriber)
            self._drainable.clear()
            self._outgoing.clear()

    def publish_big(
        self,
        sender: Subscriber | None,
        topic: str,
        message: Any,
        callback: Callable[[Subscriber, Any], Any],
    ) -> bool:
        """Hand a message straight to each subscriber except the sender."""
        topic_obj = self._topics.get(topic)
        if topic_obj is None:
            return False
        for subscriber in list(topic_obj):
            if subscriber is not sender:
                callback(subscriber, message)
        return True

    def publish(self, sender: Subscriber | None, topic: str, message: T) -> bool:
        """Queue a message for all subscribers of a topic except the sender.

        Returns True if at least one subscriber will receive it.
        """
        topic_obj = self._topics.get(topic)
        if topic_obj is None:
            return False

        if len(self._outgoing) == MAX_OUTGOING_MESSAGES:
            self.drain_all()

        referenced = False
        for subscriber in list(topic_obj):
            if subscriber is sender:
                continue
            referenced = True
            if len(subscriber._message_indices) == MAX_MESSAGES_PER_SUBSCRIBER:
                self.drain(subscriber)
            subscriber._message_indices.append(len(self._outgoing))
            if len(subscriber._message_indices) == 1:
                self._drainable[subscriber] = None

        if referenced:
            self._outgoing.append(message)
        return referenced