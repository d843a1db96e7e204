"""In-process change notifier for realtime fan-out.

Services publish a ChangeEvent after a successful commit; every live
subscription whose table and filters match receives it. The notifier is
owned by the application (``app.state.notifier``) and passed to services
explicitly.

Delivery contract:
- asynchronous and at-least-once, with no ordering across subscribers;
- events are not suppressed for the client that caused them, so
  subscribers compare ``event.is_from(user_id)`` to skip their own messages;
- once ``Subscription.cancel()`` returns, its handler is never invoked again.
"""

from collections import defaultdict
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from src.hotel.core.logging import get_logger

logger = get_logger(__name__)


class ChangeKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    kind: ChangeKind
    row: dict[str, Any]

    def matches(self, filters: Mapping[str, Any]) -> bool:
        """True if every filter value equals the row's value for that field."""
        return all(str(self.row.get(key)) == str(value) for key, value in filters.items())

    def is_from(self, user_id: UUID | str) -> bool:
        """True if the row was produced by ``user_id`` (sender or subject of the change)."""
        origin = self.row.get("sender_id", self.row.get("user_id"))
        return origin is not None and str(origin) == str(user_id)

    def to_dict(self) -> dict[str, Any]:
        return {"table": self.table, "kind": self.kind.value, "row": self.row}


Handler = Callable[[ChangeEvent], Awaitable[None]]


@dataclass(eq=False)
class Subscription:
    """Handle returned by ChangeNotifier.subscribe()."""

    notifier: "ChangeNotifier"
    table: str
    handler: Handler
    filters: dict[str, Any] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)
    _active: bool = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Release the subscription. Idempotent."""
        if not self._active:
            return
        self._active = False
        self.notifier._remove(self)


class ChangeNotifier:
    """Publish/subscribe registry keyed by table name."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, dict[UUID, Subscription]] = defaultdict(dict)

    def subscribe(
        self,
        table: str,
        handler: Handler,
        filters: Mapping[str, Any] | None = None,
    ) -> Subscription:
        subscription = Subscription(
            notifier=self,
            table=table,
            handler=handler,
            filters=dict(filters or {}),
        )
        self._subscriptions[table][subscription.id] = subscription
        logger.debug("Subscribed", table=table, filters=subscription.filters)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions.get(subscription.table)
        if subscriptions is None:
            return
        subscriptions.pop(subscription.id, None)
        if not subscriptions:
            self._subscriptions.pop(subscription.table, None)

    async def publish(self, table: str, kind: ChangeKind, row: dict[str, Any]) -> int:
        """Deliver a change to matching subscribers. Returns the number of deliveries.

        A failing handler is logged and skipped; it never reaches the publisher.
        """
        event = ChangeEvent(table=table, kind=kind, row=row)
        delivered = 0
        # Snapshot: handlers may cancel subscriptions while we iterate
        for subscription in list(self._subscriptions.get(table, {}).values()):
            if not subscription.active or not event.matches(subscription.filters):
                continue
            try:
                await subscription.handler(event)
                delivered += 1
            except Exception as e:
                logger.warning(
                    "Subscriber failed to handle change event",
                    table=table,
                    kind=kind.value,
                    subscription_id=str(subscription.id),
                    error=str(e),
                )
        return delivered

    def subscriber_count(self, table: str | None = None) -> int:
        if table is not None:
            return len(self._subscriptions.get(table, {}))
        return sum(len(subs) for subs in self._subscriptions.values())

    def close(self) -> None:
        """Cancel every subscription. Called during application shutdown."""
        for subscriptions in list(self._subscriptions.values()):
            for subscription in list(subscriptions.values()):
                subscription.cancel()
