"""
Schedulers — run scheduled deliveries after their delay.

Deliveries are fire-and-forget: once scheduled they cannot be cancelled, and
nothing waits for them to complete.
"""

import asyncio
from typing import List, Optional, Protocol, Set

from narrative_dispatch.delivery.adapters import DeliveryAdapter
from narrative_dispatch.models.responses import ScheduledDelivery
from narrative_dispatch.utils.logging_config import get_logger

logger = get_logger(__name__)


class Scheduler(Protocol):
    def schedule(self, delivery: ScheduledDelivery) -> None: ...


class AsyncioScheduler:
    """Schedules each delivery on the asyncio event loop with `call_later`."""

    def __init__(
        self,
        adapter: DeliveryAdapter,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.adapter = adapter
        self._loop = loop
        self._tasks: Set[asyncio.Task] = set()    # Sends in flight

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, delivery: ScheduledDelivery) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(delivery.delay_seconds, self._fire, loop, delivery)

    def _fire(self, loop: asyncio.AbstractEventLoop, delivery: ScheduledDelivery) -> None:
        task = loop.create_task(self.adapter.send(delivery.request_body()))
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._report(t, delivery))

    def _report(self, task: "asyncio.Task", delivery: ScheduledDelivery) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Delivery to %s failed: %s", delivery.psid, error)


class RecordingScheduler:
    """Keeps scheduled deliveries as data instead of running them."""

    def __init__(self):
        self.deliveries: List[ScheduledDelivery] = []

    def schedule(self, delivery: ScheduledDelivery) -> None:
        self.deliveries.append(delivery)

    @property
    def delays(self) -> List[int]:
        return [d.delay_ms for d in self.deliveries]
