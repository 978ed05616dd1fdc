"""
Response Sequencer — turns a response unit into paced deliveries.

A single message goes out immediately. The i-th message of a sequence waits
i * spacing milliseconds. A message's own `delay` overrides either default.
The `persona_id` side channel moves to the top level of the request body.
"""

from typing import Iterator, List

from narrative_dispatch.delivery.scheduler import Scheduler
from narrative_dispatch.models.responses import (
    OutboundMessage,
    ResponseUnit,
    ScheduledDelivery,
)
from narrative_dispatch.models.user import User

SEQUENCE_SPACING_MS = 2000


class ResponseSequencer:
    def __init__(self, scheduler: Scheduler, spacing_ms: int = SEQUENCE_SPACING_MS):
        self.scheduler = scheduler
        self.spacing_ms = spacing_ms

    def plan(self, user: User, unit: ResponseUnit) -> List[ScheduledDelivery]:
        """The deliveries a unit would produce, without scheduling them."""
        return list(self._deliveries(user, unit))

    def send(self, user: User, unit: ResponseUnit) -> List[ScheduledDelivery]:
        """Schedule every message of a unit, each as soon as it is built."""
        scheduled = []
        for delivery in self._deliveries(user, unit):
            self.scheduler.schedule(delivery)
            scheduled.append(delivery)
        return scheduled

    def _deliveries(self, user: User, unit: ResponseUnit) -> Iterator[ScheduledDelivery]:
        if isinstance(unit, OutboundMessage):
            yield self._build(user, unit, default_delay=0)
            return
        for index, message in enumerate(unit):
            yield self._build(user, message, default_delay=index * self.spacing_ms)

    def _build(
        self, user: User, message: OutboundMessage, default_delay: int
    ) -> ScheduledDelivery:
        delay = message.delay if message.delay is not None else default_delay
        return ScheduledDelivery(
            psid=user.psid,
            message=message.content(),
            persona_id=message.persona_id,
            delay_ms=delay,
        )
