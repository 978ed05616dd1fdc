"""
Narrative Dispatch Table — routes canonical payloads to their handler.

Routes are evaluated top to bottom and the first matching predicate wins:

  1. GET_STARTED | DEVDOCS | GITHUB      → introduction
  2. contains OPEN_DOOR                  → Stage 1
  3. GO_DOWNSTAIRS | GO_UPSTAIRS         → Stage 2
  4. EXAMINE_* | ENTER_TUNNEL | BREAK_THE_WINDOW → Stage 3
  5. USE_BACKPACK | USE_ROPE             → Stage 4
  6. anything else                       → acknowledgement echoing the payload

Payloads stay plain strings: stages emit payloads owned by other stages, so
the payload space is deliberately open.
"""

from typing import Callable, List, Optional

from narrative_dispatch.dispatch.context import DispatchContext
from narrative_dispatch.models.responses import ResponseUnit
from narrative_dispatch.narrative.base import PayloadHandler
from narrative_dispatch.narrative.steps import Step1, Step2, Step3, Step4
from narrative_dispatch.responses import builder
from narrative_dispatch.utils.logging_config import get_logger

logger = get_logger(__name__)

INTRO_PAYLOADS = frozenset({"GET_STARTED", "DEVDOCS", "GITHUB"})
STAGE_1_MARKER = "OPEN_DOOR"
STAGE_2_ENTRY = frozenset({"GO_DOWNSTAIRS", "GO_UPSTAIRS"})
STAGE_3_ENTRY = frozenset({
    "EXAMINE_ROPE",
    "EXAMINE_BACKPACK",
    "ENTER_TUNNEL",
    "BREAK_THE_WINDOW",
})
STAGE_4_ENTRY = frozenset({"USE_BACKPACK", "USE_ROPE"})


class IntroHandler:
    """The new-user experience."""

    def __init__(self, context: DispatchContext):
        self.context = context

    def handle_payload(self, payload: str) -> ResponseUnit:
        return builder.gen_nux_message(self.context.user, self.context.localizer)


class AcknowledgementHandler:
    """Catch-all for payloads no route claims. Not an error."""

    def __init__(self, context: DispatchContext):
        self.context = context

    def handle_payload(self, payload: str) -> ResponseUnit:
        return builder.gen_text(
            self.context.localizer.t("fallback.payload", payload=payload)
        )


class Route:
    """A (predicate, handler factory) pair in the dispatch table."""

    def __init__(
        self,
        name: str,
        predicate: Callable[[str], bool],
        factory: Callable[[DispatchContext], PayloadHandler],
    ):
        self.name = name
        self.predicate = predicate
        self.factory = factory

    def matches(self, payload: str) -> bool:
        return self.predicate(payload)


def _stage(cls) -> Callable[[DispatchContext], PayloadHandler]:
    return lambda ctx: cls(ctx.user, ctx.event, ctx.localizer)


def default_routes() -> List[Route]:
    return [
        Route("intro", lambda p: p in INTRO_PAYLOADS, IntroHandler),
        Route("step1", lambda p: STAGE_1_MARKER in p, _stage(Step1)),
        Route("step2", lambda p: p in STAGE_2_ENTRY, _stage(Step2)),
        Route("step3", lambda p: p in STAGE_3_ENTRY, _stage(Step3)),
        Route("step4", lambda p: p in STAGE_4_ENTRY, _stage(Step4)),
    ]


class NarrativeDispatchTable:
    """Ordered route list with an acknowledgement fallback."""

    def __init__(self, routes: Optional[List[Route]] = None):
        self._routes: List[Route] = routes if routes is not None else default_routes()

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def register_route(self, route: Route, index: Optional[int] = None) -> None:
        """Add a route; appended (lowest precedence) unless an index is given."""
        if index is None:
            self._routes.append(route)
        else:
            self._routes.insert(index, route)

    def route_for(self, payload: str) -> Optional[Route]:
        """The first route claiming a payload, or None for the fallback."""
        return next((r for r in self._routes if r.matches(payload)), None)

    def claimants(self, payload: str) -> List[str]:
        """Names of every route whose predicate accepts the payload, in order."""
        return [r.name for r in self._routes if r.matches(payload)]

    def dispatch(self, context: DispatchContext, payload: str) -> ResponseUnit:
        route = self.route_for(payload)
        if route is None:
            logger.info("No route for payload %s, acknowledging", payload)
            return AcknowledgementHandler(context).handle_payload(payload)
        logger.debug("Payload %s routed to %s", payload, route.name)
        return route.factory(context).handle_payload(payload)
