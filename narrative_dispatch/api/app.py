"""
Webhook API — FastAPI endpoints for the Messenger Platform.

- GET  /webhook   subscription handshake
- POST /webhook   inbound events, one dispatch per messaging entry
- GET  /health    liveness
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError

from narrative_dispatch.delivery.adapters import DeliveryAdapter, InMemoryDeliveryAdapter
from narrative_dispatch.delivery.graph_api import GraphApiClient
from narrative_dispatch.delivery.scheduler import AsyncioScheduler, Scheduler
from narrative_dispatch.delivery.sequencer import ResponseSequencer
from narrative_dispatch.dispatch.receiver import Dispatcher
from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.config import DispatcherConfig
from narrative_dispatch.models.events import InboundEvent
from narrative_dispatch.models.user import User
from narrative_dispatch.users.store import UserStore
from narrative_dispatch.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


# --- Request Models ---

class WebhookEntry(BaseModel):
    id: Optional[str] = None
    time: Optional[int] = None
    messaging: List[dict] = []              # Validated one event at a time


class WebhookBody(BaseModel):
    object: str
    entry: List[WebhookEntry] = []


# --- Application Factory ---

def create_app(
    config: Optional[DispatcherConfig] = None,
    delivery_adapter: Optional[DeliveryAdapter] = None,
    scheduler: Optional[Scheduler] = None,
    user_store: Optional[UserStore] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    cfg = config or DispatcherConfig.from_env()
    setup_logging(cfg)

    app = FastAPI(
        title="Narrative Dispatch",
        description="Messenger webhook for the lighthouse story",
        version="0.1.0",
    )

    missing = cfg.missing_settings()
    if missing and delivery_adapter is None:
        logger.warning(
            "Missing settings %s: replies will be recorded, not sent",
            ", ".join(missing),
        )
        delivery_adapter = InMemoryDeliveryAdapter()

    # Initialize components
    adapter = delivery_adapter or GraphApiClient(cfg)
    sequencer = ResponseSequencer(
        scheduler or AsyncioScheduler(adapter),
        spacing_ms=cfg.sequence_spacing_ms,
    )
    dispatcher = Dispatcher(
        sequencer=sequencer,
        analytics=adapter,
        localizer=Localizer(cfg.default_locale),
        care_persona_id=cfg.care_persona_id,
    )
    users = user_store or UserStore()

    app.state.config = cfg
    app.state.delivery_adapter = adapter
    app.state.dispatcher = dispatcher
    app.state.user_store = users

    async def get_user(psid: str) -> User:
        user = users.get(psid)
        if user is not None:
            return user
        profile = None
        try:
            profile = await adapter.fetch_profile(psid)
        except Exception as e:
            logger.warning("Profile for %s unavailable: %s", psid, e)
        return users.get_or_create(psid, profile)

    @app.get("/health")
    def health():
        return {"status": "ok", "known_users": users.count()}

    @app.get("/webhook", response_class=PlainTextResponse)
    def verify_webhook(
        mode: Optional[str] = Query(None, alias="hub.mode"),
        token: Optional[str] = Query(None, alias="hub.verify_token"),
        challenge: str = Query("", alias="hub.challenge"),
    ):
        """Answer the platform's subscription handshake."""
        if mode == "subscribe" and cfg.verify_token and token == cfg.verify_token:
            logger.info("Webhook verified")
            return challenge
        raise HTTPException(403, "Verification failed")

    @app.post("/webhook", response_class=PlainTextResponse)
    async def receive_webhook(body: WebhookBody):
        """Dispatch every messaging entry of a page webhook delivery."""
        if body.object != "page":
            raise HTTPException(404, "Unsupported object")

        for entry in body.entry:
            for raw in entry.messaging:
                message = raw.get("message")
                if isinstance(message, dict) and message.get("is_echo"):
                    logger.debug("Skipping echo %s", message.get("mid"))
                    continue
                sender = raw.get("sender")
                if not isinstance(sender, dict) or sender.get("id") is None:
                    continue
                user = await get_user(str(sender["id"]))
                try:
                    event = InboundEvent.model_validate(raw)
                except ValidationError as e:
                    dispatcher.handle_fault(user, e)
                    continue
                dispatcher.handle_event(user, event)

        return "EVENT_RECEIVED"

    return app


# Default application instance
app = create_app()
