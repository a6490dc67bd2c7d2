from typing import Callable, Dict, Union

from gamehub.config import WebhookType
from gamehub.logging_config import get_logger
from gamehub.responses import error_response
from gamehub.schemas.webhook_schemas import WebhookPayload

logger = get_logger(__name__)

WebhookHandlerFn = Callable[[WebhookPayload], dict]


class WebhookRouter:
    """
    Maps a webhook ``type`` to the integrator's handler.

    Handlers receive the parsed payload and return a reply body built with
    ``gamehub.responses``; their exceptions are not caught here.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, WebhookHandlerFn] = {}

    def register(self, webhook_type: Union[WebhookType, str], handler: WebhookHandlerFn) -> None:
        key = webhook_type.value if isinstance(webhook_type, WebhookType) else webhook_type
        if key in self._handlers:
            logger.warning("Replacing handler for webhook type=%s", key)
        self._handlers[key] = handler

    def on(self, webhook_type: Union[WebhookType, str]) -> Callable[[WebhookHandlerFn], WebhookHandlerFn]:
        def decorator(handler: WebhookHandlerFn) -> WebhookHandlerFn:
            self.register(webhook_type, handler)
            return handler
        return decorator

    def handles(self, webhook_type: str) -> bool:
        return webhook_type in self._handlers

    def dispatch(self, payload: WebhookPayload) -> dict:
        handler = self._handlers.get(payload.type)
        if handler is None:
            logger.warning(
                "No handler for webhook type=%s playerId=%s transactionId=%s",
                payload.type,
                payload.player_id,
                payload.transaction_id,
            )
            return error_response("UNSUPPORTED_WEBHOOK_TYPE", f"Unsupported webhook type: {payload.type}")
        return handler(payload)
