from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from gamehub.config import settings
from gamehub.exceptions import AuthenticationError, MalformedPayloadError
from gamehub.logging_config import get_logger
from gamehub.router import WebhookRouter
from gamehub.security import SignatureVerifier


logger = get_logger(__name__)

WEBHOOK_PATH = "/webhooks/gamehub"


def create_app(router: Optional[WebhookRouter] = None, webhook_secret: Optional[str] = None) -> FastAPI:
    """
    Build the webhook receiver app. Run with ``uvicorn --factory gamehub.main:create_app``.
    """
    verifier = SignatureVerifier(webhook_secret or settings.webhook_secret)
    webhook_router = router or WebhookRouter()
    signature_header = settings.signature_header
    app = FastAPI(title="GameHub Webhook Receiver")

    @app.post(WEBHOOK_PATH)
    async def receive_webhook(request: Request):
        raw_body = await request.body()
        signature = request.headers.get(signature_header, "")
        try:
            payload = verifier.verify_and_parse(raw_body, signature)
        except AuthenticationError as exc:
            logger.warning(
                "Rejected webhook with invalid signature header=%s bodyBytes=%s",
                signature_header,
                len(raw_body),
            )
            raise HTTPException(status_code=401, detail="invalid signature") from exc
        except MalformedPayloadError as exc:
            logger.warning("Rejected malformed webhook error=%s fieldErrors=%s", exc, len(exc.errors))
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info(
            "Received webhook type=%s playerId=%s transactionId=%s amount=%s currency=%s",
            payload.type,
            payload.player_id,
            payload.transaction_id,
            payload.amount_minor_units,
            payload.currency,
        )
        # integrator handlers may block on their ledger
        response = await run_in_threadpool(webhook_router.dispatch, payload)
        logger.info(
            "Answered webhook type=%s transactionId=%s status=%s",
            payload.type,
            payload.transaction_id,
            response.get("status"),
        )
        return response

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
