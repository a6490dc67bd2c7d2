from typing import Any, Mapping, Optional, Union

import httpx

from gamehub.config import settings
from gamehub.exceptions import ConfigurationError
from gamehub.logging_config import get_logger
from gamehub.security import SignatureVerifier
from gamehub.widgets import jackpot_widget_embed_code, multi_session_iframe, promotion_widget_embed_code

logger = get_logger(__name__)


class GameHubClient:
    """
    Entry point for talking to GameHub: holds the API credentials, the HTTP
    transport and, when a secret is configured, the webhook verifier.

    Arguments left as ``None`` fall back to ``gamehub.config.settings``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        webhook_secret: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        api_key = api_key if api_key is not None else settings.api_key
        if not api_key:
            raise ConfigurationError("api_key is required")
        self.base_url = str(base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.verify_ssl = verify_ssl if verify_ssl is not None else settings.verify_ssl
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            verify=self.verify_ssl,
            headers={"Authorization": f"Bearer {api_key}", "Accept": "application/json"},
            transport=transport,
        )
        secret = webhook_secret if webhook_secret is not None else settings.webhook_secret
        self._webhook_verifier = SignatureVerifier(secret) if secret else None

    async def __aenter__(self) -> "GameHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def webhooks(self) -> SignatureVerifier:
        if self._webhook_verifier is None:
            raise ConfigurationError("Webhook secret not configured. Pass webhook_secret in client config.")
        return self._webhook_verifier

    def create_webhook_handler(self, secret: Union[bytes, str]) -> SignatureVerifier:
        return SignatureVerifier(secret)

    async def call(
        self,
        method: str,
        path: str,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> dict:
        """
        Issue one API request and fold the outcome into the
        ``{"success": ..., "data" | "error": ...}`` envelope. No retries.
        """
        try:
            response = await self.client.request(method, path, json=json, params=params)
        except httpx.RequestError as exc:
            logger.warning("GameHub request failed method=%s path=%s error=%s", method, path, exc)
            return {"success": False, "error": f"request error: {exc}"}
        if response.status_code >= 400:
            logger.warning(
                "GameHub request rejected method=%s path=%s status=%s",
                method,
                path,
                response.status_code,
            )
            return {"success": False, "error": response.text, "status_code": response.status_code}
        if not response.content:
            return {"success": True, "data": None}
        try:
            data = response.json()
        except ValueError:
            logger.warning("GameHub returned non-JSON body method=%s path=%s", method, path)
            return {"success": False, "error": "invalid JSON response", "status_code": response.status_code}
        return {"success": True, "data": data}

    def jackpot_widget_embed_code(self, token: str, options: Optional[Mapping] = None) -> str:
        return jackpot_widget_embed_code(self.base_url, token, options)

    def promotion_widget_embed_code(self, token: str, options: Optional[Mapping] = None) -> str:
        return promotion_widget_embed_code(self.base_url, token, options)

    def multi_session_iframe(self, swipe_url: str, options: Optional[Mapping] = None) -> str:
        return multi_session_iframe(swipe_url, options)
