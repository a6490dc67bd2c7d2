import hmac
import hashlib
from typing import Optional, Union

from gamehub.exceptions import AuthenticationError, ConfigurationError
from gamehub.parser import WebhookPayloadParser
from gamehub.schemas.webhook_schemas import WebhookPayload


def _as_bytes(value: Union[bytes, str]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def compute_signature(secret: Union[bytes, str], raw_body: Union[bytes, str]) -> str:
    return hmac.new(_as_bytes(secret), _as_bytes(raw_body), hashlib.sha256).hexdigest()


class SignatureVerifier:
    """
    Checks the hex HMAC-SHA256 signature GameHub sends with every webhook.

    The secret is fixed at construction; an empty secret is rejected so a
    misconfigured receiver cannot accept unsigned traffic.
    """

    __slots__ = ("_secret", "_parser")

    def __init__(self, secret: Union[bytes, str, None], parser: Optional[WebhookPayloadParser] = None):
        if not secret:
            raise ConfigurationError("webhook secret is required")
        self._secret = _as_bytes(secret)
        self._parser = parser or WebhookPayloadParser()

    def verify(self, raw_body: Union[bytes, str], signature_hex: Optional[str]) -> bool:
        if not isinstance(signature_hex, str) or not signature_hex:
            return False
        expected = compute_signature(self._secret, raw_body)
        # compare bytes: compare_digest raises on non-ASCII str input
        return hmac.compare_digest(expected.encode("ascii"), signature_hex.encode("utf-8", "replace"))

    def verify_and_parse(self, raw_body: Union[bytes, str], signature_hex: Optional[str]) -> WebhookPayload:
        if not self.verify(raw_body, signature_hex):
            raise AuthenticationError("invalid webhook signature")
        return self._parser.parse(raw_body)
