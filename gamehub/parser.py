import json
from typing import Union

from pydantic import ValidationError

from gamehub.exceptions import MalformedPayloadError
from gamehub.schemas.webhook_schemas import WebhookPayload


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not allowed")


class WebhookPayloadParser:
    """
    Decodes an untrusted webhook body into a ``WebhookPayload``.

    Missing fields fall back to their defaults; only undecodable JSON, a
    non-object top level or a wrongly typed field is rejected.
    """

    def parse(self, raw_body: Union[bytes, str]) -> WebhookPayload:
        try:
            data = json.loads(raw_body, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise MalformedPayloadError(f"Invalid JSON payload: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedPayloadError(
                f"Webhook payload must be a JSON object, got {type(data).__name__}"
            )
        try:
            return WebhookPayload.from_raw(data)
        except ValidationError as exc:
            raise MalformedPayloadError(
                "Webhook payload has invalid field types",
                errors=exc.errors(include_url=False),
            ) from exc


def parse_payload(raw_body: Union[bytes, str]) -> WebhookPayload:
    return WebhookPayloadParser().parse(raw_body)
