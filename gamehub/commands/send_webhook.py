import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

import httpx

from gamehub.config import settings
from gamehub.logging_config import get_logger
from gamehub.security import compute_signature

logger = get_logger(__name__)


async def send_webhook(
    body: bytes,
    secret: str,
    url: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """
    Sign ``body`` the way GameHub does and POST it once to ``url``.
    """
    headers = {
        "Content-Type": "application/json",
        settings.signature_header: compute_signature(secret, body),
    }
    async with httpx.AsyncClient(timeout=settings.timeout, transport=transport) as client:
        response = await client.post(url, content=body, headers=headers)
    logger.info("Delivered webhook url=%s status=%s bodyBytes=%s", url, response.status_code, len(body))
    return response


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sign a GameHub webhook payload and send it to a receiver."
    )
    parser.add_argument("payload", help="path to a JSON payload file, or '-' to read stdin")
    parser.add_argument("--url", default=str(settings.hub_webhook_url), help="receiver URL")
    parser.add_argument("--secret", default=settings.webhook_secret, help="shared webhook secret")
    parser.add_argument("--sign-only", action="store_true", help="print the signature and exit")
    return parser


def _read_payload(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


async def run(argv: Optional[Sequence[str]] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.secret:
        logger.error("No webhook secret: pass --secret or set WEBHOOK_SECRET")
        return 2
    body = _read_payload(args.payload)
    if args.sign_only:
        print(compute_signature(args.secret, body))
        return 0
    try:
        response = await send_webhook(body, args.secret, args.url, transport=transport)
    except httpx.RequestError as exc:
        logger.error("Webhook delivery failed url=%s error=%s", args.url, exc)
        return 1
    print(response.text)
    return 0 if response.status_code == 200 else 1


def main() -> None:
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
