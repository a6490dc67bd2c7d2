import json
import sys
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gamehub.config import WebhookType  # noqa: E402
from gamehub.main import create_app  # noqa: E402
from gamehub.responses import (  # noqa: E402
    already_processed_response,
    insufficient_funds_response,
    player_not_found_response,
    success_response,
)
from gamehub.router import WebhookRouter  # noqa: E402
from gamehub.security import compute_signature  # noqa: E402

SECRET = "test_secret_for_webhooks"


def encode(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


def signed(payload: dict, secret: str = SECRET):
    body = encode(payload)
    return body, compute_signature(secret, body)


class FakeLedger:
    """
    Integrator-side wallet kept in memory, balances in major units.
    """

    def __init__(self, balances: dict):
        self.balances = {player: Decimal(amount) for player, amount in balances.items()}
        self.processed: set = set()

    def authenticate(self, payload):
        if payload.player_id not in self.balances:
            return player_not_found_response()
        return success_response(self.balances[payload.player_id], {"player_id": payload.player_id})

    def balance(self, payload):
        if payload.player_id not in self.balances:
            return player_not_found_response()
        return success_response(self.balances[payload.player_id])

    def bet(self, payload):
        if payload.player_id not in self.balances:
            return player_not_found_response()
        if payload.transaction_id in self.processed:
            return already_processed_response(self.balances[payload.player_id])
        amount = payload.amount_in_major_units()
        if amount > self.balances[payload.player_id]:
            return insufficient_funds_response(self.balances[payload.player_id])
        self.balances[payload.player_id] -= amount
        self.processed.add(payload.transaction_id)
        return success_response(self.balances[payload.player_id])

    def win(self, payload):
        if payload.player_id not in self.balances:
            return player_not_found_response()
        if payload.transaction_id in self.processed:
            return already_processed_response(self.balances[payload.player_id])
        self.balances[payload.player_id] += payload.amount_in_major_units()
        self.processed.add(payload.transaction_id)
        return success_response(self.balances[payload.player_id])

    def router(self) -> WebhookRouter:
        router = WebhookRouter()
        router.register(WebhookType.AUTHENTICATE, self.authenticate)
        router.register(WebhookType.BALANCE_CHECK, self.balance)
        router.register(WebhookType.BET, self.bet)
        router.register(WebhookType.WIN, self.win)
        return router


@pytest.fixture
def ledger():
    return FakeLedger({"player_456": "100.50"})


@pytest.fixture
def client(ledger):
    app = create_app(ledger.router(), webhook_secret=SECRET)
    with TestClient(app) as client:
        yield client
