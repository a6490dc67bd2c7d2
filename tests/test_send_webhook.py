import asyncio
import json

import httpx

from conftest import SECRET
from gamehub.commands.send_webhook import run, send_webhook
from gamehub.config import settings
from gamehub.security import SignatureVerifier, compute_signature


def run_sync(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def write_payload(tmp_path, payload: dict):
    path = tmp_path / "bet.json"
    path.write_bytes(json.dumps(payload).encode("utf-8"))
    return path


def test_send_webhook_signs_raw_body():
    captured = {}

    def receiver(request: httpx.Request) -> httpx.Response:
        captured["body"] = request.content
        captured["signature"] = request.headers[settings.signature_header]
        return httpx.Response(200, json={"status": "success", "balance": 9050})

    body = b'{"type":"bet","player_id":"p1","currency":"USD","amount":500,"transaction_id":42}'
    response = run_sync(send_webhook(body, SECRET, "http://hub.test/webhooks/gamehub", httpx.MockTransport(receiver)))

    assert response.status_code == 200
    assert captured["body"] == body
    assert SignatureVerifier(SECRET).verify(captured["body"], captured["signature"])


def test_run_sign_only_prints_signature(tmp_path, capsys):
    path = write_payload(tmp_path, {"type": "balance_check", "player_id": "p1"})
    exit_code = run_sync(run([str(path), "--secret", SECRET, "--sign-only"]))
    assert exit_code == 0
    assert capsys.readouterr().out.strip() == compute_signature(SECRET, path.read_bytes())


def test_run_posts_and_reports_status(tmp_path, capsys):
    path = write_payload(tmp_path, {"type": "bet", "player_id": "p1", "amount": 500, "transaction_id": 1})
    statuses = [200, 401]
    transport = httpx.MockTransport(lambda request: httpx.Response(statuses.pop(0), json={"status": "success"}))

    ok = run_sync(run([str(path), "--secret", SECRET, "--url", "http://hub.test/hook"], transport=transport))
    rejected = run_sync(run([str(path), "--secret", SECRET, "--url", "http://hub.test/hook"], transport=transport))

    assert ok == 0
    assert rejected == 1
    assert '"status"' in capsys.readouterr().out


def test_run_without_secret_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "webhook_secret", None)
    path = write_payload(tmp_path, {"type": "bet"})
    assert run_sync(run([str(path), "--secret", ""])) == 2


def test_run_reports_connection_errors(tmp_path):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    path = write_payload(tmp_path, {"type": "bet"})
    exit_code = run_sync(run([str(path), "--secret", SECRET], transport=httpx.MockTransport(refuse)))
    assert exit_code == 1
