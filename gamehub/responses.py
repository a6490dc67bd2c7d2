"""
Canonical reply bodies returned to GameHub for webhook calls.

Balances come in as major units (e.g. dollars) and always leave as integer
minor units, rounded half away from zero.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Union

Amount = Union[Decimal, int, float, str]

MINOR_UNITS_PER_MAJOR = Decimal(100)


def to_minor_units(amount: Amount) -> int:
    if isinstance(amount, float):
        amount = repr(amount)
    cents = Decimal(amount) * MINOR_UNITS_PER_MAJOR
    return int(cents.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def success_response(balance: Amount, extra: Optional[Mapping[str, Any]] = None) -> dict:
    response = {
        "status": "success",
        "balance": to_minor_units(balance),
    }
    if extra:
        response.update(extra)
    return response


def error_response(code: str, message: str) -> dict:
    return {
        "status": "error",
        "error_code": code,
        "error_message": message,
    }


def player_not_found_response() -> dict:
    return error_response("PLAYER_NOT_FOUND", "Player not found")


def insufficient_funds_response(balance: Amount) -> dict:
    response = error_response("INSUFFICIENT_FUNDS", "Insufficient funds")
    response["balance"] = to_minor_units(balance)
    return response


def already_processed_response(balance: Amount) -> dict:
    """
    Reply for a replayed transaction: a success carrying ``already_processed``.
    """
    return success_response(balance, {"already_processed": True})
