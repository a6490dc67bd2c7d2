from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

from gamehub.config import TRANSACTION_TYPES, WebhookType


# attribute -> wire keys in precedence order; the first key holding a non-null value wins
FIELD_ALIASES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("type", ("type",)),
    ("player_id", ("player_id",)),
    ("currency", ("currency",)),
    ("game_id", ("game_id",)),
    ("game_type", ("game_type",)),
    ("timestamp", ("timestamp",)),
    ("transaction_id", ("transaction_id",)),
    ("amount_minor_units", ("amount",)),
    ("session_id", ("session_id",)),
    ("round_id", ("round_id",)),
    ("reward_type", ("reward_type",)),
    ("reward_title", ("reward_title",)),
    ("is_freespin", ("is_freespin_round", "is_freespin")),
    ("freespin_id", ("freespin_id", "bonus_id")),
    ("freespin_total", ("freespin_total",)),
    ("freespins_remaining", ("freespins_remaining", "freespin_left")),
    ("freespin_round_number", ("freespin_round_number",)),
    ("freespin_total_winnings", ("freespin_total_winnings",)),
)


def resolve_aliases(data: Mapping[str, Any]) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for attribute, keys in FIELD_ALIASES:
        for key in keys:
            if data.get(key) is not None:
                resolved[attribute] = data[key]
                break
    return resolved


class WebhookPayload(BaseModel):
    """
    Read-only view over one decoded GameHub webhook.

    Build it with ``from_raw`` so wire aliases are resolved; ``amount_minor_units``
    is the integer cent value exactly as sent.
    """
    model_config = ConfigDict(frozen=True)

    type: StrictStr = ""
    player_id: StrictStr = ""
    currency: StrictStr = ""
    game_id: Optional[StrictInt] = None
    game_type: Optional[StrictStr] = None
    timestamp: StrictStr = ""

    transaction_id: Optional[StrictInt] = None
    amount_minor_units: Optional[StrictInt] = Field(default=None, ge=0)
    session_id: Optional[StrictStr] = None
    round_id: Optional[StrictStr] = None

    reward_type: Optional[StrictStr] = None
    reward_title: Optional[StrictStr] = None

    is_freespin: StrictBool = False
    freespin_id: Optional[StrictStr] = None
    freespin_total: Optional[StrictInt] = None
    freespins_remaining: Optional[StrictInt] = None
    freespin_round_number: Optional[StrictInt] = None
    freespin_total_winnings: Optional[Decimal] = None

    raw: Mapping[str, Any] = Field(default_factory=dict, repr=False, validate_default=True)

    @field_validator("freespin_total_winnings", mode="before")
    @classmethod
    def _winnings_from_json_number(cls, value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("freespin_total_winnings must be a JSON number")
        # repr() keeps the shortest decimal form, so 12.3 stays Decimal("12.3")
        return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)

    @field_validator("raw")
    @classmethod
    def _seal_raw(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> "WebhookPayload":
        return cls(raw=data, **resolve_aliases(data))

    @property
    def webhook_type(self) -> Optional[WebhookType]:
        try:
            return WebhookType(self.type)
        except ValueError:
            return None

    @property
    def is_transaction(self) -> bool:
        return self.webhook_type in TRANSACTION_TYPES

    def is_authenticate(self) -> bool:
        return self.type == WebhookType.AUTHENTICATE.value

    def is_balance_check(self) -> bool:
        return self.type == WebhookType.BALANCE_CHECK.value

    def is_bet(self) -> bool:
        return self.type == WebhookType.BET.value

    def is_win(self) -> bool:
        return self.type == WebhookType.WIN.value

    def is_rollback(self) -> bool:
        return self.type == WebhookType.ROLLBACK.value

    def is_reward(self) -> bool:
        return self.type == WebhookType.REWARD.value

    def amount_in_major_units(self) -> Optional[Decimal]:
        """
        Amount in major currency units, e.g. 500 cents -> Decimal("5.00").
        """
        if self.amount_minor_units is None:
            return None
        # shift the exponent directly; arithmetic would round past 28 digits
        sign, digits, exponent = Decimal(self.amount_minor_units).as_tuple()
        return Decimal((sign, digits, exponent - 2))

    def get(self, key: str, default: Any = None) -> Any:
        value = self.raw.get(key)
        return default if value is None else value
