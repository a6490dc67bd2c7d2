import logging
from enum import Enum
from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    api_key: Optional[str] = None
    base_url: AnyHttpUrl = "https://api.iplaygames.ai"
    timeout: float = 30.0
    verify_ssl: bool = True
    webhook_secret: Optional[str] = None
    signature_header: str = "X-Signature"
    hub_webhook_url: AnyHttpUrl = "http://localhost:8000/webhooks/gamehub"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return value.upper()

settings = Settings()

class WebhookType(str, Enum):
    AUTHENTICATE = "authenticate"
    BALANCE_CHECK = "balance_check"
    BET = "bet"
    WIN = "win"
    ROLLBACK = "rollback"
    REWARD = "reward"

TRANSACTION_TYPES = frozenset({
    WebhookType.BET,
    WebhookType.WIN,
    WebhookType.ROLLBACK,
    WebhookType.REWARD,
})
