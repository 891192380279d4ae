import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from emoclass.core.config import Settings, settings as default_settings
from emoclass.core.errors import DispatchFailure

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotifierConfig:
    bot_token: Optional[str]
    chat_id: Optional[str]
    api_base: str = "https://api.telegram.org"
    timeout_seconds: float = 5.0

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token) and bool(self.chat_id)

    @classmethod
    def from_settings(cls, s: Settings = default_settings) -> "NotifierConfig":
        return cls(
            bot_token=s.TELEGRAM_BOT_TOKEN,
            chat_id=s.TELEGRAM_CHAT_ID,
            api_base=s.TELEGRAM_API_BASE.rstrip("/"),
            timeout_seconds=s.TELEGRAM_TIMEOUT_SECONDS,
        )


class TelegramNotifier:
    """
    Sends plain-text messages to one Telegram chat through the Bot API.
    One attempt per call, no retry; every failure is logged and reported as False.
    """

    def __init__(self, config: NotifierConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._transport = transport

    def send(self, text: str) -> bool:
        try:
            self._post(text)
        except DispatchFailure as e:
            log.error("Telegram alert not sent: %s", e)
            return False
        log.info("Telegram alert sent to chat %s", self.config.chat_id)
        return True

    def _post(self, text: str) -> None:
        if not self.config.enabled:
            raise DispatchFailure("Telegram credentials not configured")

        url = f"{self.config.api_base}/bot{self.config.bot_token}/sendMessage"
        timeout = httpx.Timeout(self.config.timeout_seconds)
        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                r = client.post(url, json={"chat_id": self.config.chat_id, "text": text})
                r.raise_for_status()
        except httpx.TimeoutException as e:
            raise DispatchFailure(f"Telegram API timeout after {self.config.timeout_seconds}s") from e
        except httpx.HTTPStatusError as e:
            raise DispatchFailure(
                f"Telegram API HTTP error: {e.response.status_code}",
                {"body": e.response.text[:200]},
            ) from e
        except httpx.RequestError as e:
            raise DispatchFailure(f"Telegram API unreachable: {type(e).__name__}") from e
        except httpx.InvalidURL as e:
            raise DispatchFailure("Telegram API base URL is invalid") from e
