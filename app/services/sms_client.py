# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: SMS client — outbound text messages through the Twilio REST API.
Falls back to logging the message when Twilio credentials are not configured.
"""

from typing import Optional

import httpx

from app.core.config import settings
from app.core.errors import NotificationError
from app.core.logging import get_logger
from app.metrics import SMS_LATENCY, SMS_SENT

logger = get_logger(__name__)


class SmsClient:
    """Fire-and-forget SMS sender."""

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        from_number: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._account_sid = settings.TWILIO_ACCOUNT_SID if account_sid is None else account_sid
        self._auth_token = settings.TWILIO_AUTH_TOKEN if auth_token is None else auth_token
        self._from_number = settings.TWILIO_PHONE_NUMBER if from_number is None else from_number
        self._api_url = (api_url or settings.TWILIO_API_URL).rstrip("/")
        self._timeout = settings.SMS_TIMEOUT if timeout is None else timeout

    @property
    def enabled(self) -> bool:
        return bool(self._account_sid and self._auth_token and self._from_number)

    def send(self, to: str, body: str) -> str:
        """Send one SMS. Any failure to deliver is raised as NotificationError."""
        if not self.enabled:
            logger.info("[MOCK SMS] To: %s | %s", to, body)
            SMS_SENT.labels(status="mocked").inc()
            return "mocked"

        url = f"{self._api_url}/Accounts/{self._account_sid}/Messages.json"
        try:
            with SMS_LATENCY.time():
                with httpx.Client(timeout=self._timeout, auth=(self._account_sid, self._auth_token)) as client:
                    resp = client.post(url, data={"Body": body, "From": self._from_number, "To": to})
        except Exception as exc:
            SMS_SENT.labels(status="failed").inc()
            raise NotificationError(to, str(exc)) from exc

        if resp.status_code >= 300:
            SMS_SENT.labels(status="failed").inc()
            raise NotificationError(to, f"provider returned HTTP {resp.status_code}")

        SMS_SENT.labels(status="sent").inc()
        logger.info("SMS sent: recipient=%s, status=%d", to, resp.status_code)
        return "sent"
