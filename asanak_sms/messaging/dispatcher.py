from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from asanak_sms.messaging.client import AsanakSmsClient
from asanak_sms.messaging.errors import HttpError, SoapFaultError
from asanak_sms.ops.metrics import Timer
from asanak_sms.utils.phone import mask_phone

log = logging.getLogger("asanak.dispatcher")


class SmsDispatcher:
    """Fire-and-report wrapper: failures come back as {"ok": False, ...} instead of raising."""

    def __init__(self, client: Optional[AsanakSmsClient] = None):
        self.client = client

    async def send_sms(self, to_number: str, text: str) -> Dict[str, Any]:
        timer = Timer()
        log.info(
            "message_send_attempt",
            extra={"extra": {"event": "message_send_attempt", "channel": "sms", "dest": mask_phone(to_number)}},
        )
        try:
            if not self.client:
                self.client = AsanakSmsClient()
            raw = await self.client.send(to_number, text)
            log.info(
                "message_send_result",
                extra={
                    "extra": {
                        "event": "message_send_result",
                        "channel": "sms",
                        "dest": mask_phone(to_number),
                        "ok": True,
                        "latency_ms": timer.ms(),
                    }
                },
            )
            return {"ok": True, "channel": "sms", "response": raw}
        except Exception as e:
            log.error(
                "message_send_exception",
                extra={
                    "extra": {
                        "event": "message_send_exception",
                        "channel": "sms",
                        "dest": mask_phone(to_number),
                        "error_type": type(e).__name__,
                        "message": str(e),
                        "latency_ms": timer.ms(),
                    }
                },
                exc_info=True,
            )
            result: Dict[str, Any] = {"ok": False, "channel": "sms", "error_type": type(e).__name__, "message": str(e)}
            if isinstance(e, SoapFaultError):
                result["code"] = e.code
            elif isinstance(e, HttpError):
                result["status_code"] = e.status_code
            return result
