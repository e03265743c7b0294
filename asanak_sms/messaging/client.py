from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

import httpx

from asanak_sms.config.settings import ClientConfig, Settings, resolve_client_config
from asanak_sms.messaging.errors import (
    HttpError,
    NetworkError,
    RequestTimeoutError,
    SoapFaultError,
    ValidationError,
)
from asanak_sms.messaging.soap import SoapFault, build_send_sms_envelope, parse_soap_fault
from asanak_sms.ops.metrics import Timer
from asanak_sms.ops.structured_logger import attach_debug_handler
from asanak_sms.utils.phone import mask_phone

log = logging.getLogger("asanak.client")

REQUEST_TIMEOUT_SECONDS = 20.0


def _post_url(endpoint: str) -> str:
    # The gateway is addressed by path only; '?wsdl' on the configured URL is not sent.
    parts = urlsplit(endpoint)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class AsanakSmsClient:
    """
    Client for Asanak's CompositeSmsGateway SOAP web service.

    Credentials not passed explicitly are read once from ASANAK_USERNAME,
    ASANAK_PASSWORD, ASANAK_SOURCE_NUMBER and ASANAK_WEBSERVICE. With
    debug=True every stage of a send is logged on the "asanak.client" logger;
    the password is never logged and destinations are masked. If the host
    application has no logging handlers, debug=True installs a JSON stdout
    handler on the "asanak" logger (see ops.structured_logger).
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        source_address: Optional[str] = None,
        endpoint: Optional[str] = None,
        debug: bool = False,
        *,
        settings: Optional[Settings] = None,
        config: Optional[ClientConfig] = None,
    ):
        if config is not None:
            self.config = config
        else:
            self.config = resolve_client_config(
                username=username,
                password=password,
                source_address=source_address,
                endpoint=endpoint,
                debug=debug,
                settings=settings,
            )
        if self.config.debug:
            attach_debug_handler()
        self._log_init()

    @classmethod
    def from_config(cls, config: ClientConfig) -> "AsanakSmsClient":
        # Taken as given; the environment is not consulted.
        return cls(config=config)

    @property
    def debug(self) -> bool:
        return self.config.debug

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    def _debug(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        if not self.config.debug:
            return
        log.log(level, event, extra={"extra": {"event": event, **fields}})

    def _log_init(self) -> None:
        self._debug(
            "asanak_init",
            endpoint=_post_url(self.config.endpoint),
            source_address=self.config.source_address,
            debug=self.config.debug,
        )

    def build_request_envelope(self, destination: str, message: str) -> str:
        return build_send_sms_envelope(
            username=self.config.username,
            password=self.config.password,
            source_address=self.config.source_address,
            destination=destination,
            message=message,
        )

    @staticmethod
    def parse_soap_fault(response_body: Any) -> Optional[SoapFault]:
        return parse_soap_fault(response_body)

    @staticmethod
    def mask_phone(phone: str) -> str:
        return mask_phone(phone)

    async def send(self, destination: str, message: str) -> str:
        """
        Send one SMS and return the gateway's raw XML response.

        Raises ValidationError before any network call when an argument is
        empty, HttpError for non-2xx statuses, SoapFaultError when a 2xx body
        carries a soap:Fault, RequestTimeoutError after 20s and NetworkError
        for transport failures.
        """
        if not destination:
            raise ValidationError("destination")
        if not message:
            raise ValidationError("message")

        xml = self.build_request_envelope(destination, message)
        payload = xml.encode("utf-8")
        timer = Timer()

        self._debug(
            "asanak_send_start",
            to=mask_phone(destination),
            message_length=len(message),
            payload_bytes=len(payload),
        )

        headers: Dict[str, str] = {
            "Content-Type": "text/xml; charset=utf-8",
            "Content-Length": str(len(payload)),
            "SOAPAction": "",
        }

        try:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as http:
                async with http.stream("POST", _post_url(self.config.endpoint), content=payload, headers=headers) as resp:
                    self._debug("asanak_http_response", status=resp.status_code, headers=dict(resp.headers))

                    if resp.status_code < 200 or resp.status_code >= 300:
                        err = HttpError(resp.status_code, resp.reason_phrase)
                        self._debug("asanak_http_error", logging.ERROR, status=err.status_code, error=str(err))
                        raise err

                    await resp.aread()
                    body = resp.text
        except httpx.TimeoutException as e:
            self._debug("asanak_timeout", logging.ERROR, error_type=type(e).__name__, latency_ms=timer.ms())
            raise RequestTimeoutError() from e
        except httpx.RequestError as e:
            # Transport failures and undecodable bodies alike.
            self._debug("asanak_network_error", logging.ERROR, error_type=type(e).__name__, message=str(e))
            raise NetworkError(str(e) or type(e).__name__) from e

        self._debug(
            "asanak_response_end",
            duration_ms=timer.ms(),
            response_bytes=len(body.encode("utf-8")),
            raw_xml=body,
        )

        fault = parse_soap_fault(body)
        if fault:
            self._debug("asanak_soap_fault", logging.ERROR, code=fault.code, message=fault.message)
            raise SoapFaultError(fault.code, fault.message, response=body)

        self._debug("asanak_send_success", to=mask_phone(destination), duration_ms=timer.ms())
        return body
