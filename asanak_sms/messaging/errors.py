from __future__ import annotations

from typing import List, Optional


class AsanakSmsError(Exception):
    """Base class for every failure raised by the gateway client."""


class ConfigurationError(AsanakSmsError, RuntimeError):
    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"AsanakSms: missing required {', '.join(self.missing)}")


class ValidationError(AsanakSmsError, ValueError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"AsanakSms.send: {field} is required")


class HttpError(AsanakSmsError):
    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = int(status_code)
        self.reason = reason or "Request failed"
        super().__init__(f"HTTP {self.status_code}: {self.reason}")


class RequestTimeoutError(AsanakSmsError, TimeoutError):
    def __init__(self, message: str = "Request timed out"):
        super().__init__(message)


class NetworkError(AsanakSmsError):
    pass


class SoapFaultError(AsanakSmsError):
    """
    The gateway answered 2xx with a SOAP fault body.
    `response` keeps the raw XML for diagnostics.
    """

    def __init__(self, code: str, message: str, response: str = ""):
        self.code = code
        self.message = message
        self.response = response
        super().__init__(message)
