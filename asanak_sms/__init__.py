from asanak_sms.config.settings import ClientConfig, Settings
from asanak_sms.messaging.client import AsanakSmsClient
from asanak_sms.messaging.dispatcher import SmsDispatcher
from asanak_sms.messaging.errors import (
    AsanakSmsError,
    ConfigurationError,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    SoapFaultError,
    ValidationError,
)
from asanak_sms.messaging.soap import SoapFault

__all__ = [
    "AsanakSmsClient",
    "AsanakSmsError",
    "ClientConfig",
    "ConfigurationError",
    "HttpError",
    "NetworkError",
    "RequestTimeoutError",
    "Settings",
    "SmsDispatcher",
    "SoapFault",
    "SoapFaultError",
    "ValidationError",
]
