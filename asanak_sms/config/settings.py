from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from asanak_sms.messaging.errors import ConfigurationError

DEFAULT_ENDPOINT = "https://smsapi.asanak.ir/services/CompositeSmsGateway?wsdl"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Gateway credentials
    ASANAK_USERNAME: str = Field(default="")
    ASANAK_PASSWORD: str = Field(default="")
    ASANAK_SOURCE_NUMBER: str = Field(default="")  # sending line, e.g. 9821XXXX

    # Endpoint override (blank means the public web service)
    ASANAK_WEBSERVICE: str = Field(default="")


def get_settings() -> Settings:
    return Settings()


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)
    source_address: str = Field(min_length=1)
    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    debug: bool = Field(default=False)


def resolve_client_config(
    username: Optional[str] = None,
    password: Optional[str] = None,
    source_address: Optional[str] = None,
    endpoint: Optional[str] = None,
    debug: bool = False,
    settings: Optional[Settings] = None,
) -> ClientConfig:
    """
    Merge explicit options with the environment once, at construction time.
    Explicit values win; blank values fall through to ASANAK_* variables.
    """
    s = settings if settings is not None else get_settings()

    resolved = {
        "username": username or s.ASANAK_USERNAME,
        "password": password or s.ASANAK_PASSWORD,
        "source_address": source_address or s.ASANAK_SOURCE_NUMBER,
    }
    missing: List[str] = [name for name, value in resolved.items() if not value]
    if missing:
        raise ConfigurationError(missing)

    return ClientConfig(
        **resolved,
        endpoint=endpoint or s.ASANAK_WEBSERVICE or DEFAULT_ENDPOINT,
        debug=bool(debug),
    )
