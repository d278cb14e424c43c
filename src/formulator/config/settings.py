"""
Application configuration settings for the Formulator form handler.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from urllib.parse import urlparse

from dotenv import load_dotenv

from formulator.lib.exceptions import InvalidConfigurationException

DEFAULT_REQUEST_PATH = "/"
DEFAULT_REQUEST_METHOD = "POST"
DEFAULT_WEBHOOK_TIMEOUT = 10.0
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


def parse_field_list(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated list of field names, dropping blank entries."""
    if not value:
        return ()
    return tuple(name.strip() for name in value.split(",") if name.strip())


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Form handler configuration, read-only once built."""

    request_path: str = DEFAULT_REQUEST_PATH
    request_method: str = DEFAULT_REQUEST_METHOD
    honeypot_field: Optional[str] = None
    form_fields: Tuple[str, ...] = ()
    required_fields: Tuple[str, ...] = ()
    email_fields: Tuple[str, ...] = ()
    discord_webhook_url: Optional[str] = None
    slack_webhook_url: Optional[str] = None

    webhook_timeout: float = DEFAULT_WEBHOOK_TIMEOUT
    log_level: str = "INFO"
    log_file: Optional[str] = None
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    _list_fields = ("form_fields", "required_fields", "email_fields")

    def __post_init__(self):
        for name in self._list_fields:
            value = getattr(self, name)
            if isinstance(value, str):
                value = parse_field_list(value)
            object.__setattr__(self, name, tuple(value))
        object.__setattr__(self, "request_method", (self.request_method or "").upper())
        self.validate()

    def validate(self) -> None:
        """Reject values the request handler cannot work with."""
        if not self.request_path.startswith("/"):
            raise InvalidConfigurationException(
                "REQUEST_PATH must start with '/'",
                {"request_path": self.request_path}
            )
        if not self.request_method:
            raise InvalidConfigurationException("REQUEST_METHOD must not be empty")
        if self.webhook_timeout <= 0:
            raise InvalidConfigurationException(
                "WEBHOOK_TIMEOUT must be positive",
                {"webhook_timeout": self.webhook_timeout}
            )
        for name in ("discord_webhook_url", "slack_webhook_url"):
            url = getattr(self, name)
            if url is None:
                continue
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise InvalidConfigurationException(
                    f"{name.upper()} must be an http(s) URL",
                    {name: url}
                )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_env_file: bool = True
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            load_env_file: Load a .env file into os.environ first

        Returns:
            Settings instance

        Raises:
            InvalidConfigurationException: If a value cannot be used
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        try:
            webhook_timeout = float(environ.get("WEBHOOK_TIMEOUT", DEFAULT_WEBHOOK_TIMEOUT))
        except ValueError:
            raise InvalidConfigurationException(
                "WEBHOOK_TIMEOUT must be a number",
                {"webhook_timeout": environ.get("WEBHOOK_TIMEOUT")}
            )

        try:
            api_port = int(environ.get("API_PORT", DEFAULT_API_PORT))
        except ValueError:
            raise InvalidConfigurationException(
                "API_PORT must be an integer",
                {"api_port": environ.get("API_PORT")}
            )

        return cls(
            request_path=environ.get("REQUEST_PATH", DEFAULT_REQUEST_PATH),
            request_method=environ.get("REQUEST_METHOD", DEFAULT_REQUEST_METHOD),
            honeypot_field=_optional(environ.get("HONEYPOT_FIELD")),
            form_fields=parse_field_list(environ.get("FORM_FIELDS")),
            required_fields=parse_field_list(environ.get("REQUIRED_FIELDS")),
            email_fields=parse_field_list(environ.get("EMAIL_FIELDS")),
            discord_webhook_url=_optional(environ.get("DISCORD_WEBHOOK_URL")),
            slack_webhook_url=_optional(environ.get("SLACK_WEBHOOK_URL")),
            webhook_timeout=webhook_timeout,
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
            log_file=_optional(environ.get("LOG_FILE")),
            api_host=environ.get("API_HOST", DEFAULT_API_HOST),
            api_port=api_port,
        )

    def masked(self) -> dict:
        """Settings as a dict with webhook URLs reduced to scheme and host."""
        data = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if name.endswith("_webhook_url") and value:
                parsed = urlparse(value)
                value = f"{parsed.scheme}://{parsed.netloc}/***"
            elif isinstance(value, tuple):
                value = list(value)
            data[name] = value
        return data
