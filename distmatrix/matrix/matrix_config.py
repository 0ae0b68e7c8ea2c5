"""
Configuration for the distance matrix client.

Holds the static, read-only settings shared by every request a client makes:
credentials, account tier, language, units and the pacing/URL limits.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Union

from ..config.config_module import (
    ConfigError,
    get_bool_config,
    get_config,
    get_float_config,
    get_int_config,
    load_config,
)
from .matrix_errors import ClientConfigError
from .matrix_types import AccountTier, UnitSystem, parse_enum


DEFAULT_MAX_URL_LENGTH = 2000
DEFAULT_QUOTA_WAIT_SECONDS = 10.0
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class MatrixSettings:
    """Static configuration of a DistanceMatrixClient."""

    # Either an API key, or a client id with its URL-safe base64 signing secret
    api_key: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    account_tier: Union[AccountTier, str] = AccountTier.FREE
    language: str = "en"
    units: Union[UnitSystem, str] = UnitSystem.METRIC

    # The service rejects URLs longer than ~2000 characters after encoding
    max_url_length: int = DEFAULT_MAX_URL_LENGTH

    # Matches the service's rolling 10 second element window
    quota_wait_seconds: float = DEFAULT_QUOTA_WAIT_SECONDS

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    # Raise ElementStatusError instead of logging non-OK elements
    strict_elements: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        object.__setattr__(self, "account_tier", AccountTier.parse(self.account_tier))
        object.__setattr__(self, "units", parse_enum(UnitSystem, self.units, "unit system"))

        has_key = bool(self.api_key)
        has_client = bool(self.client_id) or bool(self.client_secret)

        if has_key and has_client:
            raise ClientConfigError(
                "Provide either an API key or a client id/secret pair, not both"
            )
        if not has_key and not has_client:
            raise ClientConfigError(
                "No credentials: an API key or a client id/secret pair is required"
            )
        if has_client:
            if not self.client_id or not self.client_secret:
                raise ClientConfigError("client_id and client_secret must be provided together")
            try:
                base64.b64decode(self.client_secret, altchars=b"-_", validate=True)
            except (binascii.Error, ValueError) as e:
                raise ClientConfigError(
                    f"client_secret is not valid URL-safe base64: {e}"
                )

        if not self.language or not self.language.strip():
            raise ClientConfigError("language cannot be empty")

        if self.max_url_length <= 0:
            raise ClientConfigError(
                f"max_url_length must be positive, got {self.max_url_length}"
            )
        if self.quota_wait_seconds < 0:
            raise ClientConfigError(
                f"quota_wait_seconds cannot be negative, got {self.quota_wait_seconds}"
            )
        if self.request_timeout <= 0:
            raise ClientConfigError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )

    @property
    def element_cap(self) -> int:
        """Maximum origins x destinations per request for this account tier."""
        return self.account_tier.element_cap

    @property
    def uses_signature(self) -> bool:
        return not self.api_key

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "MatrixSettings":
        """
        Build settings from DISTANCE_MATRIX_* environment variables.

        Args:
            env_path: Optional .env file loaded before reading the environment

        Raises:
            ClientConfigError: If a value is missing, malformed or inconsistent
        """
        if env_path:
            load_config(env_path)

        try:
            return cls(
                api_key=get_config("DISTANCE_MATRIX_API_KEY"),
                client_id=get_config("DISTANCE_MATRIX_CLIENT_ID"),
                client_secret=get_config("DISTANCE_MATRIX_CLIENT_SECRET"),
                account_tier=get_config("DISTANCE_MATRIX_ACCOUNT_TIER", "free"),
                language=get_config("DISTANCE_MATRIX_LANGUAGE", "en"),
                units=get_config("DISTANCE_MATRIX_UNITS", "metric"),
                max_url_length=get_int_config(
                    "DISTANCE_MATRIX_MAX_URL_LENGTH", DEFAULT_MAX_URL_LENGTH
                ),
                quota_wait_seconds=get_float_config(
                    "DISTANCE_MATRIX_QUOTA_WAIT_SECONDS", DEFAULT_QUOTA_WAIT_SECONDS
                ),
                request_timeout=get_float_config(
                    "DISTANCE_MATRIX_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
                ),
                strict_elements=get_bool_config("DISTANCE_MATRIX_STRICT_ELEMENTS"),
            )
        except ConfigError as e:
            raise ClientConfigError(str(e))
