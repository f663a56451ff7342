"""Secret key provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
import base64
import binascii
import os

from ..domain.exceptions import ConfigurationError


class SecretKeyProvider(ABC):
    """Supplies a symmetric secret key."""

    __service_group__ = "service_hangar.key_providers"

    @abstractmethod
    def get_secret_key(self) -> bytes:
        """Return the secret key bytes."""


class EnvSecretKeyProvider(SecretKeyProvider):
    """Reads a base64 encoded key from an environment variable."""

    DEFAULT_VARIABLE = "SERVICE_HANGAR_SECRET_KEY"

    def __init__(self, variable: str = DEFAULT_VARIABLE):
        self.variable = variable

    def get_secret_key(self) -> bytes:
        value = os.environ.get(self.variable)
        if not value:
            raise ConfigurationError(f"Environment variable {self.variable} is not set")
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ConfigurationError(f"{self.variable} is not valid base64: {e}") from e
