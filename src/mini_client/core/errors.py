"""Client errors: configuration, validation, operation failures and protocol violations."""
from __future__ import annotations

from typing import Any


class ClientError(Exception):
    """Base error for everything raised by mini-client itself."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ClientError):
    """Missing or malformed client options or group declarations."""


class OperationError(ClientError):
    """
    Operation failed, locally or on the remote server.
    status_code and payload keep the structured error (e.g. a 401 body) when there is one.
    """

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def prefixed(self, prefix: str) -> OperationError:
        """Same error (type, status, payload) with a prefixed message."""
        return type(self)(f"{prefix}{self.message}", status_code=self.status_code, payload=self.payload)


class ValidationError(OperationError):
    """Operation arguments rejected by the operation's parameter schema."""

    def __init__(self, message: str, status_code: int | None = 400, payload: Any = None) -> None:
        super().__init__(message, status_code=status_code, payload=payload)


class RemoteIncompatibilityError(ClientError):
    """Remote server API changed and the invoked operation is no longer supported."""


class ProtocolError(ClientError):
    """Remote server broke the convention: no checksum header, malformed descriptor."""
