"""
mini-client — lazy client for mini-service style APIs.
Operations run in-process (local transport) or over HTTP (http transport), and are
discovered on first call.
"""
from mini_client.client import Client, LazyOperation, get_client
from mini_client.core import (
    CHECKSUM_HEADER,
    ClientError,
    Config,
    ConfigurationError,
    Group,
    OperationError,
    ProtocolError,
    RemoteIncompatibilityError,
    ValidationError,
    api,
    compute_checksum,
)

__all__ = [
    "CHECKSUM_HEADER",
    "Client",
    "ClientError",
    "Config",
    "ConfigurationError",
    "Group",
    "LazyOperation",
    "OperationError",
    "ProtocolError",
    "RemoteIncompatibilityError",
    "ValidationError",
    "api",
    "compute_checksum",
    "get_client",
]
