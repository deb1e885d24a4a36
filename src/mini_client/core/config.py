"""Client options: defaults, deep merge, environment and deprecated keys."""
from __future__ import annotations

import logging
import os
import warnings
from collections.abc import Mapping
from typing import Any

DEFAULT_TIMEOUT = 20.0


class Config:
    """
    Helpers to build client options from the environment.
    Use with get_client(Config.load_from_env(name="sample-service")).
    """

    @classmethod
    def load_from_env(cls, prefix: str = "MINI_CLIENT_", **defaults: Any) -> dict[str, Any]:
        """
        Load from os.environ with prefix and defaults.
        URI, TIMEOUT and TYPE go under "transport", other keys stay top-level (lowercased).
        """
        result = dict(defaults)
        transport = dict(result.get("transport") or {})
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name == "timeout":
                transport["timeout"] = float(value)
            elif name in ("uri", "type"):
                transport[name] = value.strip()
            elif name:
                result[name] = value
        if transport:
            result["transport"] = transport
        return result

    @staticmethod
    def service_key(name: str) -> str:
        """Normalized service name: "Sample-Service" and "SAMPLE_SERVICE" both give "sample_service"."""
        return name.strip().lower().replace("-", "_")

    @classmethod
    def services_from_env(cls, suffix: str = "_SERVICE_URL") -> dict[str, str]:
        """Known service URIs, one per <NAME>_SERVICE_URL variable, keyed by service_key(NAME)."""
        return {
            cls.service_key(key[: -len(suffix)]): value.strip()
            for key, value in os.environ.items()
            if value and key.endswith(suffix) and key != suffix
        }

    @classmethod
    def service_uri(cls, name: str) -> str | None:
        """URI of a named service from the environment, if any."""
        return cls.services_from_env().get(cls.service_key(name))


def merge_options(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Deep merge: nested mappings are merged, any other value replaced by later sources."""
    result: dict[str, Any] = {}
    for source in sources:
        for key, value in (source or {}).items():
            if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
                result[key] = merge_options(result[key], value)
            elif isinstance(value, Mapping):
                result[key] = merge_options(value)
            else:
                result[key] = value
    return result


def build_options(options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Defaults + user options, with deprecated remote/timeout keys moved under transport."""
    options = dict(options or {})
    remote = options.pop("remote", None)
    timeout = options.pop("timeout", None)
    defaults = {
        "logger": logging.getLogger("mini_client"),
        "transport": {"type": "http" if remote is not None else "local"},
    }
    merged = merge_options(defaults, options)
    if remote is not None:
        warnings.warn(
            'mini-client: "remote" option has been deprecated. Use transport.uri instead',
            DeprecationWarning,
            stacklevel=3,
        )
        merged["transport"]["uri"] = remote
    if timeout is not None:
        warnings.warn(
            'mini-client: "timeout" option has been deprecated. Use transport.timeout instead',
            DeprecationWarning,
            stacklevel=3,
        )
        merged["transport"]["timeout"] = timeout
    return merged
