"""
Local transport: runs the service in the same process as the client.
Groups are initialized one after the other; the first failure aborts the remaining ones.
"""
from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from mini_client.core.descriptor import ServiceDescriptor
from mini_client.core.enricher import is_api, publish
from mini_client.core.errors import ConfigurationError
from mini_client.core.groups import extract_groups

if TYPE_CHECKING:
    from mini_client.client import Client


class LocalTransport:
    """Options: name, version, init or groups (+ group_opts), logger."""

    def __init__(self, options: dict[str, Any]) -> None:
        self.validate_options(options)
        self.options = options
        self.logger = options["logger"]

    @staticmethod
    def validate_options(options: dict[str, Any]) -> None:
        for key in ("name", "version"):
            value = options.get(key)
            if not isinstance(value, str) or not value:
                raise ConfigurationError('Local client needs "name" and "version" options')

    async def register(self, client: Client) -> None:
        name, version = self.options["name"], self.options["version"]
        exposed = ServiceDescriptor(name=name, version=version)
        client.version = exposed.full_version
        client.exposed = exposed
        groups, group_opts = extract_groups(self.options)

        for group in groups:
            initialized = group.init({**group_opts[group.name], "logger": self.logger})
            if not inspect.isawaitable(initialized):
                raise ConfigurationError(f"{group.name} init() method didn't return an awaitable")
            apis = await initialized
            if not is_api(apis):
                self.logger.debug("group %s exposes no API", group.name)
                continue

            for id, fn in apis.items():
                descriptor, operation = publish(group.name, id, fn)
                client._registry.install(group.name, name, id, operation)
                exposed.apis.append(descriptor)
                self.logger.debug("API %s from %s loaded", id, group.name)
        self.logger.debug("local client ready (%s)", client.version)
