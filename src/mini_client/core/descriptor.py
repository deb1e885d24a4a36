"""Service descriptor: what a service exposes, as received from /api/exposed or built locally."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OperationDescriptor(BaseModel):
    """One exposed operation. params order maps positional arguments to named fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    group: str
    id: str
    params: list[str] = Field(default_factory=list)
    path: str | None = None
    has_buffer_input: bool = False
    has_stream_input: bool = False

    @property
    def serialized(self) -> bool:
        """JSON round-trip (and validation) applies unless a raw payload is expected."""
        return not self.has_buffer_input and not self.has_stream_input


class ServiceDescriptor(BaseModel):
    """Service name, version and its ordered operations. Replaced wholesale on each discovery."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    version: str | None = None
    apis: list[OperationDescriptor] = Field(default_factory=list)

    @property
    def full_version(self) -> str:
        return f"{self.name}@{self.version}"
