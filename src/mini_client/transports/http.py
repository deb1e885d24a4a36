"""
HTTP transport: operations run on a remote server following the mini-service convention.

- GET <uri>/api/exposed returns {name, version, apis}
- each operation is served at <uri><path>: GET without parameters, POST with a JSON body
  of named parameters, or POST with a raw octet-stream body for buffer/stream inputs
- every response carries the x-service-compat checksum header
"""
from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, AsyncIterator, Callable

import httpx
import pydantic

from mini_client.core.checksum import array_to_obj, compute_checksum
from mini_client.core.config import DEFAULT_TIMEOUT, Config
from mini_client.core.descriptor import OperationDescriptor, ServiceDescriptor
from mini_client.core.errors import ConfigurationError, OperationError, ProtocolError
from mini_client.core.serialization import dumps, loads
from mini_client.transports.compat import check_compatibility

if TYPE_CHECKING:
    from mini_client.client import Client

JSON_TYPE = "application/json"
OCTET_STREAM_TYPE = "application/octet-stream"
CHUNK_SIZE = 64 * 1024


async def _iter_chunks(stream: Any) -> AsyncIterator[bytes]:
    """Async byte chunks from a file-like object or a (a)sync iterator."""
    if hasattr(stream, "__aiter__"):
        async for chunk in stream:
            yield chunk
    elif hasattr(stream, "read"):
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    else:
        for chunk in stream:
            yield chunk


def _parse_body(response: httpx.Response) -> Any:
    """
    Body according to headers: octet-stream -> bytes, JSON -> parsed,
    no length (streamed) -> readable stream, empty -> None, otherwise text.
    """
    content_type = response.headers.get("content-type", "")
    if content_type.startswith(OCTET_STREAM_TYPE):
        return response.content
    if JSON_TYPE in content_type:
        return loads(response.content) if response.content else None
    if "content-length" not in response.headers or response.headers.get("transfer-encoding") == "chunked":
        return io.BytesIO(response.content)
    if not response.content:
        return None
    return response.text


def _raise_for_error(response: httpx.Response) -> None:
    """Structured error bodies ({statusCode, error, message}) become OperationError."""
    if not response.is_error:
        return
    payload = None
    if JSON_TYPE in response.headers.get("content-type", "") and response.content:
        try:
            payload = loads(response.content)
        except ValueError:
            payload = None
    if isinstance(payload, dict) and "message" in payload:
        raise OperationError(str(payload["message"]), status_code=response.status_code, payload=payload)
    response.raise_for_status()


class HttpTransport:
    """Options: transport.uri, transport.timeout (seconds), transport.http_transport, logger."""

    def __init__(self, options: dict[str, Any]) -> None:
        self.validate_options(options)
        self.options = options
        self.logger = options["logger"]
        transport = options["transport"]
        self.uri = transport["uri"].rstrip("/")
        self.timeout = transport.get("timeout", DEFAULT_TIMEOUT)
        self._http_transport: httpx.AsyncBaseTransport | None = transport.get("http_transport")

    @staticmethod
    def validate_options(options: dict[str, Any]) -> None:
        transport = options["transport"]
        if not transport.get("uri") and options.get("name"):
            uri = Config.service_uri(options["name"])
            if uri:
                transport["uri"] = uri
        uri = transport.get("uri")
        if not isinstance(uri, str) or not uri:
            raise ConfigurationError('Http client needs "transport.uri" option')
        try:
            parsed = httpx.URL(uri)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f'"transport.uri" must be a valid uri: {exc}') from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ConfigurationError(f'"transport.uri" must be an http(s) uri, got {uri!r}')
        timeout = transport.get("timeout", DEFAULT_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError('"transport.timeout" must be a positive number of seconds')

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._http_transport, timeout=self.timeout)

    async def fetch_exposed(self) -> tuple[ServiceDescriptor, str]:
        """Service descriptor and the checksum of its API list."""
        self.logger.info("Fetch exposed API from %s", self.uri)
        async with self._client() as http:
            response = await http.get(f"{self.uri}/api/exposed")
        response.raise_for_status()
        try:
            body = response.json()
            exposed = ServiceDescriptor.model_validate(body)
        except (ValueError, pydantic.ValidationError) as exc:
            raise ProtocolError(f"Malformed exposed API from {self.uri}: {exc}") from exc
        return exposed, compute_checksum(body.get("apis", []))

    async def register(self, client: Client) -> None:
        exposed, checksum = await self.fetch_exposed()
        client.version = exposed.full_version
        client.exposed = exposed
        for api in exposed.apis:
            client._registry.install(api.group, exposed.name, api.id, self._stub(client, api, checksum))
            self.logger.debug("API %s from %s loaded (%s)", api.id, api.group, client.version)

    async def _send(self, api: OperationDescriptor, args: tuple[Any, ...]) -> httpx.Response:
        url = f"{self.uri}{api.path}"
        async with self._client() as http:
            if not api.serialized:
                payload = args[0] if args else b""
                if isinstance(payload, (bytes, bytearray, memoryview)):
                    payload = bytes(payload)
                else:
                    payload = _iter_chunks(payload)
                return await http.post(
                    url,
                    content=payload,
                    headers={"content-type": OCTET_STREAM_TYPE},
                )
            if not api.params:
                return await http.get(url)
            return await http.post(
                url,
                content=dumps(array_to_obj(args, api.params)),
                headers={"content-type": JSON_TYPE},
            )

    def _stub(self, client: Client, api: OperationDescriptor, checksum: str) -> Callable[..., Any]:
        async def invoke(*args: Any) -> Any:
            response = await self._send(api, args)
            _raise_for_error(response)
            self.logger.debug("api %s from %s successfully invoked", api.id, api.group)
            return await check_compatibility(
                response, _parse_body(response), checksum, client, api.group, api.id, args
            )

        invoke.__name__ = api.id
        invoke.__qualname__ = f"{api.group}.{api.id}"
        return invoke
