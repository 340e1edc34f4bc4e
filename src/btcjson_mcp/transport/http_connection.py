"""HTTP connection to a bitcoind/btcd-compatible JSON-RPC server.

Requests are POSTed as JSON with HTTP basic authentication. The node
answers RPC-level failures with an error envelope (usually HTTP 500), so
non-2xx bodies are still handed back for decoding; only failures that
leave nothing to decode become :class:`TransportError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..protocol.errors import TransportError
from ..protocol.framing import build_request, parse_request
from ..protocol.kinds import DynamicValue
from ..protocol.parser import Reply, parse_reply, parse_result
from .reader import read_raw

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8332
DEFAULT_TIMEOUT = 30.0


class RPCConnection:
    """Manages the HTTP connection to a node.

    Usage::

        conn = RPCConnection(user="rpcuser", password="secret")
        conn.open()
        reply = conn.rpc_command("getblockhash", 1)
        conn.close()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        user: str = "",
        password: str = "",
        use_tls: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._auth = httpx.BasicAuth(user, password) if user or password else None
        self._timeout = timeout
        self._url = f"{'https' if use_tls else 'http'}://{host}:{port}/"
        self._client = client
        self._owns_client = client is None
        self._connected = client is not None

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def url(self) -> str:
        return self._url

    def open(self) -> None:
        """Create the underlying HTTP client. No request is made."""
        if self._connected:
            return
        self._client = httpx.Client(timeout=self._timeout)
        self._owns_client = True
        self._connected = True
        logger.info("Opened RPC connection to %s", self._url)

    def close(self) -> None:
        """Close the HTTP client if this connection created it."""
        if not self._connected:
            return
        try:
            if self._owns_client:
                self._client.close()
        finally:
            self._client = None
            self._connected = False
            logger.info("Closed RPC connection to %s", self._url)

    def __enter__(self) -> RPCConnection:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send(self, message: bytes) -> bytes:
        """POST a serialized request and return the raw reply body.

        Args:
            message: A serialized JSON-RPC request.

        Raises:
            InvalidRequest: If ``message`` has no method; nothing is sent.
            TransportError: If the node is unreachable or rejects the credentials.
            ReadError: If the reply body cannot be read.
        """
        request = parse_request(message)
        self.open()

        http_request = self._client.build_request(
            "POST",
            self._url,
            content=message,
            headers={"Content-Type": "application/json"},
        )
        send_kwargs: dict[str, Any] = {"stream": True}
        if self._auth is not None:
            send_kwargs["auth"] = self._auth

        logger.debug("Sending %s (id=%s) to %s", request.method, request.id, self._url)
        try:
            response = self._client.send(http_request, **send_kwargs)
        except httpx.TransportError as e:
            raise TransportError(f"Could not reach {self._url}: {e}") from e

        body = read_raw(response)
        status = response.status_code
        if status in (401, 403):
            raise TransportError(
                f"Authentication rejected by {self._url} (HTTP {status})"
            )
        if status >= 400 and not body:
            raise TransportError(f"HTTP {status} from {self._url}")
        return body

    def rpc_command(self, command: str, *args: DynamicValue) -> Reply:
        """Validate, send and decode a single command."""
        request = build_request(command, *args)
        reply = parse_reply(self.send(request.to_bytes()))
        if reply.id is not None and reply.id != request.id:
            logger.warning(
                "Reply id %r does not match request id %r for %s",
                reply.id, request.id, command,
            )
        return reply

    def rpc_raw_command(self, message: bytes) -> Reply:
        """Send an already-serialized request and decode the reply."""
        return parse_reply(self.send(message))

    def call(self, command: str, *args: DynamicValue):
        """Send a command and return its (possibly typed) result.

        Raises:
            RemoteError: If the node replies with an error.
        """
        return parse_result(command, self.rpc_command(command, *args))
