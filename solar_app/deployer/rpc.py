"""Minimal JSON-RPC client for backend nodes."""

import base64
import itertools
import json
import socket
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import ParseResult, urlunparse
from urllib.request import Request, urlopen

from ..errors import RPCError
from ..logging.config import get_rpc_logger


def strip_credentials(url: ParseResult) -> str:
    """Render url without its user:password part."""
    netloc = url.netloc.rpartition("@")[2]
    return urlunparse(url._replace(netloc=netloc))


class JSONRPCClient:
    """JSON-RPC over HTTP POST with optional basic auth from the URL."""

    def __init__(
        self,
        url: ParseResult,
        platform: str,
        jsonrpc_version: str = "2.0",
        timeout_seconds: int = 30
    ):
        self.url = url
        self.endpoint = strip_credentials(url)
        self.jsonrpc_version = jsonrpc_version
        self.timeout_seconds = timeout_seconds
        self.logger = get_rpc_logger(__name__, platform, self.endpoint)
        self._ids = itertools.count(1)

        self._auth_header = None
        if url.username is not None:
            credentials = f"{url.username}:{url.password or ''}".encode("utf-8")
            self._auth_header = "Basic " + base64.b64encode(credentials).decode("ascii")

    def call(self, method: str, *params: Any) -> Any:
        """
        Invoke method and return its result.

        Raises:
            RPCError: On network failure, malformed response or an error reply
        """
        request_id = next(self._ids)
        payload = {
            "jsonrpc": self.jsonrpc_version,
            "id": request_id,
            "method": method,
            "params": list(params),
        }
        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(data)),
            "User-Agent": "solar/0.1",
        }
        if self._auth_header:
            headers["Authorization"] = self._auth_header

        req = Request(self.endpoint, data=data, headers=headers, method="POST")

        self.logger.debug("RPC request", method=method, request_id=request_id)

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                body = response.read().decode("utf-8")
        except HTTPError as e:
            # Bitcoin-style nodes report RPC errors with a 500 and a JSON body
            body = e.read().decode("utf-8", errors="replace") if e.fp else ""
            if not body:
                raise RPCError(f"HTTP {e.code}: {e.reason}", method=method, code=e.code) from e
        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning("RPC network error", method=method, error=str(e))
            raise RPCError(f"Network error: {e}", method=method) from e

        try:
            reply = json.loads(body)
        except ValueError as e:
            raise RPCError(f"Malformed RPC response: {body[:200]}", method=method) from e

        if not isinstance(reply, dict):
            raise RPCError(f"Malformed RPC response: {body[:200]}", method=method)

        error = reply.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message") if isinstance(error, dict) else str(error)
            self.logger.warning("RPC error reply", method=method, code=code, error=message)
            raise RPCError(f"{method}: {message}", method=method, code=code)

        return reply.get("result")
