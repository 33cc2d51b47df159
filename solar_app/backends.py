"""Backend platform selection."""

from enum import Enum
from typing import Optional
from urllib.parse import ParseResult, urlparse

from .errors import InvalidEndpointError, UnspecifiedEndpointError


class RPCPlatform(Enum):
    """Supported deployment backends."""
    SICASH = "sicash"
    ETHEREUM = "ethereum"


def resolve_platform(sicash_rpc: Optional[str], eth_rpc: Optional[str]) -> RPCPlatform:
    """
    Select the backend from the two endpoint settings.

    SICash takes priority when both endpoints are set.

    Raises:
        UnspecifiedEndpointError: If neither endpoint is set
    """
    if not sicash_rpc and not eth_rpc:
        raise UnspecifiedEndpointError()

    if sicash_rpc:
        return RPCPlatform.SICASH

    return RPCPlatform.ETHEREUM


def select_endpoint(sicash_rpc: Optional[str], eth_rpc: Optional[str]) -> tuple[RPCPlatform, str]:
    """Resolve the platform together with the endpoint literal it uses."""
    platform = resolve_platform(sicash_rpc, eth_rpc)
    if platform is RPCPlatform.SICASH:
        return platform, sicash_rpc  # type: ignore[return-value]
    return platform, eth_rpc  # type: ignore[return-value]


def parse_request_uri(rawurl: str) -> ParseResult:
    """
    Parse an endpoint as an absolute URL.

    Raises:
        InvalidEndpointError: If the literal is not an absolute URL
    """
    try:
        parsed = urlparse(rawurl)
        # Accessing the port validates it
        parsed.port
    except ValueError as e:
        raise InvalidEndpointError(f"Invalid RPC url: {rawurl!r}", raw_url=rawurl) from e

    if not parsed.scheme or not parsed.netloc:
        raise InvalidEndpointError(f"Invalid RPC url: {rawurl!r}", raw_url=rawurl)

    return parsed
