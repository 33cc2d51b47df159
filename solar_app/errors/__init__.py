"""
Error classification for the solar deployment tool.

Setup failures (no endpoint, bad URL, unreadable repository, deployer
construction) are fatal and terminate the command. Expansion, RPC and
deploy errors abort only the operation that raised them.
"""

from .system_failures import (
    SolarFatalError,
    UnspecifiedEndpointError,
    InvalidEndpointError,
    RepositoryOpenError,
    DeployerConstructionError,
    CompilerOptionsError,
    ConfigurationError,
)
from .runtime import (
    ExpansionError,
    UnknownPlaceholderError,
    ReporterClosedError,
    RPCError,
    DeployError,
)

__all__ = [
    # Fatal setup failures
    "SolarFatalError",
    "UnspecifiedEndpointError",
    "InvalidEndpointError",
    "RepositoryOpenError",
    "DeployerConstructionError",
    "CompilerOptionsError",
    "ConfigurationError",
    # Operation-scoped errors
    "ExpansionError",
    "UnknownPlaceholderError",
    "ReporterClosedError",
    "RPCError",
    "DeployError",
]
