"""
Fatal error classifications for configuration and collaborator setup.

These exceptions represent failures that leave the tool without a usable
deployment target or contracts repository. They are raised by the core
and turned into an operator message and a non-zero exit status by the
command entry point.
"""

from typing import Optional, Dict, Any


UNSPECIFIED_RPC_MESSAGE = (
    "Please specify RPC url by setting SICASH_RPC or ETH_RPC "
    "or using flag --sicash_rpc or --eth_rpc"
)


class SolarFatalError(Exception):
    """Base class for unrecoverable configuration and setup failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class UnspecifiedEndpointError(SolarFatalError):
    """Neither backend endpoint is configured."""

    def __init__(self, message: str = UNSPECIFIED_RPC_MESSAGE, **kwargs):
        super().__init__(message, **kwargs)


class InvalidEndpointError(SolarFatalError):
    """A configured endpoint is not an absolute URL."""

    def __init__(self, message: str, raw_url: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_url = raw_url


class RepositoryOpenError(SolarFatalError):
    """The contracts repository file could not be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path
        self.cause = cause


class DeployerConstructionError(SolarFatalError):
    """The backend-specific deployer refused to be constructed."""

    def __init__(self, message: str, platform: Optional[str] = None,
                 cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.platform = platform
        self.cause = cause


class CompilerOptionsError(SolarFatalError):
    """Compiler options could not be derived from configuration."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.cause = cause


class ConfigurationError(SolarFatalError):
    """Configuration sources are unreadable or contain invalid values."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
