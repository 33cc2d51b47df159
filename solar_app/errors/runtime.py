"""
Error classifications scoped to a single operation.

Unlike the fatal setup failures these abort only the call that raised
them: one template expansion, one RPC request, one deployment.
"""

from typing import Optional, Dict, Any


class ExpansionError(Exception):
    """Base class for errors that abort a single template expansion."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class UnknownPlaceholderError(ExpansionError):
    """A template referenced a contract name absent from the repository."""

    def __init__(self, name: str, **kwargs):
        super().__init__(f"Invalid address expansion: {name}", **kwargs)
        self.name = name


class ReporterClosedError(Exception):
    """An event was submitted after the reporter was shut down."""


class RPCError(Exception):
    """Transport or protocol failure talking to a backend node."""

    def __init__(self, message: str, method: Optional[str] = None,
                 code: Optional[int] = None):
        super().__init__(message)
        self.method = method
        self.code = code


class DeployError(Exception):
    """A deployment could not be submitted or confirmed."""

    def __init__(self, message: str, contract_name: Optional[str] = None):
        super().__init__(message)
        self.contract_name = contract_name
