"""
Background event reporting.

Deployment progress is reported as events that a single worker thread
renders in arrival order.
"""
from .events import EventReporter
from .models import ContractConfirmed, DeployFailed, DeployFinished, DeployStarted

__all__ = [
    "EventReporter",
    "DeployStarted",
    "DeployFinished",
    "DeployFailed",
    "ContractConfirmed",
]
