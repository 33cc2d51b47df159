"""Deployment progress events."""

from dataclasses import dataclass

from ..contract.repository import DeployedContract


@dataclass(frozen=True)
class DeployStarted:
    """A deployment transaction is about to be submitted."""
    deploy_name: str
    platform: str

    def render(self) -> str:
        return f"deploy {self.deploy_name} ({self.platform})"


@dataclass(frozen=True)
class DeployFinished:
    """A deployment was submitted and recorded."""
    contract: DeployedContract

    def render(self) -> str:
        return (
            f"deployed {self.contract.deploy_name} => {self.contract.address} "
            f"(txid {self.contract.txid})"
        )


@dataclass(frozen=True)
class DeployFailed:
    """A deployment could not be submitted or recorded."""
    deploy_name: str
    error: str

    def render(self) -> str:
        return f"deploy {self.deploy_name} failed: {self.error}"


@dataclass(frozen=True)
class ContractConfirmed:
    """A recorded deployment was found confirmed on chain."""
    deploy_name: str

    def render(self) -> str:
        return f"confirmed {self.deploy_name}"
