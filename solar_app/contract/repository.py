"""JSON-file repository of deployed contracts for one environment."""

import json
import os
import tempfile
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from ..errors import RepositoryOpenError
from ..logging.config import get_logger
from .address import Address

logger = get_logger(__name__)


@dataclass
class DeployedContract:
    """Deployed contract with metadata."""
    name: str
    deploy_name: str
    address: Address
    txid: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    confirmed: bool = False
    sender: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "deployName": self.deploy_name,
            "address": str(self.address),
            "txid": self.txid,
            "createdAt": self.created_at.isoformat(),
            "confirmed": self.confirmed,
            "sender": self.sender,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeployedContract":
        created_at = data.get("createdAt")
        return cls(
            name=data.get("name", ""),
            deploy_name=data["deployName"],
            address=Address.from_hex(data["address"]),
            txid=data.get("txid", ""),
            created_at=(
                datetime.fromisoformat(created_at)
                if created_at else datetime.now(timezone.utc)
            ),
            confirmed=bool(data.get("confirmed", False)),
            sender=data.get("sender", ""),
        )


class ContractsRepository:
    """Name to deployed-contract mapping persisted as a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.logger = logger.bind(repo_path=str(self.path))
        self._lock = threading.Lock()
        self._contracts: dict[str, DeployedContract] = {}
        self._libraries: dict[str, DeployedContract] = {}

    def load(self) -> None:
        """
        Read the repository file. A missing file is an empty repository.

        Raises:
            RepositoryOpenError: If the file is unreadable or malformed
        """
        if not self.path.exists():
            self.logger.info("Contracts repository file not found, starting empty")
            return

        try:
            with open(self.path) as f:
                data = json.load(f)
            contracts = self._parse_section(data, "contracts")
            libraries = self._parse_section(data, "libraries")
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise RepositoryOpenError(
                f"error opening contracts repo file {self.path}: {e}",
                path=str(self.path),
                cause=e
            ) from e

        with self._lock:
            self._contracts = contracts
            self._libraries = libraries

        self.logger.info(
            "Contracts repository loaded",
            contracts=len(contracts),
            libraries=len(libraries)
        )

    @staticmethod
    def _parse_section(data: Any, key: str) -> dict[str, DeployedContract]:
        if not isinstance(data, dict):
            raise TypeError("repository root must be an object")
        section = data.get(key) or {}
        if not isinstance(section, dict):
            raise TypeError(f"{key!r} must be an object")
        for name, entry in section.items():
            if not isinstance(entry, dict):
                raise TypeError(f"{key}.{name} must be an object")
        return {
            name: DeployedContract.from_dict(entry)
            for name, entry in section.items()
        }

    def get(self, name: str) -> tuple[Optional[DeployedContract], bool]:
        """Look up a deployed contract by deploy name."""
        with self._lock:
            contract = self._contracts.get(name)
        return contract, contract is not None

    def get_lib(self, name: str) -> tuple[Optional[DeployedContract], bool]:
        """Look up a deployed library by deploy name."""
        with self._lock:
            lib = self._libraries.get(name)
        return lib, lib is not None

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._contracts

    def exists_lib(self, name: str) -> bool:
        with self._lock:
            return name in self._libraries

    def set(self, name: str, contract: DeployedContract) -> None:
        with self._lock:
            self._contracts[name] = contract

    def set_lib(self, name: str, lib: DeployedContract) -> None:
        with self._lock:
            self._libraries[name] = lib

    def contracts(self) -> dict[str, DeployedContract]:
        """Snapshot of deployed contracts."""
        with self._lock:
            return dict(self._contracts)

    def libraries(self) -> dict[str, DeployedContract]:
        """Snapshot of deployed libraries."""
        with self._lock:
            return dict(self._libraries)

    def unconfirmed(self) -> list[tuple[DeployedContract, bool]]:
        """Unconfirmed deployments as (contract, is_library) pairs."""
        with self._lock:
            pending = [(c, False) for c in self._contracts.values() if not c.confirmed]
            pending.extend((lib, True) for lib in self._libraries.values() if not lib.confirmed)
        return pending

    def confirm(self, deploy_name: str, as_lib: bool = False) -> bool:
        """Mark a deployment as confirmed. Returns False for unknown names."""
        with self._lock:
            entries = self._libraries if as_lib else self._contracts
            contract = entries.get(deploy_name)
            if contract is None:
                return False
            contract.confirmed = True
            return True

    def commit(self) -> None:
        """Atomically rewrite the repository file."""
        with self._lock:
            data = {
                "contracts": {name: c.to_dict() for name, c in self._contracts.items()},
                "libraries": {name: lib.to_dict() for name, lib in self._libraries.items()},
            }

        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        self.logger.info(
            "Contracts repository committed",
            contracts=len(data["contracts"]),
            libraries=len(data["libraries"])
        )


def open_contracts_repository(path: Union[str, Path]) -> ContractsRepository:
    """
    Open the repository stored at path.

    Raises:
        RepositoryOpenError: If the file exists but cannot be read or parsed
    """
    repo = ContractsRepository(path)
    repo.load()
    return repo
