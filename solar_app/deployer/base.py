"""Base class for backend deployers."""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import ParseResult

from ..contract.repository import ContractsRepository, DeployedContract
from ..errors import DeployError
from ..logging.config import get_logger
from .rpc import JSONRPCClient


class BaseDeployer(ABC):
    """Submits deployments to one backend and records them in the repository."""

    platform: str = ""

    def __init__(self, rpc_url: ParseResult, repo: ContractsRepository, rpc: JSONRPCClient):
        self.rpc_url = rpc_url
        self.repo = repo
        self.rpc = rpc
        self.logger = get_logger(f"solar.deployer.{self.platform}")

    @abstractmethod
    def create_contract(
        self,
        deploy_name: str,
        bytecode: str,
        contract_name: Optional[str] = None,
        overwrite: bool = False,
        as_lib: bool = False
    ) -> DeployedContract:
        """
        Deploy compiled bytecode and record it under deploy_name.

        Args:
            deploy_name: Name the deployment is recorded under
            bytecode: Hex bytecode, constructor arguments already appended
            contract_name: Solidity contract name, defaults to deploy_name
            overwrite: Replace an existing deployment of the same name
            as_lib: Record the deployment as a library

        Returns:
            The recorded deployment
        """
        pass

    @abstractmethod
    def confirm_contract(self, contract: DeployedContract) -> bool:
        """Check whether the deployment transaction is confirmed."""
        pass

    def check_name_available(self, deploy_name: str, overwrite: bool, as_lib: bool) -> None:
        """Refuse to shadow an existing deployment unless overwrite is set."""
        exists = self.repo.exists_lib(deploy_name) if as_lib else self.repo.exists(deploy_name)
        if exists and not overwrite:
            raise DeployError(
                f"name already used: {deploy_name}",
                contract_name=deploy_name
            )

    def record(self, contract: DeployedContract, as_lib: bool) -> None:
        """Store a deployment and persist the repository."""
        if as_lib:
            self.repo.set_lib(contract.deploy_name, contract)
        else:
            self.repo.set(contract.deploy_name, contract)
        self.repo.commit()

        self.logger.info(
            "Deployment recorded",
            deploy_name=contract.deploy_name,
            address=str(contract.address),
            txid=contract.txid,
            as_lib=as_lib
        )

    @staticmethod
    def normalize_bytecode(bytecode: str) -> str:
        """Strip whitespace and a 0x prefix, and check the rest is hex."""
        code = "".join(bytecode.split())
        if code[:2] in ("0x", "0X"):
            code = code[2:]
        if not code:
            raise DeployError("empty bytecode")
        try:
            bytes.fromhex(code)
        except ValueError as e:
            raise DeployError(f"bytecode is not valid hex: {e}") from e
        return code
