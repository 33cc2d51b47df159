"""SICash backend deployer."""

from typing import Optional
from urllib.parse import ParseResult

from ..contract.address import Address
from ..contract.repository import ContractsRepository, DeployedContract
from ..errors import DeployError
from .base import BaseDeployer
from .rpc import JSONRPCClient

DEFAULT_GAS_LIMIT = 2500000
DEFAULT_GAS_PRICE = "0.0000004"


class SICashDeployer(BaseDeployer):
    """Deploys contracts through a SICash node's createcontract RPC."""

    platform = "sicash"

    def __init__(
        self,
        rpc_url: ParseResult,
        repo: ContractsRepository,
        sender_address: str = "",
        gas_limit: int = DEFAULT_GAS_LIMIT,
        gas_price: str = DEFAULT_GAS_PRICE
    ):
        if rpc_url.scheme not in ("http", "https"):
            raise ValueError(f"unsupported RPC scheme: {rpc_url.scheme}")
        if not rpc_url.username:
            raise ValueError("RPC url must include user:password credentials")

        super().__init__(rpc_url, repo, JSONRPCClient(rpc_url, self.platform, jsonrpc_version="1.0"))
        self.sender_address = sender_address
        self.gas_limit = gas_limit
        self.gas_price = gas_price

    def create_contract(
        self,
        deploy_name: str,
        bytecode: str,
        contract_name: Optional[str] = None,
        overwrite: bool = False,
        as_lib: bool = False
    ) -> DeployedContract:
        self.check_name_available(deploy_name, overwrite, as_lib)
        code = self.normalize_bytecode(bytecode)

        params = [code, self.gas_limit, self.gas_price]
        if self.sender_address:
            params.append(self.sender_address)

        result = self.rpc.call("createcontract", *params)
        if not isinstance(result, dict) or "address" not in result or "txid" not in result:
            raise DeployError(f"unexpected createcontract result: {result!r}", contract_name=deploy_name)

        contract = DeployedContract(
            name=contract_name or deploy_name,
            deploy_name=deploy_name,
            address=Address.from_hex(result["address"]),
            txid=result["txid"],
            sender=result.get("sender", self.sender_address),
        )
        self.record(contract, as_lib)
        return contract

    def confirm_contract(self, contract: DeployedContract) -> bool:
        tx = self.rpc.call("gettransaction", contract.txid)
        confirmations = tx.get("confirmations", 0) if isinstance(tx, dict) else 0
        return confirmations > 0


def new_sicash_deployer(
    rpc_url: ParseResult,
    repo: ContractsRepository,
    sender_address: str
) -> SICashDeployer:
    return SICashDeployer(rpc_url, repo, sender_address)
