"""Ethereum backend deployer."""

import time
from typing import Any, Optional
from urllib.parse import ParseResult

from ..contract.address import Address
from ..contract.repository import ContractsRepository, DeployedContract
from ..errors import DeployError
from .base import BaseDeployer
from .rpc import JSONRPCClient

DEFAULT_GAS_LIMIT = 3000000


class EthereumDeployer(BaseDeployer):
    """Deploys contracts from the node's first unlocked account."""

    platform = "ethereum"

    def __init__(
        self,
        rpc_url: ParseResult,
        repo: ContractsRepository,
        gas_limit: int = DEFAULT_GAS_LIMIT,
        receipt_attempts: int = 60,
        poll_interval_seconds: float = 1.0
    ):
        if rpc_url.scheme not in ("http", "https"):
            raise ValueError(f"unsupported RPC scheme: {rpc_url.scheme}")

        super().__init__(rpc_url, repo, JSONRPCClient(rpc_url, self.platform))
        self.gas_limit = gas_limit
        self.receipt_attempts = receipt_attempts
        self.poll_interval_seconds = poll_interval_seconds

    def sender(self) -> str:
        accounts = self.rpc.call("eth_accounts")
        if not accounts:
            raise DeployError("node has no unlocked accounts")
        return accounts[0]

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
        sender = self.sender()

        txid = self.rpc.call("eth_sendTransaction", {
            "from": sender,
            "data": "0x" + code,
            "gas": hex(self.gas_limit),
        })

        receipt = self._wait_for_receipt(txid)
        if receipt is None or not receipt.get("contractAddress"):
            raise DeployError(
                f"contract creation not mined: {txid}",
                contract_name=deploy_name
            )

        contract = DeployedContract(
            name=contract_name or deploy_name,
            deploy_name=deploy_name,
            address=Address.from_hex(receipt["contractAddress"]),
            txid=txid,
            sender=sender,
            confirmed=self._succeeded(receipt),
        )
        self.record(contract, as_lib)
        return contract

    def confirm_contract(self, contract: DeployedContract) -> bool:
        receipt = self.rpc.call("eth_getTransactionReceipt", contract.txid)
        if receipt is None or not receipt.get("contractAddress"):
            return False
        return self._succeeded(receipt)

    def _wait_for_receipt(self, txid: str) -> Optional[dict[str, Any]]:
        for attempt in range(self.receipt_attempts):
            receipt = self.rpc.call("eth_getTransactionReceipt", txid)
            if receipt is not None:
                return receipt

            self.logger.debug("Waiting for receipt", txid=txid, attempt=attempt + 1)
            time.sleep(self.poll_interval_seconds)

        return None

    @staticmethod
    def _succeeded(receipt: dict[str, Any]) -> bool:
        # Pre-Byzantium receipts carry no status field
        return receipt.get("status", "0x1") == "0x1"


def new_ethereum_deployer(rpc_url: ParseResult, repo: ContractsRepository) -> EthereumDeployer:
    return EthereumDeployer(rpc_url, repo)
