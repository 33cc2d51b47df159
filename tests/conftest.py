"""Pytest configuration and shared fixtures."""

import pytest

from solar_app.contract.address import Address, set_format_bytes_with_prefix
from solar_app.contract.repository import ContractsRepository, DeployedContract

TOKEN_ADDRESS = "abc0000000000000000000000000000000000001"
REGISTRY_ADDRESS = "def0000000000000000000000000000000000002"


@pytest.fixture(autouse=True)
def reset_address_format():
    """Address rendering is process-wide; restore the default around each test."""
    set_format_bytes_with_prefix(False)
    yield
    set_format_bytes_with_prefix(False)


@pytest.fixture
def sample_contracts_repository(tmp_path) -> ContractsRepository:
    """Repository with a Token contract and a Registry library."""
    repo = ContractsRepository(tmp_path / "solar.test.json")
    repo.set("Token", DeployedContract(
        name="Token",
        deploy_name="Token",
        address=Address.from_hex(TOKEN_ADDRESS),
        txid="aa" * 32,
        confirmed=True,
    ))
    repo.set_lib("Registry", DeployedContract(
        name="Registry",
        deploy_name="Registry",
        address=Address.from_hex(REGISTRY_ADDRESS),
        txid="bb" * 32,
    ))
    return repo
