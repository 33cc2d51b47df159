"""
Process context for solar commands.

Holds the resolved configuration and the lazily materialized shared
collaborators: the contracts repository, the backend deployer and the
event reporter. Each collaborator is built at most once, on first use,
even when first requested from several threads at the same time.

Construction failures are raised as the fatal errors in solar_app.errors;
the command entry point decides how to report them.
"""

from collections.abc import Callable
from typing import Any, Optional
from urllib.parse import ParseResult

from . import varstr
from .backends import RPCPlatform, parse_request_uri, resolve_platform, select_endpoint
from .config.compiler import CompilerOptions, compiler_options
from .config.defaults import SolarConfig
from .contract.address import set_format_bytes_with_prefix
from .contract.repository import ContractsRepository, open_contracts_repository
from .deployer.base import BaseDeployer
from .deployer.eth import new_ethereum_deployer
from .deployer.sicash import new_sicash_deployer
from .errors import (
    DeployerConstructionError,
    RepositoryOpenError,
    SolarFatalError,
    UnknownPlaceholderError,
)
from .logging.config import get_logger, log_singleton_materialized
from .once import OnceCell
from .reporter.events import EventReporter

logger = get_logger(__name__)

SICashDeployerFactory = Callable[[ParseResult, ContractsRepository, str], BaseDeployer]
EthereumDeployerFactory = Callable[[ParseResult, ContractsRepository], BaseDeployer]


class SolarContext:
    """Shared state for one solar process."""

    def __init__(
        self,
        config: SolarConfig,
        open_repository: Callable[[str], ContractsRepository] = open_contracts_repository,
        sicash_deployer_factory: SICashDeployerFactory = new_sicash_deployer,
        eth_deployer_factory: EthereumDeployerFactory = new_ethereum_deployer,
        reporter_factory: Callable[[], EventReporter] = EventReporter
    ) -> None:
        self.config = config
        self.logger = logger.bind(env=config.env)

        self._open_repository = open_repository
        self._sicash_deployer_factory = sicash_deployer_factory
        self._eth_deployer_factory = eth_deployer_factory
        self._reporter_factory = reporter_factory

        self._deployer: OnceCell[BaseDeployer] = OnceCell("deployer")
        self._repo: OnceCell[ContractsRepository] = OnceCell("repo")
        self._reporter: OnceCell[EventReporter] = OnceCell("reporter")

    def __enter__(self) -> "SolarContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def rpc_platform(self) -> RPCPlatform:
        """
        Backend selected by configuration.

        Raises:
            UnspecifiedEndpointError: If no endpoint is configured
        """
        return resolve_platform(self.config.sicash_rpc, self.config.eth_rpc)

    def reporter(self) -> EventReporter:
        """Event reporter, started on first access."""
        return self._reporter.get_or_init(self._start_reporter)

    def _start_reporter(self) -> EventReporter:
        reporter = self._reporter_factory()
        reporter.start()
        log_singleton_materialized(self.logger, "reporter")
        return reporter

    def solc_options(self) -> CompilerOptions:
        """
        Compiler options from configuration.

        Raises:
            CompilerOptionsError: If the default import path cannot be determined
        """
        return compiler_options(self.config)

    def repository_path(self) -> str:
        """Repository file: the configured override, else solar.<env>.json."""
        if self.config.repo:
            return self.config.repo
        return f"solar.{self.config.env}.json"

    def contracts_repository(self) -> ContractsRepository:
        """
        Contracts repository, opened on first access.

        Raises:
            RepositoryOpenError: If the repository file cannot be opened
        """
        return self._repo.get_or_init(self._open_contracts_repository)

    def _open_contracts_repository(self) -> ContractsRepository:
        path = self.repository_path()
        try:
            repo = self._open_repository(path)
        except RepositoryOpenError:
            raise
        except Exception as e:
            raise RepositoryOpenError(
                f"error opening contracts repo file {path}: {e}",
                path=path,
                cause=e
            ) from e

        log_singleton_materialized(self.logger, "repo", {"repo_path": path})
        return repo

    def expand_json_params(self, json_params: str) -> str:
        """
        Replace $Name and ${Name} with the address of the deployed contract Name.

        Raises:
            UnknownPlaceholderError: For a name missing from the repository
        """
        repo = self.contracts_repository()
        self.logger.debug("Expanding template", placeholders=varstr.placeholders(json_params))

        def lookup(key: str) -> str:
            contract, found = repo.get(key)
            if not found:
                raise UnknownPlaceholderError(key)
            return str(contract.address)

        return varstr.expand(json_params, lookup)

    def configure_bytes_output_format(self) -> None:
        """Render addresses with a 0x prefix when deploying to Ethereum."""
        if not self.config.sicash_rpc and not self.config.eth_rpc:
            return

        set_format_bytes_with_prefix(self.rpc_platform() is RPCPlatform.ETHEREUM)

    def deployer(self) -> BaseDeployer:
        """
        Deployer for the selected backend, constructed on first access.

        Raises:
            UnspecifiedEndpointError: If no endpoint is configured
            InvalidEndpointError: If the selected endpoint is not an absolute URL
            RepositoryOpenError: If the repository cannot be opened
            DeployerConstructionError: If the backend rejects construction
        """
        return self._deployer.get_or_init(self._new_deployer)

    def _new_deployer(self) -> BaseDeployer:
        platform, rawurl = select_endpoint(self.config.sicash_rpc, self.config.eth_rpc)
        rpc_url = parse_request_uri(rawurl)
        repo = self.contracts_repository()

        try:
            if platform is RPCPlatform.SICASH:
                deployer = self._sicash_deployer_factory(rpc_url, repo, self.config.sicash_sender)
            else:
                deployer = self._eth_deployer_factory(rpc_url, repo)
        except SolarFatalError:
            raise
        except Exception as e:
            raise DeployerConstructionError(
                f"NewDeployer error {e}",
                platform=platform.value,
                cause=e
            ) from e

        log_singleton_materialized(self.logger, "deployer", {"platform": platform.value})
        return deployer

    def close(self, timeout: Optional[float] = 5.0) -> None:
        """Drain and stop the reporter if it was started."""
        reporter = self._reporter.peek()
        if reporter is not None:
            reporter.close(timeout)
