"""Command tasks run against the process context."""

import argparse
from collections.abc import Callable
from pathlib import Path

from .context import SolarContext
from .errors import DeployError, RPCError
from .logging.config import get_logger
from .reporter.models import ContractConfirmed, DeployFailed, DeployFinished, DeployStarted

logger = get_logger(__name__)

Task = Callable[[SolarContext, argparse.Namespace], None]

app_tasks: dict[str, Task] = {}


def task(name: str) -> Callable[[Task], Task]:
    """Register a task under a command name."""
    def register(fn: Task) -> Task:
        app_tasks[name] = fn
        return fn
    return register


@task("status")
def status(ctx: SolarContext, args: argparse.Namespace) -> None:
    """Print deployed contracts and libraries."""
    repo = ctx.contracts_repository()
    sections = (("contracts", repo.contracts()), ("libraries", repo.libraries()))

    for title, entries in sections:
        if not entries:
            continue
        print(f"{title}:")
        for name in sorted(entries):
            contract = entries[name]
            state = "confirmed" if contract.confirmed else "pending"
            print(f"  {name}\t{contract.address}\t{state}")


@task("expand")
def expand(ctx: SolarContext, args: argparse.Namespace) -> None:
    """Print a parameter template with contract addresses substituted."""
    print(ctx.expand_json_params(args.template))


@task("deploy")
def deploy(ctx: SolarContext, args: argparse.Namespace) -> None:
    """Deploy pre-compiled bytecode under a name."""
    bytecode = Path(args.bytecode).read_text()
    deployer = ctx.deployer()
    reporter = ctx.reporter()

    reporter.report(DeployStarted(deploy_name=args.name, platform=ctx.rpc_platform().value))
    try:
        contract = deployer.create_contract(
            args.name,
            bytecode,
            contract_name=args.contract,
            overwrite=args.force,
            as_lib=args.lib,
        )
    except (DeployError, RPCError) as e:
        reporter.report(DeployFailed(deploy_name=args.name, error=str(e)))
        raise

    reporter.report(DeployFinished(contract=contract))


@task("confirm")
def confirm(ctx: SolarContext, args: argparse.Namespace) -> None:
    """Mark pending deployments whose transactions are confirmed."""
    deployer = ctx.deployer()
    repo = ctx.contracts_repository()
    reporter = ctx.reporter()

    confirmed = 0
    for contract, as_lib in repo.unconfirmed():
        if deployer.confirm_contract(contract):
            repo.confirm(contract.deploy_name, as_lib=as_lib)
            reporter.report(ContractConfirmed(deploy_name=contract.deploy_name))
            confirmed += 1

    if confirmed:
        repo.commit()

    logger.info("Confirmation pass finished", confirmed=confirmed)


@task("options")
def options(ctx: SolarContext, args: argparse.Namespace) -> None:
    """Print the solc options derived from configuration."""
    opts = ctx.solc_options()
    print(f"optimize: {not opts.no_optimize}")
    print(f"allow-paths: {','.join(opts.allow_paths)}")
