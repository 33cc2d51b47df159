"""
Command entry point.

Parses flags, resolves configuration, builds the process context and
runs the requested task. This is the only place that turns errors into
an exit status.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from .config.loader import ConfigLoader
from .context import SolarContext
from .errors import (
    ConfigurationError,
    DeployError,
    ExpansionError,
    ReporterClosedError,
    RPCError,
    SolarFatalError,
)
from .logging.config import configure_logging, get_logger
from .tasks import app_tasks

logger = get_logger(__name__)

# Flags that map one-to-one onto configuration settings
SETTING_FLAGS = (
    "sicash_rpc",
    "sicash_sender",
    "eth_rpc",
    "env",
    "repo",
    "optimize",
    "allow_paths",
    "log_level",
    "log_json",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solar",
        description="Solidity smart contract deployment management."
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML config file (env: SOLAR_CONFIG, default: ./solar.yaml)")
    parser.add_argument("--sicash_rpc", default=None,
                        help="RPC provider url (env: SICASH_RPC)")
    parser.add_argument("--sicash_sender", default=None,
                        help="(sicash) Sender UTXO Address (env: SICASH_SENDER)")
    parser.add_argument("--eth_rpc", default=None,
                        help="RPC provider url (env: ETH_RPC)")
    parser.add_argument("--env", default=None,
                        help="Environment name (env: SOLAR_ENV, default: development)")
    parser.add_argument("--repo", default=None,
                        help="Path of contracts repository (env: SOLAR_REPO)")
    parser.add_argument("--optimize", action=argparse.BooleanOptionalAction, default=None,
                        help="[solc] should Enable bytecode optimizer (default: enabled)")
    parser.add_argument("--allow-paths", dest="allow_paths", default=None,
                        help="[solc] Allow a given path for imports. A list of paths can be "
                             "supplied by separating them with a comma.")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        help="Log level (env: SOLAR_LOG_LEVEL, default: WARNING)")
    parser.add_argument("--log-json", dest="log_json", action="store_true", default=None,
                        help="Emit logs as JSON")

    commands = parser.add_subparsers(dest="task", metavar="COMMAND", required=True)

    commands.add_parser("status", help="List deployed contracts")

    expand = commands.add_parser("expand", help="Expand contract address placeholders")
    expand.add_argument("template", help="Template using $Name or ${Name} placeholders")

    deploy = commands.add_parser("deploy", help="Deploy pre-compiled bytecode")
    deploy.add_argument("name", help="Deploy name to record the contract under")
    deploy.add_argument("--bytecode", required=True,
                        help="File containing hex bytecode with constructor arguments")
    deploy.add_argument("--contract", default=None, help="Solidity contract name")
    deploy.add_argument("--lib", action="store_true", help="Record as a library")
    deploy.add_argument("--force", action="store_true",
                        help="Overwrite an existing deployment of the same name")

    commands.add_parser("confirm", help="Confirm pending deployments")
    commands.add_parser("options", help="Show compiler options")

    return parser


def flag_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Settings given explicitly on the command line."""
    return {name: getattr(args, name) for name in SETTING_FLAGS}


def main(argv: Optional[list[str]] = None) -> int:
    """Run one command and return its exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config).load(overrides=flag_overrides(args))
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    configure_logging(config.log_level, format_json=config.log_json)

    with SolarContext(config) as ctx:
        try:
            ctx.configure_bytes_output_format()
            app_tasks[args.task](ctx, args)
        except SolarFatalError as e:
            logger.error("Fatal error", task=args.task, error_type=type(e).__name__)
            print(e, file=sys.stderr)
            return 1
        except (ExpansionError, DeployError, RPCError, ReporterClosedError, OSError) as e:
            logger.error("Task failed", task=args.task, error_type=type(e).__name__)
            print(e, file=sys.stderr)
            return 1

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
