"""solc compiler options derived from configuration."""

import os
from dataclasses import dataclass

from ..errors import CompilerOptionsError
from .defaults import SolarConfig


@dataclass(frozen=True)
class CompilerOptions:
    """Options handed to the Solidity compiler."""
    no_optimize: bool
    allow_paths: tuple[str, ...]


def compiler_options(config: SolarConfig) -> CompilerOptions:
    """
    Build compiler options from configuration.

    When no allowed import paths are configured the current working
    directory is allowed.

    Raises:
        CompilerOptionsError: If the working directory cannot be determined
    """
    allow_paths_str = config.allow_paths
    if allow_paths_str == "":
        try:
            allow_paths_str = os.getcwd()
        except OSError as e:
            raise CompilerOptionsError(f"solc options: {e}", cause=e) from e

    return CompilerOptions(
        no_optimize=not config.optimize,
        allow_paths=tuple(allow_paths_str.split(",")),
    )
