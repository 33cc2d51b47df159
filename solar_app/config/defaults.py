"""Default configuration for the solar deployment tool."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolarConfig:
    """Resolved settings snapshot, read-only after startup."""
    # Backend endpoints; SICash wins when both are set
    sicash_rpc: str = ""
    eth_rpc: str = ""

    # Contracts repository
    env: str = "development"
    repo: str = ""                     # Overrides solar.<env>.json when set

    # SICash sender UTXO address
    sicash_sender: str = ""

    # solc options
    optimize: bool = True
    allow_paths: str = ""              # Comma-separated, cwd when empty

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False


# Environment variable for each setting
ENV_VARS: dict[str, str] = {
    "sicash_rpc": "SICASH_RPC",
    "sicash_sender": "SICASH_SENDER",
    "eth_rpc": "ETH_RPC",
    "env": "SOLAR_ENV",
    "repo": "SOLAR_REPO",
    "optimize": "SOLAR_OPTIMIZE",
    "allow_paths": "SOLAR_ALLOW_PATHS",
    "log_level": "SOLAR_LOG_LEVEL",
    "log_json": "SOLAR_LOG_JSON",
}

CONFIG_FILE_ENV = "SOLAR_CONFIG"
DEFAULT_CONFIG_FILE = "solar.yaml"


def get_default_config() -> SolarConfig:
    """Get the default configuration instance."""
    return SolarConfig()
