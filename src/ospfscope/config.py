"""
Configuration management for ospfscope.

Loads parser and logging settings from environment variables or a .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Check common locations for .env
env_locations = [
    Path.home() / ".ospfscope" / ".env",
    Path.home() / ".config" / "ospfscope" / ".env",
    Path.cwd() / ".env",
]
for env_path in env_locations:
    if env_path.exists():
        load_dotenv(env_path)
        break


AUX_OWNER_POLICIES = ("first-lsa-router", "none")


@dataclass
class OSPFScopeConfig:
    """Parser and logging configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Which router receives auxiliary command data (learned routes,
    # process info) when the process Router ID does not identify one
    aux_owner_policy: str = "first-lsa-router"

    # Attach-area for AS-external routers created lazily
    external_area: str = "0"

    def __post_init__(self):
        if self.aux_owner_policy not in AUX_OWNER_POLICIES:
            raise ValueError(
                f"Unknown auxiliary owner policy: {self.aux_owner_policy!r} "
                f"(expected one of {', '.join(AUX_OWNER_POLICIES)})"
            )

    @classmethod
    def from_env(cls) -> "OSPFScopeConfig":
        """Load configuration from environment variables."""
        return cls(
            log_level=os.getenv("OSPFSCOPE_LOG_LEVEL", "INFO"),
            log_file=os.getenv("OSPFSCOPE_LOG_FILE") or None,
            aux_owner_policy=os.getenv("OSPFSCOPE_AUX_OWNER_POLICY", "first-lsa-router"),
            external_area=os.getenv("OSPFSCOPE_EXTERNAL_AREA", "0"),
        )


# Global config instance
_config: OSPFScopeConfig | None = None


def get_config() -> OSPFScopeConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = OSPFScopeConfig.from_env()
    return _config


def set_config(config: OSPFScopeConfig | None) -> None:
    """Set the global configuration instance (None resets to environment)."""
    global _config
    _config = config
