"""
Runtime Configuration

Central configuration for tree parameters and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from flatmerkle.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "FLATMERKLE_"


@dataclass
class TreeConfig:
    """Hashing parameters of a tree (digest, N, ND)."""
    algorithm: str = "sha256"
    hash_size: int = 32
    concat_size: Optional[int] = None

    def __post_init__(self):
        # ND follows N unless set explicitly
        if self.concat_size is None:
            self.concat_size = 2 * self.hash_size


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for flatmerkle.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - FLATMERKLE_ALGORITHM: hashlib digest name
        - FLATMERKLE_HASH_SIZE: slot width N in bytes
        - FLATMERKLE_CONCAT_SIZE: concatenation buffer width ND in bytes
        - FLATMERKLE_LOG_LEVEL: log level
        - FLATMERKLE_LOG_FILE: log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ALGORITHM"):
            overrides.setdefault("tree", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}HASH_SIZE"):
            overrides.setdefault("tree", {})["hash_size"] = _env_int(f"{ENV_PREFIX}HASH_SIZE")
        if os.getenv(f"{ENV_PREFIX}CONCAT_SIZE"):
            overrides.setdefault("tree", {})["concat_size"] = _env_int(f"{ENV_PREFIX}CONCAT_SIZE")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationException(f"Invalid YAML in {path}: {e}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        tree_data = data.get("tree", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            tree = TreeConfig(**tree_data)
            log_config = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            tree=tree,
            logging=log_config,
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        tree_overrides = overrides.get("tree", {})
        for key, value in tree_overrides.items():
            setattr(new_config.tree, key, value)
        # A new N without an explicit ND drags ND along
        if "hash_size" in tree_overrides and "concat_size" not in tree_overrides:
            new_config.tree.concat_size = 2 * new_config.tree.hash_size

        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "algorithm": self.tree.algorithm,
                "hash_size": self.tree.hash_size,
                "concat_size": self.tree.concat_size,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


def _env_int(name: str) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationException(
            f"{name} must be an integer, got {raw!r}",
            parameter=name,
        ) from e


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
