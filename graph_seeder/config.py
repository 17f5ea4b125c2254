"""Configuration management for graph-seeder using YAML files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".graph-seeder"

DEFAULT_GRAPHQL_ENDPOINT = "http://localhost:8080/graphql"
DEFAULT_USERS_ENDPOINT = "http://localhost:3000/login/user"
DEFAULT_ISSUE_COUNT = 10
DEFAULT_PROJECT_COUNT = 1


class Config:
    """Configuration manager using YAML file storage.

    Supports both local (directory-level) and global (user-level) configuration.
    Local config is stored in .graph-seeder/config.yaml in the current directory.
    Global config is stored in ~/.graph-seeder/config.yaml.

    When reading, values are looked up in local config first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"

        self._config: dict[str, Any] = self._load()

        # For local config, also load global config as fallback
        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    with open(global_config_file, "r") as f:
                        self._global_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        """Load configuration from YAML file.

        Returns:
            Configuration dictionary
        """
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config = yaml.safe_load(f) or {}
                logger.debug("Config loaded successfully", keys=list(config.keys()))
                return config
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {self.config_file}: {e}") from e

    def _save(self) -> None:
        """Save configuration to YAML file, creating its directory on first write."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        For local config, checks local config first, then falls back to global config.

        Args:
            key: Configuration key
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        """Set a configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        """Remove a configuration value.

        Args:
            key: Configuration key
        """
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings.

        For local config, merges global config with local config (local takes precedence).

        Returns:
            Dictionary of all config settings
        """
        if self.is_global:
            logger.debug("Listing global config values", count=len(self._config))
            return self._config.copy()

        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.

    Returns:
        Config instance
    """
    return Config(use_global=use_global)


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Config value {key} must be an integer, got {value!r}") from e


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if str(value).strip().lower() in ("1", "true", "yes", "on"):
        return True
    if str(value).strip().lower() in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Config value {key} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class SeedSettings:
    """Everything a seeding run needs besides the token and the catalog."""

    graphql_endpoint: str = DEFAULT_GRAPHQL_ENDPOINT
    users_endpoint: str = DEFAULT_USERS_ENDPOINT
    issue_count: int = DEFAULT_ISSUE_COUNT
    project_count: int = DEFAULT_PROJECT_COUNT
    random_seed: int | None = None
    ignore_relations: bool = False
    catalog: str | None = None


def load_settings(config: Config, **overrides: Any) -> SeedSettings:
    """Resolve settings from command-line overrides, then config, then defaults.

    Overrides that are None are ignored.

    Raises:
        ValueError: If a config value has the wrong type
    """
    values: dict[str, Any] = {
        "graphql_endpoint": config.get("graphql.endpoint", DEFAULT_GRAPHQL_ENDPOINT),
        "users_endpoint": config.get("users.endpoint", DEFAULT_USERS_ENDPOINT),
        "issue_count": _as_int("seed.issue_count", config.get("seed.issue_count", DEFAULT_ISSUE_COUNT)),
        "project_count": _as_int("seed.project_count", config.get("seed.project_count", DEFAULT_PROJECT_COUNT)),
        "ignore_relations": _as_bool("seed.ignore_relations", config.get("seed.ignore_relations", False)),
        "catalog": config.get("seed.catalog"),
    }
    random_seed = config.get("seed.random_seed")
    values["random_seed"] = None if random_seed is None else _as_int("seed.random_seed", random_seed)

    values.update({key: value for key, value in overrides.items() if value is not None})
    settings = SeedSettings(**values)
    logger.debug("Settings resolved", settings=settings)
    return settings
