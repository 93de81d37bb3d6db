"""CLI context management for database access and shared state."""

import os
from dataclasses import dataclass, field

from jotdb import Collection, DatabaseConfig, JotDB

DEFAULT_CONFIG_PATH = "./jotdb.json"
DEFAULT_DATA_PATH = "./jotdb-data"


def get_config_path(path: str | None) -> str:
    """Resolve the configuration file from CLI arg, environment variable, or default.

    Priority:
    1. Explicit path argument
    2. JOTDB_CONFIG environment variable
    3. Default: ./jotdb.json
    """
    if path:
        return path
    if env_path := os.getenv("JOTDB_CONFIG"):
        return env_path
    return DEFAULT_CONFIG_PATH


def get_data_path(path: str | None, config: DatabaseConfig | None = None) -> str:
    """Resolve the data directory.

    Priority:
    1. Explicit path argument
    2. JOTDB_PATH environment variable
    3. ``path`` from the configuration file
    4. Default: ./jotdb-data
    """
    if path:
        return path
    if env_path := os.getenv("JOTDB_PATH"):
        return env_path
    if config is not None and config.path:
        return config.path
    return DEFAULT_DATA_PATH


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Loads the configuration and opens the database lazily, so commands that
    fail on argument parsing never touch the data directory.
    """

    config_path: str
    data_path: str | None
    json_output: bool
    _db: JotDB | None = field(default=None, init=False, repr=False)

    def get_db(self) -> JotDB:
        """Get or open the database.

        Raises:
            ConfigError: If the configuration file is missing or invalid
        """
        if self._db is None:
            config = DatabaseConfig.from_file(self.config_path)
            self._db = JotDB(config, path=get_data_path(self.data_path, config))
        return self._db

    def get_collection(self, name: str) -> Collection:
        return self.get_db().collection(name)

    def close(self) -> None:
        """Close database if open."""
        if self._db is not None:
            self._db.close()
            self._db = None
