"""Configuration loader."""

import os
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .models import ConfigModel

CONFIG_PATH_ENV = "BLOGPIPE_CONFIG"


def default_config_path() -> Path:
    """Config path from the environment, else the per-user default."""
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "blogpipe" / "config.yaml"


class Config:
    """Configuration manager.

    Built once at the start of a run and handed to every component that
    needs settings or credentials. Secrets are resolved from the
    environment variables named in the YAML sections.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config: Optional[ConfigModel] = None,
    ) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self._config = config

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    def get_db_config(self) -> Dict[str, Optional[str]]:
        """Get database configuration dict with the resolved connection string."""
        pg = self.config.postgres
        dsn = _from_env(pg.dsn_env)

        if not dsn:
            password = pg.password
            if pg.password_env:
                password = os.environ.get(pg.password_env) or password
            if password:
                dsn = f"postgresql://{pg.user}:{password}@{pg.host}:{pg.port}/{pg.database}"

        return {"dsn": dsn, "dsn_env": pg.dsn_env}

    def get_search_config(self) -> Dict[str, any]:
        """Get search configuration dict."""
        search_config = self.config.search.model_dump()

        api_key = _from_env(search_config.get("api_key_env"))
        if api_key:
            search_config["api_key"] = api_key

        return search_config

    def get_llm_config(self) -> Dict[str, any]:
        """Get LLM configuration dict."""
        llm_config = self.config.llm.model_dump()

        api_key = _from_env(llm_config.get("api_key_env"))
        if api_key:
            llm_config["api_key"] = api_key

        return llm_config

    def require(self, database: bool = True, search: bool = False, llm: bool = False) -> None:
        """
        Check that the credentials a phase needs are present.

        Raises:
            ConfigError: listing every missing credential
        """
        missing: List[str] = []

        if database and not self.get_db_config()["dsn"]:
            missing.append(self.config.postgres.dsn_env or "postgres.password")

        if search and not self.get_search_config().get("api_key"):
            missing.append(self.config.search.api_key_env or "search.api_key")

        if llm:
            llm_config = self.get_llm_config()
            if llm_config["provider"] != "mock" and not llm_config.get("api_key"):
                missing.append(self.config.llm.api_key_env or "llm.api_key")

        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")


def _from_env(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    return os.environ.get(name) or None


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
