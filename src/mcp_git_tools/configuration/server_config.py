"""Server configuration with environment binding and .env loading."""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import ServerDefaults

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET"}


def load_environment_variables(repository_path: Path | None = None) -> list[str]:
    """Load environment variables from .env files.

    Order of precedence:
    1. System environment variables (never overridden)
    2. Project-specific .env file (current working directory)
    3. Repository-specific .env file (if repository path provided)

    Args:
        repository_path: Optional path to the repository being served

    Returns:
        The .env files that were loaded, in load order
    """
    candidates = [Path.cwd() / ".env"]
    if repository_path:
        candidates.append(Path(repository_path) / ".env")

    loaded_files: list[str] = []
    for env_file in candidates:
        resolved = str(env_file.resolve())
        if not env_file.exists() or resolved in loaded_files:
            continue
        try:
            load_dotenv(env_file, override=False)
        except OSError as e:
            logger.warning(f"Failed to load .env file {env_file}: {e}")
            continue
        loaded_files.append(resolved)
        logger.info(f"Loaded environment variables from {env_file}")

    return loaded_files


class ServerConfig(BaseSettings):
    """Runtime configuration of the MCP Git Tools server.

    Values come from the environment (``MCP_GIT_*`` and ``LOG_LEVEL``); CLI
    flags override them through ``merge_cli``.
    """

    model_config = SettingsConfigDict(
        env_prefix=ServerDefaults.ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
    )

    repository: Optional[Path] = Field(
        None, description="Default repository for calls without repoPath"
    )
    log_level: str = Field(
        ServerDefaults.LOG_LEVEL,
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
        description="Root log level",
    )
    file_logging: bool = Field(False, description="Also write logs to a file")
    log_dir: Optional[Path] = Field(
        None, description="Directory for log files (defaults to <repository>/logs)"
    )
    server_name: str = Field(ServerDefaults.SERVER_NAME, description="MCP server name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def merge_cli(
        self,
        repository: Optional[Path] = None,
        verbose: int = 0,
        enable_file_logging: bool = False,
    ) -> "ServerConfig":
        """Return a copy with CLI flags applied over environment values."""
        updates: dict = {}
        if repository is not None:
            updates["repository"] = repository
        if verbose == 1:
            updates["log_level"] = "INFO"
        elif verbose >= 2:
            updates["log_level"] = "DEBUG"
        if enable_file_logging:
            updates["file_logging"] = True
        return self.model_copy(update=updates)

    def resolved_log_dir(self) -> Optional[Path]:
        if not self.file_logging:
            return None
        if self.log_dir is not None:
            return self.log_dir
        return (self.repository or Path.cwd()) / ServerDefaults.LOG_DIR_NAME
