"""Configuration module for MCP Git Tools.

Configuration is a single pydantic-settings model, ``ServerConfig``, bound to the
environment and overridable from the command line.

Environment variable binding:
    MCP_GIT_REPOSITORY: default repository for calls without ``repoPath``
    LOG_LEVEL: root log level (DEBUG, INFO, WARNING, ...)
    MCP_GIT_FILE_LOGGING: "1"/"true"/"yes"/"on" to also log to a file
    MCP_GIT_LOG_DIR: directory for the log file
    MCP_GIT_SERVER_NAME: name announced to MCP clients

``.env`` files in the working directory and the repository are loaded first
with python-dotenv; variables already set in the process environment always
win.

Usage examples:
    >>> from mcp_git_tools.configuration import ServerConfig, load_environment_variables
    >>>
    >>> load_environment_variables(Path("/path/to/repo"))
    >>> config = ServerConfig().merge_cli(verbose=2)
    >>> config.log_level
    'DEBUG'
"""

from .server_config import ServerConfig, load_environment_variables

__all__ = ["ServerConfig", "load_environment_variables"]
