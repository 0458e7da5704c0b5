import asyncio
import logging
import sys
from pathlib import Path

import click

from .configuration import ServerConfig, load_environment_variables
from .logging_config import configure_logging
from .server import serve

__version__ = "0.1.0"


@click.command()
@click.option("--repository", "-r", type=Path, help="Default git repository path")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v INFO, -vv DEBUG)")
@click.option(
    "--enable-file-logging",
    is_flag=True,
    help="Enable logging to file in logs/ directory",
)
@click.option(
    "--test-mode",
    is_flag=True,
    help="Run in test mode for CI (stays alive without immediate stdio)",
)
def main(
    repository: Path | None, verbose: int, enable_file_logging: bool, test_mode: bool
) -> None:
    """MCP Git Tools - git operations as MCP tools"""
    load_environment_variables(repository)
    config = ServerConfig().merge_cli(
        repository=repository,
        verbose=verbose,
        enable_file_logging=enable_file_logging,
    )

    log_file = configure_logging(config.log_level, config.resolved_log_dir())
    if log_file is not None:
        print(f"📝 File logging enabled: {log_file}", file=sys.stderr)
        logging.getLogger(__name__).info(f"📝 File logging enabled: {log_file}")

    asyncio.run(serve(config, test_mode=test_mode))


if __name__ == "__main__":
    main()
