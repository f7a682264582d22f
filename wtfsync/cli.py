"""CLI interface for wtfsync."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .config import DEFAULT_CONFIG_NAME, SyncOptions
from .output import OutputFormatter
from .sync.runner import run_sync

logger = logging.getLogger(__name__)


def default_wtf_root(config_path: Path) -> Path:
    """Return the WTF directory for a config file.

    The tool is meant to live in its own folder inside ``WTF/``, next to
    its ``config.conf``, so the WTF root is the config directory's parent.
    """
    return config_path.resolve().parent.parent


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_NAME,
    show_default=True,
    help="Path to the sync configuration file",
)
@click.option(
    "--wtf-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="WTF directory containing Account/ (default: parent of the config's folder)",
)
@click.option("--dry-run", is_flag=True, help="Show what would be done, change nothing")
@click.option(
    "--verbose", "-v", is_flag=True, help="Log every file-level decision"
)
@click.option("--debug", is_flag=True, help="Enable debug logging output")
@click.version_option()
@click.pass_context
def main(
    ctx: Any,
    config_path: Path,
    wtf_root: Optional[Path],
    dry_run: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Copy a prototype character's settings to all other characters.

    Character files of the prototype (bindings, macros, layout, chat,
    AddOns.txt and SavedVariables) are copied to every other character of
    every account, and account-wide SavedVariables are copied to every
    other account.
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("wtfsync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    options = SyncOptions(
        config_path=config_path,
        wtf_root=wtf_root if wtf_root is not None else default_wtf_root(config_path),
        dry_run=dry_run,
        verbose=verbose,
    )
    logger.debug("Options: %s", options)

    out = OutputFormatter(verbose=verbose)
    ctx.exit(run_sync(options, output=out))


if __name__ == "__main__":
    main()
