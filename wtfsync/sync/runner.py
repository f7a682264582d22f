"""Entry point tying config loading, prototype resolution and the engine together."""

import logging
from typing import Optional

from ..config import SyncOptions, load_config_file
from ..exceptions import ConfigError, ResolverError
from ..output import OutputFormatter
from .engine import SyncEngine
from .filesystem import FileSystem, LocalFileSystem
from .resolver import check_account_root, resolve_prototype

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_ITEM_FAILURES = 3


def run_sync(
    options: SyncOptions,
    output: Optional[OutputFormatter] = None,
    fs: Optional[FileSystem] = None,
) -> int:
    """Run one complete sync.

    Nothing is written before the config is loaded and the prototype is
    resolved; a failure in either step aborts the run.

    Args:
        options: Invocation options
        output: Output formatter (defaults to one honouring ``options.verbose``)
        fs: Filesystem to operate on (defaults to the local disk)

    Returns:
        Process exit status: 0 on success, 1 on a fatal error, 3 if at
        least one item could not be synced
    """
    output = output or OutputFormatter(verbose=options.verbose)
    fs = fs or LocalFileSystem()

    if options.dry_run:
        output.info("Dry-run enabled")

    try:
        config = load_config_file(options.config_path)
        check_account_root(options.account_root, fs=fs)
        resolved = resolve_prototype(options.account_root, config, fs=fs)
    except (ConfigError, ResolverError) as e:
        logger.debug("Aborting: %s", e.reason.value)
        output.error(str(e))
        return EXIT_FATAL

    logger.debug("Prototype resolved to %s", resolved.character_path)

    engine = SyncEngine(
        config=config,
        resolved=resolved,
        account_root=options.account_root,
        fs=fs,
        output=output,
        dry_run=options.dry_run,
    )
    stats = engine.run()

    if stats["failures"] > 0:
        return EXIT_ITEM_FAILURES
    return EXIT_OK
