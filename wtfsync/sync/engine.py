"""Core sync engine propagating the prototype's files through the account tree."""

import logging
from pathlib import Path
from typing import Optional

from ..config import SyncConfig
from ..exceptions import ItemCopyError
from ..output import OutputFormatter
from .filesystem import FileSystem, LocalFileSystem
from .filters import (
    should_include_character,
    should_skip_addon_file,
    should_skip_char_item,
)
from .resolver import ResolvedPrototype, enumerate_accounts, enumerate_characters
from .targets import (
    ACCOUNT_ITEMS,
    CHARACTER_ITEMS,
    SAVED_VARIABLES_DIR,
    AccountTarget,
    CharacterTarget,
    CopyPlan,
    SyncAction,
    SyncDecision,
)

logger = logging.getLogger(__name__)


class SyncEngine:
    """Copies the prototype's files to every other character and account.

    One engine instance performs one run. It holds the run's statistics and
    nothing else; every run starts from a fresh view of the filesystem.
    """

    def __init__(
        self,
        config: SyncConfig,
        resolved: ResolvedPrototype,
        account_root: Path,
        fs: Optional[FileSystem] = None,
        output: Optional[OutputFormatter] = None,
        dry_run: bool = False,
    ):
        """Initialize sync engine.

        Args:
            config: Loaded sync configuration
            resolved: Resolved prototype location
            account_root: The ``WTF/Account`` directory
            fs: Filesystem to operate on (defaults to the local disk)
            output: Output formatter for progress lines
            dry_run: If True, only log what would be done
        """
        self.config = config
        self.resolved = resolved
        self.account_root = account_root
        self.fs = fs or LocalFileSystem()
        self.output = output or OutputFormatter()
        self.dry_run = dry_run
        self.stats = self._create_empty_stats()

    def _create_empty_stats(self) -> dict:
        """Create an empty statistics dictionary.

        Returns:
            Dictionary with zero counts for all stat categories
        """
        return {
            "characters": 0,
            "accounts": 0,
            "copied": 0,
            "created": 0,
            "removed": 0,
            "excluded": 0,
            "missing": 0,
            "failures": 0,
        }

    def run(self) -> dict:
        """Sync characters of the prototype's account, then every other account.

        Returns:
            Dictionary with sync statistics

        Examples:
            >>> engine = SyncEngine(config, resolved, Path("WTF/Account"))
            >>> stats = engine.run()
            >>> print(f"{stats['failures']} item(s) failed")
        """
        prototype_account = self.resolved.prototype.account

        self.output.info(
            f"Syncing characters within prototype account: {prototype_account}"
        )
        self._sync_characters_of(self.resolved.account_path)

        try:
            accounts = enumerate_accounts(
                self.account_root, exclude=prototype_account, fs=self.fs
            )
        except OSError as e:
            self._record_failure(ItemCopyError("list", self.account_root, e))
            accounts = []

        for account in accounts:
            target = AccountTarget(account=account, path=self.account_root / account)
            self._sync_account_target(target)
            self._sync_characters_of(target.path)

        self.output.success("Done.")
        self._display_summary()
        return self.stats

    def _sync_characters_of(self, account_path: Path) -> None:
        """Sync every included character of one account."""
        try:
            targets = enumerate_characters(account_path, fs=self.fs)
        except OSError as e:
            self._record_failure(ItemCopyError("list", account_path, e))
            return

        prototype_path = self.resolved.character_path.resolve()
        for target in targets:
            if target.path.resolve() == prototype_path:
                continue
            if not should_include_character(target.character, self.config.only_chars):
                logger.debug("Character %s not in only_chars", target.display)
                continue
            self._sync_character_target(target)

    def _sync_character_target(self, target: CharacterTarget) -> None:
        self.output.info(f"Syncing character: {target.display}")
        self.stats["characters"] += 1
        self.sync_character(self.resolved.character_path, target.path)

    def _sync_account_target(self, target: AccountTarget) -> None:
        self.output.info(f"Syncing account: {target.display}")
        self.stats["accounts"] += 1
        self.sync_account(self.resolved.account_path, target.path)

    def build_character_plan(self, source: Path, destination: Path) -> CopyPlan:
        """Plan the fixed character items for one character directory.

        Args:
            source: Prototype character directory
            destination: Target character directory

        Returns:
            CopyPlan with one decision per character item
        """
        plan = CopyPlan(destination=destination)
        for item in CHARACTER_ITEMS:
            if should_skip_char_item(item, self.config.excluded_char_files):
                plan.add(SyncAction.EXCLUDE, item)
                continue
            self._plan_item(plan, item, source, destination)
        return plan

    def build_account_plan(self, source: Path, destination: Path) -> CopyPlan:
        """Plan the account-level items for one account directory."""
        plan = CopyPlan(destination=destination)
        for item in ACCOUNT_ITEMS:
            self._plan_item(plan, item, source, destination)
        return plan

    def _plan_item(
        self, plan: CopyPlan, item: str, source: Path, destination: Path
    ) -> None:
        source_item = source / item
        if not self.fs.exists(source_item):
            plan.add(SyncAction.SKIP_MISSING, item, source=source_item)
        elif item == SAVED_VARIABLES_DIR and self.fs.is_dir(source_item):
            plan.add(
                SyncAction.MIRROR,
                item,
                source=source_item,
                destination=destination / item,
            )
        else:
            plan.add(
                SyncAction.COPY,
                item,
                source=source_item,
                destination=destination / item,
            )

    def build_saved_variables_plan(self, source: Path, destination: Path) -> CopyPlan:
        """Plan the mirror of a SavedVariables folder.

        Only regular files at the top of the folder are mirrored. Files of
        excluded addons are not copied, and copies of them already present
        at the destination are scheduled for removal.

        Args:
            source: Prototype's SavedVariables folder
            destination: Target's SavedVariables folder

        Returns:
            CopyPlan of copy, exclude and remove decisions

        Raises:
            OSError: If one of the folders cannot be listed
        """
        excluded_addons = self.config.excluded_addons
        plan = CopyPlan(destination=destination)

        for entry in self.fs.list_dir(source):
            if not self.fs.is_file(entry):
                continue
            if should_skip_addon_file(entry.name, excluded_addons):
                plan.add(SyncAction.EXCLUDE, entry.name, source=entry)
                continue
            plan.add(
                SyncAction.COPY,
                entry.name,
                source=entry,
                destination=destination / entry.name,
            )

        if excluded_addons and self.fs.is_dir(destination):
            for entry in self.fs.list_dir(destination):
                if self.fs.is_file(entry) and should_skip_addon_file(
                    entry.name, excluded_addons
                ):
                    plan.add(SyncAction.REMOVE, entry.name, destination=entry)

        return plan

    def sync_character(self, source: Path, destination: Path) -> None:
        """Copy the prototype's character items into one character directory.

        Excluded items are neither copied nor removed at the destination.
        """
        logger.debug("Syncing %s -> %s", source, destination)
        self._execute_plan(self.build_character_plan(source, destination))

    def sync_account(self, source: Path, destination: Path) -> None:
        """Copy account-level SavedVariables into one account directory."""
        logger.debug("Syncing account files %s -> %s", source, destination)
        self._execute_plan(self.build_account_plan(source, destination))

    def mirror_saved_variables(self, source: Path, destination: Path) -> None:
        """Mirror a SavedVariables folder, honouring addon exclusions."""
        try:
            plan = self.build_saved_variables_plan(source, destination)
        except OSError as e:
            self._record_failure(ItemCopyError("list", source, e))
            return
        self._execute_plan(plan)

    def _execute_plan(self, plan: CopyPlan) -> None:
        """Execute the decisions of a plan in order.

        A destination directory that cannot be created skips the whole plan.
        """
        if not self._ensure_directory(plan.destination):
            return
        for decision in plan.decisions:
            self._execute_decision(decision)

    def _execute_decision(self, decision: SyncDecision) -> None:
        if decision.action == SyncAction.EXCLUDE:
            self.stats["excluded"] += 1
            self.output.detail(f"Excluded by config: {decision.name}")
        elif decision.action == SyncAction.SKIP_MISSING:
            self.stats["missing"] += 1
            self.output.detail(f"Skipping missing: {decision.source}")
        elif decision.action == SyncAction.MIRROR:
            if decision.source is not None and decision.destination is not None:
                self.mirror_saved_variables(decision.source, decision.destination)
        elif decision.action == SyncAction.COPY:
            if decision.source is not None and decision.destination is not None:
                self._copy_file(decision.source, decision.destination)
        elif decision.action == SyncAction.REMOVE:
            if decision.destination is not None:
                self._remove_file(decision.destination)

    def _ensure_directory(self, path: Path) -> bool:
        """Create ``path`` if missing.

        Returns:
            False if the directory could not be created
        """
        if self.fs.is_dir(path):
            return True
        if self.dry_run:
            self.output.info(f"Would create directory: {path}")
            self.stats["created"] += 1
            return True
        self.output.detail(f"Create directory: {path}")
        try:
            self.fs.make_dirs(path)
        except OSError as e:
            self._record_failure(ItemCopyError("create directory", path, e))
            return False
        self.stats["created"] += 1
        return True

    def _copy_file(self, source: Path, destination: Path) -> None:
        if self.dry_run:
            self.output.info(f"Would copy: {source} -> {destination}")
            self.stats["copied"] += 1
            return
        self.output.detail(f"Copy: {source} -> {destination}")
        try:
            self.fs.copy_file(source, destination)
        except OSError as e:
            self._record_failure(ItemCopyError("copy", source, e))
            return
        self.stats["copied"] += 1

    def _remove_file(self, path: Path) -> None:
        if self.dry_run:
            self.output.info(f"Would remove: {path}")
            self.stats["removed"] += 1
            return
        self.output.detail(f"Remove: {path}")
        try:
            self.fs.remove_file(path)
        except OSError as e:
            self._record_failure(ItemCopyError("remove", path, e))
            return
        self.stats["removed"] += 1

    def _record_failure(self, error: ItemCopyError) -> None:
        self.stats["failures"] += 1
        self.output.warning(str(error))
        logger.debug("Item failure", exc_info=error.cause)

    def _display_summary(self) -> None:
        """Display sync summary (verbose only, failures always)."""
        stats = self.stats
        self.output.detail(
            f"Characters: {stats['characters']}, accounts: {stats['accounts']}"
        )
        verb = "Would copy" if self.dry_run else "Copied"
        self.output.detail(
            f"{verb}: {stats['copied']} file(s), "
            f"removed: {stats['removed']}, excluded: {stats['excluded']}"
        )
        if stats["failures"] > 0:
            self.output.warning(f"{stats['failures']} item(s) failed")
