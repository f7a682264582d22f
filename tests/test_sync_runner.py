"""Tests for run_sync, the validate-then-propagate entry point."""

from pathlib import Path

from conftest import make_output, snapshot

from wtfsync.config import SyncOptions
from wtfsync.sync import LocalFileSystem
from wtfsync.sync.runner import EXIT_FATAL, EXIT_ITEM_FAILURES, EXIT_OK, run_sync


def _options(config_path: Path, wtf_root: Path, **kwargs) -> SyncOptions:
    return SyncOptions(config_path=config_path, wtf_root=wtf_root, **kwargs)


class TestRunSync:
    """Tests for exit status and fatal error reporting of run_sync."""

    def test_success(self, wtf_root, config_file):
        """Test a successful run ending with Done."""
        output, stdout, stderr = make_output()

        code = run_sync(_options(config_file(), wtf_root), output=output)

        assert code == EXIT_OK
        assert stdout.getvalue().splitlines()[-1] == "[sync] Done."
        assert stderr.getvalue() == ""

    def test_missing_prototype_aborts_without_writes(self, wtf_root, config_file):
        """Test that a config without prototype aborts before writing."""
        path = config_file("addon_excluded=pfQuest\n")
        before = snapshot(wtf_root)
        output, stdout, stderr = make_output()

        code = run_sync(_options(path, wtf_root), output=output)

        assert code == EXIT_FATAL
        assert snapshot(wtf_root) == before
        assert stderr.getvalue().strip() == (
            "[sync][error] prototype is required in config"
        )
        assert stdout.getvalue() == ""

    def test_invalid_prototype(self, wtf_root, config_file):
        """Test that a malformed prototype is a fatal error."""
        output, _, stderr = make_output()

        code = run_sync(
            _options(config_file("prototype=A/B/C/D\n"), wtf_root), output=output
        )

        assert code == EXIT_FATAL
        assert "[sync][error] Invalid prototype: A/B/C/D" in stderr.getvalue()

    def test_config_not_found(self, wtf_root):
        """Test that a missing config file is a fatal error."""
        output, _, stderr = make_output()

        code = run_sync(_options(wtf_root / "missing.conf", wtf_root), output=output)

        assert code == EXIT_FATAL
        assert "[sync][error] Config not found" in stderr.getvalue()

    def test_config_not_utf8_aborts_without_writes(self, wtf_root, config_file):
        """Test that an undecodable config file is reported, not raised."""
        path = config_file()
        path.write_bytes(b"prototype=A/Org/Hero\n# caf\xe9\n")
        before = snapshot(wtf_root)
        output, stdout, stderr = make_output()

        code = run_sync(_options(path, wtf_root), output=output)

        assert code == EXIT_FATAL
        assert snapshot(wtf_root) == before
        assert stderr.getvalue().startswith("[sync][error] Config is not valid UTF-8")
        assert stdout.getvalue() == ""

    def test_account_root_missing(self, tmp_path):
        """Test that a missing Account directory is a fatal error."""
        config_path = tmp_path / "config.conf"
        config_path.write_text("prototype=A/Org/Hero\n")
        output, _, stderr = make_output()

        code = run_sync(_options(config_path, tmp_path / "WTF"), output=output)

        assert code == EXIT_FATAL
        assert "[sync][error] Account dir not found" in stderr.getvalue()

    def test_prototype_not_found(self, wtf_root, config_file):
        """Test that an unknown prototype aborts before writing."""
        path = config_file("prototype=A/Nobody\n")
        before = snapshot(wtf_root)
        output, _, stderr = make_output()

        code = run_sync(_options(path, wtf_root), output=output)

        assert code == EXIT_FATAL
        assert snapshot(wtf_root) == before
        assert "[sync][error] Prototype path not found for A/Nobody" in stderr.getvalue()

    def test_unreadable_account_aborts_without_writes(self, wtf_root, config_file):
        """Test that an unlistable prototype account is a fatal error."""

        class LockedFileSystem(LocalFileSystem):
            def list_dir(self, path: Path) -> list[Path]:
                raise PermissionError(13, "Permission denied", str(path))

        path = config_file("prototype=A/Hero\n")
        before = snapshot(wtf_root)
        output, _, stderr = make_output()

        code = run_sync(
            _options(path, wtf_root),
            output=output,
            fs=LockedFileSystem(),
        )

        assert code == EXIT_FATAL
        assert snapshot(wtf_root) == before
        assert "[sync][error] Cannot read account dir" in stderr.getvalue()

    def test_dry_run(self, wtf_root, config_file):
        """Test that a dry run succeeds without touching the tree."""
        path = config_file()
        before = snapshot(wtf_root)
        output, stdout, _ = make_output()

        code = run_sync(_options(path, wtf_root, dry_run=True), output=output)

        assert code == EXIT_OK
        assert snapshot(wtf_root) == before
        assert stdout.getvalue().splitlines()[0] == "[sync] Dry-run enabled"

    def test_item_failures_reported_in_exit_status(self, wtf_root, config_file):
        """Test that failed items turn into exit status 3."""

        class ReadOnlyFileSystem(LocalFileSystem):
            def copy_file(self, source: Path, destination: Path) -> None:
                raise PermissionError(13, "Permission denied", str(destination))

        output, _, _ = make_output()

        code = run_sync(
            _options(config_file(), wtf_root), output=output, fs=ReadOnlyFileSystem()
        )

        assert code == EXIT_ITEM_FAILURES
