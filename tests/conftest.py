"""Shared fixtures building a WTF account tree on disk."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from wtfsync.output import OutputFormatter

HERO_FILES = {
    "bindings-cache.wtf": "hero bindings",
    "camera-settings.txt": "hero camera",
    "chat-cache.txt": "hero chat",
    "layout-cache.txt": "hero layout",
    "macros-cache.txt": "hero macros",
    "macros-local.txt": "hero local macros",
    "AddOns.txt": "hero addons",
}

HERO_SAVED_VARIABLES = {
    "Bagnon.lua": "hero bagnon",
    "pfQuest.lua": "hero pfquest",
    "pfQuest-Config.lua": "hero pfquest config",
    "pfQuest.lua.bak": "hero pfquest backup",
}

ACCOUNT_SAVED_VARIABLES = {
    "Bagnon.lua": "account bagnon",
    "pfQuest.lua": "account pfquest",
}


def write_files(directory: Path, files: dict) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content)


def snapshot(root: Path) -> dict:
    """Map every file below ``root`` to its bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def make_output(verbose: bool = False) -> tuple[OutputFormatter, io.StringIO, io.StringIO]:
    """Create an OutputFormatter writing to in-memory buffers."""
    stdout = io.StringIO()
    stderr = io.StringIO()
    output = OutputFormatter(
        verbose=verbose,
        console=Console(file=stdout, highlight=False, markup=False, soft_wrap=True),
        error_console=Console(
            file=stderr, highlight=False, markup=False, soft_wrap=True
        ),
    )
    return output, stdout, stderr


@pytest.fixture
def wtf_root(tmp_path):
    """Create a WTF tree.

    Account A: realm Org with Hero (prototype) and Mage.
    Account B: realm Org with Warrior.
    """
    root = tmp_path / "WTF"
    account_a = root / "Account" / "A"
    account_b = root / "Account" / "B"

    hero = account_a / "Org" / "Hero"
    write_files(hero, HERO_FILES)
    write_files(hero / "SavedVariables", HERO_SAVED_VARIABLES)

    mage = account_a / "Org" / "Mage"
    write_files(mage, {"AddOns.txt": "mage addons"})
    write_files(
        mage / "SavedVariables",
        {"pfQuest.lua": "stale mage pfquest", "Other.lua": "mage other"},
    )

    (account_a / "SavedVariables.lua").write_text("account A")
    write_files(account_a / "SavedVariables", ACCOUNT_SAVED_VARIABLES)

    (account_b / "Org" / "Warrior").mkdir(parents=True)
    write_files(account_b / "SavedVariables", {"pfQuest-Cache.lua": "stale B"})

    return root


@pytest.fixture
def config_file(wtf_root):
    """Write a config file for the prototype A/Org/Hero inside WTF/wtfsync/."""

    def _write(text: str = "prototype=A/Org/Hero\naddon_excluded=pfQuest\n") -> Path:
        path = wtf_root / "wtfsync" / "config.conf"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write
