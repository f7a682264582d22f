"""Locate the prototype and enumerate accounts, realms and characters.

Layout of the account tree::

    <WTF>/Account/<account>/SavedVariables.lua
    <WTF>/Account/<account>/SavedVariables/
    <WTF>/Account/<account>/<realm>/<character>/...
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Prototype, SyncConfig
from ..exceptions import ResolverError, ResolverErrorReason
from .filesystem import FileSystem, LocalFileSystem
from .targets import CharacterTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPrototype:
    """Concrete location of the prototype character."""

    prototype: Prototype
    """Prototype identity from the config"""

    realm: str
    """Realm the character was found in (filled in when searched)"""

    character_path: Path
    """Existing prototype character directory"""

    account_path: Path
    """Prototype account directory, source of account-level files"""


def check_account_root(account_root: Path, fs: Optional[FileSystem] = None) -> None:
    """Ensure the ``Account`` directory exists.

    Raises:
        ResolverError: If ``account_root`` is not a directory or cannot be
            inspected
    """
    fs = fs or LocalFileSystem()
    try:
        exists = fs.is_dir(account_root)
    except OSError as e:
        raise ResolverError(
            ResolverErrorReason.UNREADABLE,
            f"Cannot read account dir {account_root}: {e.strerror or e}",
        ) from e
    if not exists:
        raise ResolverError(
            ResolverErrorReason.ACCOUNT_ROOT_NOT_FOUND,
            f"Account dir not found: {account_root}",
        )


def _subdirectories(path: Path, fs: FileSystem) -> list[Path]:
    if not fs.is_dir(path):
        return []
    return [entry for entry in fs.list_dir(path) if fs.is_dir(entry)]


def resolve_prototype(
    account_root: Path,
    config: SyncConfig,
    fs: Optional[FileSystem] = None,
) -> ResolvedPrototype:
    """Turn the configured prototype into an existing directory.

    When the prototype has no realm, realms of the prototype's account are
    searched in name order and the first realm containing the character
    wins. Two realms holding a character with the same name therefore
    always resolve to the alphabetically first realm.

    Args:
        account_root: The ``WTF/Account`` directory
        config: Loaded sync configuration
        fs: Filesystem to use (defaults to the local disk)

    Returns:
        ResolvedPrototype pointing at an existing directory

    Raises:
        ResolverError: If the character directory cannot be found, or the
            prototype's account cannot be read
    """
    fs = fs or LocalFileSystem()
    prototype = config.prototype
    account_path = account_root / prototype.account

    try:
        resolved = _find_prototype(prototype, account_path, fs)
    except OSError as e:
        raise ResolverError(
            ResolverErrorReason.UNREADABLE,
            f"Cannot read account dir {account_path}: {e.strerror or e}",
        ) from e

    if resolved is None:
        raise ResolverError(
            ResolverErrorReason.PROTOTYPE_NOT_FOUND,
            f"Prototype path not found for {prototype.display}",
        )
    return resolved


def _find_prototype(
    prototype: Prototype, account_path: Path, fs: FileSystem
) -> Optional[ResolvedPrototype]:
    if prototype.has_realm:
        character_path = account_path / prototype.realm / prototype.character
        if fs.is_dir(character_path):
            return ResolvedPrototype(
                prototype=prototype,
                realm=prototype.realm,
                character_path=character_path,
                account_path=account_path,
            )
        return None

    for realm_path in _subdirectories(account_path, fs):
        character_path = realm_path / prototype.character
        if fs.is_dir(character_path):
            logger.debug(
                "Found prototype %s in realm %s", prototype.display, realm_path.name
            )
            return ResolvedPrototype(
                prototype=prototype,
                realm=realm_path.name,
                character_path=character_path,
                account_path=account_path,
            )
    return None


def enumerate_accounts(
    account_root: Path,
    exclude: str = "",
    fs: Optional[FileSystem] = None,
) -> list[str]:
    """List account directory names, leaving out ``exclude``.

    Args:
        account_root: The ``WTF/Account`` directory
        exclude: Account name to leave out (the prototype's account)
        fs: Filesystem to use (defaults to the local disk)

    Returns:
        Account names in name order
    """
    fs = fs or LocalFileSystem()
    return [
        path.name
        for path in _subdirectories(account_root, fs)
        if path.name != exclude
    ]


def enumerate_characters(
    account_path: Path,
    fs: Optional[FileSystem] = None,
) -> list[CharacterTarget]:
    """List every ``<realm>/<character>`` directory of an account.

    Every subdirectory of every realm directory counts as a character; no
    attempt is made to recognise non-character folders.

    Args:
        account_path: An account directory
        fs: Filesystem to use (defaults to the local disk)

    Returns:
        Character targets ordered by realm, then character name
    """
    fs = fs or LocalFileSystem()
    targets: list[CharacterTarget] = []
    for realm_path in _subdirectories(account_path, fs):
        for character_path in _subdirectories(realm_path, fs):
            targets.append(
                CharacterTarget(
                    account=account_path.name,
                    realm=realm_path.name,
                    character=character_path.name,
                    path=character_path,
                )
            )
    return targets
