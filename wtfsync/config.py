"""Sync configuration loading.

The configuration is a line-oriented ``key=value`` file::

    prototype=Account/Realm/Character   # or Account/Character
    addon_excluded=pfQuest,ShaguPlates
    char_files_excluded=AddOns.txt,bindings-cache.wtf
    only_chars=Name1,Name2

Everything after a ``#`` is a comment, on any line.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigError, ConfigErrorReason

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.conf"

COMMENT_MARKER = "#"

KEY_PROTOTYPE = "prototype"
KEY_ADDON_EXCLUDED = "addon_excluded"
KEY_CHAR_FILES_EXCLUDED = "char_files_excluded"
KEY_ONLY_CHARS = "only_chars"


@dataclass(frozen=True)
class Prototype:
    """Identity of the character whose files are copied everywhere else."""

    account: str
    """Account directory name"""

    realm: str
    """Realm directory name, empty when the realm should be searched"""

    character: str
    """Character directory name"""

    @property
    def has_realm(self) -> bool:
        return bool(self.realm)

    @property
    def display(self) -> str:
        """Human-readable ``account/realm/character`` form."""
        if self.realm:
            return f"{self.account}/{self.realm}/{self.character}"
        return f"{self.account}/{self.character}"

    @classmethod
    def parse(cls, value: str) -> "Prototype":
        """Parse ``account/realm/character`` or ``account/character``.

        Args:
            value: Raw ``prototype`` value from the config file

        Returns:
            Prototype instance

        Raises:
            ConfigError: If the value does not have two or three segments,
                or if the account or character segment is empty

        Examples:
            >>> Prototype.parse("Main/Nordanaar/Hero").realm
            'Nordanaar'
            >>> Prototype.parse("Main/Hero").realm
            ''
        """
        segments = [segment.strip() for segment in value.split("/")]
        if len(segments) == 2:
            account, character = segments
            realm = ""
        elif len(segments) == 3:
            account, realm, character = segments
        else:
            raise ConfigError(
                ConfigErrorReason.INVALID_PROTOTYPE, f"Invalid prototype: {value}"
            )

        if not account or not character:
            raise ConfigError(
                ConfigErrorReason.INVALID_PROTOTYPE, f"Invalid prototype: {value}"
            )

        return cls(account=account, realm=realm, character=character)


@dataclass(frozen=True)
class SyncConfig:
    """Parsed sync preferences. Immutable once loaded."""

    prototype: Prototype
    """Source-of-truth character"""

    excluded_addons: frozenset[str] = field(default_factory=frozenset)
    """Addon names whose SavedVariables files are never copied"""

    excluded_char_files: frozenset[str] = field(default_factory=frozenset)
    """Top-level character item names that are never copied"""

    only_chars: frozenset[str] = field(default_factory=frozenset)
    """Character allow-list; empty means every character is included"""


@dataclass(frozen=True)
class SyncOptions:
    """Invocation options handed to the sync core by the command line."""

    config_path: Path
    """Path to the configuration file"""

    wtf_root: Path
    """The game's WTF directory (contains ``Account/``)"""

    dry_run: bool = False
    """Log would-be changes instead of touching the filesystem"""

    verbose: bool = False
    """Log every file-level decision"""

    @property
    def account_root(self) -> Path:
        return self.wtf_root / "Account"


def _strip_comment(line: str) -> str:
    return line.split(COMMENT_MARKER, 1)[0].strip()


def parse_list(value: str) -> frozenset[str]:
    """Split a comma separated value into a set of trimmed, non-empty names.

    Examples:
        >>> sorted(parse_list(" pfQuest , ShaguPlates,, "))
        ['ShaguPlates', 'pfQuest']
    """
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def parse_lines(lines: Iterable[str]) -> dict[str, str]:
    """Collect ``key=value`` pairs, ignoring comments and blank lines.

    Lines without ``=`` are ignored. When a key occurs twice the last
    value wins.
    """
    values: dict[str, str] = {}
    for raw_line in lines:
        line = _strip_comment(raw_line)
        if not line or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def load_config(reader: Iterable[str]) -> SyncConfig:
    """Load a sync configuration from an iterable of text lines.

    Unknown keys are ignored so newer config files keep working with
    older versions of the tool.

    Args:
        reader: Open text file, ``io.StringIO`` or list of lines

    Returns:
        Parsed SyncConfig

    Raises:
        ConfigError: If ``prototype`` is missing or malformed
    """
    values = parse_lines(reader)

    prototype_value = values.get(KEY_PROTOTYPE, "")
    if not prototype_value:
        raise ConfigError(
            ConfigErrorReason.MISSING_PROTOTYPE, "prototype is required in config"
        )

    config = SyncConfig(
        prototype=Prototype.parse(prototype_value),
        excluded_addons=parse_list(values.get(KEY_ADDON_EXCLUDED, "")),
        excluded_char_files=parse_list(values.get(KEY_CHAR_FILES_EXCLUDED, "")),
        only_chars=parse_list(values.get(KEY_ONLY_CHARS, "")),
    )
    logger.debug("Loaded config: %s", config)
    return config


def load_config_file(path: Path) -> SyncConfig:
    """Load a sync configuration from a UTF-8 encoded file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed SyncConfig

    Raises:
        ConfigError: If the file does not exist, cannot be read or decoded,
            or its content is invalid
    """
    if not path.is_file():
        raise ConfigError(ConfigErrorReason.FILE_NOT_FOUND, f"Config not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except UnicodeDecodeError as e:
        raise ConfigError(
            ConfigErrorReason.UNREADABLE,
            f"Config is not valid UTF-8: {path} (byte {e.start})",
        ) from e
    except OSError as e:
        raise ConfigError(
            ConfigErrorReason.UNREADABLE,
            f"Cannot read config {path}: {e.strerror or e}",
        ) from e

    return load_config(lines)
