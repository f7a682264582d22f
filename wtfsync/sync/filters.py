"""Inclusion and exclusion rules for characters, character items and addons.

All functions here are pure: they only look at names, never at the disk.
"""

from collections.abc import Collection


def should_include_character(name: str, only_chars: Collection[str]) -> bool:
    """Check if a character takes part in the sync.

    Args:
        name: Character directory name
        only_chars: Allow-list from the config; empty means "everyone"

    Returns:
        True if the character should be synced

    Examples:
        >>> should_include_character("Mage", set())
        True
        >>> should_include_character("Mage", {"Warrior"})
        False
    """
    if not only_chars:
        return True
    return name in only_chars


def should_skip_char_item(item_name: str, excluded_char_files: Collection[str]) -> bool:
    """Check if a top-level character item is excluded by config."""
    return item_name in excluded_char_files


def addon_stem(file_name: str) -> str:
    """Return a file name without its last extension.

    Examples:
        >>> addon_stem("pfQuest-Config.lua")
        'pfQuest-Config'
        >>> addon_stem("pfQuest.lua.bak")
        'pfQuest.lua'
        >>> addon_stem("Foo.Bar.lua")
        'Foo.Bar'
        >>> addon_stem("README")
        'README'
    """
    stem, dot, _ = file_name.rpartition(".")
    if not dot or not stem:
        return file_name
    return stem


def should_skip_addon_file(file_name: str, excluded_addons: Collection[str]) -> bool:
    """Check if a SavedVariables file belongs to an excluded addon.

    A file belongs to addon ``name`` when its stem is exactly ``name``, or
    starts with ``name-`` or ``name.``. The last form covers the client's
    ``<Addon>.lua.bak`` backups, whose stem is ``<Addon>.lua``. The
    extension itself does not matter, so ``.lua`` and ``.bak`` files are
    treated alike.

    Args:
        file_name: Base name of a file inside a SavedVariables folder
        excluded_addons: Addon names from ``addon_excluded``

    Returns:
        True if the file must not be copied (and must be pruned)

    Examples:
        >>> should_skip_addon_file("pfQuest.lua", {"pfQuest"})
        True
        >>> should_skip_addon_file("pfQuest-Config.bak", {"pfQuest"})
        True
        >>> should_skip_addon_file("pfQuest.lua.bak", {"pfQuest"})
        True
        >>> should_skip_addon_file("pfQuestExtra.lua", {"pfQuest"})
        False
    """
    if not excluded_addons:
        return False
    stem = addon_stem(file_name)
    for name in excluded_addons:
        if (
            stem == name
            or stem.startswith(f"{name}-")
            or stem.startswith(f"{name}.")
        ):
            return True
    return False
