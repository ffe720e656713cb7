from typing import Iterable, List

from .entry import Entry


def sort_name(name: str) -> str:
    """Name used for ordering: one leading dot dropped, lowercased."""
    if name.startswith("."):
        name = name[1:]
    return name.lower()


def sort_key(entry: Entry):
    return (not entry.is_dir, sort_name(entry.name))


def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    """
    Sorts the entries alphabetically, but placing the directories before the
    other types of items. Returns a new list; the input is left untouched.
    """
    return sorted(entries, key=sort_key)
