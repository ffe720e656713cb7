import os
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .entry import Entry, EntryType
from .exceptions import DirectoryReadError, MetadataError

logger = logging.getLogger("Dirview.Lister")


def read_entry(dirpath: str, name: str, resolve_symlinks: bool = False) -> Entry:
    """
    Get the properties of the item called ``name`` inside ``dirpath``.

    By default the item is inspected with ``os.lstat`` so a symlink is reported
    as ``symlink``. A symlink whose target cannot be resolved is still an
    error. With ``resolve_symlinks`` the link is followed and the entry takes
    its target's type.
    """
    itempath = os.path.join(dirpath, name)
    try:
        st = os.stat(itempath) if resolve_symlinks else os.lstat(itempath)
        entry = Entry.from_stat(name, itempath, st)
        if entry.type is EntryType.SYMLINK:
            # Dangling links fail the listing.
            os.stat(itempath)
    except (OSError, OverflowError, ValueError) as e:
        # Out-of-range timestamps surface as OverflowError or ValueError.
        raise MetadataError(itempath, e) from e
    return entry


def list_directory(
    dirpath: str,
    thread_pool: Optional[ThreadPoolExecutor] = None,
    resolve_symlinks: bool = False,
) -> List[Entry]:
    """
    Read the immediate contents of ``dirpath`` along with their properties.

    Metadata for the children is fetched concurrently on ``thread_pool`` (a
    private pool is used when none is given). The order of the result is
    unspecified; use ``sort_entries`` for display order.

    Raises DirectoryReadError if the directory cannot be enumerated and
    MetadataError if any single child cannot be inspected. No partial
    listing is ever returned.
    """
    try:
        names = os.listdir(dirpath)
    except OSError as e:
        logger.debug(f"listdir failed for {dirpath}: {e}")
        raise DirectoryReadError(dirpath, e) from e

    if not names:
        return []

    if thread_pool is None:
        with ThreadPoolExecutor(max_workers=min(32, len(names))) as pool:
            return _stat_all(pool, dirpath, names, resolve_symlinks)
    return _stat_all(thread_pool, dirpath, names, resolve_symlinks)


def _stat_all(pool, dirpath, names, resolve_symlinks):
    futures = [
        pool.submit(read_entry, dirpath, name, resolve_symlinks) for name in names
    ]
    entries = []
    error = None
    # Join every future before reporting so no stat is left running.
    for future in futures:
        try:
            entries.append(future.result())
        except Exception as e:
            if error is None:
                error = e
    if error is not None:
        logger.debug(f"Listing of {dirpath} failed: {error}")
        raise error
    logger.debug(f"Read {len(entries)} entries from {dirpath}")
    return entries
