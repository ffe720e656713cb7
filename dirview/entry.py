import datetime
import enum
import stat
from dataclasses import dataclass


class EntryType(str, enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    BLOCK_DEVICE = "blockdevice"
    CHARACTER_DEVICE = "characterdevice"
    SYMLINK = "symlink"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"


# First match wins.
_TYPE_PREDICATES = (
    (stat.S_ISREG, EntryType.FILE),
    (stat.S_ISDIR, EntryType.DIRECTORY),
    (stat.S_ISBLK, EntryType.BLOCK_DEVICE),
    (stat.S_ISCHR, EntryType.CHARACTER_DEVICE),
    (stat.S_ISLNK, EntryType.SYMLINK),
    (stat.S_ISFIFO, EntryType.FIFO),
    (stat.S_ISSOCK, EntryType.SOCKET),
)


def classify(mode: int) -> EntryType:
    """
    Get the entry type from an ``st_mode`` value.
    """
    for predicate, entry_type in _TYPE_PREDICATES:
        if predicate(mode):
            return entry_type
    return EntryType.UNKNOWN


@dataclass(frozen=True)
class Entry:
    name: str
    path: str
    type: EntryType
    size: int
    modified_time: datetime.datetime

    @classmethod
    def from_stat(cls, name: str, path: str, st) -> "Entry":
        return cls(
            name=name,
            path=path,
            type=classify(st.st_mode),
            size=st.st_size,
            modified_time=datetime.datetime.fromtimestamp(
                st.st_mtime, tz=datetime.timezone.utc
            ),
        )

    @property
    def is_dir(self) -> bool:
        return self.type is EntryType.DIRECTORY

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    def to_dict(self):
        return {
            "name": self.name,
            "type": self.type.value,
            "path": self.path,
            "size": self.size,
            "modifiedTime": self.modified_time.isoformat(),
        }
