import json
import enum
import datetime
import uuid
import pathlib
import dataclasses


class DirviewJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        # Objects that know their wire form (Entry, ListingResponse, errors)
        if hasattr(obj, "to_dict"):
            return obj.to_dict()

        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, datetime.timedelta):
            return obj.total_seconds()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, pathlib.PurePath):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)

        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)

        return super().default(obj)


def dumps(obj, **kwargs):
    return json.dumps(obj, cls=DirviewJSONEncoder, **kwargs)


def serialize(obj):
    """
    Convert ``obj`` to JSON-compatible primitives (dicts, lists, strings,
    numbers) so it can cross the window bridge.
    """
    if isinstance(obj, (str, int, float, bool, type(None))):
        return obj
    return json.loads(dumps(obj))
