import uuid
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .entry import Entry
from .exceptions import ListingError
from .lister import list_directory
from .sorter import sort_entries

logger = logging.getLogger("Dirview.Dispatcher")


def new_request_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ListingRequest:
    path: str
    id: str = field(default_factory=new_request_id)

    def to_dict(self):
        return {"id": self.id, "path": self.path}


@dataclass(frozen=True)
class ListingResponse:
    """
    Answer to exactly one ListingRequest, matched by ``id``.

    Either ``entries`` holds the sorted listing (``ok`` is True) or ``error``
    holds the failure that stopped it.
    """

    id: str
    path: str
    entries: Optional[List[Entry]] = None
    error: Optional[ListingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Entry]:
        """Return the entries or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.entries

    def to_dict(self):
        data = {"id": self.id, "ok": self.ok, "path": self.path}
        if self.ok:
            data["entries"] = [entry.to_dict() for entry in self.entries]
        else:
            data["error"] = self.error.to_dict()
        return data


class Dispatcher:
    """
    Serves listing requests: list the directory, sort it, answer once.

    ``stat_pool`` runs the per-entry metadata reads; ``request_pool`` runs
    whole requests handed to ``submit``. They must be different executors,
    otherwise queued requests can starve their own stat calls.
    """

    def __init__(
        self,
        stat_pool: Optional[ThreadPoolExecutor] = None,
        request_pool: Optional[ThreadPoolExecutor] = None,
        resolve_symlinks: bool = False,
    ):
        if stat_pool is not None and stat_pool is request_pool:
            raise ValueError("stat_pool and request_pool must be different executors")
        self.stat_pool = stat_pool
        self.request_pool = request_pool
        self.resolve_symlinks = resolve_symlinks

    def handle(self, request: ListingRequest) -> ListingResponse:
        logger.debug(f"Request {request.id}: read {request.path}")
        try:
            entries = list_directory(
                request.path,
                thread_pool=self.stat_pool,
                resolve_symlinks=self.resolve_symlinks,
            )
        except ListingError as e:
            logger.warning(f"Request {request.id} failed: {e}")
            return ListingResponse(id=request.id, path=request.path, error=e)
        return ListingResponse(
            id=request.id, path=request.path, entries=sort_entries(entries)
        )

    def read_path(self, path: str, request_id: Optional[str] = None) -> ListingResponse:
        request = ListingRequest(path=path, id=request_id or new_request_id())
        return self.handle(request)

    def submit(
        self,
        request: ListingRequest,
        callback: Optional[Callable[[ListingResponse], None]] = None,
    ) -> Future:
        """
        Run ``request`` in the background. The returned future resolves to its
        ListingResponse; ``callback``, if given, receives it exactly once.
        """
        if self.request_pool is None:
            raise RuntimeError("Dispatcher.submit() requires a request_pool")

        future = self.request_pool.submit(self.handle, request)
        if callback is not None:

            def _deliver(done):
                try:
                    callback(done.result())
                except Exception as e:
                    logger.error(f"Error in listing callback for {request.id}: {e}")

            future.add_done_callback(_deliver)
        return future
