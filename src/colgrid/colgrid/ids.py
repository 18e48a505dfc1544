"""Id factories for layout cells.

Every factory is called once per column node with the node's structural
path (the cursor of each traversal frame, outermost first) and returns the
cell id. Factories that ignore the path generate fresh ids on every build.
"""

from __future__ import annotations

import itertools
import threading
from typing import Literal, Protocol

from uuid_extensions import uuid7str

from .exceptions import IdExhaustedError

IdStrategy = Literal["sequential", "uuid7", "positional"]

DEFAULT_PREFIX = "colgrid"


class IdFactory(Protocol):
    def __call__(self, path: tuple[int, ...]) -> str: ...


class SequentialIds:
    """Monotonic counter ids: colgrid_1, colgrid_2, ...

    Safe to share between threads. Ids are never reused within a process.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX, limit: int | None = None):
        self.prefix = prefix
        self.limit = limit
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self, path: tuple[int, ...]) -> str:
        with self._lock:
            n = next(self._counter)
        if self.limit is not None and n > self.limit:
            raise IdExhaustedError(self.limit)
        return f"{self.prefix}_{n}"


class Uuid7Ids:
    """Time-ordered UUIDv7 ids, unique across processes."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix

    def __call__(self, path: tuple[int, ...]) -> str:
        return f"{self.prefix}-{uuid7str()}"


class PositionalIds:
    """Ids keyed by structural position: colgrid-0, colgrid-1-0, ...

    Rebuilding a structurally unchanged tree yields the same ids, which keeps
    rendered markup diff-stable.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix

    def __call__(self, path: tuple[int, ...]) -> str:
        return "-".join([self.prefix, *(str(i) for i in path)])


# Process-wide default, shared by every engine that is not given a factory
DEFAULT_IDS = SequentialIds()


def make_id_factory(
    strategy: IdStrategy = "sequential", prefix: str = DEFAULT_PREFIX
) -> IdFactory:
    """Create an id factory by strategy name.

    The sequential strategy with the default prefix returns the shared
    ``DEFAULT_IDS`` counter so ids stay unique across engines.
    """
    if strategy == "sequential":
        if prefix == DEFAULT_PREFIX:
            return DEFAULT_IDS
        return SequentialIds(prefix)
    if strategy == "uuid7":
        return Uuid7Ids(prefix)
    if strategy == "positional":
        return PositionalIds(prefix)
    raise ValueError(f"Unknown id strategy: {strategy}")
