"""
process-scoped caches which are built at most once and are read-only afterwards
"""
import threading
from typing import Any, Callable, Dict, Hashable, Optional

from .util import logger


class ProcessCache:
    """
    build-once, read-many storage for values derived from the reference store

    Values are built on first access while holding a lock, so concurrent first access
    from several threads builds each key exactly once and never sees a partial value.
    There is no invalidation tied to changes in the underlying store: a cached value
    stays stale until :meth:`reset` is called or the process restarts.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._content: Dict[Hashable, Any] = {}

    def get(self, key: Hashable, builder: Callable[[], Any]) -> Any:
        """
        return the cached value for a key, building it with the builder on first access
        """
        try:
            return self._content[key]
        except KeyError:
            pass
        with self._lock:
            if key not in self._content:
                logger.info(f'building cache: {key}')
                self._content[key] = builder()
            return self._content[key]

    def __contains__(self, key: Hashable) -> bool:
        return key in self._content

    def reset(self, scope: Optional[Hashable] = None) -> None:
        """
        drop cached values

        Args:
            scope: only drop keys whose first element is this scope (i.e. a store key). All keys are dropped if not given
        """
        with self._lock:
            if scope is None:
                self._content.clear()
                return
            for key in list(self._content):
                if isinstance(key, tuple) and key and key[0] == scope:
                    del self._content[key]


CACHE = ProcessCache()
