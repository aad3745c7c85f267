"""Explicit caches injected into template evaluation.

Two kinds of state outlive a single frame:

- :class:`MeasurementArena` memoizes derived values such as text widths. It
  is keyed by a stable element id plus a fingerprint of every input the
  value depends on, so a cached width is valid on any frame regardless of
  evaluation order.
- :class:`ResourcePool` owns heavyweight handles (decoded textures, video
  streams) created lazily by a host-supplied factory. Lifetimes are
  reference counted and eviction happens only when the host asks for it.

Both are created by the host and handed to templates through
:class:`~motionblocks.core.templates.EvaluationContext`. Templates never own
global caches.
"""

import time
from typing import Any, Callable, Dict, Hashable, List, Optional

from motionblocks.errors import ResourceReleaseError
from motionblocks.utils.hash_utils import fingerprint
from motionblocks.utils.logging import log


class MeasurementArena:
    """Memo of measured values keyed by ``(element_id, fingerprint)``.

    Examples:
        >>> arena = MeasurementArena()
        >>> arena.get_or_compute("t1:title", ("Hello", 60), lambda: 165.0)
        165.0
        >>> arena.get_or_compute("t1:title", ("Hello", 60), lambda: 0.0)
        165.0
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, element_id: str, key: str, default: Any = None) -> Any:
        return self._entries.get(element_id, {}).get(key, default)

    def put(self, element_id: str, key: str, value: Any) -> Any:
        self._entries.setdefault(element_id, {})[key] = value
        return value

    def get_or_compute(self, element_id: str, inputs: tuple, compute: Callable[[], Any]) -> Any:
        """Return the cached value for ``inputs`` or compute and store it."""
        key = fingerprint(*inputs)
        bucket = self._entries.setdefault(element_id, {})
        if key in bucket:
            self.hits += 1
            return bucket[key]
        self.misses += 1
        value = bucket[key] = compute()
        return value

    def invalidate(self, element_id: str) -> None:
        """Drop every measurement stored for one element."""
        self._entries.pop(element_id, None)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._entries.values())

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._entries


class _PoolEntry:
    __slots__ = ("handle", "ref_count", "last_used")

    def __init__(self, handle: Any, now: float):
        self.handle = handle
        self.ref_count = 0
        self.last_used = now


class ResourcePool:
    """Reference-counted pool of lazily created handles.

    Args:
        factory: Creates the handle for a key (usually a URL) on first use
        disposer: Optional callback that frees a handle on eviction or close
        clock: Time source for idle tracking (``time.monotonic`` by default)

    Examples:
        >>> pool = ResourcePool(lambda url: f"texture<{url}>")
        >>> pool.acquire("a.png")
        'texture<a.png>'
        >>> pool.peek("a.png")
        'texture<a.png>'
        >>> pool.release("a.png")
        >>> pool.evict_unreferenced()
        ['a.png']
    """

    def __init__(self, factory: Callable[[Hashable], Any],
                 disposer: Optional[Callable[[Any], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        self._factory = factory
        self._disposer = disposer
        self._clock = clock
        self._entries: Dict[Hashable, _PoolEntry] = {}

    def _entry(self, key: Hashable) -> _PoolEntry:
        entry = self._entries.get(key)
        if entry is None:
            log.debug(f"Creating resource '{key}'")
            entry = self._entries[key] = _PoolEntry(self._factory(key), self._clock())
        else:
            entry.last_used = self._clock()
        return entry

    def acquire(self, key: Hashable) -> Any:
        """Return the handle for ``key`` and take one reference to it."""
        entry = self._entry(key)
        entry.ref_count += 1
        return entry.handle

    def release(self, key: Hashable) -> None:
        """Give back one reference.

        Raises:
            ResourceReleaseError: If ``key`` holds no references
        """
        entry = self._entries.get(key)
        if entry is None or entry.ref_count <= 0:
            raise ResourceReleaseError(str(key))
        entry.ref_count -= 1
        entry.last_used = self._clock()

    def get(self, key: Hashable) -> Any:
        """Return the handle for ``key``, creating it if needed, without ownership."""
        return self._entry(key).handle

    def peek(self, key: Hashable) -> Optional[Any]:
        """Return an already created handle, or None. Never creates."""
        entry = self._entries.get(key)
        return entry.handle if entry is not None else None

    def ref_count(self, key: Hashable) -> int:
        entry = self._entries.get(key)
        return entry.ref_count if entry is not None else 0

    def evict_unreferenced(self, max_idle: Optional[float] = None) -> List[Hashable]:
        """Dispose handles nobody holds.

        Args:
            max_idle: Only evict entries idle for at least this many seconds
                (None evicts every unreferenced entry)

        Returns:
            Evicted keys, in insertion order
        """
        now = self._clock()
        evicted = [
            key for key, entry in self._entries.items()
            if entry.ref_count == 0 and (max_idle is None or now - entry.last_used >= max_idle)
        ]
        for key in evicted:
            self._dispose(self._entries.pop(key))
        if evicted:
            log.debug(f"Evicted {len(evicted)} unreferenced resource(s)")
        return evicted

    def close(self) -> None:
        """Dispose every handle, referenced or not."""
        for entry in self._entries.values():
            self._dispose(entry)
        self._entries.clear()

    def _dispose(self, entry: _PoolEntry) -> None:
        if self._disposer is not None:
            self._disposer(entry.handle)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries
