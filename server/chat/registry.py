"""
Membership registry module.

Holds the set of claimed display names and the output handles of every
named session. Both collections are guarded by one lock and are only
reachable through the coroutines below.
"""

import asyncio
from typing import List, Optional, Set

from server.chat.connection import Connection


class Registry:
    """Concurrency-safe store of claimed names and broadcast sinks."""

    def __init__(self):
        self._names: Set[str] = set()
        self._sinks: List[Connection] = []
        self._lock = asyncio.Lock()  # Protect shared state

    async def try_claim(self, name: str) -> bool:
        """Claim name if nobody holds it. Returns False without mutating otherwise."""
        async with self._lock:
            if name in self._names:
                return False
            self._names.add(name)
            return True

    async def release(self, name: str):
        """Release a claimed name. Releasing an unknown name is a no-op."""
        async with self._lock:
            self._names.discard(name)

    async def add_sink(self, sink: Connection):
        """Register an output handle for broadcast."""
        async with self._lock:
            if sink not in self._sinks:
                self._sinks.append(sink)

    async def remove_sink(self, sink: Connection):
        """Unregister an output handle. Removing an unknown handle is a no-op."""
        async with self._lock:
            if sink in self._sinks:
                self._sinks.remove(sink)

    async def snapshot_names(self, excluding: Optional[str] = None) -> List[str]:
        """Return the claimed names, sorted, without excluding."""
        async with self._lock:
            return sorted(name for name in self._names if name != excluding)

    async def snapshot_sinks(self) -> List[Connection]:
        """Return a copy of the current broadcast sinks."""
        async with self._lock:
            return list(self._sinks)

    def get_member_count(self) -> int:
        """Get the number of claimed names."""
        return len(self._names)
