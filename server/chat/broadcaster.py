"""
Broadcast module.

Fans one line out to a snapshot of sinks. A recipient that cannot be written
to is logged, has its transport aborted so its own session notices and cleans
up, and is skipped; delivery to everyone else continues.
"""

from typing import Callable, List, Optional, Sequence

from server.chat.connection import Connection
from server.utils.logger import logger


class Broadcaster:
    """Server-side fan-out of chat lines."""

    async def broadcast(self, line: str, sinks: Sequence[Connection],
                        on_recipient: Optional[Callable[[Connection], None]] = None) -> List[Connection]:
        """
        Send line to every sink.

        on_recipient, when given, is called once per sink before the write.
        Returns the sinks whose write failed. Never raises for a failed sink.
        """
        failed = []

        for sink in sinks:
            if on_recipient is not None:
                on_recipient(sink)
            try:
                await sink.write_line(line)
            except Exception as e:
                logger.log_broadcast_failure(sink.peername, e)
                failed.append(sink)
                self._abort(sink)

        return failed

    def _abort(self, sink: Connection):
        try:
            sink.abort()
        except Exception as e:
            logger.debug(f"Abort of {sink.peername} failed: {e}")
