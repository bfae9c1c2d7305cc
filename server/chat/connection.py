"""
Client connection module.

Wraps one client's asyncio stream pair and exchanges discrete text lines.
A Connection is also the output handle ("sink") registered for broadcast.
"""

import asyncio
from typing import Optional

from common.constants import WRITE_TIMEOUT, CLOSE_TIMEOUT
from common.protocol_definitions import encode_line, decode_line


class Connection:
    """Line-oriented view of a client stream."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 write_timeout: float = WRITE_TIMEOUT, close_timeout: float = CLOSE_TIMEOUT):
        self.reader = reader
        self.writer = writer
        self.write_timeout = write_timeout
        self.close_timeout = close_timeout
        self.peername = writer.get_extra_info('peername')
        self.closed = False

    def __repr__(self):
        return f"<Connection {self.peername}>"

    async def read_line(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Read one line from the client.

        Returns None at end of stream. Raises ConnectionError when the line
        exceeds the reader limit or the stream fails, and asyncio.TimeoutError
        when no line arrives within timeout seconds.
        """
        try:
            if timeout is None:
                data = await self.reader.readline()
            else:
                data = await asyncio.wait_for(self.reader.readline(), timeout)
        except ValueError as e:
            # StreamReader reports an over-long line as ValueError
            raise ConnectionError(f"line too long from {self.peername}") from e

        if not data:
            return None
        return decode_line(data)

    async def write_line(self, line: str):
        """
        Send one line to the client and wait for the buffer to drain.

        A peer that does not take the line within write_timeout seconds is
        treated as failed: ConnectionError is raised.
        """
        if self.closed or self.writer.is_closing():
            raise ConnectionError(f"connection to {self.peername} is closed")
        self.writer.write(encode_line(line))
        try:
            await asyncio.wait_for(self.writer.drain(), self.write_timeout)
        except asyncio.TimeoutError as e:
            raise ConnectionError(
                f"write to {self.peername} timed out after {self.write_timeout}s"
            ) from e

    def abort(self):
        """Drop the transport and any unsent data; the owning session sees EOF."""
        self.closed = True
        self.writer.transport.abort()

    async def close(self):
        """Close the stream. Safe to call more than once; never waits past close_timeout."""
        self.closed = True
        if not self.writer.is_closing():
            self.writer.close()
        try:
            await asyncio.wait_for(self.writer.wait_closed(), self.close_timeout)
        except asyncio.TimeoutError:
            # Peer is not reading, so the buffer will never flush
            self.writer.transport.abort()
