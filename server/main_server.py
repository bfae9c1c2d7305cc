#!/usr/bin/env python3
"""
Chat Relay Server - listener loop

Accepts TCP connections and runs one SessionHandler task per client. All
sessions share one Registry, one Broadcaster and one activity log sink.
"""

import asyncio
import socket
from datetime import datetime
from typing import Dict, Optional

from common.constants import DATE_FORMAT
from server.activity.activity_log import ActivityLogSink, Transcript
from server.chat.broadcaster import Broadcaster
from server.chat.connection import Connection
from server.chat.registry import Registry
from server.chat.session import SessionHandler
from server.utils.config import ServerConfig
from server.utils.logger import logger


class ChatRelayServer:
    """Main server class that wires the chat components together."""

    def __init__(self, config: Optional[ServerConfig] = None,
                 activity_log: Optional[ActivityLogSink] = None):
        self.config = config or ServerConfig()
        self.activity_log = activity_log or Transcript(self.config.transcript_path)
        self.registry = Registry()
        self.broadcaster = Broadcaster()
        self.sessions: Dict[SessionHandler, asyncio.Task] = {}
        self.server: Optional[asyncio.AbstractServer] = None

        # Set when accepting fails for good; start() re-raises it
        self.listener_error: Optional[OSError] = None
        self._listener_done: Optional[asyncio.Future] = None
        self._previous_handler = None

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        connection = Connection(reader, writer, **self.config.get_stream_settings())
        logger.log_connection(connection.peername)

        session = SessionHandler(
            connection, self.registry, self.broadcaster, self.activity_log, self.config
        )
        self.sessions[session] = asyncio.current_task()
        try:
            await session.run()
        finally:
            self.sessions.pop(session, None)

    async def start_listening(self) -> asyncio.AbstractServer:
        """Bind the listen socket. Bind failures propagate to the caller."""
        info = self.config.get_connection_info()
        self.server = await asyncio.start_server(
            self.handle_client,
            info['host'],
            info['port'],
            limit=self.config.read_limit
        )

        addr = ', '.join(str(sock.getsockname()) for sock in self.server.sockets)
        logger.info(f"Server listening on {addr}")
        self._announce()
        return self.server

    async def start(self):
        """
        Start the server and serve until cancelled.

        asyncio only logs a failing accept() and keeps the listener alive. A
        loop exception handler turns such a failure into an OSError raised
        from here, so the caller sees the listener die. Live sessions are
        ended before the listen socket is waited on.
        """
        await self.start_listening()
        loop = asyncio.get_running_loop()
        self._previous_handler = loop.get_exception_handler()
        loop.set_exception_handler(self._handle_loop_exception)
        self._listener_done = loop.create_future()
        try:
            await self._listener_done
        finally:
            loop.set_exception_handler(self._previous_handler)
            self._listener_done = None
            await self.stop()

    async def stop(self):
        """Stop accepting clients, end live sessions and close the listen socket."""
        if self.server is None:
            return
        server, self.server = self.server, None
        server.close()
        await self._cancel_sessions()
        await server.wait_closed()

    async def _cancel_sessions(self):
        """Cancel every running session and wait for its cleanup to finish."""
        current = asyncio.current_task()
        tasks = [task for task in self.sessions.values() if task is not current]
        if not tasks:
            return
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info(f"Ended {len(tasks)} live session(s)")

    def _handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: dict):
        """Treat accept() failures as fatal; pass everything else on."""
        exception = context.get('exception')
        if isinstance(exception, OSError) and _is_accept_failure(context):
            logger.log_error("accepting connections", exception)
            self.listener_error = exception
            if self._listener_done is not None and not self._listener_done.done():
                self._listener_done.set_exception(exception)
            return

        if self._previous_handler is not None:
            self._previous_handler(loop, context)
        else:
            loop.default_exception_handler(context)

    def get_bound_port(self) -> Optional[int]:
        """Get the port actually bound (useful when configured with port 0)."""
        if self.server is None or not self.server.sockets:
            return None
        return self.server.sockets[0].getsockname()[1]

    def _announce(self):
        """Write the start banner to the activity log when it supports notices."""
        append_notice = getattr(self.activity_log, 'append_notice', None)
        if append_notice is None:
            return
        append_notice(f"The Chat Server is running on IP: {_get_local_ip()}")
        append_notice(f"---{datetime.now().strftime(DATE_FORMAT)}---")
        append_notice("")


def _is_accept_failure(context: dict) -> bool:
    # Resource exhaustion is reported with an accept message; other errors
    # surface as an exception in the loop's _accept_connection callback
    if 'accept' in context.get('message', '').lower():
        return True
    return '_accept_connection' in repr(context.get('handle'))


def _get_local_ip() -> str:
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return '127.0.0.1'
