"""
Chat client module.

This module handles the client side of the line protocol: answering the name
handshake, displaying MESSAGE lines and reacting to QUIT.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from common.constants import ControlLines
from common.protocol_definitions import encode_line, parse_server_line


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, writer: Optional[asyncio.StreamWriter] = None):
        self.writer = writer
        self.name_provider: Optional[Callable[[], Awaitable[str]]] = None
        self.display_handler: Callable[[str], None] = print
        self.username: Optional[str] = None
        self.accepted = False
        self.name_accepted = asyncio.Event()
        self.running = True

    def set_writer(self, writer: asyncio.StreamWriter):
        """Set the writer for sending lines."""
        self.writer = writer

    def set_name_provider(self, provider: Callable[[], Awaitable[str]]):
        """Set the coroutine function asked for a name on every SUBMITNAME."""
        self.name_provider = provider

    def set_display_handler(self, handler: Callable[[str], None]):
        """Set the callable that shows MESSAGE text to the user."""
        self.display_handler = handler

    async def send_line(self, line: str) -> bool:
        """Send one line to the server."""
        if not self.writer:
            print("[ERROR] Not connected to server")
            return False

        try:
            self.writer.write(encode_line(line))
            await self.writer.drain()
            return True
        except Exception as e:
            print(f"[ERROR] Failed to send line: {e}")
            return False

    async def handle_line(self, line: str):
        """Handle one line received from the server."""
        kind, payload = parse_server_line(line)

        if kind == ControlLines.SUBMITNAME:
            await self._handle_submit_name()
        elif kind == ControlLines.NAMEACCEPTED:
            self.accepted = True
            self.name_accepted.set()
        elif kind == ControlLines.QUIT:
            self.running = False
        else:
            self.display_handler(payload)

    async def _handle_submit_name(self):
        """Answer a name request."""
        if self.accepted:
            return
        if self.name_provider is None:
            raise RuntimeError("server asked for a name but no name provider is set")
        self.username = await self.name_provider()
        await self.send_line(self.username)
