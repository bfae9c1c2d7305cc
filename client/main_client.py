#!/usr/bin/env python3
"""
Chat Relay Client

Connects to the relay, answers the name handshake and forwards stdin lines
to the room while printing everything the server sends.
"""

import asyncio
import sys
from typing import Optional

from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import Commands, DEFAULT_HOST, DEFAULT_PORT
from common.protocol_definitions import decode_line


class ChatRelayClient:
    """Main client class: connection handling around a ChatClient."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, username: Optional[str] = None):
        self.config = ClientConfig(host, port, username)
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.running = False

        self.chat_client = ChatClient()
        self.chat_client.set_name_provider(self.ask_username)
        self._pending_username = username

    async def connect(self, retry_count: Optional[int] = None, base_delay: Optional[float] = None) -> bool:
        """Establish connection to the server with retry logic and exponential backoff."""
        retry_count = retry_count or self.config.connect_attempts
        base_delay = base_delay if base_delay is not None else self.config.connect_retry_delay
        info = self.config.get_connection_info()
        host, port = info['host'], info['port']
        attempt = 0

        while attempt < retry_count:
            try:
                self.reader, self.writer = await asyncio.open_connection(host, port)
                logger.log_connection(host, port, True)
                self.running = True
                self.chat_client.set_writer(self.writer)
                return True
            except OSError as e:
                attempt += 1
                logger.log_connection(host, port, False)
                logger.log_error("connection", e)

                if attempt < retry_count:
                    delay = base_delay * (2 ** (attempt - 1))  # Exponential backoff
                    logger.info(f"[INFO] Retrying connection in {delay}s (attempt {attempt}/{retry_count})...")
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"[ERROR] Failed to connect after {retry_count} attempts")
        return False

    async def ask_username(self) -> str:
        """Supply a name: the configured one first, then ask on stdin."""
        if self._pending_username is not None:
            username, self._pending_username = self._pending_username, None
            return username

        print("Enter username: ", end='', flush=True)
        line = await asyncio.get_running_loop().run_in_executor(None, sys.stdin.readline)
        return line.strip()

    async def listen_for_messages(self):
        """Listen for incoming lines until the server closes or sends QUIT."""
        was_accepted = False
        try:
            while self.running and self.chat_client.running:
                data = await self.reader.readline()
                if not data:
                    logger.info("[INFO] Server closed connection")
                    break
                await self.chat_client.handle_line(decode_line(data))

                if self.chat_client.accepted and not was_accepted:
                    was_accepted = True
                    logger.log_login(self.chat_client.username)
        except ConnectionError as e:
            logger.error(f"[ERROR] Connection lost: {e}")
        finally:
            self.running = False

    async def read_user_input(self):
        """Forward stdin lines to the server until EOF or /quit."""
        await self.chat_client.name_accepted.wait()
        loop = asyncio.get_running_loop()
        while self.running:
            user_input = await loop.run_in_executor(None, sys.stdin.readline)
            if not user_input:
                await self.chat_client.send_line(Commands.QUIT.lower())
                break
            text = user_input.rstrip('\r\n')
            if not text:
                continue
            await self.chat_client.send_line(text)
            if text.upper().startswith(Commands.QUIT):
                break

    async def interactive_mode(self):
        """Run client with interactive chat input."""
        if not await self.connect():
            return

        logger.show_interactive_mode_info()
        listener_task = asyncio.create_task(self.listen_for_messages())
        input_task = asyncio.create_task(self.read_user_input())

        try:
            # The listener ends on QUIT or EOF; input ends on /quit or stdin EOF
            await listener_task
        except asyncio.CancelledError:
            pass
        finally:
            self.running = False
            input_task.cancel()
            try:
                await input_task
            except asyncio.CancelledError:
                pass

            # Close connection
            if self.writer:
                self.writer.close()
                await self.writer.wait_closed()

            logger.info("[INFO] Disconnected from server")
