"""
Chat session module.

One SessionHandler serves one client from accept to cleanup:

    AWAITING_NAME --name claimed--> ACTIVE --EOF / error / /quit--> CLOSED

CLOSED is also reached straight from AWAITING_NAME when the client goes away
before a name is accepted. Cleanup runs exactly once on every exit path.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

from common.constants import ControlLines, Commands, SERVER_ACTOR_LABEL
from common.protocol_definitions import (
    current_hhmm, create_joined_message, create_chat_line, create_disconnected_message,
    create_user_list_message, create_help_message, parse_command
)
from server.activity.activity_log import ActivityLogSink
from server.chat.broadcaster import Broadcaster
from server.chat.connection import Connection
from server.chat.registry import Registry
from server.utils.config import ServerConfig
from server.utils.logger import logger


class SessionState(Enum):
    AWAITING_NAME = 'awaiting_name'
    ACTIVE = 'active'
    CLOSED = 'closed'


class SessionHandler:
    """Protocol state machine for one connected client."""

    def __init__(self, connection: Connection, registry: Registry, broadcaster: Broadcaster,
                 activity_log: ActivityLogSink, config: Optional[ServerConfig] = None,
                 clock: Callable[[], str] = current_hhmm):
        self.connection = connection
        self.registry = registry
        self.broadcaster = broadcaster
        self.activity_log = activity_log
        self.config = config or ServerConfig()
        self.clock = clock

        self.display_name: Optional[str] = None
        self.state = SessionState.AWAITING_NAME
        self._sink_added = False

    async def run(self):
        """Serve the client until it leaves, then clean up."""
        try:
            if await self._handshake():
                await self._command_loop()
        except asyncio.TimeoutError:
            logger.info(f"Session {self.connection.peername} idle for {self.config.idle_timeout}s, closing")
        except (ConnectionError, OSError) as e:
            logger.info(f"Stream error for {self.connection.peername}: {e}")
        finally:
            await self.close()

    async def _read_line(self) -> Optional[str]:
        return await self.connection.read_line(timeout=self.config.idle_timeout)

    async def _handshake(self) -> bool:
        """Request names until one is claimed. Returns False if the client left."""
        attempts = 0

        while True:
            await self.connection.write_line(ControlLines.SUBMITNAME)
            name = await self._read_line()
            if name is None:
                return False

            self._log_event(SERVER_ACTOR_LABEL, f"{name} {ControlLines.SUBMITNAME}")

            if await self.registry.try_claim(name):
                self.display_name = name
                break

            logger.log_name_rejected(name, self.connection.peername)
            attempts += 1
            max_attempts = self.config.max_name_attempts
            if max_attempts is not None and attempts >= max_attempts:
                logger.info(f"{self.connection.peername} gave up after {attempts} name attempts")
                return False

        await self.connection.write_line(ControlLines.NAMEACCEPTED)
        self._log_event(SERVER_ACTOR_LABEL, f"{name} {ControlLines.NAMEACCEPTED}")

        # Announce before registering so the newcomer does not see its own join
        sinks = await self.registry.snapshot_sinks()
        await self.broadcaster.broadcast(create_joined_message(name), sinks)
        self._log_event(SERVER_ACTOR_LABEL, f"{name} joined")

        await self.registry.add_sink(self.connection)
        self._sink_added = True
        self.state = SessionState.ACTIVE
        logger.log_login(name, self.connection.peername)
        return True

    async def _command_loop(self):
        while self.state is SessionState.ACTIVE:
            line = await self._read_line()
            if line is None:
                return

            command = parse_command(line)
            if command == Commands.QUIT:
                await self.handle_quit()
                return
            elif command == Commands.USER:
                await self.handle_user_list(line)
            elif command == Commands.HELP:
                await self.handle_help(line)
            else:
                await self.handle_chat(line)

    async def handle_quit(self):
        """Acknowledge /quit and tell the room, this session included."""
        await self.connection.write_line(ControlLines.QUIT)
        self._log_event(SERVER_ACTOR_LABEL, f"{self.display_name} disconnected")

        sinks = await self.registry.snapshot_sinks()
        await self.broadcaster.broadcast(
            create_disconnected_message(self.display_name, self.clock()), sinks
        )

    async def handle_user_list(self, line: str):
        """Send this client the names of everyone else in the room."""
        self._log_event(self.display_name, line)
        others = await self.registry.snapshot_names(excluding=self.display_name)
        for reply in create_user_list_message(others):
            await self.connection.write_line(reply)

    async def handle_help(self, line: str):
        """Send this client the command summary."""
        self._log_event(self.display_name, line)
        for reply in create_help_message():
            await self.connection.write_line(reply)

    async def handle_chat(self, text: str):
        """Broadcast a chat message to every sink, logging once per recipient."""
        hhmm = self.clock()
        sinks = await self.registry.snapshot_sinks()
        await self.broadcaster.broadcast(
            create_chat_line(self.display_name, text, hhmm),
            sinks,
            on_recipient=lambda sink: self._log_event(self.display_name, text, hhmm)
        )

    async def close(self):
        """Release everything this session holds. Runs its steps once, best effort."""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED

        if self.display_name is not None:
            try:
                await self.registry.release(self.display_name)
            except Exception as e:
                logger.log_error("release name", e)

        if self._sink_added:
            try:
                await self.registry.remove_sink(self.connection)
            except Exception as e:
                logger.log_error("remove sink", e)

        try:
            await self.connection.close()
        except Exception as e:
            logger.debug(f"Closing {self.connection.peername} failed: {e}")

        logger.log_disconnect(self.display_name, self.connection.peername)

    def _log_event(self, actor_label: str, text: str, hhmm: Optional[str] = None):
        """Hand an event to the activity log. Sink failures never reach the session."""
        try:
            self.activity_log.log_event(actor_label, hhmm or self.clock(), text)
        except Exception as e:
            logger.warning(f"Activity log rejected event: {e}")
