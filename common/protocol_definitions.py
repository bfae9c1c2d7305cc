"""
Protocol definitions for the Chat Relay system.

This module defines the line formats exchanged between client and server and
the transcript entry structure used by the server activity log.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass
from datetime import datetime

from common.constants import (
    ControlLines, Commands, TIMESTAMP_FORMAT, NOTICE_INDENT, ENCODING, LINE_TERMINATOR
)


@dataclass(frozen=True)
class TranscriptEntry:
    """Activity log entry structure."""
    actor_label: str
    timestamp_hhmm: str
    text: str

    def format(self) -> str:
        return f"{self.actor_label} ({self.timestamp_hhmm}) : {self.text}"


def current_hhmm(now: Optional[datetime] = None) -> str:
    """Return the wall clock as HH:MM."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def create_message_line(text: str) -> str:
    """Create a MESSAGE line displayed verbatim by the client."""
    return ControlLines.MESSAGE_PREFIX + text


def create_notice_line(text: str) -> str:
    """Create an indented server notice MESSAGE line."""
    return create_message_line(NOTICE_INDENT + text)


def create_joined_message(username: str) -> str:
    """Create a join notice."""
    return create_notice_line(f"{username} joined")


def create_chat_line(username: str, text: str, hhmm: str) -> str:
    """Create a chat broadcast line."""
    return create_message_line(f"{username} ({hhmm}) : {text}")


def create_disconnected_message(username: str, hhmm: str) -> str:
    """Create a disconnect notice."""
    return create_message_line(f"{username} ({hhmm}) disconnected")


def create_user_list_message(usernames: List[str]) -> List[str]:
    """Create the /user reply: a header followed by one line per name."""
    lines = [create_notice_line("list of users:")]
    lines.extend(create_notice_line(name) for name in usernames)
    return lines


def create_help_message() -> List[str]:
    """Create the /help reply."""
    return [
        create_notice_line("/user => list of connected users."),
        create_notice_line("/quit => disconnect from Chat-Server."),
    ]


def parse_command(line: str) -> Optional[str]:
    """
    Match a client line against the known commands.

    Matching is a case-insensitive prefix match. Returns the matching
    Commands constant, or None when the line is a chat message.
    """
    upper = line.upper()
    for command in (Commands.QUIT, Commands.USER, Commands.HELP):
        if upper.startswith(command):
            return command
    return None


def parse_server_line(line: str) -> Tuple[str, str]:
    """
    Split a server line into (kind, payload).

    kind is one of the ControlLines values; payload is the text after the
    MESSAGE tag and empty for control lines. Unknown lines are returned as
    MESSAGE so nothing sent by the server is lost.
    """
    if line.startswith(ControlLines.MESSAGE_PREFIX):
        return ControlLines.MESSAGE, line[len(ControlLines.MESSAGE_PREFIX):]
    if line in (ControlLines.SUBMITNAME, ControlLines.NAMEACCEPTED, ControlLines.QUIT):
        return line, ""
    return ControlLines.MESSAGE, line


def encode_line(line: str) -> bytes:
    """Frame a line for the wire."""
    return (line + LINE_TERMINATOR).encode(ENCODING)


def decode_line(data: bytes) -> str:
    """Decode a raw line read from the wire, dropping its terminator."""
    return data.decode(ENCODING, errors='replace').rstrip('\r\n')
