"""
Shared constants for the Chat Relay system.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 56789

# Stream settings
ENCODING = 'utf-8'
LINE_TERMINATOR = '\n'
READ_LIMIT = 64 * 1024  # max bytes in one line
WRITE_TIMEOUT = 10.0  # seconds a recipient may take to accept a line
CLOSE_TIMEOUT = 2.0  # seconds to wait for a graceful close

# Client connection
CONNECT_ATTEMPTS = 3
CONNECT_RETRY_DELAY = 1.0  # seconds

# Timestamps
TIMESTAMP_FORMAT = '%H:%M'
DATE_FORMAT = '%Y/%m/%d'

# Activity log
SERVER_ACTOR_LABEL = ' ' * 8
NOTICE_INDENT = ' ' * 7

# Logging
LOG_DIR = 'logs'
TRANSCRIPT_LOG_FILE = 'chat_transcript.log'


# Control lines and framing
class ControlLines:
    # Server to Client
    SUBMITNAME = 'SUBMITNAME'
    NAMEACCEPTED = 'NAMEACCEPTED'
    QUIT = 'QUIT'
    MESSAGE = 'MESSAGE'
    MESSAGE_PREFIX = 'MESSAGE '


# Client commands (case-insensitive prefix match)
class Commands:
    QUIT = '/QUIT'
    USER = '/USER'
    HELP = '/HELP'
