"""
Server configuration module.

This module handles server-side configuration settings.
"""

from pathlib import Path
from typing import Optional

from common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, LOG_DIR, TRANSCRIPT_LOG_FILE, READ_LIMIT,
    WRITE_TIMEOUT, CLOSE_TIMEOUT
)


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 logs_dir: str = LOG_DIR, transcript_file: Optional[str] = TRANSCRIPT_LOG_FILE,
                 max_name_attempts: Optional[int] = None, idle_timeout: Optional[float] = None):
        self.host = host
        self.port = port

        # Logging configuration
        self.logs_dir = logs_dir
        self.transcript_file = transcript_file

        # Session limits (None keeps the session open indefinitely)
        self.max_name_attempts = max_name_attempts
        self.idle_timeout = idle_timeout

        # Stream settings
        self.read_limit = READ_LIMIT
        self.write_timeout = WRITE_TIMEOUT
        self.close_timeout = CLOSE_TIMEOUT

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_stream_settings(self):
        """Get per-connection stream timeouts."""
        return {
            'write_timeout': self.write_timeout,
            'close_timeout': self.close_timeout
        }

    @property
    def transcript_path(self) -> Optional[Path]:
        """Path of the transcript file, or None when disabled."""
        if not self.transcript_file:
            return None
        return Path(self.logs_dir) / self.transcript_file
