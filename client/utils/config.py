"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import DEFAULT_HOST, DEFAULT_PORT, CONNECT_ATTEMPTS, CONNECT_RETRY_DELAY


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, username: str = None):
        self.host = host
        self.port = port
        self.username = username

        # Connection settings
        self.connect_attempts = CONNECT_ATTEMPTS
        self.connect_retry_delay = CONNECT_RETRY_DELAY

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port,
            'username': self.username
        }
