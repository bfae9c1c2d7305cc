"""
Server logging module.

This module handles server-side operational logging. The chat activity
transcript is kept separately by server.activity.activity_log.
"""

import logging


class ServerLogger:
    """Server logging class."""

    def __init__(self, log_level: int = logging.INFO):
        # Set up main logger
        self.logger = logging.getLogger('chat_relay_server')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        self.console_handler = logging.StreamHandler()
        self.console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(self.console_handler)

    def configure(self, log_level: int):
        """Change the active log level."""
        self.logger.setLevel(log_level)
        self.console_handler.setLevel(log_level)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr: tuple):
        """Log client connection."""
        self.info(f"New connection from {addr}")

    def log_name_rejected(self, username: str, addr: tuple):
        """Log a name that is already taken."""
        self.info(f"Name '{username}' from {addr} already in use, requesting another")

    def log_login(self, username: str, addr: tuple):
        """Log user login."""
        self.info(f"User '{username}' joined from {addr}")

    def log_disconnect(self, username: str, addr: tuple):
        """Log user disconnect."""
        if username is None:
            self.info(f"Connection from {addr} closed before a name was accepted")
        else:
            self.info(f"User {username} ({addr}) disconnected")

    def log_broadcast_failure(self, peer, error: Exception):
        """Log a recipient that could not be written to."""
        self.warning(f"Failed to broadcast to {peer}: {error}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ServerLogger()
