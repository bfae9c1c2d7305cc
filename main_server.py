#!/usr/bin/env python3
"""
Chat Relay Server - Main Entry Point

Starts the line-oriented chat relay. Clients register a unique name and
every message they send is broadcast to the whole room.

Usage:
    python main_server.py

Optional arguments:
    --host HOST               Bind address (default: 0.0.0.0)
    --port PORT               TCP port (default: 56789)
    --logs-dir DIR            Directory for the transcript file (default: logs)
    --no-transcript-file      Keep the transcript in memory only
    --max-name-attempts N     Close a session after N rejected names (default: unbounded)
    --idle-timeout SECONDS    Close a session idle this long (default: never)
    --log-level LEVEL         DEBUG, INFO, WARNING or ERROR (default: INFO)
    --gui                     Show the server log window
"""

import asyncio
import argparse
import logging
import sys

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, LOG_DIR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Chat Relay Server')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'TCP port (default: {DEFAULT_PORT})')
    parser.add_argument('--logs-dir', type=str, default=LOG_DIR,
                        help=f'Directory for the transcript file (default: {LOG_DIR})')
    parser.add_argument('--no-transcript-file', action='store_true',
                        help='Do not write the transcript to disk')
    parser.add_argument('--max-name-attempts', type=int, default=None,
                        help='Close a session after this many rejected names (default: unbounded)')
    parser.add_argument('--idle-timeout', type=float, default=None,
                        help='Close a session idle for this many seconds (default: never)')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: INFO)')
    parser.add_argument('--gui', action='store_true',
                        help='Show the server log window (requires PyQt6)')
    return parser


def build_config(args):
    from server.utils.config import ServerConfig
    config = ServerConfig(
        host=args.host,
        port=args.port,
        logs_dir=args.logs_dir,
        max_name_attempts=args.max_name_attempts,
        idle_timeout=args.idle_timeout
    )
    if args.no_transcript_file:
        config.transcript_file = None
    return config


def run_gui_server(server) -> int:
    """Run the server in a background thread behind the log window."""
    from PyQt6.QtWidgets import QApplication
    from server.ui.log_window import ServerLogWindow, ServerThread

    app = QApplication(sys.argv)

    window = ServerLogWindow(server.activity_log)
    thread = ServerThread(server)
    window.attach_server_thread(thread)
    thread.failed.connect(lambda message: app.exit(1))
    thread.start()

    window.show()
    return app.exec()


def run_headless_server(server) -> int:
    """Run the server on the main thread until interrupted."""
    from server.utils.logger import logger
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    return 0


def main() -> int:
    """Main entry point."""
    from server.main_server import ChatRelayServer
    from server.utils.logger import logger

    args = build_parser().parse_args()
    logger.configure(getattr(logging, args.log_level))

    server = ChatRelayServer(build_config(args))
    logger.info(f"Server binding to {args.host}:{args.port}")
    try:
        if args.gui:
            return run_gui_server(server)
        return run_headless_server(server)
    except OSError as e:
        logger.error(f"Listener failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
