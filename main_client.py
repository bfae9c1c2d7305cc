#!/usr/bin/env python3
"""
Chat Relay Client - Main Entry Point

Usage:
    python main_client.py [--username NAME] [--server-ip HOST] [--port PORT]

Type messages to chat. Commands: /user lists the room, /help shows the
command summary, /quit leaves.
"""

import asyncio
import argparse
import sys

from common.constants import DEFAULT_HOST, DEFAULT_PORT


def main() -> int:
    """Main entry point."""
    from client.main_client import ChatRelayClient
    from client.utils.logger import logger

    parser = argparse.ArgumentParser(description='Chat Relay Client')
    parser.add_argument('--username', type=str, default=None,
                        help='Name to register (default: asked on stdin)')
    parser.add_argument('--server-ip', type=str, default=DEFAULT_HOST,
                        help=f'Server IP address (default: {DEFAULT_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'Server port (default: {DEFAULT_PORT})')

    args = parser.parse_args()

    client = ChatRelayClient(
        host=args.server_ip,
        port=args.port,
        username=args.username
    )

    try:
        asyncio.run(client.interactive_mode())
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
    except OSError as e:
        logger.log_error("client", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
