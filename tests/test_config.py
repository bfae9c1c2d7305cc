#!/usr/bin/env python3
"""
Unit tests for server/utils/config.py and client/utils/config.py
"""

import unittest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from client.utils.config import ClientConfig
from common.constants import DEFAULT_PORT, WRITE_TIMEOUT, CLOSE_TIMEOUT
from server.utils.config import ServerConfig


class TestServerConfig(unittest.TestCase):
    """Test cases for ServerConfig."""

    def test_connection_info(self):
        config = ServerConfig(host='127.0.0.1', port=4000)
        self.assertEqual(config.get_connection_info(), {'host': '127.0.0.1', 'port': 4000})

    def test_default_port(self):
        self.assertEqual(ServerConfig().get_connection_info()['port'], DEFAULT_PORT)

    def test_stream_settings_default(self):
        self.assertEqual(
            ServerConfig().get_stream_settings(),
            {'write_timeout': WRITE_TIMEOUT, 'close_timeout': CLOSE_TIMEOUT}
        )

    def test_stream_settings_follow_attributes(self):
        config = ServerConfig()
        config.write_timeout = 0.5
        self.assertEqual(config.get_stream_settings()['write_timeout'], 0.5)

    def test_transcript_path(self):
        config = ServerConfig(logs_dir='out', transcript_file='room.log')
        self.assertEqual(config.transcript_path, Path('out') / 'room.log')

    def test_transcript_disabled(self):
        self.assertIsNone(ServerConfig(transcript_file=None).transcript_path)


class TestClientConfig(unittest.TestCase):
    """Test cases for ClientConfig."""

    def test_connection_info(self):
        config = ClientConfig('chat.local', 5000, username='alice')
        self.assertEqual(
            config.get_connection_info(),
            {'host': 'chat.local', 'port': 5000, 'username': 'alice'}
        )


if __name__ == '__main__':
    unittest.main()
