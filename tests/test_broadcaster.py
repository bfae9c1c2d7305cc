#!/usr/bin/env python3
"""
Unit tests for fan-out in server/chat/broadcaster.py

A failing recipient must not stop delivery to the others and must not raise.
"""

import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from server.chat.broadcaster import Broadcaster


class RecordingSink:
    """Stand-in for a Connection that records written lines."""

    def __init__(self, name: str, fail: bool = False):
        self.peername = (name, 0)
        self.fail = fail
        self.lines = []
        self.aborted = False

    async def write_line(self, line: str):
        if self.fail:
            raise ConnectionResetError("peer gone")
        self.lines.append(line)

    def abort(self):
        self.aborted = True


class TestBroadcaster(unittest.IsolatedAsyncioTestCase):
    """Test cases for Broadcaster."""

    def setUp(self):
        self.broadcaster = Broadcaster()

    async def test_delivers_to_every_sink(self):
        sinks = [RecordingSink("a"), RecordingSink("b"), RecordingSink("c")]
        failed = await self.broadcaster.broadcast("MESSAGE hi", sinks)
        self.assertEqual(failed, [])
        for sink in sinks:
            self.assertEqual(sink.lines, ["MESSAGE hi"])

    async def test_failed_sink_is_skipped(self):
        good_before = RecordingSink("a")
        bad = RecordingSink("b", fail=True)
        good_after = RecordingSink("c")

        failed = await self.broadcaster.broadcast("MESSAGE hi", [good_before, bad, good_after])

        self.assertEqual(failed, [bad])
        self.assertEqual(good_before.lines, ["MESSAGE hi"])
        self.assertEqual(good_after.lines, ["MESSAGE hi"])

    async def test_failed_sink_is_aborted(self):
        bad = RecordingSink("b", fail=True)
        await self.broadcaster.broadcast("MESSAGE hi", [bad])
        self.assertTrue(bad.aborted)

    async def test_on_recipient_called_once_per_sink(self):
        sinks = [RecordingSink("a"), RecordingSink("b", fail=True)]
        on_recipient = Mock()
        await self.broadcaster.broadcast("MESSAGE hi", sinks, on_recipient=on_recipient)
        self.assertEqual(on_recipient.call_count, 2)

    async def test_empty_sink_list(self):
        self.assertEqual(await self.broadcaster.broadcast("MESSAGE hi", []), [])


if __name__ == '__main__':
    unittest.main()
