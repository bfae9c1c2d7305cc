#!/usr/bin/env python3
"""
Unit tests for the membership registry in server/chat/registry.py

Covers:
- At most one concurrent claim of a name succeeds
- Released names can be claimed again
- Idempotent release/remove
- Snapshot contents
"""

import asyncio
import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from server.chat.registry import Registry


class TestRegistry(unittest.IsolatedAsyncioTestCase):
    """Test cases for Registry."""

    async def asyncSetUp(self):
        self.registry = Registry()

    async def test_concurrent_claims_of_same_name(self):
        """Only one of many simultaneous claims wins."""
        results = await asyncio.gather(*(self.registry.try_claim("alice") for _ in range(50)))
        self.assertEqual(results.count(True), 1)
        self.assertEqual(self.registry.get_member_count(), 1)

    async def test_claim_of_taken_name_does_not_mutate(self):
        self.assertTrue(await self.registry.try_claim("alice"))
        self.assertFalse(await self.registry.try_claim("alice"))
        self.assertEqual(await self.registry.snapshot_names(), ["alice"])

    async def test_names_are_case_sensitive(self):
        self.assertTrue(await self.registry.try_claim("alice"))
        self.assertTrue(await self.registry.try_claim("Alice"))

    async def test_release_allows_reclaim(self):
        await self.registry.try_claim("alice")
        await self.registry.release("alice")
        self.assertTrue(await self.registry.try_claim("alice"))

    async def test_release_is_idempotent(self):
        await self.registry.release("nobody")
        await self.registry.try_claim("alice")
        await self.registry.release("alice")
        await self.registry.release("alice")
        self.assertEqual(await self.registry.snapshot_names(), [])

    async def test_snapshot_names_excludes_caller(self):
        for name in ("carol", "alice", "bob"):
            await self.registry.try_claim(name)
        self.assertEqual(await self.registry.snapshot_names(excluding="alice"), ["bob", "carol"])
        self.assertEqual(await self.registry.snapshot_names(), ["alice", "bob", "carol"])

    async def test_sinks_add_remove(self):
        first, second = Mock(), Mock()
        await self.registry.add_sink(first)
        await self.registry.add_sink(second)
        await self.registry.add_sink(first)
        self.assertEqual(await self.registry.snapshot_sinks(), [first, second])

        await self.registry.remove_sink(first)
        await self.registry.remove_sink(first)
        self.assertEqual(await self.registry.snapshot_sinks(), [second])

    async def test_snapshot_is_a_copy(self):
        sink = Mock()
        await self.registry.add_sink(sink)
        snapshot = await self.registry.snapshot_sinks()
        await self.registry.remove_sink(sink)
        self.assertEqual(snapshot, [sink])


if __name__ == '__main__':
    unittest.main()
