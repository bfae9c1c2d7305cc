#!/usr/bin/env python3
"""
Unit tests for the wire line formats in common/protocol_definitions.py
"""

import unittest
from datetime import datetime

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.constants import ControlLines, Commands
from common.protocol_definitions import (
    TranscriptEntry, current_hhmm, create_joined_message, create_chat_line,
    create_disconnected_message, create_user_list_message, create_help_message,
    parse_command, parse_server_line, encode_line, decode_line
)


class TestLineFormats(unittest.TestCase):
    """Server to client line builders."""

    def test_chat_line(self):
        self.assertEqual(
            create_chat_line("alice", "hello", "09:05"),
            "MESSAGE alice (09:05) : hello"
        )

    def test_disconnected_line(self):
        self.assertEqual(
            create_disconnected_message("alice", "23:59"),
            "MESSAGE alice (23:59) disconnected"
        )

    def test_joined_line_is_an_indented_notice(self):
        self.assertEqual(create_joined_message("bob"), "MESSAGE        bob joined")

    def test_user_list_has_header_then_names(self):
        lines = create_user_list_message(["bob", "carol"])
        self.assertEqual(lines, [
            "MESSAGE        list of users:",
            "MESSAGE        bob",
            "MESSAGE        carol",
        ])

    def test_user_list_for_empty_room_is_header_only(self):
        self.assertEqual(create_user_list_message([]), ["MESSAGE        list of users:"])

    def test_help_lines(self):
        self.assertEqual(create_help_message(), [
            "MESSAGE        /user => list of connected users.",
            "MESSAGE        /quit => disconnect from Chat-Server.",
        ])

    def test_current_hhmm_uses_24h_clock(self):
        self.assertEqual(current_hhmm(datetime(2024, 1, 2, 17, 3)), "17:03")

    def test_transcript_entry_format(self):
        entry = TranscriptEntry("alice", "10:00", "/help")
        self.assertEqual(entry.format(), "alice (10:00) : /help")


class TestParseCommand(unittest.TestCase):
    """Client command recognition."""

    def test_commands_are_case_insensitive(self):
        self.assertEqual(parse_command("/quit"), Commands.QUIT)
        self.assertEqual(parse_command("/Quit"), Commands.QUIT)
        self.assertEqual(parse_command("/USER"), Commands.USER)
        self.assertEqual(parse_command("/help"), Commands.HELP)

    def test_commands_match_by_prefix(self):
        self.assertEqual(parse_command("/users please"), Commands.USER)
        self.assertEqual(parse_command("/quitting"), Commands.QUIT)

    def test_other_lines_are_chat(self):
        self.assertIsNone(parse_command("hello /quit"))
        self.assertIsNone(parse_command(""))
        self.assertIsNone(parse_command("/shrug"))


class TestParseServerLine(unittest.TestCase):
    """Client-side classification of server lines."""

    def test_control_lines(self):
        for control in (ControlLines.SUBMITNAME, ControlLines.NAMEACCEPTED, ControlLines.QUIT):
            self.assertEqual(parse_server_line(control), (control, ""))

    def test_message_payload_is_kept_verbatim(self):
        self.assertEqual(
            parse_server_line("MESSAGE        bob joined"),
            (ControlLines.MESSAGE, "       bob joined")
        )

    def test_unknown_line_is_displayed(self):
        self.assertEqual(parse_server_line("SOMETHING"), (ControlLines.MESSAGE, "SOMETHING"))


class TestFraming(unittest.TestCase):

    def test_encode_appends_newline(self):
        self.assertEqual(encode_line("SUBMITNAME"), b"SUBMITNAME\n")

    def test_decode_strips_crlf(self):
        self.assertEqual(decode_line(b"alice\r\n"), "alice")
        self.assertEqual(decode_line(b"alice\n"), "alice")

    def test_decode_replaces_invalid_bytes(self):
        self.assertEqual(decode_line(b"caf\xff\n"), "caf�")


if __name__ == '__main__':
    unittest.main()
