"""
Chat module for server-side messaging functionality.

Handles:
- Client line streams
- Name claims and broadcast sinks
- Message fan-out
- The per-client protocol state machine
"""
