"""
Server package for the Chat Relay system.

This package contains all server-side functionality including:
- Name registration and membership tracking
- Message broadcasting
- Per-connection session handling
- Activity transcript and log window
- Configuration and utilities
"""
