"""
Client package for the Chat Relay system.

This package contains all client-side functionality including:
- Name handshake
- Sending and displaying chat lines
- Configuration and utilities
"""
