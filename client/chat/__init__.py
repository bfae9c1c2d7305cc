"""
Chat module for client-side messaging functionality.

Handles:
- Answering name requests
- Sending chat lines and commands
- Displaying relayed messages
"""
