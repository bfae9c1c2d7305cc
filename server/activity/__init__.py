"""
Activity module for the server transcript.

Handles:
- The activity log sink interface
- The in-memory transcript and its file mirror
"""
