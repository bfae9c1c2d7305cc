"""
UI module for the optional PyQt6 server log window.
"""
