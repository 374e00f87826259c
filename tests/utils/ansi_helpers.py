"""
Helpers for asserting on terminal output.
"""

import re

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove escape sequences, leaving the visible text."""
    return ANSI_PATTERN.sub("", text)
