"""Shared helpers for the cc_statusline test suite."""
