"""Logging, timing and command-line helpers."""
