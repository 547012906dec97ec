"""Shared helpers: logging, constants and duration formatting."""
