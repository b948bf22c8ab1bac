"""Shared utilities: logging setup and datetime helpers."""
