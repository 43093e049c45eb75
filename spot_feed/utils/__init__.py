"""Shared helpers (blob path layout)."""
