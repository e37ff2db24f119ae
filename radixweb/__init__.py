"""Radix-tree HTTP routing, a response wrapper and header middleware helpers."""

__version__ = "0.1.0"