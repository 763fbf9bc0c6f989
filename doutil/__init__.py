"""Everyday helpers for sequences, concurrency, time, signing, TCP forwarding, routing and Go module utilities."""

__version__ = "0.1.0"