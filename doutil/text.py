"""String helpers."""


def fuzz_wrap(value: str) -> str:
    """Wrap value in % signs for a SQL LIKE pattern."""
    return f"%{value}%"


def string_to_bytes(s: str) -> bytes:
    """Encode s as UTF-8."""
    return s.encode("utf-8", errors="surrogateescape")


def bytes_to_string(b: bytes) -> str:
    """Decode UTF-8 bytes; invalid bytes survive a round trip."""
    return bytes(b).decode("utf-8", errors="surrogateescape")