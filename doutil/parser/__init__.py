"""Go module discovery, parser options, source model records and mock source generation."""

__all__ = ["import_path", "option", "model", "mock"]