"""MySQL column types, tuple merging, concurrency helpers and event dispatch."""

__version__ = "0.1.0"