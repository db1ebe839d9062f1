"""I/O adapters (HTTP, files)."""
