"""Run settings and tools-file loading."""
