"""Client-side task list synchronization over a remote task store."""

__version__ = "0.1.0"
