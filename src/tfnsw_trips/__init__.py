"""Transport for NSW trip planner proxy - simplified trips for clients."""

__version__ = "0.1.0"
