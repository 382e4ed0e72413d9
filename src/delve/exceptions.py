class DelveError(Exception):
    """Base exception for the delve map generation package."""


class InvalidConfiguration(DelveError, ValueError):
    """Raised when map generation options cannot produce a valid layout."""
