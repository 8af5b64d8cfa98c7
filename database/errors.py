"""
Exceptions raised by the persistence layer.
"""


class ConflictError(Exception):
    """A unique constraint rejected the write (e.g. email already registered)."""
