"""Repository-specific exceptions.

These exceptions provide semantic meaning for data access errors,
separating them from general database errors.
"""


class RepositoryError(Exception):
    """Base exception for repository operations."""


class DataFetchError(RepositoryError):
    """The data source was unreachable or rejected the query."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to fetch {source}: {reason}")
