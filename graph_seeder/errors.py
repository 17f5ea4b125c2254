"""Exceptions raised by graph-seeder."""


class SeederError(Exception):
    """Base class for graph-seeder errors."""


class RemoteError(SeederError):
    """A call to the remote API failed.

    Covers transport failures, non-2xx responses and GraphQL error payloads.
    """

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{operation} failed: {message}")


class GraphError(SeederError):
    """The build graph is invalid (unknown requirement, duplicate step or cycle)."""


class CatalogError(SeederError):
    """A catalog file could not be parsed into a Catalog."""
