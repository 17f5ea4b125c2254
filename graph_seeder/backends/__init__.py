"""Backend implementations."""

from graph_seeder.backends.graphql import GraphQLBackend

__all__ = ["GraphQLBackend"]
