"""Client library for administering a Humio server over its GraphQL and REST APIs."""

__version__ = "0.1.0"