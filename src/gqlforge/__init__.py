"""gqlforge: generate GraphQL field dispatchers from a resolved schema model."""

__version__ = "0.1.0"
