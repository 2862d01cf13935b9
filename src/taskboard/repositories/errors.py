"""Errors raised by task repositories."""


class StoreError(Exception):
    """The document store failed to complete an operation."""

    pass
