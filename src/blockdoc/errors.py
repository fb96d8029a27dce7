"""Exceptions raised by blockdoc."""


class BlockdocError(Exception):
    """Base class for all blockdoc errors."""


class MalformedInputError(BlockdocError, ValueError):
    """Input could not be handed to the HTML or JSON collaborators at all."""


class ResourceExhaustedError(BlockdocError):
    """Parsing or walking ran out of memory or recursion depth."""
